"""
Benchmark registration.

A Registry owns an ordered table of suites, each holding the benchmarks
registered while it was the current suite. Registration order matters: the
first benchmark of a suite becomes its baseline unless another one is
flagged, and reports list benchmarks in the order they were registered.

Example:
    registry = Registry()

    with registry.suite("containers"):
        registry.register_benchmark("list", bench_list).baseline()
        registry.register_benchmark("deque", bench_deque).samples(3)

    @registry.benchmark(iterations=[100, 1000])
    def bench_dict(state):
        ...
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from .state import State

logger = logging.getLogger(__name__)

BenchmarkProc = Callable[[State], Any]


class Benchmark:
    """
    A registered benchmark and its configuration.

    The configuration methods return the benchmark itself so calls can be
    chained right after registration. An empty iteration list or a sample
    count of 0 means "use the runner default".

    The runner stores the states of the current run on the benchmark
    (`states`) and advances `cursor` while interleaving.
    """

    def __init__(self, name: str, proc: BenchmarkProc):
        self.name = name
        self.proc = proc
        self.is_baseline = False
        self.state_iterations: List[int] = []
        self.sample_count = 0

        # Per-run execution state, owned by this benchmark
        self.states: List[State] = []
        self.cursor = 0

    def iterations(self, data: Sequence[int]) -> "Benchmark":
        """Set the workload sizes this benchmark runs with."""
        data = list(data)
        assert all(i > 0 for i in data), f"iterations must be positive: {data}"
        self.state_iterations = data
        return self

    def samples(self, n: int) -> "Benchmark":
        """Set how many samples to take per workload size."""
        assert n >= 0, f"samples must not be negative, got {n}"
        self.sample_count = n
        return self

    def label(self, label: str) -> "Benchmark":
        """Rename the benchmark in reports."""
        self.name = label
        return self

    def baseline(self, b: bool = True) -> "Benchmark":
        """Flag this benchmark as the baseline of its suite."""
        self.is_baseline = b
        return self

    def __repr__(self) -> str:
        flag = ", baseline" if self.is_baseline else ""
        return f"Benchmark({self.name!r}{flag})"


@dataclass
class Suite:
    """A named group of benchmarks compared against one baseline."""
    name: Optional[str]
    benchmarks: List[Benchmark] = field(default_factory=list)

    def resolve_baseline(self) -> Optional[Benchmark]:
        """
        Make sure the suite has a baseline.

        If no benchmark is flagged, the first registered one is. If several
        are flagged, only the first of them stays the baseline. Empty suites
        are left alone.

        Returns:
            The baseline benchmark, or None for an empty suite
        """
        if not self.benchmarks:
            return None

        flagged = [bm for bm in self.benchmarks if bm.is_baseline]
        if not flagged:
            baseline = self.benchmarks[0]
            baseline.is_baseline = True
            logger.debug(f"Suite {self.name!r}: no baseline flagged, using {baseline.name!r}")
            return baseline

        baseline = flagged[0]
        for bm in flagged[1:]:
            logger.warning(
                f"Suite {self.name!r}: {bm.name!r} is also flagged as baseline, "
                f"keeping {baseline.name!r}"
            )
            bm.is_baseline = False
        return baseline


class Registry:
    """
    Ordered table of suites and their benchmarks.

    The registry is filled once, before any run, and is not safe to modify
    while a runner is using it.
    """

    def __init__(self):
        self._suites: Dict[Optional[str], Suite] = {}
        self._current: Optional[str] = None

    @property
    def current_suite(self) -> Optional[str]:
        return self._current

    @property
    def suites(self) -> List[Suite]:
        """Suites in declaration order."""
        return list(self._suites.values())

    def declare_suite(self, name: Optional[str]) -> Optional[str]:
        """
        Set the suite subsequent registrations go into.

        Declaring an existing suite again appends to it.

        Args:
            name: Suite name, or None for the unnamed suite

        Returns:
            The suite name, usable as a token
        """
        self._current = name
        self._get_suite(name)
        return name

    @contextmanager
    def suite(self, name: Optional[str]) -> Iterator[Suite]:
        """Register into `name` for the duration of the block."""
        previous = self._current
        self.declare_suite(name)
        try:
            yield self._suites[name]
        finally:
            self._current = previous

    def register_benchmark(self, name: str, proc: BenchmarkProc) -> Benchmark:
        """
        Add a benchmark to the current suite.

        Args:
            name: Display name (names may repeat)
            proc: Any callable taking a State

        Returns:
            The new benchmark, for chained configuration
        """
        if not callable(proc):
            raise TypeError(f"Benchmark {name!r} is not callable: {proc!r}")

        bm = Benchmark(name, proc)
        self._get_suite(self._current).benchmarks.append(bm)
        return bm

    def benchmark(
        self,
        name: Optional[str] = None,
        iterations: Optional[Sequence[int]] = None,
        samples: int = 0,
        baseline: bool = False,
    ) -> Callable[[BenchmarkProc], BenchmarkProc]:
        """
        Decorator form of register_benchmark().

        The decorated function is returned unchanged.
        """
        def decorator(proc: BenchmarkProc) -> BenchmarkProc:
            bm = self.register_benchmark(name or proc.__name__, proc)
            if iterations:
                bm.iterations(iterations)
            if samples:
                bm.samples(samples)
            if baseline:
                bm.baseline()
            return proc
        return decorator

    def merge(self, other: "Registry") -> "Registry":
        """Append every suite of another registry, keeping its order."""
        for suite in other.suites:
            self._get_suite(suite.name).benchmarks.extend(suite.benchmarks)
        return self

    def _get_suite(self, name: Optional[str]) -> Suite:
        suite = self._suites.get(name)
        if suite is None:
            suite = self._suites[name] = Suite(name)
        return suite

    def __len__(self) -> int:
        return sum(len(s.benchmarks) for s in self._suites.values())

    def __iter__(self) -> Iterator[Benchmark]:
        for suite in self._suites.values():
            yield from suite.benchmarks
