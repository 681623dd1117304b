"""
Benchmark runner: expands registered benchmarks into execution units,
runs them in a seeded pseudo-random interleaved order and aggregates the
measured times into a Report.
"""

import random
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..config import Config, DEFAULT_ITERATIONS, DEFAULT_SAMPLES
from .clock import Clock, default_clock
from .registry import Benchmark, Registry, Suite
from .report import BenchmarkReport, Report, SuiteReport, TimingCollector
from .state import State

logger = logging.getLogger(__name__)


@dataclass
class RunnerConfig:
    """Configuration for a benchmark run."""
    iterations: List[int] = field(default_factory=lambda: list(DEFAULT_ITERATIONS))
    samples: int = DEFAULT_SAMPLES

    # Only run these suites (None runs everything)
    suites: Optional[List[Optional[str]]] = None


class BenchmarkRunner:
    """
    Runs every benchmark of a registry and builds the report.

    Each benchmark is expanded into one State per (workload size, sample).
    The states are inserted into the benchmark's own queue at random
    positions, then the runner repeatedly picks a random unfinished
    benchmark and runs its next state. Drift over the run (thermal state,
    frequency scaling, caches) is therefore spread over all benchmarks
    instead of hitting whichever happens to run last.

    Features:
        - Reproducible order for a given seed
        - Per-benchmark overrides of workload sizes and sample count
        - Progress and per-unit callbacks

    Example:
        runner = BenchmarkRunner(registry)
        report = runner.run(seed=42)
        report.render_detailed(sys.stdout)
    """

    def __init__(
        self,
        registry: Registry,
        config: Optional[RunnerConfig] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize benchmark runner.

        Args:
            registry: Benchmarks to run
            config: Run configuration (default: values from Config)
            clock: Time source handed to every state
        """
        self.registry = registry
        self.config = config or RunnerConfig(
            iterations=Config.default_iterations(),
            samples=Config.default_samples(),
        )
        self.clock = clock or default_clock

        # Callbacks
        self._on_progress: Optional[Callable[[int, int], None]] = None
        self._on_unit: Optional[Callable[[Benchmark, State], None]] = None

    def set_default_iterations(self, data: Sequence[int]) -> "BenchmarkRunner":
        """Workload sizes for benchmarks that don't set their own."""
        data = list(data)
        assert data and all(i > 0 for i in data), f"invalid iterations: {data}"
        self.config.iterations = data
        return self

    def set_default_samples(self, n: int) -> "BenchmarkRunner":
        """Samples per workload size for benchmarks that don't set their own."""
        assert n > 0, f"samples must be positive, got {n}"
        self.config.samples = n
        return self

    def on_progress(self, callback: Callable[[int, int], None]) -> "BenchmarkRunner":
        """
        Set progress callback.

        Args:
            callback: Function(completed, total) called after every unit
        """
        self._on_progress = callback
        return self

    def on_unit(self, callback: Callable[[Benchmark, State], None]) -> "BenchmarkRunner":
        """
        Set per-unit callback.

        Args:
            callback: Function(benchmark, state) called after a state has run
        """
        self._on_unit = callback
        return self

    def run(self, seed: Optional[int] = None) -> Report:
        """
        Run all selected benchmarks.

        Args:
            seed: Seed for the interleaving order. None or a negative value
                draws a seed from the system's random source.

        Returns:
            Report grouped by suite, benchmark and workload size
        """
        if seed is None or seed < 0:
            seed = random.SystemRandom().randrange(2 ** 32)
        rnd = random.Random(seed)

        suites = self._selected_suites()

        benchmarks: List[Benchmark] = []
        for suite in suites:
            suite.resolve_baseline()
            benchmarks.extend(suite.benchmarks)

        total = 0
        for bm in benchmarks:
            total += self._expand(bm, rnd)

        logger.info(
            f"Running {len(benchmarks)} benchmarks in {len(suites)} suites: "
            f"{total} units, seed={seed}"
        )

        self._interleave(benchmarks, rnd, total)

        return Report(
            suites=[self._suite_report(suite) for suite in suites],
            seed=seed,
        )

    def _selected_suites(self) -> List[Suite]:
        suites = self.registry.suites
        if self.config.suites is None:
            return suites

        wanted = set(self.config.suites)
        selected = [s for s in suites if s.name in wanted]
        missing = wanted - {s.name for s in selected}
        if missing:
            logger.warning(f"Unknown suites skipped: {', '.join(sorted(map(str, missing)))}")
        return selected

    def effective_iterations(self, bm: Benchmark) -> List[int]:
        """Workload sizes a benchmark runs with, duplicates removed."""
        iterations = bm.state_iterations or self.config.iterations
        return list(dict.fromkeys(iterations))

    def effective_samples(self, bm: Benchmark) -> int:
        """Samples per workload size a benchmark runs with."""
        return bm.sample_count or self.config.samples

    def _expand(self, bm: Benchmark, rnd: random.Random) -> int:
        """
        Create the states of a benchmark for this run.

        Every new state goes to a random position among the states created
        so far for the same benchmark.

        Returns:
            Number of states created
        """
        samples = self.effective_samples(bm)
        assert samples > 0

        bm.states = []
        bm.cursor = 0
        for iters in self.effective_iterations(bm):
            for _ in range(samples):
                index = rnd.randrange(len(bm.states) + 1)
                bm.states.insert(index, State(iters, self.clock))

        logger.debug(f"{bm.name}: {len(bm.states)} states")
        return len(bm.states)

    def _interleave(self, benchmarks: List[Benchmark], rnd: random.Random, total: int) -> None:
        """Run every pending state, picking a random benchmark each time."""
        working = [bm for bm in benchmarks if bm.states]
        completed = 0

        while working:
            i = rnd.randrange(len(working))
            bm = working[i]

            state = bm.states[bm.cursor]
            bm.proc(state)
            bm.cursor += 1

            if bm.cursor == len(bm.states):
                del working[i]

            completed += 1

            if self._on_unit:
                self._on_unit(bm, state)
            if self._on_progress:
                self._on_progress(completed, total)

        assert completed == total, f"ran {completed} of {total} units"

    def _suite_report(self, suite: Suite) -> SuiteReport:
        benchmarks = []
        for bm in suite.benchmarks:
            collector = TimingCollector(
                self.effective_iterations(bm),
                self.effective_samples(bm),
            )
            for state in bm.states:
                collector.record(state)

            benchmarks.append(BenchmarkReport(
                name=bm.name,
                is_baseline=bm.is_baseline,
                data=collector.calculate(),
            ))

        return SuiteReport(name=suite.name, benchmarks=benchmarks)
