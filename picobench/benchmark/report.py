"""
Timing aggregation and text rendering for benchmark runs.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TextIO

from ..exceptions import MissingBaselineError

BASELINE_MARK = "-"
UNKNOWN_MARK = "???"
LINE_WIDTH = 80


@dataclass
class ProblemSpace:
    """
    Timing of one benchmark at one workload size.

    total_time_ns is the average over samples of the time it took to run the
    whole workload once, not a per-operation time.
    """
    dimension: int
    samples: int = 0
    total_time_ns: int = 0

    @property
    def ns_per_op(self) -> int:
        return self.total_time_ns // self.dimension

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dimension": self.dimension,
            "samples": self.samples,
            "total_time_ns": self.total_time_ns,
            "ns_per_op": self.ns_per_op,
        }


class TimingCollector:
    """
    Collects executed states of a benchmark and averages them per workload size.

    Usage:
        collector = TimingCollector([8, 64], samples=2)

        for state in benchmark.states:
            collector.record(state)

        data = collector.calculate()
    """

    def __init__(self, dimensions: List[int], samples: int):
        """
        Initialize timing collector.

        Args:
            dimensions: Workload sizes, in report order
            samples: Samples expected per workload size
        """
        self.samples = samples
        self._data: Dict[int, ProblemSpace] = OrderedDict(
            (d, ProblemSpace(dimension=d)) for d in dimensions
        )

    def record(self, state: Any) -> None:
        """
        Record a single executed state.

        Args:
            state: State that has run (needs iterations and duration_ns)
        """
        ps = self._data.get(state.iterations)
        assert ps is not None, f"unexpected workload size {state.iterations}"
        ps.total_time_ns += state.duration_ns
        ps.samples += 1

    def calculate(self) -> List[ProblemSpace]:
        """
        Average the recorded sums.

        Returns:
            One ProblemSpace per workload size with the average total time
        """
        result = []
        for ps in self._data.values():
            assert ps.samples == self.samples, (
                f"workload size {ps.dimension}: {ps.samples} samples, expected {self.samples}"
            )
            total = ps.total_time_ns // ps.samples if ps.samples else 0
            result.append(ProblemSpace(ps.dimension, ps.samples, total))
        return result


def ops_per_second(iterations: int, total_time_ns: int) -> float:
    """Throughput of running `iterations` operations in `total_time_ns`."""
    if total_time_ns <= 0:
        return float("inf")
    return iterations * (1000000000.0 / total_time_ns)


@dataclass
class Row:
    """One rendered line of a report table."""
    name: str
    is_baseline: bool
    ns_per_op: int
    ops_per_second: float
    ratio: Optional[float] = None
    dimension: Optional[int] = None
    total_time_ns: Optional[int] = None

    @property
    def total_ms(self) -> float:
        return (self.total_time_ns or 0) / 1000000.0

    @property
    def ratio_text(self) -> str:
        if self.is_baseline:
            return BASELINE_MARK
        if self.ratio is None:
            return UNKNOWN_MARK
        return f"{self.ratio:.3f}"

    @property
    def name_text(self) -> str:
        return f"{self.name} *" if self.is_baseline else self.name


@dataclass
class BenchmarkReport:
    """Results of one benchmark across all its workload sizes."""
    name: str
    is_baseline: bool
    data: List[ProblemSpace] = field(default_factory=list)

    @property
    def total_time_ns(self) -> int:
        return sum(d.total_time_ns for d in self.data)

    @property
    def total_iterations(self) -> int:
        return sum(d.dimension for d in self.data)

    @property
    def ns_per_op(self) -> int:
        """Sum of times over sum of workload sizes."""
        if not self.total_iterations:
            return 0
        return self.total_time_ns // self.total_iterations

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "is_baseline": self.is_baseline,
            "ns_per_op": self.ns_per_op,
            "data": [d.to_dict() for d in self.data],
        }


@dataclass
class SuiteReport:
    """Results of all benchmarks of a suite."""
    name: Optional[str]
    benchmarks: List[BenchmarkReport] = field(default_factory=list)

    @property
    def baseline(self) -> Optional[BenchmarkReport]:
        for bm in self.benchmarks:
            if bm.is_baseline:
                return bm
        return None

    def problem_space_view(self) -> Dict[int, List[Row]]:
        """
        Group the suite's results by workload size.

        Returns:
            Mapping of workload size (ascending) to one row per benchmark
            that ran at that size
        """
        view: Dict[int, List[Row]] = {}
        for bm in self.benchmarks:
            for d in bm.data:
                view.setdefault(d.dimension, []).append(Row(
                    name=bm.name,
                    is_baseline=bm.is_baseline,
                    ns_per_op=d.ns_per_op,
                    ops_per_second=ops_per_second(d.dimension, d.total_time_ns),
                    dimension=d.dimension,
                    total_time_ns=d.total_time_ns,
                ))

        # Ratios are relative to the baseline at the same workload size
        for rows in view.values():
            baseline = next((r for r in rows if r.is_baseline), None)
            for row in rows:
                if baseline is not None and baseline.total_time_ns:
                    row.ratio = row.total_time_ns / baseline.total_time_ns

        return OrderedDict(sorted(view.items()))

    def detailed_rows(self) -> List[Row]:
        rows = []
        for group in self.problem_space_view().values():
            rows.extend(group)
        return rows

    def concise_rows(self) -> List[Row]:
        """
        One row per benchmark, collapsed over all workload sizes.

        Raises:
            MissingBaselineError: If the suite has benchmarks but no baseline
        """
        if not self.benchmarks:
            return []

        baseline = self.baseline
        if baseline is None:
            raise MissingBaselineError(self.name)
        baseline_ns_per_op = baseline.ns_per_op

        rows = []
        for bm in self.benchmarks:
            ns_per_op = bm.ns_per_op
            ratio = ns_per_op / baseline_ns_per_op if baseline_ns_per_op else None
            rows.append(Row(
                name=bm.name,
                is_baseline=bm is baseline,
                ns_per_op=ns_per_op,
                ops_per_second=ops_per_second(bm.total_iterations, bm.total_time_ns),
                ratio=ratio,
                total_time_ns=bm.total_time_ns,
            ))
        return rows

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "benchmarks": [bm.to_dict() for bm in self.benchmarks],
        }


@dataclass
class Report:
    """
    Aggregated results of a run.

    Example:
        report = runner.run()
        report.render_detailed(sys.stdout)
        report.render_concise(sys.stdout)
    """
    suites: List[SuiteReport] = field(default_factory=list)
    seed: Optional[int] = None

    def render_detailed(self, sink: TextIO) -> None:
        """Write the per-workload-size table of every suite."""
        for suite in self.suites:
            if suite.name is not None:
                sink.write(f"{suite.name}:\n")

            _line(sink)
            sink.write(
                "   Name (baseline is *)   |   Dim   |  Total ms |  ns/op  |Baseline| Ops/second\n"
            )
            _line(sink)

            for row in suite.detailed_rows():
                sink.write(
                    f"{row.name_text:>25} |{row.dimension:>8} |{row.total_ms:>10.3f} |"
                    f"{row.ns_per_op:>8} |{row.ratio_text:>7} |{row.ops_per_second:>11.1f}\n"
                )

            _line(sink)

    def render_concise(self, sink: TextIO) -> None:
        """
        Write one line per benchmark with ns/op over all workload sizes.

        Raises:
            MissingBaselineError: If a non-empty suite has no baseline
        """
        # Resolve every suite first so a missing baseline leaves the sink untouched
        suite_rows = [(suite, suite.concise_rows()) for suite in self.suites]

        for suite, rows in suite_rows:
            if suite.name is not None:
                sink.write(f"{suite.name}:\n")

            _line(sink)
            sink.write("   Name (baseline is *)   |  ns/op  | Baseline |  Ops/second\n")
            _line(sink)

            for row in rows:
                sink.write(
                    f"{row.name_text:>25} |{row.ns_per_op:>8} |{row.ratio_text:>9} |"
                    f"{row.ops_per_second:>12.1f}\n"
                )

            _line(sink)

    def render_csv(self, sink: TextIO) -> None:
        """CSV output is not implemented."""
        raise NotImplementedError("CSV output is not implemented")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "seed": self.seed,
            "suites": [s.to_dict() for s in self.suites],
        }


def _line(sink: TextIO) -> None:
    sink.write("_" * LINE_WIDTH + "\n")
