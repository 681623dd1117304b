"""
Benchmark execution and reporting package.
"""

from .clock import Clock, FakeClock, PerfCounterClock
from .state import State, scope
from .registry import Benchmark, Registry, Suite
from .report import BenchmarkReport, ProblemSpace, Report, SuiteReport, TimingCollector
from .runner import BenchmarkRunner, RunnerConfig
from .reporter import Reporter

__all__ = [
    "Clock",
    "FakeClock",
    "PerfCounterClock",
    "State",
    "scope",
    "Benchmark",
    "Registry",
    "Suite",
    "BenchmarkReport",
    "ProblemSpace",
    "Report",
    "SuiteReport",
    "TimingCollector",
    "BenchmarkRunner",
    "RunnerConfig",
    "Reporter",
]
