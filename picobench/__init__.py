"""
picobench - a small in-process micro-benchmarking harness.
"""

from .benchmark import (
    Benchmark,
    BenchmarkRunner,
    FakeClock,
    Registry,
    Report,
    Reporter,
    RunnerConfig,
    State,
    scope,
)
from .exceptions import BenchmarkLoadError, MissingBaselineError, PicobenchError
from .loader import BenchmarkLoader

__version__ = "0.2.0"

__all__ = [
    "Benchmark",
    "BenchmarkRunner",
    "FakeClock",
    "Registry",
    "Report",
    "Reporter",
    "RunnerConfig",
    "State",
    "scope",
    "BenchmarkLoadError",
    "MissingBaselineError",
    "PicobenchError",
    "BenchmarkLoader",
]
