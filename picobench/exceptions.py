"""
Exception hierarchy for picobench.
"""

from typing import Any, Dict, Optional


class PicobenchError(Exception):
    """
    Base class for all picobench errors.

    Attributes:
        message: Human-readable error description
        context: Extra details useful when debugging
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __repr__(self) -> str:
        ctx = f", context={self.context}" if self.context else ""
        return f"{self.__class__.__name__}({self.message!r}{ctx})"


class MissingBaselineError(PicobenchError):
    """Raised when a report view needs a baseline and the suite has none."""

    def __init__(self, suite: Optional[str]):
        super().__init__(
            f"Suite {suite!r} has no baseline benchmark",
            context={"suite": suite},
        )
        self.suite = suite


class BenchmarkLoadError(PicobenchError):
    """Raised when a benchmark file cannot be imported."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Failed to load benchmarks from {path}: {reason}",
            context={"path": path},
        )
        self.path = path
        self.reason = reason
