"""
Monotonic nanosecond clocks used to time benchmark states.
"""

import time


class Clock:
    """
    Source of monotonic timestamps in nanoseconds.

    Subclasses only need to implement now_ns(). The runner hands one clock
    to every state it creates, so swapping the clock swaps the time source
    for a whole run.
    """

    def now_ns(self) -> int:
        raise NotImplementedError


class PerfCounterClock(Clock):
    """Real clock backed by time.perf_counter_ns()."""

    def now_ns(self) -> int:
        return time.perf_counter_ns()


class FakeClock(Clock):
    """
    Controllable clock for tests.

    Time only moves when advance() is called, which lets a benchmark
    simulate elapsed time without sleeping.

    Example:
        clock = FakeClock()

        def bench(state):
            for _ in state:
                clock.advance(100)
    """

    def __init__(self, start: int = 0):
        self._now = start

    def now_ns(self) -> int:
        return self._now

    def advance(self, ns: int) -> None:
        """Move the clock forward by ns nanoseconds."""
        assert ns >= 0
        self._now += ns

    # Alias for code written against a sleeping clock
    sleep_ns = advance


default_clock = PerfCounterClock()
