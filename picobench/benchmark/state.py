"""
Measurement state handed to benchmark callables.

A benchmark receives a State configured with a target number of iterations
and must run its workload exactly that many times, either by iterating over
the state or by bracketing the work manually with scope().

Example:
    def bench_append(state):
        items = []
        for _ in state:
            items.append(1)
"""

from typing import Iterator, Optional

from .clock import Clock, default_clock


class State:
    """
    Timer and iteration counter for a single execution unit.

    Iterating over the state starts the timer, yields once per iteration
    (counting down from `iterations` to 1) and stops the timer as soon as the
    count reaches zero, before control returns to the loop.

    Attributes:
        iterations: Number of times the workload must run
        duration_ns: Time measured between start_timer() and stop_timer()
    """

    __slots__ = ("_iterations", "_clock", "_start", "_duration_ns")

    def __init__(self, iterations: int, clock: Optional[Clock] = None):
        assert iterations > 0, f"iterations must be positive, got {iterations}"
        self._iterations = iterations
        self._clock = clock or default_clock
        self._start = 0
        self._duration_ns = 0

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def duration_ns(self) -> int:
        return self._duration_ns

    def start_timer(self) -> None:
        self._start = self._clock.now_ns()

    def stop_timer(self) -> None:
        self._duration_ns = self._clock.now_ns() - self._start

    def scope(self) -> "scope":
        """Return a context manager timing the enclosed block."""
        return scope(self)

    def __iter__(self) -> Iterator[int]:
        self.start_timer()
        counter = self._iterations
        while counter:
            yield counter
            counter -= 1
            assert counter >= 0
        self.stop_timer()

    def __repr__(self) -> str:
        return f"State(iterations={self._iterations}, duration_ns={self._duration_ns})"


class scope:
    """
    Manual measurement for benchmarks that can't use the loop protocol.

    The timer starts on enter and stops on exit, whichever way the block
    is left.

    Example:
        def bench_sort(state):
            data = make_data(state.iterations)
            with scope(state):
                data.sort()
    """

    def __init__(self, state: State):
        self._state = state

    def __enter__(self) -> State:
        self._state.start_timer()
        return self._state

    def __exit__(self, exc_type, exc, tb) -> None:
        self._state.stop_timer()
