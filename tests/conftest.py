"""Shared fixtures for picobench tests."""

from typing import Callable

import pytest

from picobench.benchmark.clock import FakeClock
from picobench.benchmark.registry import Registry
from picobench.benchmark.runner import BenchmarkRunner, RunnerConfig
from picobench.benchmark.state import State


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry() -> Registry:
    return Registry()


@pytest.fixture
def make_bench(clock: FakeClock) -> Callable[[int], Callable[[State], None]]:
    """Build a benchmark that costs `ns` fake nanoseconds per iteration."""
    def factory(ns: int) -> Callable[[State], None]:
        def bench(state: State) -> None:
            for _ in state:
                clock.advance(ns)
        return bench
    return factory


@pytest.fixture
def make_runner(registry: Registry, clock: FakeClock) -> Callable[..., BenchmarkRunner]:
    def factory(iterations=(10, 100), samples: int = 1, suites=None) -> BenchmarkRunner:
        config = RunnerConfig(iterations=list(iterations), samples=samples, suites=suites)
        return BenchmarkRunner(registry, config, clock=clock)
    return factory
