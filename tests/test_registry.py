"""Tests for benchmark registration."""

import pytest

from picobench.benchmark.registry import Benchmark, Registry, Suite


def noop(state) -> None:
    for _ in state:
        pass


class TestRegistration:
    """Suites and benchmarks are recorded in order."""

    def test_register_without_suite_uses_unnamed_suite(self, registry: Registry) -> None:
        registry.register_benchmark("a", noop)

        assert [s.name for s in registry.suites] == [None]
        assert registry.suites[0].benchmarks[0].name == "a"

    def test_declare_suite_sets_current(self, registry: Registry) -> None:
        token = registry.declare_suite("math")
        registry.register_benchmark("add", noop)
        registry.declare_suite("strings")
        registry.register_benchmark("concat", noop)

        assert token == "math"
        assert registry.current_suite == "strings"
        assert [s.name for s in registry.suites] == ["math", "strings"]
        assert [b.name for b in registry.suites[0].benchmarks] == ["add"]

    def test_redeclared_suite_appends(self, registry: Registry) -> None:
        registry.declare_suite("s")
        registry.register_benchmark("a", noop)
        registry.declare_suite("other")
        registry.declare_suite("s")
        registry.register_benchmark("b", noop)

        assert [b.name for b in registry.suites[0].benchmarks] == ["a", "b"]

    def test_suite_context_restores_previous(self, registry: Registry) -> None:
        registry.declare_suite("outer")
        with registry.suite("inner") as suite:
            registry.register_benchmark("x", noop)
        registry.register_benchmark("y", noop)

        assert isinstance(suite, Suite)
        assert [b.name for b in suite.benchmarks] == ["x"]
        assert registry.current_suite == "outer"
        assert [b.name for b in registry.suites[0].benchmarks] == ["y"]

    def test_names_may_repeat(self, registry: Registry) -> None:
        first = registry.register_benchmark("same", noop)
        second = registry.register_benchmark("same", noop)

        assert first is not second
        assert len(registry) == 2

    def test_closures_are_accepted(self, registry: Registry) -> None:
        calls = []

        class Workload:
            def __call__(self, state) -> None:
                calls.append(state)

        registry.register_benchmark("closure", lambda state: calls.append(state))
        registry.register_benchmark("object", Workload())

        assert len(registry) == 2

    def test_rejects_non_callable(self, registry: Registry) -> None:
        with pytest.raises(TypeError):
            registry.register_benchmark("bad", 42)

    def test_iteration_yields_benchmarks_in_order(self, registry: Registry) -> None:
        registry.declare_suite("a")
        registry.register_benchmark("1", noop)
        registry.declare_suite("b")
        registry.register_benchmark("2", noop)
        registry.register_benchmark("3", noop)

        assert [b.name for b in registry] == ["1", "2", "3"]


class TestFluentConfiguration:
    def test_chained_setters(self, registry: Registry) -> None:
        bm = (
            registry.register_benchmark("x", noop)
            .iterations([1, 2, 3])
            .samples(4)
            .label("renamed")
            .baseline()
        )

        assert isinstance(bm, Benchmark)
        assert bm.state_iterations == [1, 2, 3]
        assert bm.sample_count == 4
        assert bm.name == "renamed"
        assert bm.is_baseline

    def test_defaults_mean_runner_defaults(self, registry: Registry) -> None:
        bm = registry.register_benchmark("x", noop)
        assert bm.state_iterations == []
        assert bm.sample_count == 0
        assert not bm.is_baseline

    def test_baseline_can_be_cleared(self, registry: Registry) -> None:
        bm = registry.register_benchmark("x", noop).baseline().baseline(False)
        assert not bm.is_baseline

    def test_invalid_values_are_asserted(self, registry: Registry) -> None:
        bm = registry.register_benchmark("x", noop)
        with pytest.raises(AssertionError):
            bm.iterations([10, 0])
        with pytest.raises(AssertionError):
            bm.samples(-1)

    def test_decorator(self, registry: Registry) -> None:
        @registry.benchmark(iterations=[5], samples=2, baseline=True)
        def bench_thing(state) -> None:
            pass

        @registry.benchmark(name="other")
        def bench_other(state) -> None:
            pass

        first, second = registry
        assert callable(bench_thing)
        assert first.name == "bench_thing"
        assert first.state_iterations == [5]
        assert first.sample_count == 2
        assert first.is_baseline
        assert second.name == "other"


class TestBaselineResolution:
    def test_first_becomes_baseline(self, registry: Registry) -> None:
        registry.declare_suite("s")
        a = registry.register_benchmark("a", noop)
        b = registry.register_benchmark("b", noop)

        assert registry.suites[0].resolve_baseline() is a
        assert a.is_baseline and not b.is_baseline

    def test_flagged_baseline_is_kept(self, registry: Registry) -> None:
        a = registry.register_benchmark("a", noop)
        b = registry.register_benchmark("b", noop).baseline()

        assert registry.suites[0].resolve_baseline() is b
        assert not a.is_baseline

    def test_only_first_flagged_stays_baseline(self, registry: Registry) -> None:
        registry.register_benchmark("a", noop)
        b = registry.register_benchmark("b", noop).baseline()
        c = registry.register_benchmark("c", noop).baseline()

        assert registry.suites[0].resolve_baseline() is b
        assert not c.is_baseline

    def test_empty_suite_has_no_baseline(self) -> None:
        assert Suite("empty").resolve_baseline() is None


class TestMerge:
    def test_merge_appends_suites(self, registry: Registry) -> None:
        registry.declare_suite("s")
        registry.register_benchmark("a", noop)

        other = Registry()
        other.declare_suite("s")
        other.register_benchmark("b", noop)
        other.declare_suite("t")
        other.register_benchmark("c", noop)

        registry.merge(other)

        assert [s.name for s in registry.suites] == ["s", "t"]
        assert [b.name for b in registry] == ["a", "b", "c"]
