"""Tests for configuration parsing."""

import pytest

from picobench.config import Config, DEFAULT_ITERATIONS


class TestParseIterations:
    def test_keeps_order(self) -> None:
        assert Config.parse_iterations("100, 10,1000") == [100, 10, 1000]

    def test_ignores_empty_entries(self) -> None:
        assert Config.parse_iterations("8,,64,") == [8, 64]

    @pytest.mark.parametrize("text", ["", ",", "8,0", "-3", "abc"])
    def test_rejects_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            Config.parse_iterations(text)


def test_default_iterations(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Config, "ITERATIONS", ",".join(str(i) for i in DEFAULT_ITERATIONS))
    assert Config.default_iterations() == [8, 64, 512, 4096, 8196]

    monkeypatch.setattr(Config, "ITERATIONS", "5,50")
    assert Config.default_iterations() == [5, 50]


def test_ensure_directories(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    target = tmp_path / "out" / "reports"
    monkeypatch.setattr(Config, "REPORT_DIR", target)

    Config.ensure_directories()

    assert target.is_dir()


class TestDefaultSamples:
    def test_configured_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(Config, "SAMPLES", 4)
        assert Config.default_samples() == 4

    @pytest.mark.parametrize("value", [0, -2])
    def test_rejects_non_positive(self, monkeypatch: pytest.MonkeyPatch, value: int) -> None:
        monkeypatch.setattr(Config, "SAMPLES", value)
        with pytest.raises(ValueError, match="PICOBENCH_SAMPLES"):
            Config.default_samples()
