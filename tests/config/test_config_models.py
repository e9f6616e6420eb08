# tests/config/test_config_models.py
"""Tests for MonitorConfig."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from slow_internet_detector.config.models import MonitorConfig
from slow_internet_detector.monitor import get_monitor


class TestMonitorConfig:
    def test_defaults(self) -> None:
        config = MonitorConfig()
        assert config.threshold_ms == 3000
        assert config.confirmation_delay_ms == 250
        assert config.settling_ms == 5000
        assert config.confirmation_delay_s == 0.25
        assert config.settling_s == 5.0

    def test_frozen(self) -> None:
        config = MonitorConfig()
        with pytest.raises(ValidationError):
            config.threshold_ms = 10

    def test_threshold_is_not_validated(self) -> None:
        assert MonitorConfig(threshold_ms=0).threshold_ms == 0
        assert MonitorConfig(threshold_ms=-50).threshold_ms == -50

    def test_negative_delays_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MonitorConfig(confirmation_delay_ms=-1)
        with pytest.raises(ValidationError):
            MonitorConfig(settling_ms=-1)

    def test_with_overrides(self) -> None:
        base = MonitorConfig(threshold_ms=100)
        updated = base.with_overrides(settling_ms=1000, threshold_ms=None)

        assert updated.threshold_ms == 100
        assert updated.settling_ms == 1000
        assert base.settling_ms == 5000

    def test_with_overrides_validates(self) -> None:
        with pytest.raises(ValidationError):
            MonitorConfig().with_overrides(settling_ms=-5)


class TestFromEnv:
    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SLOW_NET_THRESHOLD_MS", "1500")
        monkeypatch.setenv("SLOW_NET_CONFIRMATION_DELAY_MS", "100")
        monkeypatch.setenv("SLOW_NET_SETTLING_MS", "2000")

        config = MonitorConfig.from_env()
        assert config.threshold_ms == 1500
        assert config.confirmation_delay_ms == 100
        assert config.settling_ms == 2000

    def test_unparsable_values_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SLOW_NET_THRESHOLD_MS", "fast")
        monkeypatch.delenv("SLOW_NET_SETTLING_MS", raising=False)

        config = MonitorConfig.from_env()
        assert config.threshold_ms == 3000
        assert config.settling_ms == 5000

    def test_negative_delays_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SLOW_NET_CONFIRMATION_DELAY_MS", "-1")
        monkeypatch.setenv("SLOW_NET_SETTLING_MS", "-5")

        config = MonitorConfig.from_env()
        assert config.confirmation_delay_ms == 250
        assert config.settling_ms == 5000

    def test_negative_delay_does_not_break_default_monitor(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SLOW_NET_SETTLING_MS", "-5")

        assert get_monitor().config.settling_ms == 5000
