# tests/monitor/test_monitor_timing.py
"""Real-time behaviour of SlowRequestMonitor on the asyncio loop and on threads."""

from __future__ import annotations

import asyncio
import threading
import time

import pytest

from slow_internet_detector.config.models import MonitorConfig
from slow_internet_detector.monitor import SlowRequestMonitor, configure_monitor


@pytest.fixture
def live_monitor():
    monitor = configure_monitor(threshold_ms=100)
    yield monitor
    monitor.close()


class TestEventLoopScenarios:
    """Request/response sequences timed with real sleeps on the running loop."""

    @pytest.mark.asyncio
    async def test_initial_state_is_not_slow(self, live_monitor):
        assert live_monitor.slow_network.value is False

    @pytest.mark.asyncio
    async def test_slow_request_is_detected(self, live_monitor):
        live_monitor.on_request_start()
        await asyncio.sleep(0.2)
        live_monitor.on_response_received()

        await asyncio.sleep(0.3)
        assert live_monitor.slow_network.value is True

    @pytest.mark.slow
    @pytest.mark.asyncio
    async def test_slow_flag_resets_after_settling(self, live_monitor):
        live_monitor.on_request_start()
        await asyncio.sleep(0.2)
        live_monitor.on_response_received()

        await asyncio.sleep(0.3)
        assert live_monitor.slow_network.value is True

        await asyncio.sleep(5.2)
        assert live_monitor.slow_network.value is False

    @pytest.mark.asyncio
    async def test_fast_request_is_not_flagged(self, live_monitor):
        seen = []
        live_monitor.slow_network.subscribe(seen.append)

        live_monitor.on_request_start()
        await asyncio.sleep(0.05)
        live_monitor.on_response_received()

        await asyncio.sleep(0.15)
        assert live_monitor.slow_network.value is False
        assert seen == []


class TestThreadingFallback:
    def test_timers_run_without_event_loop(self):
        monitor = SlowRequestMonitor(
            MonitorConfig(threshold_ms=10, confirmation_delay_ms=20, settling_ms=50)
        )
        raised = threading.Event()
        cleared = threading.Event()
        monitor.slow_network.subscribe(
            lambda slow: raised.set() if slow else cleared.set()
        )

        monitor.on_request_start()
        time.sleep(0.03)
        monitor.on_response_received()

        assert raised.wait(2.0)
        assert cleared.wait(2.0)
        assert monitor.slow_network.value is False
