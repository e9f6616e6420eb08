"""Common test fixtures and utilities for slow internet detector tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from slow_internet_detector.config.models import MonitorConfig
from slow_internet_detector.monitor import SlowRequestMonitor, reset_monitor


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class ManualHandle:
    def __init__(self, due: float, callback: Callable[..., Any], args: tuple):
        self.due = due
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by a FakeClock; timers fire on ``advance``."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.handles: list[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ManualHandle:
        handle = ManualHandle(self.clock.now + delay * 1000.0, callback, args)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance(self, ms: float) -> None:
        """Move the clock forward, firing due timers in order."""
        target = self.clock.now + ms
        while True:
            due = [h for h in self.pending if h.due <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.due)
            self.handles.remove(handle)
            self.clock.now = max(self.clock.now, handle.due)
            handle.callback(*handle.args)
        self.clock.now = target


@pytest.fixture(autouse=True)
def reset_default_monitor():
    """Reset the process-default monitor before and after each test."""
    reset_monitor()
    yield
    reset_monitor()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock: FakeClock) -> ManualScheduler:
    return ManualScheduler(clock)


@pytest.fixture
def monitor(clock: FakeClock, scheduler: ManualScheduler) -> SlowRequestMonitor:
    """Monitor with a 100ms threshold on a manual clock."""
    return SlowRequestMonitor(
        MonitorConfig(threshold_ms=100), scheduler=scheduler, clock=clock
    )


class FakeView:
    """ViewContext stand-in."""

    def __init__(self, mounted: bool = True, current: bool = True):
        self.mounted = mounted
        self.current = current
        self.queries = 0

    def is_current(self) -> bool:
        self.queries += 1
        return self.current


class ExplodingView:
    """ViewContext whose query raises, as a disposed view might."""

    mounted = True

    def is_current(self) -> bool:
        raise RuntimeError("view disposed")
