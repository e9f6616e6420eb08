# slow_internet_detector/scheduling.py
"""Deferred callbacks for the monitor's confirmation and settling timers.

Anything with ``call_later(delay, callback, *args)`` returning a handle
with ``cancel()`` will do. ``asyncio`` event loops already satisfy this;
:class:`ThreadingScheduler` covers synchronous clients that run without a
loop.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle: ...


class ThreadingScheduler:
    """Runs callbacks on daemon ``threading.Timer`` threads."""

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> threading.Timer:
        timer = threading.Timer(delay, callback, args=args)
        timer.daemon = True
        timer.start()
        return timer


def resolve_scheduler(scheduler: Scheduler | None = None) -> Scheduler:
    """Return ``scheduler`` or the best default for the calling context.

    Inside a running event loop the loop itself is used so callbacks stay
    on the loop thread; otherwise timers run on background threads.
    """
    if scheduler is not None:
        return scheduler
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return ThreadingScheduler()
