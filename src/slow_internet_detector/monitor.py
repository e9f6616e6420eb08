# slow_internet_detector/monitor.py
"""SlowRequestMonitor - flags HTTP requests that take unusually long.

The monitor measures the wall-clock time of a single tracked request. When
a measurement exceeds the configured threshold it waits a short
confirmation delay, publishes ``slow_network = True`` and, after a fixed
settling window, drops the signal back to False. UI code reads the
published signals; HTTP clients drive the three lifecycle callbacks
(see :mod:`slow_internet_detector.transports`).

Only one start time is tracked at a time. A request starting while another
is still being measured reuses the existing start time.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Any, Callable

from slow_internet_detector.config.models import MonitorConfig
from slow_internet_detector.scheduling import Scheduler, TimerHandle, resolve_scheduler
from slow_internet_detector.signals import ValueSignal
from slow_internet_detector.visibility import Visibility, ViewContext, query_visibility

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


class SlowRequestMonitor:
    """Tracks request timing and publishes slow-network state.

    Args:
        config: Timing configuration; defaults to :class:`MonitorConfig`.
        scheduler: Source of deferred callbacks. When omitted the running
            asyncio loop is used, falling back to background timer threads.
        clock: Millisecond clock, injectable for tests.
    """

    def __init__(
        self,
        config: MonitorConfig | None = None,
        *,
        scheduler: Scheduler | None = None,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self._config = config or MonitorConfig()
        self._scheduler = scheduler
        self._clock = clock
        self._lock = threading.RLock()

        self.slow_network: ValueSignal[bool] = ValueSignal(False, name="slow_network")
        self.home_visible: ValueSignal[bool] = ValueSignal(False, name="home_visible")
        self.home_visibility: ValueSignal[Visibility] = ValueSignal(
            Visibility.NOT_VISIBLE, name="home_visibility"
        )

        # Assigned by the UI layer
        self.home_screen_context: ViewContext | None = None

        self._start_ms: float | None = None
        self._warning_visible = False

        # Each warning cycle gets a generation; timer callbacks carrying an
        # older generation are ignored.
        self._generation = 0
        self._confirm_handle: TimerHandle | None = None
        self._settle_handle: TimerHandle | None = None
        self._cycle_scheduler: Scheduler | None = None

    def __repr__(self) -> str:
        return (
            f"SlowRequestMonitor(threshold_ms={self._config.threshold_ms}, "
            f"slow={self.slow_network.value}, warning_visible={self._warning_visible})"
        )

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def config(self) -> MonitorConfig:
        return self._config

    def reconfigure(self, config: MonitorConfig) -> None:
        """Replace the timing configuration for future measurements.

        Timers already scheduled keep the delays they were created with.
        """
        with self._lock:
            self._config = config
        logger.debug(f"Monitor reconfigured: {config}")

    # =========================================================================
    # State
    # =========================================================================

    @property
    def tracked_start_ms(self) -> float | None:
        return self._start_ms

    @property
    def is_warning_visible(self) -> bool:
        return self._warning_visible

    @property
    def confirmation_pending(self) -> bool:
        return self._confirm_handle is not None

    # =========================================================================
    # Request lifecycle
    # =========================================================================

    def on_request_start(self, *_: Any) -> None:
        """A request is about to be sent."""
        with self._lock:
            if self._start_ms is None:
                self._start_ms = self._clock()
        self.check_slow_requests()

    def on_response_received(self, *_: Any) -> None:
        """A response arrived for the tracked request."""
        self.check_slow_requests(request_finished=True)

    def on_request_failed(self, *_: Any) -> None:
        """The tracked request failed; timed exactly like a response."""
        self.check_slow_requests(request_finished=True)

    # =========================================================================
    # Timing check
    # =========================================================================

    def check_slow_requests(
        self,
        request_finished: bool = False,
        update_home_visibility: bool = False,
    ) -> bool:
        """Measure the tracked request and start a warning if it is slow.

        Also serves as the manual trigger for UI events: calling it with
        ``update_home_visibility=True`` refreshes the home-visibility
        signals even when nothing is being timed.

        Args:
            request_finished: Clear the tracked start time (request done).
            update_home_visibility: Refresh the home-visibility signals.

        Returns:
            True if this call started a new slow-warning sequence.
        """
        with self._lock:
            start = self._start_ms
            if request_finished:
                self._start_ms = None

        if update_home_visibility:
            self.update_home_screen_visibility(force_refresh=True)

        if start is None:
            return False

        elapsed = self._clock() - start

        with self._lock:
            orphaned = self._drop_orphaned_cycle()
            begin = (
                elapsed > self._config.threshold_ms
                and not self._warning_visible
                and self._confirm_handle is None
            )
            if begin:
                self._begin_warning(start, elapsed)

        if orphaned:
            self.slow_network.set(False)

        if not begin:
            logger.debug(
                f"Request timing {elapsed:.0f}ms (threshold "
                f"{self._config.threshold_ms}ms, finished={request_finished})"
            )
            if update_home_visibility:
                self.update_home_screen_visibility()
        return begin

    # =========================================================================
    # Home-screen visibility
    # =========================================================================

    def update_home_screen_visibility(
        self, force_refresh: bool = False
    ) -> Visibility | None:
        """Recompute and publish home-view visibility.

        Skipped (returns None) unless the network is currently flagged slow
        or ``force_refresh`` is set.
        """
        if not (self.slow_network.value or force_refresh):
            return None

        visibility = query_visibility(self.home_screen_context)
        self.home_visibility.set(visibility)
        self.home_visible.set(visibility.is_visible)
        return visibility

    # =========================================================================
    # Warning cycle
    # =========================================================================

    def _begin_warning(self, start: float, elapsed: float) -> None:
        """Schedule the confirmation step. Caller holds the lock."""
        self._generation += 1
        generation = self._generation
        scheduler = resolve_scheduler(self._scheduler)
        self._cycle_scheduler = scheduler
        logger.debug(
            f"Request exceeded threshold ({elapsed:.0f}ms > "
            f"{self._config.threshold_ms}ms); confirming in "
            f"{self._config.confirmation_delay_ms}ms"
        )
        self._confirm_handle = scheduler.call_later(
            self._config.confirmation_delay_s,
            self._confirm_warning,
            generation,
            start,
        )

    def _confirm_warning(self, generation: int, start: float) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._confirm_handle = None

        self.update_home_screen_visibility(force_refresh=True)

        with self._lock:
            if generation != self._generation:
                return
            self._warning_visible = True

        self.slow_network.set(True)
        logger.info("Slow network detected")

        # Settling starts only once True is published
        with self._lock:
            if generation != self._generation:
                return
            scheduler = self._cycle_scheduler or resolve_scheduler(self._scheduler)
            self._settle_handle = scheduler.call_later(
                self._config.settling_s,
                self._settle_warning,
                generation,
                start,
            )

    def _settle_warning(self, generation: int, start: float) -> None:
        # The reset is unconditional: a request that turned slow during the
        # window does not extend it.
        with self._lock:
            if generation != self._generation:
                return
            self._settle_handle = None
            if self._start_ms == start:
                self._start_ms = None
            self._warning_visible = False

        self.slow_network.set(False)
        logger.info("Slow network warning cleared")

    def _drop_orphaned_cycle(self) -> bool:
        """Forget a warning cycle whose event loop has been closed.

        Its timers can never fire, so without this the monitor would stay
        stuck in the warning state. Caller holds the lock.
        """
        scheduler = self._cycle_scheduler
        if not isinstance(scheduler, asyncio.AbstractEventLoop):
            return False
        if not scheduler.is_closed():
            return False
        if self._confirm_handle is None and not self._warning_visible:
            return False
        logger.debug("Discarding warning cycle bound to a closed event loop")
        self._clear_cycle()
        return True

    def _clear_cycle(self) -> None:
        self._generation += 1
        for handle in (self._confirm_handle, self._settle_handle):
            if handle is not None:
                handle.cancel()
        self._confirm_handle = None
        self._settle_handle = None
        self._cycle_scheduler = None
        self._warning_visible = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Cancel pending timers and clear all measurement state."""
        with self._lock:
            self._clear_cycle()
            self._start_ms = None
        self.slow_network.set(False)


# =============================================================================
# Process-default instance
# =============================================================================

_default_monitor: SlowRequestMonitor | None = None
_default_lock = threading.Lock()


def get_monitor() -> SlowRequestMonitor:
    """Get or create the process-default monitor (configured from env)."""
    global _default_monitor
    with _default_lock:
        if _default_monitor is None:
            _default_monitor = SlowRequestMonitor(MonitorConfig.from_env())
        return _default_monitor


def configure_monitor(
    config: MonitorConfig | None = None, **overrides: Any
) -> SlowRequestMonitor:
    """Reconfigure the process-default monitor and return it.

    Always returns the same instance; the last caller's settings win.

    Example:
        >>> monitor = configure_monitor(threshold_ms=1500)
    """
    monitor = get_monitor()
    base = config or monitor.config
    monitor.reconfigure(base.with_overrides(**overrides))
    return monitor


def reset_monitor() -> None:
    """Close and discard the process-default monitor."""
    global _default_monitor
    with _default_lock:
        if _default_monitor is not None:
            _default_monitor.close()
        _default_monitor = None
