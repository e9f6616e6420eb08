"""Slow internet detector.

Times outgoing httpx requests and publishes a ``slow_network`` signal a UI
can bind to.

Example:
    >>> monitor = SlowRequestMonitor(MonitorConfig(threshold_ms=3000))
    >>> client = monitored_async_client(monitor)
    >>> monitor.slow_network.subscribe(lambda slow: print("slow" if slow else "ok"))
"""

from slow_internet_detector.config.models import MonitorConfig
from slow_internet_detector.monitor import (
    SlowRequestMonitor,
    configure_monitor,
    get_monitor,
    reset_monitor,
)
from slow_internet_detector.scheduling import Scheduler, ThreadingScheduler
from slow_internet_detector.signals import ValueSignal
from slow_internet_detector.transports import (
    MonitoredAsyncTransport,
    MonitoredTransport,
    install_event_hooks,
    monitored_async_client,
    monitored_client,
)
from slow_internet_detector.visibility import ViewContext, Visibility, query_visibility

__all__ = [
    # Monitor
    "SlowRequestMonitor",
    "MonitorConfig",
    "get_monitor",
    "configure_monitor",
    "reset_monitor",
    # Signals and visibility
    "ValueSignal",
    "Visibility",
    "ViewContext",
    "query_visibility",
    # Scheduling
    "Scheduler",
    "ThreadingScheduler",
    # httpx integration
    "MonitoredTransport",
    "MonitoredAsyncTransport",
    "install_event_hooks",
    "monitored_client",
    "monitored_async_client",
]
