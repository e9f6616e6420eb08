"""Terminal UI pieces bound to the monitor's signals."""

from slow_internet_detector.ui.banner import DEFAULT_BANNER_MESSAGE, SlowNetworkBanner

__all__ = ["DEFAULT_BANNER_MESSAGE", "SlowNetworkBanner"]
