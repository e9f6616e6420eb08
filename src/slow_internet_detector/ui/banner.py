"""Rich renderable for the slow-network warning.

Reads the monitor's signals every time it is rendered, so it can be placed
directly inside a ``rich.live.Live`` display or printed on demand.
"""

from __future__ import annotations

from typing import Callable

from rich.console import RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from slow_internet_detector.monitor import SlowRequestMonitor

DEFAULT_BANNER_MESSAGE = "⚠️  Slow Internet Connection Detected"


class SlowNetworkBanner:
    """Warning banner shown while the monitor reports a slow network.

    Args:
        monitor: Monitor whose signals drive the banner.
        message: Banner text.
        require_home_visible: Only show the banner while the home view is
            the active one.
    """

    def __init__(
        self,
        monitor: SlowRequestMonitor,
        message: str = DEFAULT_BANNER_MESSAGE,
        require_home_visible: bool = False,
    ):
        self.monitor = monitor
        self.message = message
        self.require_home_visible = require_home_visible

    @property
    def visible(self) -> bool:
        if not self.monitor.slow_network.value:
            return False
        if self.require_home_visible:
            return self.monitor.home_visible.value
        return True

    def __rich__(self) -> RenderableType:
        if not self.visible:
            return Text("")
        return Panel(
            Text(self.message, style="bold white", justify="center"),
            style="white on red",
            border_style="red",
            expand=True,
        )

    def bind(
        self, live: Live, renderable: RenderableType | None = None
    ) -> Callable[[], None]:
        """Refresh ``live`` whenever a signal changes; returns an unbinder.

        ``renderable`` is what gets re-rendered, when the banner is only part
        of the live display.
        """
        target = renderable if renderable is not None else self

        def refresh(_value: object) -> None:
            live.update(target, refresh=True)

        unsubscribers = [
            self.monitor.slow_network.subscribe(refresh),
            self.monitor.home_visible.subscribe(refresh),
        ]

        def unbind() -> None:
            for unsubscribe in unsubscribers:
                unsubscribe()

        return unbind
