#!/usr/bin/env python
"""
Demo: Slow network banner

Sends a fast and then a slow request through a monitored httpx client
(a MockTransport simulates the network, so no connection is needed) and
shows the warning banner in a Rich Live display while the monitor reports
a slow network.
"""

import asyncio

import httpx
from rich.console import Console, Group
from rich.live import Live
from rich.text import Text

from slow_internet_detector import MonitorConfig, SlowRequestMonitor, monitored_async_client
from slow_internet_detector.ui import SlowNetworkBanner


class HomeView:
    """Pretend home screen that is always mounted."""

    def __init__(self):
        self.mounted = True
        self.active = True

    def is_current(self) -> bool:
        return self.active


async def simulated_network(request: httpx.Request) -> httpx.Response:
    delay = float(request.url.params.get("delay", "0"))
    await asyncio.sleep(delay)
    return httpx.Response(200, json={"delay": delay})


async def main():
    console = Console()
    monitor = SlowRequestMonitor(MonitorConfig(threshold_ms=1000, settling_ms=3000))
    home = HomeView()
    monitor.home_screen_context = home

    banner = SlowNetworkBanner(monitor, require_home_visible=True)
    status = Text("Starting...", style="dim")

    layout = Group(banner, status)

    with Live(layout, console=console, refresh_per_second=8) as live:
        unbind = banner.bind(live, layout)

        async with monitored_async_client(
            monitor, transport=httpx.MockTransport(simulated_network)
        ) as client:
            status.plain = "Fast request (0.2s)..."
            await client.get("https://demo.test/", params={"delay": "0.2"})
            await asyncio.sleep(1)

            status.plain = "Slow request (1.5s)..."
            await client.get("https://demo.test/", params={"delay": "1.5"})
            await asyncio.sleep(1)

            status.plain = "Navigating away from home..."
            home.active = False
            monitor.check_slow_requests(update_home_visibility=True)
            await asyncio.sleep(1)

            status.plain = "Back on home, waiting for the warning to settle..."
            home.active = True
            monitor.check_slow_requests(update_home_visibility=True)
            await asyncio.sleep(3)

        status.plain = "Done."
        live.update(layout, refresh=True)
        unbind()

    monitor.close()


if __name__ == "__main__":
    asyncio.run(main())
