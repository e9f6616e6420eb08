# slow_internet_detector/cli.py
"""Command-line entry point.

``slow-net probe URL`` issues requests through a monitored client and shows
the slow-network banner the way a UI would.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx
import typer
from rich.console import Console

from slow_internet_detector.config.defaults import (
    APP_NAME,
    DEFAULT_HTTP_REQUEST_TIMEOUT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PROBE_COUNT,
    DEFAULT_PROBE_INTERVAL,
)
from slow_internet_detector.config.env_vars import EnvVar, get_env
from slow_internet_detector.config.logging import setup_logging
from slow_internet_detector.config.models import MonitorConfig
from slow_internet_detector.monitor import SlowRequestMonitor
from slow_internet_detector.transports import monitored_async_client
from slow_internet_detector.ui.banner import SlowNetworkBanner

logger = logging.getLogger(__name__)

app = typer.Typer(
    name=APP_NAME,
    add_completion=False,
    help="Detect slow HTTP responses and report them.",
)

console = Console()


@app.callback()
def main_callback(
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Suppress most log output"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable verbose logging"),
    log_level: str = typer.Option(
        get_env(EnvVar.LOG_LEVEL, DEFAULT_LOG_LEVEL), "--log-level", help="Set log level"
    ),
    log_file: Optional[str] = typer.Option(
        get_env(EnvVar.LOG_FILE), "--log-file", help="Also write logs to this file"
    ),
) -> None:
    """Slow internet detector."""
    setup_logging(level=log_level, quiet=quiet, verbose=verbose, log_file=log_file)


async def run_probe(
    monitor: SlowRequestMonitor,
    url: str,
    count: int = DEFAULT_PROBE_COUNT,
    interval: float = DEFAULT_PROBE_INTERVAL,
    timeout: float = DEFAULT_HTTP_REQUEST_TIMEOUT,
    out: Console | None = None,
) -> int:
    """Issue ``count`` GET requests to ``url`` and report slow-network state.

    Returns:
        Process exit code: 0 if every request completed, 1 otherwise.
    """
    out = out or console
    banner = SlowNetworkBanner(monitor)
    failures = 0

    async with monitored_async_client(monitor, timeout=timeout) as client:
        for attempt in range(1, count + 1):
            loop = asyncio.get_running_loop()
            started = loop.time()
            try:
                response = await client.get(url)
            except httpx.HTTPError as exc:
                failures += 1
                out.print(f"[red]Request {attempt} failed:[/red] {exc}")
                logger.debug(f"Probe request {attempt} failed", exc_info=True)
            else:
                elapsed_ms = (loop.time() - started) * 1000
                out.print(
                    f"Request {attempt}: HTTP {response.status_code} "
                    f"in {elapsed_ms:.0f}ms"
                )
            if attempt < count:
                await asyncio.sleep(interval)

    # Give a pending confirmation the chance to publish
    await asyncio.sleep(monitor.config.confirmation_delay_s + 0.05)

    if banner.visible:
        out.print(banner)
    else:
        out.print("[green]Connection OK[/green]")

    monitor.close()
    return 1 if failures else 0


@app.command()
def probe(
    url: str = typer.Argument(..., help="URL to request"),
    threshold_ms: Optional[int] = typer.Option(
        None, "--threshold-ms", help="Slow threshold in milliseconds"
    ),
    count: int = typer.Option(DEFAULT_PROBE_COUNT, "--count", "-n", min=1, help="Number of requests"),
    interval: float = typer.Option(
        DEFAULT_PROBE_INTERVAL, "--interval", help="Seconds between requests"
    ),
    timeout: float = typer.Option(
        DEFAULT_HTTP_REQUEST_TIMEOUT, "--timeout", help="Request timeout in seconds"
    ),
) -> None:
    """Request URL through a monitored client and report slow responses."""
    config = MonitorConfig.from_env().with_overrides(threshold_ms=threshold_ms)
    monitor = SlowRequestMonitor(config)
    logger.debug(f"Probing {url} with {config}")
    exit_code = asyncio.run(
        run_probe(monitor, url, count=count, interval=interval, timeout=timeout)
    )
    raise typer.Exit(exit_code)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
