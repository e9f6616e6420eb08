# slow_internet_detector/transports.py
"""httpx integration.

Two ways to attach a :class:`SlowRequestMonitor` to httpx:

- :class:`MonitoredTransport` / :class:`MonitoredAsyncTransport` wrap the
  real transport and see starts, responses *and* failures. Preferred.
- :func:`install_event_hooks` adds request/response hooks to an existing
  client. httpx has no failure hook, so a request that raises leaves the
  start time tracked until the next completed request clears it.

Requests, responses and exceptions pass through untouched.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from slow_internet_detector.monitor import SlowRequestMonitor, get_monitor

logger = logging.getLogger(__name__)


class MonitoredTransport(httpx.BaseTransport):
    """Synchronous transport that reports request timing to a monitor."""

    def __init__(
        self,
        monitor: SlowRequestMonitor | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.monitor = monitor or get_monitor()
        self._transport = transport or httpx.HTTPTransport()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.monitor.on_request_start(request)
        try:
            response = self._transport.handle_request(request)
        except BaseException as exc:
            logger.debug(f"{request.method} {request.url} failed: {exc!r}")
            self.monitor.on_request_failed(exc)
            raise
        self.monitor.on_response_received(response)
        return response

    def close(self) -> None:
        self._transport.close()


class MonitoredAsyncTransport(httpx.AsyncBaseTransport):
    """Async transport that reports request timing to a monitor."""

    def __init__(
        self,
        monitor: SlowRequestMonitor | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.monitor = monitor or get_monitor()
        self._transport = transport or httpx.AsyncHTTPTransport()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.monitor.on_request_start(request)
        try:
            response = await self._transport.handle_async_request(request)
        except BaseException as exc:
            logger.debug(f"{request.method} {request.url} failed: {exc!r}")
            self.monitor.on_request_failed(exc)
            raise
        self.monitor.on_response_received(response)
        return response

    async def aclose(self) -> None:
        await self._transport.aclose()


def install_event_hooks(
    client: httpx.Client | httpx.AsyncClient,
    monitor: SlowRequestMonitor | None = None,
) -> SlowRequestMonitor:
    """Append monitor hooks to ``client``'s request/response event hooks."""
    monitor = monitor or get_monitor()

    if isinstance(client, httpx.AsyncClient):

        async def on_request(request: httpx.Request) -> None:
            monitor.on_request_start(request)

        async def on_response(response: httpx.Response) -> None:
            monitor.on_response_received(response)

    else:

        def on_request(request: httpx.Request) -> None:
            monitor.on_request_start(request)

        def on_response(response: httpx.Response) -> None:
            monitor.on_response_received(response)

    hooks = client.event_hooks
    hooks.setdefault("request", []).append(on_request)
    hooks.setdefault("response", []).append(on_response)
    client.event_hooks = hooks
    return monitor


def monitored_client(
    monitor: SlowRequestMonitor | None = None,
    transport: httpx.BaseTransport | None = None,
    **kwargs: Any,
) -> httpx.Client:
    """Create an ``httpx.Client`` whose requests are timed by ``monitor``."""
    return httpx.Client(transport=MonitoredTransport(monitor, transport), **kwargs)


def monitored_async_client(
    monitor: SlowRequestMonitor | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    **kwargs: Any,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` whose requests are timed by ``monitor``."""
    return httpx.AsyncClient(
        transport=MonitoredAsyncTransport(monitor, transport), **kwargs
    )
