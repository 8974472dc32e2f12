"""aiohttp server exposing the meter metrics."""

from __future__ import annotations

import logging

from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry

from src.adapters.driven.metrics.meter_collector import render_metrics

__all__ = ["MetricsServer", "build_app"]

logger = logging.getLogger(__name__)

INDEX_TEXT = "Power meter exporter\nMetrics are served on /metrics\n"


def build_app(registry: CollectorRegistry) -> web.Application:
    """Create the web application with its routes.

    Args:
        registry: Registry rendered on each scrape.

    Returns:
        Configured application.
    """

    async def handle_metrics(_request: web.Request) -> web.Response:
        """Render the registry."""
        return web.Response(
            body=render_metrics(registry),
            headers={"Content-Type": CONTENT_TYPE_LATEST},
        )

    async def handle_index(_request: web.Request) -> web.Response:
        """Point visitors at the metrics path."""
        return web.Response(text=INDEX_TEXT)

    app = web.Application()
    app.add_routes(
        [
            web.get("/", handle_index),
            web.get("/metrics", handle_metrics),
        ]
    )
    return app


class MetricsServer:
    """HTTP server for Prometheus scrapes.

    Features:
    - GET /metrics in Prometheus text format.
    - Async context manager for start/stop.
    """

    def __init__(self, registry: CollectorRegistry, host: str | None, port: int) -> None:
        """Initialize server.

        Args:
            registry: Registry to expose.
            host: Interface to bind; None binds all interfaces.
            port: TCP port; 0 picks a free one.
        """
        self.registry = registry
        self.host = host
        self.port = port
        self._runner: web.AppRunner | None = None

    @property
    def bound_port(self) -> int | None:
        """Actual port once started (useful when port=0)."""
        if self._runner is None:
            return None
        for address in self._runner.addresses:
            if isinstance(address, tuple):
                return int(address[1])
        return None

    async def start(self) -> None:
        """Start listening."""
        self._runner = web.AppRunner(build_app(self.registry), access_log=None)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info(f"Serving /metrics on {self.host or '*'}:{self.bound_port}")

    async def stop(self) -> None:
        """Stop listening and release the socket."""
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
            logger.info("Metrics server stopped")

    async def __aenter__(self) -> "MetricsServer":
        """Start server.

        Returns:
            Self for use in async with statement.
        """
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        """Stop server."""
        await self.stop()
