"""
Outbound health-check poller

Periodically requests a health URL (usually this API's own public
/health route) so hosting platforms that idle inactive services keep it
awake, and logs every result.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class HealthCheckPoller:
    """Polls ``url`` every ``interval_ms`` on a background asyncio task."""

    def __init__(
        self,
        url: str,
        interval_ms: int = 100_000,
        timeout_ms: int = 20_000,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not url:
            raise ValueError("Health check URL is required")
        self.url = url
        self.interval_s = interval_ms / 1000
        self.timeout_s = timeout_ms / 1000
        self._client = client
        self._owns_client = client is None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def check_once(self) -> bool:
        """Run one health request; True on a 2xx response."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout_s)
        try:
            resp = await self._client.get(self.url, timeout=self.timeout_s)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Health check %s failed — %s", self.url, e)
            return False
        if resp.is_success:
            logger.info("Health check %s → %d", self.url, resp.status_code)
            return True
        logger.warning("Health check %s → %d", self.url, resp.status_code)
        return False

    async def _run(self) -> None:
        while True:
            try:
                await self.check_once()
            except Exception:
                logger.exception("Health check %s raised; polling continues", self.url)
            await asyncio.sleep(self.interval_s)

    def start(self) -> None:
        """Start polling on the running event loop (no-op if already running)."""
        if self.running:
            return
        logger.info(
            "Starting health checks for %s every %.0fs (timeout %.0fs)",
            self.url, self.interval_s, self.timeout_s,
        )
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Cancel the polling task and close the HTTP client."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
        logger.info("Health checks stopped")
