# asset_scout/crawler/fetcher.py
"""
Fetcher module: HTTP GET with a concurrency ceiling, retry/backoff and timeout.
"""
from __future__ import annotations

import asyncio
import logging
import random
from typing import Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from asset_scout.config import CrawlConfig
from asset_scout.crawler.models import HTML_TYPES, FetchResult
from asset_scout.crawler.resolver import normalize_url
from asset_scout.errors import TransportError
from asset_scout.logger import LOGGER_NAME

RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)
MAX_BACKOFF = 60.0

logger = logging.getLogger(LOGGER_NAME)


class Fetcher:
    """
    Issues GET requests on a shared session.

    At most ``config.concurrency`` requests are in flight at once; every
    request carries a ``config.timeout`` deadline.
    """

    def __init__(
        self,
        session: ClientSession,
        config: CrawlConfig,
        retry_status: Sequence[int] = RETRY_STATUS,
    ) -> None:
        self.session = session
        self.config = config
        self._retry_status = retry_status
        self._semaphore = asyncio.Semaphore(config.concurrency)
        self._timeout = ClientTimeout(total=config.timeout)

    async def get(self, url: str) -> FetchResult:
        """
        Fetch *url* and return its status and body.

        The body is read only for HTML (or untyped) responses; for any other
        Content-Type it is left empty.

        Statuses in ``retry_status`` are retried up to ``config.retry_times``
        times; the last response is returned whatever its status. Connection
        errors and timeouts are retried the same way and then raised as
        TransportError.
        """
        attempts = 0
        while True:
            try:
                async with self._semaphore:
                    result = await self._get_once(url)
            except (ClientError, asyncio.TimeoutError) as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    raise TransportError(url, str(exc) or type(exc).__name__) from exc
                await self._backoff(url, attempts, exc)
                continue
            if result.status in self._retry_status and attempts < self.config.retry_times:
                attempts += 1
                await self._backoff(url, attempts, f"status {result.status}")
                continue
            return result

    async def _get_once(self, url: str) -> FetchResult:
        async with self.session.get(url, timeout=self._timeout, allow_redirects=True) as resp:
            ctype = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
            # only markup is ever parsed, other bodies are left unread
            body = await resp.read() if not ctype or ctype in HTML_TYPES else b""
            return FetchResult(
                url=url,
                final_url=normalize_url(str(resp.url)),
                status=resp.status,
                content_type=ctype,
                body=body,
            )

    async def _backoff(self, url: str, attempt: int, reason: object) -> None:
        delay = min(MAX_BACKOFF, self.config.retry_backoff * 2 ** (attempt - 1))
        if delay:
            delay += random.uniform(0, delay / 10)
        logger.debug(
            "Retry %d/%d for %s after %.2f s (%s)", attempt, self.config.retry_times, url, delay, reason
        )
        await asyncio.sleep(delay)

