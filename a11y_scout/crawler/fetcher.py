# a11y_scout/crawler/fetcher.py
"""
Fetcher module: downloads sitemap documents with retry/backoff and timeout.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from a11y_scout.config import AuditConfig
from a11y_scout.errors import FetchError
from a11y_scout.logger import logger

RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)


class Fetcher:
    """Handles HTTP fetching of sitemap documents with retries/backoff and timeout.

    Use as an async context manager, or pass an already open ``session``.
    """

    def __init__(
        self,
        config: AuditConfig,
        session: Optional[ClientSession] = None,
        retry_status: Sequence[int] = RETRY_STATUS,
        backoff_cap: float = 60.0,
    ) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self._retry_status = retry_status
        self._backoff_cap = backoff_cap

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch_text(self, url: str) -> bytes:
        """
        Fetch the raw body of *url*.

        Retries 5xx/429 up to ``retry_times`` with exponential backoff.
        Raises FetchError on any other non-2xx status, network error or timeout.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")

        attempts = 0
        while True:
            try:
                async with self.session.get(url, raise_for_status=False) as resp:
                    if resp.status in self._retry_status:
                        raise ClientError(f"retryable status {resp.status}")
                    if not 200 <= resp.status < 300:
                        raise FetchError(url, f"HTTP {resp.status}")
                    return await resp.read()
            except asyncio.TimeoutError as exc:
                # no retry on timeout
                raise FetchError(url, "timeout") from exc
            except ClientError as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    raise FetchError(url, str(exc)) from exc
                backoff = min(self._backoff_cap, 2**attempts)
                logger.debug(
                    "Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, backoff
                )
                await asyncio.sleep(backoff)
