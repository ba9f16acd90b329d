# sitecrawl/crawler/fetcher.py
"""
Fetcher module: one HTTP GET per call under a fixed concurrency ceiling.

Every failure (HTTP status >= 400, non-HTML body, transport error, timeout,
abort) is reported as ``None`` so the caller simply skips the page.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession

from sitecrawl.logger import get_logger

__all__ = ("Fetcher",)

log = get_logger("fetcher")


class Fetcher:
    """Handles HTTP fetching with a slot semaphore and a run-wide abort signal."""

    def __init__(
        self,
        session: ClientSession,
        max_concurrency: int,
        abort: Optional[asyncio.Event] = None,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self.session = session
        self.max_concurrency = max_concurrency
        self.abort = abort if abort is not None else asyncio.Event()
        self._slots = asyncio.Semaphore(max_concurrency)
        self._in_flight = 0
        self.peak_in_flight = 0

    @property
    def in_flight(self) -> int:
        return self._in_flight

    async def fetch(self, url: str) -> Optional[str]:
        """
        Fetch *url* and return the HTML body.

        Returns None on failure, on a non-HTML response or when the run was aborted.
        """
        if self.abort.is_set():
            return None
        async with self._slots:
            if self.abort.is_set():
                return None
            self._in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self._in_flight)
            try:
                return await self._race_abort(url)
            finally:
                self._in_flight -= 1

    async def _race_abort(self, url: str) -> Optional[str]:
        request = asyncio.ensure_future(self._get(url))
        aborted = asyncio.ensure_future(self.abort.wait())
        try:
            await asyncio.wait({request, aborted}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            aborted.cancel()
            if not request.done():
                request.cancel()
        if self.abort.is_set() or request.cancelled():
            log.debug("Aborted %s", url)
            return None
        return request.result()

    async def _get(self, url: str) -> Optional[str]:
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                if resp.status >= 400:
                    log.warning("HTTP %d for %s, skipping", resp.status, url)
                    return None
                ctype = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if ctype != "text/html":
                    log.debug("Non-HTML content (%s) at %s, skipping", ctype or "none", url)
                    return None
                return await resp.text()
        except asyncio.TimeoutError:
            log.warning("Timeout fetching %s", url)
            return None
        except (ClientError, UnicodeDecodeError) as e:
            log.warning("Failed %s: %s", url, e)
            return None
