# sitecrawl/crawler/scheduler.py
"""
Crawl scheduler: recursive fan-out of per-page tasks over one crawl run.

Each discovered link gets its own asyncio task. Only network I/O is
throttled (by the :class:`Fetcher` semaphore); task fan-out is not. The run
is over when the set of in-flight tasks is empty.

Per-page pipeline::

    stop check -> domain check -> normalize -> claim -> fetch -> extract
    -> complete -> spawn children

Any step may end the task early; none of them raises to the caller.
"""
from __future__ import annotations

import asyncio
import time
from typing import Dict, Optional, Set

from sitecrawl.crawler.extractor import Extractor, extract_page_data
from sitecrawl.crawler.fetcher import Fetcher
from sitecrawl.crawler.models import ClaimResult, PageRecord
from sitecrawl.crawler.registry import VisitedRegistry
from sitecrawl.crawler.urls import hostname_of, normalize_url
from sitecrawl.errors import InvalidURLError
from sitecrawl.logger import get_logger

__all__ = ("CrawlScheduler",)

log = get_logger("scheduler")


class CrawlScheduler:
    """Owns one crawl run: registry, stop signal and the in-flight task set."""

    def __init__(
        self,
        base_url: str,
        fetcher: Fetcher,
        registry: VisitedRegistry,
        extractor: Extractor = extract_page_data,
    ) -> None:
        self.base_url = base_url
        self.base_host = hostname_of(base_url)
        self.fetcher = fetcher
        self.registry = registry
        self.extractor = extractor
        self._stop = asyncio.Event()
        self._tasks: Set[asyncio.Task[None]] = set()
        self.skipped = 0

    @property
    def stopping(self) -> bool:
        return self._stop.is_set()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def stop(self) -> None:
        """Stop handing out new work. Safe to call any number of times."""
        if not self._stop.is_set():
            log.info("Page budget of %d exhausted, stopping", self.registry.max_pages)
            self._stop.set()

    def abort(self) -> None:
        """Stop and also abort fetches that are queued or on the wire."""
        self._stop.set()
        self.fetcher.abort.set()

    def spawn(self, url: str) -> Optional[asyncio.Task[None]]:
        if self._stop.is_set():
            return None
        task = asyncio.create_task(self.crawl_page(url), name=f"crawl:{url}")
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("Crawl task %s crashed: %r", task.get_name(), exc)

    async def crawl_page(self, url: str) -> None:
        if self._stop.is_set():
            return

        try:
            if hostname_of(url) != self.base_host:
                return
            key = normalize_url(url)
        except InvalidURLError as e:
            log.debug("Skipping %s", e)
            self.skipped += 1
            return

        claim = await self.registry.claim_if_new(key)
        if claim is ClaimResult.ALREADY_VISITED:
            return
        if claim is ClaimResult.BUDGET_EXHAUSTED:
            self.stop()
            return

        log.debug("Fetching %s", url)
        html = await self.fetcher.fetch(url)
        if html is None:
            await self.registry.fail(key)
            self.skipped += 1
            return

        record = self.extractor(html, url)
        await self.registry.complete(key, record)
        log.info("Crawled %s (%d/%d)", url, self.registry.claimed_count, self.registry.max_pages)

        for link in record.outgoing_links:
            self.spawn(link)

    async def run(self, seed_url: Optional[str] = None) -> Dict[str, PageRecord]:
        """Crawl from *seed_url* (default: the base URL) until quiescence."""
        start = time.monotonic()
        seed = seed_url or self.base_url
        log.info("Starting crawl at %s", seed)
        self.spawn(seed)
        try:
            while self._tasks:
                await asyncio.wait(set(self._tasks))
        except asyncio.CancelledError:
            # our own caller gave up (run deadline): abort and drain before unwinding
            self.abort()
            for task in list(self._tasks):
                task.cancel()
            await asyncio.gather(*self._tasks, return_exceptions=True)
            raise
        pages = self.registry.snapshot()
        duration = time.monotonic() - start
        log.info(
            "Finished: %d pages (%d claimed, %d skipped) in %.2f s",
            len(pages),
            self.registry.claimed_count,
            self.skipped,
            duration,
        )
        return pages
