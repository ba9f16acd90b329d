# File: sitecrawl/session.py
"""sitecrawl.session: точка входа для запуска одного обхода сайта.

``crawl_site(base_url, max_concurrency, max_pages)`` validates its arguments,
runs the scheduler until quiescence and returns ``{normalized_url: PageRecord}``.
Per-page failures never surface here; only bad arguments raise
:class:`~sitecrawl.errors.ConfigurationError`, and they do so before any I/O.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from aiohttp import ClientSession, ClientTimeout
from pydantic import ValidationError

from sitecrawl.config import CrawlConfig
from sitecrawl.crawler.extractor import Extractor, extract_page_data
from sitecrawl.crawler.fetcher import Fetcher
from sitecrawl.crawler.models import PageRecord
from sitecrawl.crawler.registry import VisitedRegistry
from sitecrawl.crawler.scheduler import CrawlScheduler
from sitecrawl.errors import ConfigurationError
from sitecrawl.logger import get_logger

__all__ = ["AsyncCrawler", "build_config", "crawl_site", "crawl_with_config", "run"]

log = get_logger("session")


class AsyncCrawler:
    """Async context manager owning the HTTP session for one or more crawl runs."""

    def __init__(self, config: CrawlConfig, extractor: Extractor = extract_page_data) -> None:
        self.config = config
        self.extractor = extractor
        self.session: Optional[ClientSession] = None
        self.scheduler: Optional[CrawlScheduler] = None

    async def __aenter__(self) -> AsyncCrawler:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    def _new_scheduler(self) -> CrawlScheduler:
        if not self.session:
            raise RuntimeError("Session not initialized")
        fetcher = Fetcher(self.session, self.config.max_concurrency)
        registry = VisitedRegistry(self.config.max_pages)
        return CrawlScheduler(self.config.base_url, fetcher, registry, self.extractor)

    async def crawl(self) -> Dict[str, PageRecord]:
        """Run a fresh crawl; partial results are returned if the run deadline hits."""
        self.scheduler = scheduler = self._new_scheduler()
        try:
            return await asyncio.wait_for(scheduler.run(), timeout=self.config.run_timeout)
        except asyncio.TimeoutError:
            log.warning(
                "Crawl did not finish within %s s, returning %d partial results",
                self.config.run_timeout,
                len(scheduler.registry.snapshot()),
            )
            return scheduler.registry.snapshot()


def build_config(
    base_url: str, max_concurrency: int, max_pages: int, **overrides: Any
) -> CrawlConfig:
    """Validate top-level arguments, turning any schema error into ConfigurationError."""
    try:
        return CrawlConfig(
            base_url=base_url,
            max_concurrency=max_concurrency,
            max_pages=max_pages,
            **{k: v for k, v in overrides.items() if v is not None},
        )
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


async def crawl_site(
    base_url: str,
    max_concurrency: int,
    max_pages: int,
    *,
    extractor: Extractor = extract_page_data,
    **overrides: Any,
) -> Dict[str, PageRecord]:
    """Crawl *base_url* and return the completed pages keyed by normalized URL."""
    config = build_config(base_url, max_concurrency, max_pages, **overrides)
    return await crawl_with_config(config, extractor=extractor)


async def crawl_with_config(
    config: CrawlConfig, *, extractor: Extractor = extract_page_data
) -> Dict[str, PageRecord]:
    async with AsyncCrawler(config, extractor) as crawler:
        return await crawler.crawl()


def run(base_url: str, max_concurrency: int, max_pages: int, **overrides: Any) -> Dict[str, PageRecord]:
    """Синхронная обёртка над :func:`crawl_site` (``asyncio.run``)."""
    return asyncio.run(crawl_site(base_url, max_concurrency, max_pages, **overrides))
