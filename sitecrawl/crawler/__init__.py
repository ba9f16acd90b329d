# sitecrawl/crawler/__init__.py
"""Concurrent crawl core: canonicalizer, fetcher, visited registry and scheduler."""
from sitecrawl.crawler.extractor import extract_page_data
from sitecrawl.crawler.fetcher import Fetcher
from sitecrawl.crawler.models import ClaimResult, PageRecord, VisitState
from sitecrawl.crawler.registry import VisitedRegistry
from sitecrawl.crawler.scheduler import CrawlScheduler
from sitecrawl.crawler.urls import hostname_of, normalize_url

__all__ = [
    "ClaimResult",
    "CrawlScheduler",
    "Fetcher",
    "PageRecord",
    "VisitState",
    "VisitedRegistry",
    "extract_page_data",
    "hostname_of",
    "normalize_url",
]
