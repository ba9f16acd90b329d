# sitecrawl/crawler/registry.py
"""
Visited registry: the single synchronization point of a crawl run.

The visit map and the claimed-page counter live behind one lock, so
"is this page new AND is there budget left" is decided in one step.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

from sitecrawl.crawler.models import ClaimResult, PageRecord, VisitState
from sitecrawl.logger import get_logger

__all__ = ("VisitedRegistry",)

log = get_logger("registry")


class VisitedRegistry:
    """Concurrency-safe map ``normalized URL -> visit state`` with a page budget."""

    def __init__(self, max_pages: int) -> None:
        if max_pages < 1:
            raise ValueError("max_pages must be >= 1")
        self.max_pages = max_pages
        self._lock = asyncio.Lock()
        self._states: Dict[str, VisitState] = {}
        self._records: Dict[str, PageRecord] = {}
        self._claimed = 0
        self._stopping = False

    @property
    def claimed_count(self) -> int:
        return self._claimed

    @property
    def exhausted(self) -> bool:
        """True once the budget is used up; no more claims are granted."""
        return self._stopping

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, key: object) -> bool:
        return key in self._states

    async def claim_if_new(self, key: str) -> ClaimResult:
        async with self._lock:
            if key in self._states:
                return ClaimResult.ALREADY_VISITED
            if self._stopping or self._claimed >= self.max_pages:
                self._stopping = True
                return ClaimResult.BUDGET_EXHAUSTED
            self._states[key] = VisitState.CLAIMED
            self._claimed += 1
            if self._claimed >= self.max_pages:
                log.debug("Page budget reached (%d), no further claims", self.max_pages)
                self._stopping = True
            return ClaimResult.CLAIMED

    async def complete(self, key: str, record: PageRecord) -> None:
        async with self._lock:
            self._transition(key, VisitState.COMPLETED)
            self._records[key] = record

    async def fail(self, key: str) -> None:
        """Mark a claimed page as failed for good; it is never reclaimed."""
        async with self._lock:
            self._transition(key, VisitState.FAILED)

    def _transition(self, key: str, new: VisitState) -> None:
        current = self._states.get(key, VisitState.UNCLAIMED)
        if current is not VisitState.CLAIMED:
            raise RuntimeError(f"{key!r}: cannot move from {current.value} to {new.value}")
        self._states[key] = new

    def state(self, key: str) -> VisitState:
        return self._states.get(key, VisitState.UNCLAIMED)

    def record(self, key: str) -> Optional[PageRecord]:
        return self._records.get(key)

    def snapshot(self) -> Dict[str, PageRecord]:
        """Completed pages only, keyed by normalized URL."""
        return dict(self._records)
