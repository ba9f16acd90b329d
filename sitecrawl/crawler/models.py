# sitecrawl/crawler/models.py
"""
Data models for the SiteCrawl crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


@dataclass(frozen=True, slots=True)
class PageRecord:
    """Data extracted from one crawled page. Immutable once built."""

    url: str
    h1: str = ""
    first_paragraph: str = ""
    outgoing_links: Tuple[str, ...] = field(default_factory=tuple)
    image_urls: Tuple[str, ...] = field(default_factory=tuple)

    def as_dict(self) -> Dict[str, Any]:
        """Snake_case form used by the report writers."""
        return {
            "url": self.url,
            "h1": self.h1,
            "first_paragraph": self.first_paragraph,
            "outgoing_links": list(self.outgoing_links),
            "image_urls": list(self.image_urls),
        }


class VisitState(Enum):
    UNCLAIMED = "unclaimed"
    CLAIMED = "claimed"
    COMPLETED = "completed"
    FAILED = "failed"


class ClaimResult(Enum):
    """Outcome of :meth:`VisitedRegistry.claim_if_new`."""

    CLAIMED = "claimed"
    ALREADY_VISITED = "already_visited"
    BUDGET_EXHAUSTED = "budget_exhausted"
