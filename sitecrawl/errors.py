# File: sitecrawl/errors.py
"""sitecrawl.errors: Исключения, видимые вызывающему коду."""

from __future__ import annotations

__all__ = ["CrawlError", "ConfigurationError", "InvalidURLError"]


class CrawlError(Exception):
    """Base class for all sitecrawl errors."""


class ConfigurationError(CrawlError, ValueError):
    """Invalid top-level arguments, reported before any crawling starts."""


class InvalidURLError(CrawlError, ValueError):
    """A URL could not be parsed into hostname + path."""

    def __init__(self, url: str, reason: str = "not an absolute URL") -> None:
        super().__init__(f"Invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason
