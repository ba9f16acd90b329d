# sitecrawl/crawler/urls.py
"""
URL canonicalization for SiteCrawl.

A page is identified by ``hostname + path`` with one trailing slash removed;
scheme, port, query and fragment do not take part in the key.
"""
from __future__ import annotations

from urllib.parse import SplitResult, urlsplit

from sitecrawl.errors import InvalidURLError

__all__ = ("normalize_url", "hostname_of")


def _split(url: str) -> SplitResult:
    if not isinstance(url, str):
        raise InvalidURLError(repr(url), "expected a string")
    try:
        parts = urlsplit(url.strip())
        # .port raises ValueError for a non-numeric or out-of-range port
        parts.port
    except ValueError as exc:
        raise InvalidURLError(url, str(exc)) from exc
    if not parts.scheme or not parts.hostname:
        raise InvalidURLError(url)
    return parts


def hostname_of(url: str) -> str:
    """Return the (lower-cased) hostname of an absolute URL."""
    return _split(url).hostname or ""


def normalize_url(url: str) -> str:
    """
    Map *url* to its dedup key.

    >>> normalize_url("https://blog.boot.dev/path/")
    'blog.boot.dev/path'
    >>> normalize_url("http://blog.boot.dev/")
    'blog.boot.dev'
    """
    parts = _split(url)
    path = parts.path
    if path.endswith("/"):
        path = path[:-1]
    return f"{parts.hostname}{path}"
