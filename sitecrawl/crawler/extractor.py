# sitecrawl/crawler/extractor.py
"""
Page data extraction for SiteCrawl.

Turns raw HTML plus the page URL into a :class:`PageRecord`. Missing or
malformed elements give empty strings / lists, never an exception.
"""
from __future__ import annotations

from typing import Callable, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from sitecrawl.crawler.models import PageRecord

__all__ = (
    "Extractor",
    "extract_page_data",
    "get_h1_from_html",
    "get_first_paragraph_from_html",
    "get_urls_from_html",
    "get_images_from_html",
)

#: Anything that maps ``(html, page_url)`` to a record can drive the scheduler.
Extractor = Callable[[str, str], PageRecord]


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def _resolve(base_url: str, raw: str) -> Optional[str]:
    try:
        return urljoin(base_url, raw.strip())
    except ValueError:
        return None


def _attr_urls(soup: BeautifulSoup, tag_name: str, attr: str, base_url: str) -> List[str]:
    urls: List[str] = []
    for tag in soup.find_all(tag_name):
        if not isinstance(tag, Tag):
            continue
        value = tag.get(attr)
        if not isinstance(value, str) or not value.strip():
            continue
        absolute = _resolve(base_url, value)
        if absolute:
            urls.append(absolute)
    return urls


def _h1(soup: BeautifulSoup) -> str:
    tag = soup.find("h1")
    return tag.get_text(strip=True) if tag else ""


def _first_paragraph(soup: BeautifulSoup) -> str:
    # a paragraph inside <main> wins over anything before it
    main = soup.find("main")
    tag = main.find("p") if isinstance(main, Tag) else None
    if tag is None:
        tag = soup.find("p")
    return tag.get_text(strip=True) if tag else ""


def get_h1_from_html(html: str) -> str:
    return _h1(_soup(html))


def get_first_paragraph_from_html(html: str) -> str:
    return _first_paragraph(_soup(html))


def get_urls_from_html(html: str, base_url: str) -> List[str]:
    """Absolute ``href`` of every ``<a>``, in document order."""
    return _attr_urls(_soup(html), "a", "href", base_url)


def get_images_from_html(html: str, base_url: str) -> List[str]:
    """Absolute ``src`` of every ``<img>``, in document order."""
    return _attr_urls(_soup(html), "img", "src", base_url)


def extract_page_data(html: str, page_url: str) -> PageRecord:
    """Parse *html* once and build the :class:`PageRecord` for *page_url*."""
    soup = _soup(html)
    return PageRecord(
        url=page_url,
        h1=_h1(soup),
        first_paragraph=_first_paragraph(soup),
        outgoing_links=tuple(_attr_urls(soup, "a", "href", page_url)),
        image_urls=tuple(_attr_urls(soup, "img", "src", page_url)),
    )
