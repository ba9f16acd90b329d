# sitecrawl/__init__.py
"""
SiteCrawl package initializer.
Defines package version and exposes the crawl entry points.
"""
__version__ = "0.1.0"

from sitecrawl.errors import ConfigurationError, InvalidURLError
from sitecrawl.crawler.models import PageRecord
from sitecrawl.session import crawl_site, run

__all__ = ["__version__", "ConfigurationError", "InvalidURLError", "PageRecord", "crawl_site", "run"]
