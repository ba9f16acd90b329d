# File: tests/test_urls.py
import pytest

from sitecrawl.crawler.urls import hostname_of, normalize_url
from sitecrawl.errors import InvalidURLError


@pytest.mark.parametrize(
    "url",
    [
        "https://blog.boot.dev/path/",
        "https://blog.boot.dev/path",
        "http://blog.boot.dev/path/",
        "http://blog.boot.dev/path",
    ],
)
def test_normalize_url_drops_scheme_and_trailing_slash(url):
    assert normalize_url(url) == "blog.boot.dev/path"


def test_normalize_url_root_path():
    assert normalize_url("https://blog.boot.dev/") == "blog.boot.dev"
    assert normalize_url("https://blog.boot.dev") == "blog.boot.dev"


def test_normalize_url_strips_only_one_slash():
    assert normalize_url("https://blog.boot.dev/path//") == "blog.boot.dev/path/"


def test_normalize_url_drops_query_fragment_and_port():
    assert normalize_url("https://blog.boot.dev:8443/a/b?x=1#top") == "blog.boot.dev/a/b"


def test_normalize_url_keeps_path_case_lowercases_host():
    assert normalize_url("https://Blog.Boot.dev/Path/") == "blog.boot.dev/Path"


@pytest.mark.parametrize(
    "url",
    ["", "not a url", "/relative/path", "mailto:someone@example.com", "http://[::1/", "http://host:port/"],
)
def test_normalize_url_rejects_malformed(url):
    with pytest.raises(InvalidURLError):
        normalize_url(url)


def test_hostname_of():
    assert hostname_of("https://blog.boot.dev/path") == "blog.boot.dev"
    with pytest.raises(InvalidURLError):
        hostname_of("javascript:void(0)")
