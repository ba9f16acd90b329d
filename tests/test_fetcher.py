# File: tests/test_fetcher.py
from __future__ import annotations

import asyncio
import time

import pytest
from aiohttp import ClientSession, ClientTimeout

from sitecrawl.crawler.fetcher import Fetcher

SLOW_SLEEP: float = 1.0


@pytest.mark.asyncio()
async def test_fetch_html(serve_site):
    base, _ = await serve_site({"/": "<h1>Hello</h1>"})
    async with ClientSession() as session:
        html = await Fetcher(session, 2).fetch(f"{base}/")
    assert html == "<h1>Hello</h1>"


@pytest.mark.asyncio()
@pytest.mark.parametrize(
    "route",
    [
        (404, "text/html", "missing", 0.0),
        (500, "text/html", "boom", 0.0),
        (200, "text/plain", "plain text", 0.0),
        (200, "application/json", "{}", 0.0),
    ],
)
async def test_fetch_skips_errors_and_non_html(serve_site, route):
    base, site = await serve_site({"/doc": route})
    async with ClientSession() as session:
        fetcher = Fetcher(session, 1)
        assert await fetcher.fetch(f"{base}/doc") is None
        assert fetcher.in_flight == 0
    assert site.hits["/doc"] == 1


@pytest.mark.asyncio()
async def test_fetch_connection_error_is_skip(unused_tcp_port):
    async with ClientSession() as session:
        assert await Fetcher(session, 1).fetch(f"http://localhost:{unused_tcp_port}/") is None


@pytest.mark.asyncio()
async def test_fetch_timeout_is_skip(serve_site):
    base, _ = await serve_site({"/slow": (200, "text/html", "late", SLOW_SLEEP)})
    async with ClientSession(timeout=ClientTimeout(total=0.2)) as session:
        fetcher = Fetcher(session, 1)
        assert await fetcher.fetch(f"{base}/slow") is None
        assert fetcher.in_flight == 0


@pytest.mark.asyncio()
async def test_slots_are_released_on_every_path(serve_site):
    base, _ = await serve_site({"/": "<p>ok</p>", "/gone": (404, "text/html", "", 0.0)})
    async with ClientSession() as session:
        fetcher = Fetcher(session, 1)
        for _ in range(3):
            assert await fetcher.fetch(f"{base}/gone") is None
        # a leaked slot would block here forever
        html = await asyncio.wait_for(fetcher.fetch(f"{base}/"), timeout=5)
    assert html == "<p>ok</p>"


@pytest.mark.asyncio()
async def test_concurrency_ceiling(serve_site):
    routes = {f"/p{i}": (200, "text/html", f"<p>{i}</p>", 0.2) for i in range(8)}
    base, site = await serve_site(routes)
    async with ClientSession() as session:
        fetcher = Fetcher(session, 3)
        results = await asyncio.gather(*(fetcher.fetch(f"{base}/p{i}") for i in range(8)))
    assert all(r is not None for r in results)
    assert fetcher.peak_in_flight == 3
    assert site.peak_active <= 3


@pytest.mark.asyncio()
async def test_abort_before_fetch_never_hits_server(serve_site):
    base, site = await serve_site({"/": "<p>x</p>"})
    async with ClientSession() as session:
        fetcher = Fetcher(session, 1)
        fetcher.abort.set()
        assert await fetcher.fetch(f"{base}/") is None
    assert site.hits["/"] == 0


@pytest.mark.asyncio()
async def test_abort_cancels_in_flight_request(serve_site):
    base, _ = await serve_site({"/slow": (200, "text/html", "late", SLOW_SLEEP)})
    async with ClientSession() as session:
        fetcher = Fetcher(session, 1)
        start = time.perf_counter()
        pending = asyncio.ensure_future(fetcher.fetch(f"{base}/slow"))
        await asyncio.sleep(0.1)
        fetcher.abort.set()
        assert await pending is None
        elapsed = time.perf_counter() - start
        assert fetcher.in_flight == 0
    assert elapsed < SLOW_SLEEP


def test_max_concurrency_must_be_positive():
    with pytest.raises(ValueError):
        Fetcher(session=None, max_concurrency=0)  # type: ignore[arg-type]
