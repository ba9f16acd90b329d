# File: tests/conftest.py
from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Dict, Tuple, Union

import pytest
import pytest_asyncio
from aiohttp import web

from sitecrawl.crawler.models import PageRecord
from sitecrawl.logger import LOGGER_NAME

#: a route is either an HTML body or (status, content_type, body, delay)
Route = Union[str, Tuple[int, str, str, float]]


@pytest.fixture(autouse=True)
def reset_logger():
    """The CLI binds handlers to CliRunner streams; drop them after every test."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
    lg.propagate = True


class SiteApp:
    """aiohttp app built from a ``path -> route`` mapping that counts hits."""

    def __init__(self, routes: Dict[str, Route]) -> None:
        self.hits: Counter[str] = Counter()
        self.active = 0
        self.peak_active = 0
        self.app = web.Application()
        for path, route in routes.items():
            self.app.router.add_get(path, self._handler(path, route))

    def _handler(self, path: str, route: Route) -> Callable[[web.Request], Awaitable[web.Response]]:
        if isinstance(route, str):
            route = (200, "text/html", route, 0.0)
        status, ctype, body, delay = route

        async def handle(_: web.Request) -> web.Response:
            self.hits[path] += 1
            self.active += 1
            self.peak_active = max(self.peak_active, self.active)
            try:
                if delay:
                    await asyncio.sleep(delay)
                return web.Response(status=status, text=body, content_type=ctype)
            finally:
                self.active -= 1

        return handle


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def serve_site(unused_tcp_port_factory) -> AsyncIterator[Callable[[Dict[str, Route]], Awaitable[Tuple[str, SiteApp]]]]:
    """Factory: ``base, site = await serve_site({"/": "<html>…</html>"})``."""
    servers = []

    async def _start(routes: Dict[str, Route]) -> Tuple[str, SiteApp]:
        site = SiteApp(routes)
        gen = _serve_app(site.app, unused_tcp_port_factory())
        base = await gen.__anext__()
        servers.append(gen)
        return base, site

    yield _start

    for gen in servers:
        await gen.aclose()


@pytest.fixture()
def sample_pages() -> Dict[str, PageRecord]:
    return {
        "blog.boot.dev": PageRecord(
            url="https://blog.boot.dev",
            h1="Test Title",
            first_paragraph='Says "hi", then leaves',
            outgoing_links=("https://blog.boot.dev/link1", "https://blog.boot.dev/link2"),
            image_urls=("https://blog.boot.dev/image1.jpg",),
        ),
        "blog.boot.dev/link1": PageRecord(url="https://blog.boot.dev/link1", h1="<Link 1>"),
    }
