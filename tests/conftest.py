# File: tests/conftest.py
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Iterable, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web

from linkcount.config import CrawlerConfig
from linkcount.crawler.models import FetchedPage
from linkcount.errors import FetchFailed
from linkcount.logger import LOGGER_NAME


async def body_chunks(body: bytes, size: int = 7) -> AsyncIterator[bytes]:
    """Yield *body* in small chunks so tags get split across feeds."""
    for i in range(0, len(body), size):
        yield body[i:i + size]


def anchors(*hrefs: str) -> str:
    return "<html><body>" + "".join(f'<a href="{h}">link</a>' for h in hrefs) + "</body></html>"


class StubFetcher:
    """
    In-memory stand-in for :class:`linkcount.crawler.fetcher.Fetcher`.

    ``pages`` maps URL -> HTML; unknown URLs fail like an unreachable host. URLs in
    ``hang`` never finish, URLs in ``delays`` sleep before answering.
    """

    def __init__(
        self,
        pages: Dict[str, str],
        *,
        delays: Optional[Dict[str, float]] = None,
        hang: Iterable[str] = (),
        errors: Optional[Dict[str, Exception]] = None,
    ) -> None:
        self.pages = pages
        self.delays = delays or {}
        self.hang = set(hang)
        self.errors = errors or {}
        self.calls: List[str] = []
        self.closed: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @asynccontextmanager
    async def fetch(self, url: str):
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if url in self.hang:
                await asyncio.Event().wait()
            await asyncio.sleep(self.delays.get(url, 0))
            if url in self.errors:
                raise self.errors[url]
            if url not in self.pages:
                raise FetchFailed(url, "connection refused")
            yield FetchedPage(url, 200, "text/html", body_chunks(self.pages[url].encode()))
        finally:
            self.in_flight -= 1
            self.closed.append(url)


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig for crawler tests.
    """
    return CrawlerConfig(timeout=2.0, read_timeout=2.0, concurrency=4)


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory):
    """Start aiohttp apps on free ports; returns their base URLs, cleans up afterwards."""
    runners: List[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    yield _serve
    for runner in runners:
        await runner.cleanup()


@pytest.fixture()
def chunked():
    return body_chunks


@pytest.fixture()
def stub_fetcher():
    """Factory for :class:`StubFetcher` instances."""
    return StubFetcher


@pytest.fixture()
def html_links():
    return anchors


@pytest.fixture(autouse=True)
def reset_project_logger():
    """The CLI detaches the project logger from root; re-attach it so caplog sees records."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)
