# linkcount/crawler/fetcher.py
"""
Fetcher module: bounded-timeout HTTP GET returning a streamed body.
"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout

from linkcount.config import CrawlerConfig
from linkcount.crawler.models import FetchedPage
from linkcount.errors import FetchFailed

CHUNK_SIZE = 16 * 1024


class Fetcher:
    """Owns the HTTP session of one crawl and opens pages as byte streams."""

    def __init__(self, config: CrawlerConfig, chunk_size: int = CHUNK_SIZE) -> None:
        self.config = config
        self.chunk_size = chunk_size
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> Fetcher:
        # Only connection setup and socket reads are bounded; a slowly
        # trickling page may take as long as it keeps sending data.
        timeout = ClientTimeout(
            total=None,
            connect=self.config.timeout,
            sock_connect=self.config.timeout,
            sock_read=self.config.read_timeout,
        )
        self.session = ClientSession(timeout=timeout, raise_for_status=False)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    @asynccontextmanager
    async def fetch(self, url: str) -> AsyncIterator[FetchedPage]:
        """
        Open *url* and yield a :class:`FetchedPage` whose body is streamed.

        The response is released when the context exits, whichever way it
        exits. Error statuses are delivered like any other page, their body
        may still carry links. Raises :class:`FetchFailed` on network errors
        and timeouts, including a body that stalls while it is read.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            resp = await self.session.get(url)
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise FetchFailed(url, _describe(exc)) from exc

        async with resp:
            yield FetchedPage(
                url=url,
                status=resp.status,
                content_type=resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower() or None,
                chunks=self._iter_body(url, resp),
            )

    async def _iter_body(self, url: str, resp: ClientResponse) -> AsyncIterator[bytes]:
        try:
            async for chunk in resp.content.iter_chunked(self.chunk_size):
                yield chunk
        except (ClientError, asyncio.TimeoutError) as exc:
            raise FetchFailed(url, _describe(exc)) from exc


def _describe(exc: BaseException) -> str:
    # asyncio.TimeoutError carries no message
    return str(exc) or type(exc).__name__
