# linkcount/crawler/crawler.py
from __future__ import annotations

import asyncio
import logging
import time
from contextlib import aclosing
from typing import Iterable, List, Optional, Tuple

from linkcount.config import CrawlerConfig
from linkcount.crawler.fetcher import Fetcher
from linkcount.crawler.link_extractor import extract_links
from linkcount.crawler.models import CrawlStats, Page
from linkcount.crawler.normalizer import is_crawlable, resolve
from linkcount.crawler.registry import VisitedRegistry
from linkcount.errors import FetchFailed, MalformedAddress

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """Асинхронный краулер: пул воркеров, общий реестр адресов, остановка по stop()."""

    def __init__(
        self,
        config: CrawlerConfig,
        fetcher=None,
        registry: Optional[VisitedRegistry] = None,
    ) -> None:
        self.config = config
        self.registry = registry if registry is not None else VisitedRegistry(keep_links=config.keep_links)
        self.stats = CrawlStats()
        self.logger = logging.getLogger("linkcount")
        self._fetcher = fetcher
        self._owns_fetcher = fetcher is None
        self._queue: asyncio.Queue[Tuple[str, int]] = asyncio.Queue()
        self._stopped = asyncio.Event()
        self._accepting = True

    async def __aenter__(self) -> AsyncCrawler:
        if self._owns_fetcher:
            self._fetcher = Fetcher(self.config)
            await self._fetcher.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_fetcher and self._fetcher is not None:
            await self._fetcher.__aexit__(exc_type, exc, tb)

    @property
    def stopping(self) -> bool:
        return self._stopped.is_set()

    def stop(self) -> None:
        """Stop accepting addresses and end the crawl; in-flight fetches are abandoned."""
        if not self._stopped.is_set():
            self.logger.info("Stop requested, %d pages fetched so far", self.stats.fetched)
        self._accepting = False
        self._stopped.set()

    def submit(self, address: str, depth: int = 0) -> bool:
        """Queue *address* for fetching; False if the crawl no longer takes it."""
        if not self._accepting:
            return False
        if self.config.max_depth is not None and depth > self.config.max_depth:
            self.logger.debug("Depth limit, not fetching %s", address)
            return False
        if self.config.max_pages is not None and self.stats.submitted >= self.config.max_pages:
            self.logger.debug("Page limit reached, not fetching %s", address)
            return False
        self.stats.submitted += 1
        self._queue.put_nowait((address, depth))
        return True

    async def crawl(self, seeds: Iterable[str]) -> List[Page]:
        if self._fetcher is None:
            raise RuntimeError("Crawler not entered; use 'async with AsyncCrawler(...)'")
        seeds = list(seeds)
        self.logger.info("Starting crawl: %s", ", ".join(seeds))
        start = time.monotonic()
        for seed in seeds:
            if self.registry.register_seed(seed):
                self.submit(seed, 0)

        workers = [asyncio.create_task(self._worker()) for _ in range(self.config.concurrency)]
        drained = asyncio.create_task(self._queue.join())
        stopped = asyncio.create_task(self._stopped.wait())
        try:
            await asyncio.wait({drained, stopped}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            self._accepting = False
            for task in (*workers, drained, stopped):
                task.cancel()
            await asyncio.gather(*workers, drained, stopped, return_exceptions=True)

        self.stats.elapsed = time.monotonic() - start
        reason = "stopped" if self.stopping else "exhausted"
        self.logger.info(
            "Crawl %s: %d fetched, %d failed, %d addresses known in %.2f s",
            reason, self.stats.fetched, self.stats.failed, len(self.registry), self.stats.elapsed,
        )
        return self.registry.snapshot()

    async def _worker(self) -> None:
        while True:
            address, depth = await self._queue.get()
            try:
                await self._process(address, depth)
            except Exception:
                # one broken page must not take the worker down with it
                self.logger.exception("Unexpected error while crawling %s", address)
            finally:
                self._queue.task_done()

    async def _process(self, address: str, depth: int) -> None:
        try:
            async with self._fetcher.fetch(address) as page:
                status = page.status
                if page.is_html:
                    async with aclosing(extract_links(page.chunks)) as links:
                        async for href in links:
                            if not self._accepting:
                                break
                            self._handle_link(address, href, depth)
        except FetchFailed as exc:
            self.stats.failed += 1
            self.logger.warning("%s", exc)
            return
        # success is known only once the body has been read
        self.stats.fetched += 1
        self.logger.debug("Fetched %s (HTTP %d)", address, status)

    def _handle_link(self, source: str, href: str, depth: int) -> None:
        try:
            target = resolve(source, href)
        except MalformedAddress as exc:
            self.stats.dropped += 1
            self.logger.debug("%s (on %s)", exc, source)
            return
        if not is_crawlable(target):
            self.stats.dropped += 1
            return
        self.stats.discovered += 1
        seen = self.registry.observe(target, source=source)
        if seen.first_sight:
            self.submit(target, depth + 1)
