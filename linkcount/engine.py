# File: linkcount/engine.py
"""linkcount.engine: запуск обхода, остановка по сигналу и сборка отчёта."""

from __future__ import annotations

import asyncio
import signal
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from linkcount.aggregator import CrawlReport, aggregate_results
from linkcount.config import CrawlerConfig
from linkcount.crawler.crawler import AsyncCrawler
from linkcount.crawler.normalizer import normalize_seeds
from linkcount.logger import logger

__all__ = ["start_crawl", "stop_on_signals"]

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


@contextmanager
def stop_on_signals(crawler: AsyncCrawler, signals: Sequence[signal.Signals] = STOP_SIGNALS) -> Iterator[None]:
    """Пока активен контекст, SIGINT/SIGTERM останавливают обход вместо завершения процесса."""
    loop = asyncio.get_running_loop()

    def _on_signal(signum: signal.Signals) -> None:
        logger.info("Received %s, preparing results", signum.name)
        crawler.stop()

    installed = []
    for sig in signals:
        try:
            loop.add_signal_handler(sig, _on_signal, sig)
        except (NotImplementedError, RuntimeError):
            # Windows or not the main thread: the default handler stays
            logger.debug("Cannot install handler for %s", sig.name)
            continue
        installed.append(sig)
    try:
        yield
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


async def start_crawl(
    cfg: CrawlerConfig,
    seeds: Optional[Sequence[str]] = None,
    *,
    crawl_timeout: Optional[float] = None,
) -> CrawlReport:
    """
    Запускает обход и возвращает итоговый отчёт.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация обхода.
    seeds : sequence of str, optional
        Стартовые URL; по умолчанию ``cfg.seeds``.
    crawl_timeout : float, optional
        Через сколько секунд остановить обход, как если бы пришёл SIGINT.

    Raises
    ------
    FatalArgumentError
        Если стартовых URL нет или один из них не разбирается.
    """
    addresses = normalize_seeds(seeds if seeds is not None else cfg.seeds)
    loop = asyncio.get_running_loop()

    async with AsyncCrawler(cfg) as crawler:
        deadline = loop.call_later(crawl_timeout, crawler.stop) if crawl_timeout else None
        try:
            with stop_on_signals(crawler):
                pages = await crawler.crawl(addresses)
        finally:
            if deadline is not None:
                deadline.cancel()

    logger.info("Preparing results")
    return aggregate_results(
        pages,
        cfg.top_n,
        stats=crawler.stats,
        keep_links=cfg.keep_links,
    )
