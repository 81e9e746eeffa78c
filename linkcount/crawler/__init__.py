"""linkcount.crawler: конвейер обхода, реестр посещённых адресов и ранжирование."""

from .crawler import AsyncCrawler
from .models import CrawlStats, FetchedPage, Observation, Page, RankEntry
from .ranker import rank
from .registry import VisitedRegistry

__all__ = [
    "AsyncCrawler",
    "CrawlStats",
    "FetchedPage",
    "Observation",
    "Page",
    "RankEntry",
    "VisitedRegistry",
    "rank",
]
