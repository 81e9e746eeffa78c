"""
Data models for the linkcount crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import AsyncIterator, Optional, Set


@dataclass(slots=True)
class Page:
    """A crawled or discovered address with its reference count."""

    address: str
    views: int = 0
    links: Set[str] = field(default_factory=set)


@dataclass(frozen=True, slots=True)
class Observation:
    """Outcome of :meth:`VisitedRegistry.observe`."""

    first_sight: bool
    views: int


@dataclass(slots=True)
class FetchedPage:
    """An open HTTP response; ``chunks`` may only be consumed inside the fetch context."""

    url: str
    status: int
    content_type: Optional[str]
    chunks: AsyncIterator[bytes]

    @property
    def is_html(self) -> bool:
        # A missing Content-Type is tokenized anyway, like a browser would sniff it.
        if not self.content_type:
            return True
        return "html" in self.content_type


@dataclass(frozen=True, slots=True)
class RankEntry:
    rank: int
    views: int
    address: str

    def render(self) -> str:
        return f"{self.rank}: Views {self.views}: {self.address}"


@dataclass(slots=True)
class CrawlStats:
    """Counters collected by the crawl pipeline."""

    submitted: int = 0
    fetched: int = 0
    failed: int = 0
    discovered: int = 0
    dropped: int = 0
    elapsed: float = 0.0
