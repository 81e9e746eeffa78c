# linkcount/crawler/registry.py
"""
Visited registry: the one place where addresses are counted and claimed.
"""
from __future__ import annotations

import threading
from typing import Dict, List, Optional

from linkcount.crawler.models import Observation, Page

__all__ = ("VisitedRegistry",)


class VisitedRegistry:
    """
    Maps normalized addresses to :class:`Page` records.

    All mutations run under a single lock, so concurrent callers see a
    total order: for any address exactly one :meth:`observe` (or
    :meth:`register_seed`) call creates the page, and only that caller may
    schedule the fetch.
    """

    def __init__(self, keep_links: bool = False) -> None:
        self.keep_links = keep_links
        self._pages: Dict[str, Page] = {}
        self._lock = threading.Lock()

    def observe(self, address: str, source: Optional[str] = None) -> Observation:
        """Count one discovery of *address*, optionally linked from *source*."""
        with self._lock:
            page = self._pages.get(address)
            first_sight = page is None
            if page is None:
                page = self._pages[address] = Page(address)
            page.views += 1
            if self.keep_links and source is not None:
                owner = self._pages.get(source)
                if owner is not None:
                    owner.links.add(address)
            return Observation(first_sight=first_sight, views=page.views)

    def register_seed(self, address: str) -> bool:
        """Claim *address* for fetching without counting a view; False if already known."""
        with self._lock:
            if address in self._pages:
                return False
            self._pages[address] = Page(address)
            return True

    def snapshot(self) -> List[Page]:
        """Point-in-time copies of all pages."""
        with self._lock:
            return [Page(p.address, p.views, set(p.links)) for p in self._pages.values()]

    def views(self, address: str) -> int:
        with self._lock:
            page = self._pages.get(address)
            return page.views if page else 0

    def __contains__(self, address: object) -> bool:
        with self._lock:
            return address in self._pages

    def __len__(self) -> int:
        with self._lock:
            return len(self._pages)
