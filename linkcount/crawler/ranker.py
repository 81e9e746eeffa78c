# linkcount/crawler/ranker.py
"""
Top-N ranking of pages by reference count.
"""
from __future__ import annotations

import heapq
from typing import Iterable, List

from linkcount.crawler.models import Page, RankEntry

__all__ = ("rank",)


def rank(pages: Iterable[Page], top_n: int) -> List[RankEntry]:
    """
    Return the *top_n* most referenced pages, most referenced first.

    Pages nobody linked to (seeds) are left out. Equal counts are ordered
    by address. Selection keeps a heap of at most *top_n* items instead of
    sorting every page.
    """
    if top_n <= 0:
        return []
    linked = (p for p in pages if p.views > 0)
    best = heapq.nsmallest(top_n, linked, key=lambda p: (-p.views, p.address))
    return [RankEntry(rank=i, views=p.views, address=p.address) for i, p in enumerate(best, start=1)]
