# File: linkcount/aggregator.py
"""linkcount.aggregator: сборка итогового отчёта обхода из снимка реестра."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional

from linkcount.crawler.models import CrawlStats, Page, RankEntry
from linkcount.crawler.ranker import rank


@dataclass(slots=True)
class CrawlReport:
    """Итог обхода: рейтинг адресов, счётчики и (опционально) граф ссылок."""

    entries: List[RankEntry] = field(default_factory=list)
    stats: CrawlStats = field(default_factory=CrawlStats)
    total_pages: int = 0
    links: Optional[Dict[str, List[str]]] = None

    def lines(self) -> List[str]:
        """Строки рейтинга в формате ``<rank>: Views <count>: <address>``."""
        return [entry.render() for entry in self.entries]

    def as_dict(self) -> dict:
        data = {
            "top": [asdict(entry) for entry in self.entries],
            "total_pages": self.total_pages,
            "stats": asdict(self.stats),
        }
        if self.links is not None:
            data["links"] = self.links
        return data

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(
    pages: Iterable[Page],
    top_n: int,
    stats: Optional[CrawlStats] = None,
    keep_links: bool = False,
) -> CrawlReport:
    """Собирает CrawlReport из снимка страниц."""
    pages = list(pages)
    report = CrawlReport(
        entries=rank(pages, top_n),
        stats=stats if stats is not None else CrawlStats(),
        total_pages=len(pages),
    )
    if keep_links:
        report.links = {p.address: sorted(p.links) for p in sorted(pages, key=lambda p: p.address) if p.links}
    return report
