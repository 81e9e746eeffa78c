# linkcount/crawler/link_extractor.py
"""
Streaming link extraction: ``href`` values of anchor tags, as the body arrives.
"""
from __future__ import annotations

from typing import AsyncIterator, Iterator, List

from lxml import etree

from linkcount.errors import MarkupParseError
from linkcount.logger import logger

__all__ = ("extract_links",)


async def extract_links(chunks: AsyncIterator[bytes]) -> AsyncIterator[str]:
    """
    Yield the ``href`` of every ``<a>`` start tag found in *chunks*.

    The body is fed to an incremental parser, so links are yielded while
    the rest of the page is still downloading. A markup error ends the
    sequence; links yielded before it stand.
    """
    parser = etree.HTMLPullParser(events=("start",), tag="a")
    try:
        async for chunk in chunks:
            for href in _feed(parser, chunk):
                yield href
        for href in _finish(parser):
            yield href
    except MarkupParseError as exc:
        logger.debug("Link extraction stopped early: %s", exc)


def _feed(parser: etree.HTMLPullParser, chunk: bytes) -> List[str]:
    try:
        parser.feed(chunk)
    except etree.LxmlError as exc:
        raise MarkupParseError(str(exc)) from exc
    return list(_hrefs(parser))


def _finish(parser: etree.HTMLPullParser) -> List[str]:
    try:
        parser.close()
    except etree.LxmlError as exc:
        # lxml refuses to close an empty document
        raise MarkupParseError(str(exc)) from exc
    return list(_hrefs(parser))


def _hrefs(parser: etree.HTMLPullParser) -> Iterator[str]:
    for _event, element in parser.read_events():
        href = element.get("href")
        if href is not None:
            yield href.strip()
