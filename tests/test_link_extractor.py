import pytest
from lxml import etree

import linkcount.crawler.link_extractor as link_extractor
from linkcount.crawler.link_extractor import extract_links


async def collect(chunks):
    return [href async for href in extract_links(chunks)]


@pytest.mark.asyncio()
async def test_hrefs_from_split_chunks(chunked):
    html = (
        b'<html><head><link href="/style.css"></head><body>'
        b'<a href="/a">A</a><p><A HREF=" /b ">B</A></p>'
        b'<a name="anchor-without-href">x</a>'
        b'<a href="javascript:void(0)">js</a>'
        b'</body></html>'
    )
    assert await collect(chunked(html, size=5)) == ["/a", "/b", "javascript:void(0)"]


@pytest.mark.asyncio()
async def test_duplicates_are_kept(chunked):
    html = b'<a href="/a">1</a><a href="/a">2</a>'
    assert await collect(chunked(html)) == ["/a", "/a"]


@pytest.mark.asyncio()
async def test_links_are_yielded_before_body_ends():
    consumed = []

    async def slow_body():
        consumed.append(1)
        yield b'<html><body><a href="/first">1</a><p>' + b"filler " * 64 + b"</p>"
        consumed.append(2)
        yield b'<a href="/second">2</a></body></html>'

    links = extract_links(slow_body())
    assert await links.__anext__() == "/first"
    assert consumed == [1]
    assert [href async for href in links] == ["/second"]
    assert consumed == [1, 2]


@pytest.mark.asyncio()
async def test_empty_body_yields_nothing(chunked):
    assert await collect(chunked(b"")) == []


@pytest.mark.asyncio()
async def test_markup_error_ends_sequence_early(monkeypatch):
    class BrokenParser:
        def __init__(self, **kwargs):
            self.fed = 0

        def feed(self, chunk):
            self.fed += 1
            if self.fed > 1:
                raise etree.ParserError("tokenizer gave up")

        def read_events(self):
            return [("start", etree.Element("a", href="/before-error"))] if self.fed == 1 else []

        def close(self):
            return None

    monkeypatch.setattr(link_extractor.etree, "HTMLPullParser", BrokenParser)

    async def body():
        yield b"chunk one"
        yield b"chunk two"
        yield b"chunk three"

    assert await collect(body()) == ["/before-error"]
