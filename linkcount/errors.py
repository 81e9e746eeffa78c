"""Exceptions raised by the linkcount crawler.

Every error except :class:`FatalArgumentError` is recovered where it occurs:
the offending link, page or address is dropped and the crawl goes on.
"""
from __future__ import annotations


class LinkCountError(Exception):
    """Base class for all linkcount errors."""


class MalformedAddress(LinkCountError):
    """Raised when a link string cannot be parsed as a URL."""

    def __init__(self, candidate: str, reason: str = "cannot be parsed"):
        self.candidate = candidate
        self.reason = reason
        super().__init__(f"Malformed address {candidate!r}: {reason}")


class FetchFailed(LinkCountError):
    """Raised when an HTTP fetch fails due to network errors or timeouts."""

    def __init__(self, url: str, reason: object):
        self.url = url
        self.reason = reason
        super().__init__(f"Fetch failed for {url}: {reason}")


class MarkupParseError(LinkCountError):
    """Raised when the HTML tokenizer cannot continue on a page."""


class FatalArgumentError(LinkCountError):
    """Raised for unusable command-line input, before any crawling starts."""
