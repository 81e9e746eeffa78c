"""
Address resolution and crawlability checks.
"""
from __future__ import annotations

from typing import Iterable, List, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from linkcount.errors import FatalArgumentError, MalformedAddress

__all__ = ("NETWORK_SCHEMES", "resolve", "is_crawlable", "normalize_seeds")

NETWORK_SCHEMES = frozenset({"http", "https"})


def resolve(base: Optional[str], candidate: str) -> str:
    """
    Resolve *candidate* against *base* and return the normalized address.

    Scheme and host are lower-cased, the fragment is dropped and an empty
    path becomes ``/``. Raises :class:`MalformedAddress` if the result
    cannot be parsed.
    """
    raw = candidate.strip()
    try:
        joined = urljoin(base, raw) if base else raw
        parts = urlsplit(joined)
        # accessing .port validates it
        parts.port
    except ValueError as exc:
        raise MalformedAddress(candidate, str(exc)) from exc

    path = parts.path
    if parts.netloc and not path:
        path = "/"
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, ""))


def is_crawlable(address: str) -> bool:
    """Return True for absolute http(s) addresses with a host."""
    try:
        parts = urlsplit(address)
    except ValueError:
        return False
    return parts.scheme.lower() in NETWORK_SCHEMES and bool(parts.hostname)


def normalize_seeds(raw_seeds: Iterable[str]) -> List[str]:
    """
    Validate and normalize the seed URLs, dropping duplicates.

    Raises :class:`FatalArgumentError` when no seed is given or a seed is
    not a crawlable absolute URL.
    """
    seeds: List[str] = []
    for raw in raw_seeds:
        try:
            address = resolve(None, raw)
        except MalformedAddress as exc:
            raise FatalArgumentError(f"Can't parse url {raw!r}: {exc.reason}") from exc
        if not is_crawlable(address):
            raise FatalArgumentError(f"Can't crawl url {raw!r}: expected an absolute http(s) URL")
        if address not in seeds:
            seeds.append(address)
    if not seeds:
        raise FatalArgumentError("Needs url to start crawler")
    return seeds
