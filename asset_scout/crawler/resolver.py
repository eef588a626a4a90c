# asset_scout/crawler/resolver.py
"""
URL resolution and normalization for AssetScout.

Every URL that enters the visited ledger goes through :func:`normalize_url`,
so two spellings of the same page (``HTTPS://Example.org`` and
``https://example.org:443/#top``) share one ledger key.
"""
from __future__ import annotations

from urllib.parse import SplitResult, urljoin, urlsplit, urlunsplit

from asset_scout.errors import ParseError, UnsupportedScheme

__all__ = ("CRAWLABLE_SCHEMES", "normalize_url", "resolve", "parse_seed_url", "is_crawlable")

CRAWLABLE_SCHEMES = frozenset({"http", "https"})
DEFAULT_PORTS = {"http": 80, "https": 443}


def _split(url: str) -> SplitResult:
    try:
        parts = urlsplit(url)
        # .port validates the port component lazily
        parts.port
    except ValueError as exc:
        raise ParseError(f"malformed URL {url!r}: {exc}") from exc
    return parts


def normalize_url(url: str) -> str:
    """
    Lowercase scheme and netloc, drop the scheme's default port and the
    fragment, use ``/`` for an empty path.

    Query strings are kept verbatim.
    """
    parts = _split(url)
    scheme = parts.scheme.lower()
    netloc = parts.netloc.lower()
    if netloc.endswith(":"):
        netloc = netloc[:-1]
    elif parts.port is not None and parts.port == DEFAULT_PORTS.get(scheme):
        netloc = netloc.rsplit(":", 1)[0]
    path = parts.path
    if netloc and not path:
        path = "/"
    return urlunsplit((scheme, netloc, path, parts.query, ""))


def resolve(base: str, href: str) -> str:
    """Return *href* as an absolute, normalized URL relative to *base*."""
    raw = href.strip()
    parts = _split(raw)
    if parts.scheme and parts.netloc:
        return normalize_url(raw)
    return normalize_url(urljoin(base, raw))


def is_crawlable(url: str) -> bool:
    """True for http/https URLs that carry a host."""
    parts = urlsplit(url)
    return parts.scheme.lower() in CRAWLABLE_SCHEMES and bool(parts.hostname)


def parse_seed_url(raw: str) -> str:
    """
    Validate the seed URL of a crawl.

    Raises ParseError for an empty, malformed or host-less URL and
    UnsupportedScheme for anything other than http/https.
    """
    if not raw or not raw.strip():
        raise ParseError("seed URL is empty")
    url = normalize_url(raw.strip())
    parts = urlsplit(url)
    if parts.scheme not in CRAWLABLE_SCHEMES:
        raise UnsupportedScheme(f"seed URL must use http or https: {raw!r}")
    if not parts.hostname:
        raise ParseError(f"seed URL has no host: {raw!r}")
    return url
