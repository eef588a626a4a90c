# asset_scout/crawler/hosts.py
"""
Host allow-list matching.

Patterns are dot-segment templates: ``*.example.org`` matches
``www.example.org`` but neither ``example.org`` nor ``a.b.example.org``,
because ``*`` stands for exactly one segment.
"""
from __future__ import annotations

from typing import Iterable, Optional, Tuple
from urllib.parse import urlsplit

__all__ = ("WILDCARD", "host_matches", "HostAllowList")

WILDCARD = "*"


def host_matches(host: str, pattern: str) -> bool:
    """Return True if *host* matches the dot-segment *pattern* (case-insensitive)."""
    host_segments = host.lower().split(".")
    pattern_segments = pattern.lower().split(".")
    if len(host_segments) != len(pattern_segments):
        return False
    return all(p == WILDCARD or p == h for h, p in zip(host_segments, pattern_segments))


class HostAllowList:
    """Read-only set of host patterns that are in scope for a crawl."""

    def __init__(self, patterns: Iterable[str]) -> None:
        self._patterns: Tuple[str, ...] = tuple(p.strip().lower() for p in patterns if p.strip())

    @property
    def patterns(self) -> Tuple[str, ...]:
        return self._patterns

    def allows(self, host: Optional[str]) -> bool:
        if not host:
            return False
        return any(host_matches(host, pattern) for pattern in self._patterns)

    def allows_url(self, url: str) -> bool:
        """Check the hostname (port and userinfo stripped) of an absolute URL."""
        try:
            host = urlsplit(url).hostname
        except ValueError:
            return False
        return self.allows(host)

    def __repr__(self) -> str:
        return f"<HostAllowList {list(self._patterns)!r}>"
