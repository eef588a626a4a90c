# asset_scout/crawler/models.py
"""
Data models for the AssetScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass

HTML_TYPES = frozenset({"text/html", "application/xhtml+xml"})


@dataclass(slots=True)
class FetchResult:
    """Response of one GET: requested and final URL, status, raw body."""

    url: str
    final_url: str
    status: int
    content_type: str
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_html(self) -> bool:
        # untyped responses count as HTML
        return not self.content_type or self.content_type in HTML_TYPES

    @property
    def redirected(self) -> bool:
        return self.final_url != self.url
