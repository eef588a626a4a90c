# asset_scout/crawler/classifier.py
"""Split discovered URLs into document assets and pages to crawl."""
from __future__ import annotations

from typing import Sequence
from urllib.parse import urlsplit

__all__ = ("DEFAULT_ASSET_SUFFIXES", "is_asset")

DEFAULT_ASSET_SUFFIXES: Sequence[str] = (".pdf",)


def is_asset(url: str, suffixes: Sequence[str] = DEFAULT_ASSET_SUFFIXES) -> bool:
    """
    True when the URL path ends with one of *suffixes* (case-sensitive).

    Only the path is inspected: ``/view?file=a.pdf`` is a page, ``/A.PDF`` is
    a page too. No request is made, so the server's Content-Type is never
    consulted.
    """
    return urlsplit(url).path.endswith(tuple(suffixes))
