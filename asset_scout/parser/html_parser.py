# === FILE: asset_scout/parser/html_parser.py ===
"""HTML parsing for AssetScout.

A thin wrapper over BeautifulSoup: the crawl engine hands it the raw response
body and gets back the navigable document tree that
:func:`asset_scout.crawler.link_extractor.extract_links` walks.

Bytes are passed to BeautifulSoup untouched so that its own encoding
detection (``<meta charset>``, BOM, fallbacks) picks the charset.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Union

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from asset_scout.errors import ParseError

__all__: Sequence[str] = ("DEFAULT_FEATURES", "parse_html")

DEFAULT_FEATURES = "html.parser"


def parse_html(content: Union[str, bytes], features: str = DEFAULT_FEATURES) -> BeautifulSoup:
    """Parse *content* into a document tree.

    Raises
    ------
    ParseError
        The markup was rejected by the underlying tree builder.
    """
    try:
        return BeautifulSoup(content, features)
    except (ParserRejectedMarkup, AssertionError) as exc:
        raise ParseError(f"could not parse document: {exc}") from exc
