# asset_scout/crawler/link_extractor.py
"""
Link extraction for AssetScout.

Walks a parsed document tree and yields every in-scope, not yet visited
absolute URL referenced by an ``<a href>``.
"""
from __future__ import annotations

import logging
from typing import Iterator, List

from bs4.element import Tag

from asset_scout.crawler.hosts import HostAllowList
from asset_scout.crawler.ledger import VisitedLedger
from asset_scout.crawler.resolver import is_crawlable, resolve
from asset_scout.errors import ParseError
from asset_scout.logger import LOGGER_NAME

__all__ = ("iter_anchors", "extract_links")

logger = logging.getLogger(LOGGER_NAME)


def iter_anchors(root: Tag) -> Iterator[Tag]:
    """Yield ``<a>`` elements of *root* in document (pre-)order."""
    stack: List[Tag] = [root]
    while stack:
        node = stack.pop()
        if node.name == "a":
            yield node
        children = [child for child in node.children if isinstance(child, Tag)]
        stack.extend(reversed(children))


def extract_links(
    root: Tag,
    base_url: str,
    allow_list: HostAllowList,
    ledger: VisitedLedger,
) -> Iterator[str]:
    """
    Yield candidate URLs found in *root*.

    Each href is resolved against *base_url*; unparseable hrefs, non-http(s)
    schemes, hosts outside *allow_list* and URLs already in *ledger* are
    dropped. The generator is lazy: the ledger is consulted when a link is
    reached, not when extraction starts.
    """
    for anchor in iter_anchors(root):
        href = anchor.get("href")
        if not isinstance(href, str):
            continue
        try:
            url = resolve(base_url, href)
        except ParseError as exc:
            logger.debug("Skipping href on %s: %s", base_url, exc)
            continue
        if not is_crawlable(url):
            continue
        if not allow_list.allows_url(url):
            logger.debug("Host not allowed: %s", url)
            continue
        if url in ledger:
            continue
        logger.debug("found: %s", url)
        yield url
