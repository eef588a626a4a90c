# === FILE: asset_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import Dict, Optional

from aiohttp import ClientSession, ClientTimeout
from bs4 import BeautifulSoup

from asset_scout.config import CrawlConfig
from asset_scout.crawler.classifier import is_asset
from asset_scout.crawler.fetcher import Fetcher
from asset_scout.crawler.hosts import HostAllowList
from asset_scout.crawler.ledger import AssetList, CrawlState, VisitedLedger
from asset_scout.crawler.link_extractor import extract_links
from asset_scout.errors import HostNotAllowed, ParseError, PersistenceError, TransportError
from asset_scout.logger import LOGGER_NAME
from asset_scout.parser.html_parser import parse_html
from asset_scout.report import CrawlReport, build_report
from asset_scout.storage import PersistenceSink

__all__ = ("AssetCrawler",)


class AssetCrawler:
    """
    Async crawler that collects document assets reachable from a seed page.

    Every page gets its own task; a page's links are fetched concurrently and
    the page is finished only after all of them are. Fetches are capped by
    the fetcher's semaphore, so link-dense sites queue up instead of opening
    unbounded connections.
    """

    def __init__(self, config: CrawlConfig, sink: Optional[PersistenceSink] = None) -> None:
        self.config = config
        self.allow_list = HostAllowList(config.allowed_hosts)
        self.ledger = VisitedLedger()
        self.assets = AssetList()
        self.sink = sink if sink is not None else PersistenceSink(config.assets_file, config.ledger_file)
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.logger = logging.getLogger(LOGGER_NAME)

    async def __aenter__(self) -> AssetCrawler:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> CrawlReport:
        """
        Crawl from ``config.seed_url`` and return the report.

        A transport failure on the seed itself (host unreachable, timeout)
        propagates as TransportError; failures on any other page only mark
        that page as failed.
        """
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        seed = self.config.seed_url
        self.logger.info("Crawl started: %s (allowed hosts: %s)", seed, ", ".join(self.allow_list.patterns))
        start = time.monotonic()
        try:
            await self.visit(seed, is_seed=True)
        finally:
            await self._flush()
        duration = time.monotonic() - start
        report = build_report(seed, self.assets, self.ledger, duration)
        self.logger.info(
            "Finished: %d pages, %d assets, %d failed in %.2f s",
            report.pages_crawled, len(report.assets), len(report.failed), duration,
        )
        return report

    async def visit(self, url: str, *, is_seed: bool = False) -> None:
        """Process *url* unless another task already claimed it."""
        if not self.ledger.mark_seen(url):
            return
        await self._process(url, is_seed=is_seed)

    async def _process(self, url: str, *, is_seed: bool = False) -> None:
        try:
            document = await self._fetch_document(url)
        except TransportError as exc:
            self._fail(url, exc)
            if is_seed and exc.status is None:
                raise
            return
        except (HostNotAllowed, ParseError) as exc:
            self._fail(url, exc)
            return

        children = self._dispatch(document, url)
        # only the child tasks live across the join, not the parsed tree
        del document
        if children:
            outcomes = await asyncio.gather(*children.values(), return_exceptions=True)
            for link, outcome in zip(children, outcomes):
                if isinstance(outcome, Exception):
                    self.logger.error("Unexpected error while crawling %s: %r", link, outcome)
                    self.ledger.mark_terminal(link, CrawlState.FAILED)

        self.ledger.mark_terminal(url, CrawlState.PAGE)
        await self._flush()

    async def _fetch_document(self, url: str) -> BeautifulSoup:
        assert self.fetcher is not None
        # re-checked before every fetch, links were filtered at extraction time
        if not self.allow_list.allows_url(url):
            raise HostNotAllowed(url)
        self.logger.info("Crawling: %s", url)
        result = await self.fetcher.get(url)
        if not result.ok:
            raise TransportError(url, f"HTTP {result.status}", status=result.status)
        if result.redirected and not self.allow_list.allows_url(result.final_url):
            raise HostNotAllowed(f"{url} redirected to {result.final_url}")
        self.logger.debug("Status %s for %s (%s)", result.status, url, result.content_type or "?")
        if not result.is_html:
            raise ParseError(f"not an HTML page: {result.content_type}")
        return parse_html(result.body)

    def _dispatch(self, document: BeautifulSoup, base_url: str) -> Dict[str, asyncio.Task[None]]:
        children: Dict[str, asyncio.Task[None]] = {}
        for link in extract_links(document, base_url, self.allow_list, self.ledger):
            if not self.ledger.mark_seen(link):
                continue
            if is_asset(link, self.config.asset_suffixes):
                self.assets.append(link)
                self.ledger.mark_terminal(link, CrawlState.ASSET)
                self.logger.info("Asset: %s", link)
                continue
            children[link] = asyncio.create_task(self._process(link))
        return children

    def _fail(self, url: str, reason: Exception) -> None:
        self.ledger.mark_terminal(url, CrawlState.FAILED)
        if isinstance(reason, HostNotAllowed):
            self.logger.warning("Host not allowed: %s", reason)
        else:
            self.logger.warning("Failed %s: %s", url, reason)

    async def _flush(self) -> None:
        # file I/O runs on a worker thread, the sink serializes writers
        try:
            await asyncio.to_thread(self.sink.flush, self.assets, self.ledger)
        except PersistenceError as exc:
            self.logger.error("%s", exc)
