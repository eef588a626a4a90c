# asset_scout/crawler/ledger.py
"""
Shared crawl state: the visited ledger and the discovered asset list.

Both objects are handed to every crawl task explicitly. Each guards its data
with its own lock; no method awaits while holding it, so the same instances
are safe from coroutines and from worker threads.
"""
from __future__ import annotations

import threading
from collections import Counter
from enum import Enum
from typing import Dict, Iterator, List, Optional

__all__ = ("CrawlState", "TERMINAL_STATES", "VisitedLedger", "AssetList")


class CrawlState(str, Enum):
    """Processing state of a URL recorded in the ledger."""

    DISCOVERED = "discovered"
    PAGE = "page"
    ASSET = "asset"
    FAILED = "failed"


TERMINAL_STATES = frozenset({CrawlState.PAGE, CrawlState.ASSET, CrawlState.FAILED})


class VisitedLedger:
    """Mapping of normalized URL -> :class:`CrawlState` with at-most-once claims."""

    def __init__(self) -> None:
        self._states: Dict[str, CrawlState] = {}
        self._lock = threading.Lock()

    def mark_seen(self, url: str) -> bool:
        """
        Claim *url* for processing.

        Returns True for exactly one caller per URL; every later call gets
        False. The check and the insert happen under one lock acquisition.
        """
        with self._lock:
            if url in self._states:
                return False
            self._states[url] = CrawlState.DISCOVERED
            return True

    def mark_terminal(self, url: str, state: CrawlState) -> bool:
        """
        Move a DISCOVERED entry to *state*.

        Returns False when *url* was never claimed or already left DISCOVERED.
        """
        if state not in TERMINAL_STATES:
            raise ValueError(f"not a terminal state: {state!r}")
        with self._lock:
            if self._states.get(url) is not CrawlState.DISCOVERED:
                return False
            self._states[url] = state
            return True

    def state(self, url: str) -> Optional[CrawlState]:
        with self._lock:
            return self._states.get(url)

    def snapshot(self) -> Dict[str, str]:
        """Copy of the ledger as ``{url: state value}`` in insertion order."""
        with self._lock:
            return {url: state.value for url, state in self._states.items()}

    def counts(self) -> Dict[str, int]:
        with self._lock:
            counter = Counter(state.value for state in self._states.values())
        return {state.value: counter.get(state.value, 0) for state in CrawlState}

    def urls_in(self, state: CrawlState) -> List[str]:
        with self._lock:
            return [url for url, s in self._states.items() if s is state]

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._states

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)


class AssetList:
    """Append-only, ordered list of asset URLs."""

    def __init__(self) -> None:
        self._items: List[str] = []
        self._lock = threading.Lock()

    def append(self, url: str) -> None:
        with self._lock:
            self._items.append(url)

    def snapshot(self) -> List[str]:
        with self._lock:
            return list(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
