# File: asset_scout/report.py
"""asset_scout.report: Итоговый отчёт обхода для CLI и тестов."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Dict, List

from asset_scout.crawler.ledger import AssetList, CrawlState, VisitedLedger


@dataclass(slots=True)
class CrawlReport:
    """Результаты обхода: найденные документы, статистика журнала и упавшие страницы."""

    seed_url: str
    assets: List[str] = field(default_factory=list)
    states: Dict[str, int] = field(default_factory=dict)
    failed: List[str] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def pages_crawled(self) -> int:
        return self.states.get(CrawlState.PAGE.value, 0)

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        output = asdict(self)
        output["elapsed"] = round(self.elapsed, 3)
        return json.dumps(output, ensure_ascii=False, indent=2 if pretty else None)


def build_report(
    seed_url: str, assets: AssetList, ledger: VisitedLedger, elapsed: float
) -> CrawlReport:
    """Собирает CrawlReport из состояния завершённого обхода."""
    return CrawlReport(
        seed_url=seed_url,
        assets=assets.snapshot(),
        states=ledger.counts(),
        failed=ledger.urls_in(CrawlState.FAILED),
        elapsed=elapsed,
    )
