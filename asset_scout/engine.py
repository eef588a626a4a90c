# File: asset_scout/engine.py
"""asset_scout.engine: Точка запуска обхода для CLI и тестов."""

from __future__ import annotations

from typing import Optional

from asset_scout.config import CrawlConfig
from asset_scout.crawler.crawler import AssetCrawler
from asset_scout.logger import logger
from asset_scout.report import CrawlReport
from asset_scout.storage import PersistenceSink

__all__ = ["start_crawl"]


async def start_crawl(cfg: CrawlConfig, sink: Optional[PersistenceSink] = None) -> CrawlReport:
    """
    Запускает AssetCrawler в контексте сессии и возвращает итоговый отчёт.

    Parameters
    ----------
    cfg : CrawlConfig
        Конфигурация обхода.
    sink : PersistenceSink, optional
        Куда сохранять результаты; по умолчанию файлы из cfg.

    Returns
    -------
    CrawlReport
        Найденные документы и статистика журнала посещений.
    """
    logger.info("Starting crawl…")
    async with AssetCrawler(cfg, sink=sink) as crawler:
        return await crawler.crawl()
