# File: asset_scout/storage.py
"""asset_scout.storage: Сохранение списка документов и снимка журнала посещений на диск."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Union

from asset_scout.crawler.ledger import AssetList, VisitedLedger
from asset_scout.errors import PersistenceError
from asset_scout.logger import logger

__all__ = ["PersistenceSink", "atomic_write_text", "read_assets", "read_ledger"]


def atomic_write_text(path: Path, data: str) -> None:
    """Пишет текст во временный файл рядом с path и атомарно подменяет им path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class PersistenceSink:
    """Полная перезапись файлов результата после каждой обработанной страницы."""

    def __init__(self, assets_path: Union[str, Path], ledger_path: Union[str, Path]) -> None:
        self.assets_path = Path(assets_path)
        self.ledger_path = Path(ledger_path)
        self._lock = threading.Lock()

    def flush(self, assets: AssetList, ledger: VisitedLedger) -> None:
        """
        Сохраняет текущий список документов (по URL на строку, в порядке обнаружения)
        и снимок журнала в виде JSON-объекта url -> состояние.

        Снимки берутся под блокировкой записи, поэтому более поздний flush
        никогда не перезаписывается более ранним.
        """
        with self._lock:
            urls = assets.snapshot()
            states = ledger.snapshot()
            try:
                atomic_write_text(self.assets_path, "".join(f"{url}\n" for url in urls))
                atomic_write_text(
                    self.ledger_path, json.dumps(states, ensure_ascii=False, indent=2)
                )
            except (OSError, TypeError, ValueError) as exc:
                raise PersistenceError(f"не удалось сохранить результаты: {exc}") from exc
        logger.debug("Flushed %d assets, %d ledger entries", len(urls), len(states))


def read_assets(path: Union[str, Path]) -> list[str]:
    """Читает сохранённый список документов."""
    return [line for line in Path(path).read_text(encoding="utf-8").splitlines() if line]


def read_ledger(path: Union[str, Path]) -> dict[str, str]:
    """Читает сохранённый снимок журнала."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise TypeError(f"ожидался JSON-объект, получено {type(data).__name__}")
    return data
