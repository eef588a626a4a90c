# File: asset_scout/errors.py
"""asset_scout.errors: Иерархия исключений краулера AssetScout."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "ScoutError",
    "ParseError",
    "UnsupportedScheme",
    "TransportError",
    "HostNotAllowed",
    "PersistenceError",
]


class ScoutError(Exception):
    """Базовое исключение AssetScout."""


class ParseError(ScoutError, ValueError):
    """Некорректный href, seed URL или документ, который не удалось разобрать."""


class UnsupportedScheme(ParseError):
    """Схема URL не http/https."""


class TransportError(ScoutError):
    """Ошибка запроса: сеть, таймаут или ответ со статусом не 2xx."""

    def __init__(self, url: str, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(f"{url}: {message}")
        self.url = url
        # None: ответа не было (соединение, таймаут)
        self.status = status


class HostNotAllowed(ScoutError):
    """Хост URL не входит в allow-list."""


class PersistenceError(ScoutError):
    """Не удалось сохранить список документов или снимок журнала."""
