# === FILE: asset_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера AssetScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import urlsplit

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from asset_scout.crawler.resolver import parse_seed_url


class CrawlConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: str = Field(..., description="Стартовый URL обхода (http/https).")
    allowed_hosts: List[str] = Field(
        default_factory=list,
        description="Шаблоны разрешённых хостов (`*.example.org`). По умолчанию хост seed_url.",
    )
    concurrency: int = Field(8, ge=1, description="Макс. число одновременных запросов.")
    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("AssetScoutBot/1.0", min_length=1, description="Заголовок User-Agent.")
    retry_times: int = Field(2, ge=0, description="Число повторных попыток при 5xx/429 и сетевых ошибках.")
    retry_backoff: float = Field(1.0, ge=0, description="Базовая задержка экспоненциального backoff (секунд).")
    asset_suffixes: List[str] = Field(
        default_factory=lambda: [".pdf"], min_length=1, description="Суффиксы пути документов."
    )
    assets_file: Path = Field(Path("pdf_urls.txt"), description="Файл со списком найденных документов.")
    ledger_file: Path = Field(Path("visited_urls.json"), description="Файл со снимком журнала посещений.")

    @model_validator(mode="before")
    @classmethod
    def _default_allowed_hosts(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("allowed_hosts"):
            seed = data.get("seed_url")
            if isinstance(seed, str):
                try:
                    host = urlsplit(seed.strip()).hostname
                except ValueError:
                    host = None
                if host:
                    data = {**data, "allowed_hosts": [host]}
        return data

    @field_validator("seed_url", mode="before")
    @classmethod
    def _validate_seed(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_seed_url(v)
        return v

    @field_validator("allowed_hosts")
    @classmethod
    def _clean_hosts(cls, v: List[str]) -> List[str]:
        hosts = [h.strip().lower() for h in v if h and h.strip()]
        for host in hosts:
            if any(segment == "" for segment in host.split(".")):
                raise ValueError(f"пустой сегмент в шаблоне хоста: {host!r}")
        return hosts


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Читает YAML или JSON файл конфигурации в словарь."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(
    path: Union[str, Path, None] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> CrawlConfig:
    """
    Собирает и проверяет CrawlConfig.

    Значения берутся из файла path (или configs/default.yaml, если он есть),
    затем поверх применяются overrides; ключи со значением None пропускаются.
    Отсутствующий явно указанный файл — FileNotFoundError, ошибки схемы —
    pydantic.ValidationError.
    """
    if path is not None:
        data = read_config_file(path)
    elif _DEFAULT_CFG.is_file():
        data = read_config_file(_DEFAULT_CFG)
    else:
        data = {}

    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)) and not value:
            continue
        data[key] = list(value) if isinstance(value, tuple) else value

    return CrawlConfig(**data)
