# === FILE: sitecrawl/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера SiteCrawl.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from sitecrawl.crawler.urls import hostname_of
from sitecrawl.errors import InvalidURLError


class CrawlConfig(BaseModel):
    """Конфигурация одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(..., description="Стартовый URL; его хост ограничивает обход.")
    max_concurrency: int = Field(5, ge=1, description="Число одновременных HTTP-запросов.")
    max_pages: int = Field(100, ge=1, description="Жесткий лимит по числу страниц.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("SiteCrawl/0.1", min_length=1, description="Заголовок User-Agent.")
    run_timeout: Optional[float] = Field(
        None, gt=0, description="Страховочный лимит на весь обход (секунд)."
    )

    @field_validator("base_url", mode="before")
    def _check_absolute(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            try:
                hostname_of(v)
            except InvalidURLError as exc:
                raise ValueError(exc.reason) from exc
        return v


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


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Читает YAML или JSON в словарь без проверки схемы."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path], **overrides: Any) -> CrawlConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlConfig.
    Непустые значения из *overrides* заменяют значения из файла.
    """
    data = read_config_file(path)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlConfig(**data)


__all__ = ["CrawlConfig", "load_config", "read_config_file"]
