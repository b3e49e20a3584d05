# === FILE: domain_crawler/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера.
Используется Pydantic для описания схемы и проверки данных.
Все поля имеют значения по умолчанию: файл конфигурации необязателен.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/99.0.4844.83 Safari/537.36"
)


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    request_timeout: float = Field(3.0, gt=0, description="Таймаут загрузки одной страницы (секунд).")
    robots_timeout: Optional[float] = Field(
        None, gt=0, description="Таймаут загрузки robots.txt; None: без отдельного таймаута."
    )
    concurrency: int = Field(32, ge=1, description="Число одновременно работающих воркеров.")
    lock_timeout: float = Field(5.0, gt=0, description="Таймаут захвата блокировки результатов.")
    all_links_file: str = Field("all_links.json", min_length=1, description="Файл со всеми ссылками.")
    links_by_page_file: str = Field(
        "links_by_page.json", min_length=1, description="Файл со ссылками по страницам."
    )


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


def load_config(path: Union[str, Path, None] = None) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без пути возвращает конфигурацию по умолчанию.
    """
    if path is None:
        return CrawlerConfig()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)
