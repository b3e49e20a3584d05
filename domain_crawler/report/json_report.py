# File: domain_crawler/report/json_report.py
"""
Генерация JSON-отчётов: список всех ссылок и ссылки по страницам.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Tuple

from domain_crawler.aggregator import CrawlResults
from domain_crawler.config import CrawlerConfig


def _dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def render_all_links(results: CrawlResults) -> str:
    """JSON-массив всех посещённых URL (отсортирован)."""
    return _dumps(results.visited())


def render_links_by_page(results: CrawlResults) -> str:
    """JSON-объект ``страница -> массив найденных ссылок``."""
    return _dumps(results.links_by_page())


def write_reports(
    results: CrawlResults, output_dir: Path | str, config: CrawlerConfig
) -> Tuple[Path, Path]:
    """
    Сохраняет оба отчёта в *output_dir* под именами из конфигурации.

    :return: пути к файлу всех ссылок и к файлу ссылок по страницам
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    all_links = out / config.all_links_file
    all_links.write_text(render_all_links(results), encoding="utf-8")

    by_page = out / config.links_by_page_file
    by_page.write_text(render_links_by_page(results), encoding="utf-8")

    return all_links, by_page
