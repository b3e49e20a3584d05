# File: domain_crawler/engine.py
"""domain_crawler.engine: точка запуска обхода для CLI и тестов."""

from __future__ import annotations

from typing import Optional

from domain_crawler.aggregator import CrawlResults
from domain_crawler.config import CrawlerConfig
from domain_crawler.crawler.crawler import AsyncCrawler

__all__ = ["start_crawl"]


async def start_crawl(seed_url: str, config: Optional[CrawlerConfig] = None) -> CrawlResults:
    """
    Запускает асинхронный краулер в контексте и возвращает результаты обхода.

    Parameters
    ----------
    seed_url : str
        Начальный URL; обходится только его домен.
    config : CrawlerConfig, optional
        Конфигурация; по умолчанию используются встроенные значения.
    """
    config = config or CrawlerConfig()
    async with AsyncCrawler(config) as crawler:
        return await crawler.crawl(seed_url)
