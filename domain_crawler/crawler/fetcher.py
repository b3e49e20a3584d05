# File: domain_crawler/crawler/fetcher.py
"""
Fetcher module: downloads HTML pages with a short per-request timeout.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession, ClientTimeout

from domain_crawler.config import CrawlerConfig
from domain_crawler.crawler.models import PageData
from domain_crawler.logger import logger

HTML_MIME = "text/html"


class Fetcher:
    """Fetches pages and keeps only ``text/html`` responses."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config
        self._timeout = ClientTimeout(total=config.request_timeout)

    async def fetch(self, url: str) -> PageData | None:
        """
        Fetch *url* once, without retries.

        Returns PageData for an HTML response, or None on error, timeout
        or any other content type.
        """
        try:
            async with self.session.get(url, timeout=self._timeout) as resp:
                # mime type only, charset and other parameters are not compared
                if resp.content_type != HTML_MIME:
                    logger.debug("Skip %s: content type %r", url, resp.content_type)
                    return None
                text = await resp.text()
        except (ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            logger.warning("Failed %s: %r", url, e)
            return None
        return PageData(url, text)
