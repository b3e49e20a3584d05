# === FILE: domain_crawler/crawler/crawler.py ===
"""
Async same-domain crawler.

A fixed pool of workers drains a queue of claimed URLs. Each worker runs one
traversal unit per URL: fetch, parse, record the page's links, claim the new
ones and put them on the queue. The crawl is finished once the queue has been
joined, i.e. it is empty and no worker is busy.
"""
from __future__ import annotations

import asyncio
import time
from typing import FrozenSet, Optional, Set

from aiohttp import ClientSession

from domain_crawler.aggregator import CrawlResults
from domain_crawler.config import CrawlerConfig
from domain_crawler.crawler.fetcher import Fetcher
from domain_crawler.crawler.link_extractor import classify_links
from domain_crawler.crawler.robots import load_exclusions
from domain_crawler.errors import InvalidURLError
from domain_crawler.logger import logger
from domain_crawler.utils import normalize_url, root_domain

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """Same-domain crawler honouring robots.txt ``Disallow`` root segments."""

    def __init__(
        self,
        config: Optional[CrawlerConfig] = None,
        results: Optional[CrawlResults] = None,
    ) -> None:
        self.config = config or CrawlerConfig()
        self.results = results if results is not None else CrawlResults(self.config.lock_timeout)
        self.excluded: FrozenSet[str] = frozenset()
        self.session: Optional[ClientSession] = None
        self._fetcher: Optional[Fetcher] = None

    async def __aenter__(self) -> AsyncCrawler:
        self.session = ClientSession(
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        self._fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, seed_url: str) -> CrawlResults:
        """
        Crawl every page reachable from *seed_url* on the same domain.

        Raises InvalidURLError for a malformed seed and SharedStateError when
        the results store cannot be updated.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        root = root_domain(seed_url)
        self.excluded = await load_exclusions(
            self.session, root, timeout=self.config.robots_timeout
        )

        logger.info("Старт обхода: %s", seed_url)
        start = time.monotonic()
        seed = normalize_url(seed_url)
        queue: asyncio.Queue[str] = asyncio.Queue()
        if self.results.claim(seed):
            queue.put_nowait(seed)

        workers = [asyncio.create_task(self._worker(queue)) for _ in range(self.config.concurrency)]
        drained = asyncio.create_task(queue.join())
        try:
            await asyncio.wait([drained, *workers], return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (drained, *workers):
                task.cancel()
            outcomes = await asyncio.gather(drained, *workers, return_exceptions=True)

        # workers only stop on their own by raising
        for outcome in outcomes:
            if isinstance(outcome, Exception):
                raise outcome

        duration = time.monotonic() - start
        pages = len(self.results.links_by_page())
        logger.info(
            "Завершено: %d страниц, %d ссылок за %.2f с", pages, len(self.results), duration
        )
        return self.results

    async def _worker(self, queue: asyncio.Queue[str]) -> None:
        while True:
            url = await queue.get()
            try:
                for link in await self.traverse(url):
                    queue.put_nowait(link)
            finally:
                queue.task_done()

    async def traverse(self, url: str) -> Set[str]:
        """
        Fetch *url*, record its links and return the ones claimed by this call.

        Fetch and URL failures end the unit with an empty result.
        """
        if not self._fetcher:
            raise RuntimeError("Session not initialized")
        page = await self._fetcher.fetch(url)
        if page is None:
            return set()

        try:
            root = root_domain(url)
        except InvalidURLError as e:
            logger.warning("Skip %s: %s", url, e)
            return set()

        links, rejected = classify_links(page.content, root, self.excluded)
        if rejected:
            logger.debug("%s: rejected %s", url, dict(rejected))
        self.results.record_page(url, links)

        claimed = {link for link in links if self.results.claim(link)}
        logger.debug("%s: %d links, %d new", url, len(links), len(claimed))
        return claimed
