# File: tests/conftest.py
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web

from domain_crawler.aggregator import CrawlResults
from domain_crawler.config import CrawlerConfig
from domain_crawler.utils import RootDomain, root_domain

RESOURCES = Path(__file__).parent / "resources"

ServeT = Callable[[web.Application], Awaitable[str]]


@pytest.fixture()
def testing_links_html() -> str:
    """HTML page with three followable links and a set of links to reject."""
    return (RESOURCES / "testing_links.html").read_text(encoding="utf-8")


@pytest.fixture()
def example_root() -> RootDomain:
    return root_domain("https://example.com")


@pytest.fixture()
def results() -> CrawlResults:
    return CrawlResults(lock_timeout=1.0)


@pytest.fixture()
def fast_config() -> CrawlerConfig:
    """Config with short timeouts for local test servers."""
    return CrawlerConfig(request_timeout=1.0, robots_timeout=1.0, concurrency=4)


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[ServeT]:
    """Start aiohttp apps on free local ports; all of them are cleaned up after the test."""
    runners: list[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        return f"http://127.0.0.1:{port}"

    yield _serve
    for runner in runners:
        await runner.cleanup()
