# File: tests/test_crawler.py
# End-to-end tests for the async crawler against local aiohttp servers
from __future__ import annotations

import asyncio
import time
from collections import Counter

import pytest
from aiohttp import web

from domain_crawler.aggregator import CrawlResults
from domain_crawler.config import CrawlerConfig
from domain_crawler.crawler.crawler import AsyncCrawler
from domain_crawler.engine import start_crawl
from domain_crawler.errors import InvalidURLError, SharedStateError

#: number of seconds a “slow” handler sleeps in the concurrency test
SLOW_SLEEP: float = 0.5
#: pages linked from the root of the wide site
WIDE_PAGES: int = 150


def html(body: str) -> web.Response:
    return web.Response(text=f"<html><body>{body}</body></html>", content_type="text/html")


def site(pages: dict[str, str], robots: str | None = None, hits: Counter | None = None) -> web.Application:
    """Build an app serving *pages* (path -> body) as HTML, counting requests in *hits*."""
    app = web.Application()

    def handler(path: str, body: str):
        async def _handle(_):
            if hits is not None:
                hits[path] += 1
            return html(body)
        return _handle

    for path, body in pages.items():
        app.router.add_get(path, handler(path, body))
    if robots is not None:
        async def _robots(_):
            if hits is not None:
                hits["/robots.txt"] += 1
            return web.Response(text=robots, content_type="text/plain")
        app.router.add_get("/robots.txt", _robots)
    return app


@pytest.mark.asyncio()
async def test_basic_crawl(serve, fast_config):
    hits: Counter = Counter()
    app = site(
        {
            "/": '<a href="/a">A</a><a href="/b/">B</a><a href="https://external.com/x">X</a>',
            "/a": '<a href="/">Home</a><a href="/b">B</a><a href="/c">C</a><a href="#top">top</a>',
            "/b": '<a href="/a/">A</a>',
            "/c": "<h1>Leaf</h1>",
        },
        robots="User-agent: *\nDisallow:\n",
        hits=hits,
    )
    base = await serve(app)

    results = await start_crawl(base, fast_config)

    assert results.visited() == sorted([base, f"{base}/a", f"{base}/b", f"{base}/c"])
    assert results.links_by_page() == {
        base: [f"{base}/a", f"{base}/b"],
        f"{base}/a": sorted([base, f"{base}/b", f"{base}/c"]),
        f"{base}/b": [f"{base}/a"],
        f"{base}/c": [],
    }
    # every page and the policy fetched exactly once
    assert hits == Counter({"/": 1, "/a": 1, "/b": 1, "/c": 1, "/robots.txt": 1})


@pytest.mark.asyncio()
async def test_seed_with_trailing_slash(serve, fast_config):
    base = await serve(site({"/": '<a href="/">self</a><a href="/a">A</a>', "/a": ""}))
    results = await start_crawl(f"{base}/", fast_config)
    assert results.visited() == [base, f"{base}/a"]


@pytest.mark.asyncio()
async def test_respect_robots(serve, fast_config):
    hits: Counter = Counter()
    app = site(
        {
            "/": '<a href="/private/secret">S</a><a href="/private">P</a><a href="/public">Pub</a>',
            "/public": '<a href="/private/other/">O</a>',
            "/private": "",
            "/private/secret": "",
        },
        robots="User-agent: *\nDisallow: /private/area\n",
        hits=hits,
    )
    base = await serve(app)

    results = await start_crawl(base, fast_config)

    assert results.visited() == [base, f"{base}/public"]
    assert "/private" not in hits
    assert "/private/secret" not in hits


@pytest.mark.asyncio()
async def test_non_html_page_is_not_recorded(serve, fast_config):
    app = site({"/": '<a href="/image">I</a><a href="/a">A</a><a href="/missing">M</a>', "/a": ""})

    async def image(_):
        return web.Response(body=b"\x89PNG", content_type="image/png")

    app.router.add_get("/image", image)
    base = await serve(app)

    results = await start_crawl(base, fast_config)

    # claimed, but never recorded: the unit stops after the fetch
    assert results.is_visited(f"{base}/image")
    assert results.is_visited(f"{base}/missing")
    assert set(results.links_by_page()) == {base, f"{base}/a"}
    assert len(results) == 4


@pytest.mark.asyncio()
async def test_timeout_on_slow_page(serve):
    app = site({"/": '<a href="/slow">S</a><a href="/fast">F</a>', "/fast": '<a href="/leaf">L</a>', "/leaf": ""})

    async def slow(_):
        await asyncio.sleep(1.5)
        return html('<a href="/never">N</a>')

    app.router.add_get("/slow", slow)
    base = await serve(app)

    config = CrawlerConfig(request_timeout=0.3, concurrency=4)
    results = await start_crawl(base, config)

    assert set(results.links_by_page()) == {base, f"{base}/fast", f"{base}/leaf"}
    assert results.is_visited(f"{base}/slow")
    assert not results.is_visited(f"{base}/never")


@pytest.mark.asyncio()
async def test_concurrency(serve):
    """Ensure that two slow pages are fetched concurrently."""
    app = site({"/": '<a href="/slow1">S1</a><a href="/slow2">S2</a>'})

    async def slow(_):
        await asyncio.sleep(SLOW_SLEEP)
        return html("<h1>Slow</h1>")

    app.router.add_get("/slow1", slow)
    app.router.add_get("/slow2", slow)
    base = await serve(app)

    start = time.perf_counter()
    results = await start_crawl(base, CrawlerConfig(request_timeout=5.0, concurrency=2))
    elapsed = time.perf_counter() - start

    assert elapsed < SLOW_SLEEP * 1.8
    assert set(results.links_by_page()) == {base, f"{base}/slow1", f"{base}/slow2"}


@pytest.mark.asyncio()
async def test_single_worker_drains_wide_site(serve):
    links = "".join(f'<a href="/page{i}">Page{i}</a>' for i in range(WIDE_PAGES))
    pages = {"/": links}
    pages.update({f"/page{i}": '<a href="/">Home</a>' for i in range(WIDE_PAGES)})
    base = await serve(site(pages))

    results = await start_crawl(base, CrawlerConfig(request_timeout=5.0, concurrency=1))

    assert len(results) == WIDE_PAGES + 1
    assert len(results.links_by_page()) == WIDE_PAGES + 1


@pytest.mark.asyncio()
async def test_shared_results_across_crawls(serve, fast_config):
    first = await serve(site({"/": '<a href="/a">A</a>', "/a": ""}))
    second = await serve(site({"/": '<a href="/b">B</a>', "/b": ""}))
    results = CrawlResults()

    async with AsyncCrawler(fast_config, results) as crawler:
        await crawler.crawl(first)
    async with AsyncCrawler(fast_config, results) as crawler:
        await crawler.crawl(second)

    assert results.visited() == sorted([first, f"{first}/a", second, f"{second}/b"])


@pytest.mark.asyncio()
async def test_invalid_seed():
    async with AsyncCrawler() as crawler:
        with pytest.raises(InvalidURLError):
            await crawler.crawl("not a url")


class BrokenResults(CrawlResults):
    def record_page(self, url, links):
        raise SharedStateError("store unavailable")


@pytest.mark.asyncio()
async def test_shared_state_failure_aborts_crawl(serve, fast_config):
    base = await serve(site({"/": '<a href="/a">A</a>', "/a": ""}))
    async with AsyncCrawler(fast_config, BrokenResults()) as crawler:
        with pytest.raises(SharedStateError):
            await crawler.crawl(base)


@pytest.mark.asyncio()
async def test_traverse_returns_only_new_links(serve, fast_config):
    base = await serve(site({"/": '<a href="/a">A</a><a href="/b">B</a>'}))
    results = CrawlResults()
    results.claim(base)
    results.claim(f"{base}/a")

    async with AsyncCrawler(fast_config, results) as crawler:
        claimed = await crawler.traverse(base)

    assert claimed == {f"{base}/b"}
    assert results.links_by_page()[base] == [f"{base}/a", f"{base}/b"]


@pytest.mark.asyncio()
async def test_pages_fetched_with_configured_user_agent(serve, fast_config):
    agents: Counter = Counter()

    async def page(request):
        agents[request.headers.get("User-Agent")] += 1
        return html('<a href="/a">A</a>')

    app = web.Application()
    app.router.add_get("/", page)
    app.router.add_get("/a", page)
    base = await serve(app)

    await start_crawl(base, fast_config)

    assert agents == Counter({CrawlerConfig().user_agent: 2})


@pytest.mark.asyncio()
async def test_links_with_bad_ports_are_not_followed(serve, fast_config):
    body = '<a href="http://127.0.0.1:99999/x">X</a><a href="http://127.0.0.1:abc/y">Y</a><a href="/ok">OK</a>'
    base = await serve(site({"/": body, "/ok": ""}))

    results = await start_crawl(base, fast_config)

    assert results.links_by_page()[base] == [f"{base}/ok"]
    assert results.visited() == [base, f"{base}/ok"]
