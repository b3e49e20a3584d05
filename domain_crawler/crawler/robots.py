# File: domain_crawler/crawler/robots.py
"""
Loader and parser for the robots.txt exclusion policy.

Only ``Disallow:`` lines are honoured, at root-segment granularity: a rule
``Disallow: /private/drafts`` excludes everything under ``/private``.
``Allow``, ``User-agent`` groups and ``Crawl-delay`` are ignored.
"""
from __future__ import annotations

import asyncio
from typing import FrozenSet, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from domain_crawler.logger import logger
from domain_crawler.utils import RootDomain, root_path_segment

__all__ = ("ROBOTS_PATH", "DISALLOW_PREFIX", "parse_exclusions", "load_exclusions")

ROBOTS_PATH = "/robots.txt"
DISALLOW_PREFIX = "Disallow: "


def parse_exclusions(text: str) -> FrozenSet[str]:
    """Collect the root segments of every ``Disallow: `` line in *text*."""
    excluded = set()
    for line in text.splitlines():
        if not line.startswith(DISALLOW_PREFIX):
            continue
        segment = root_path_segment(line[len(DISALLOW_PREFIX):].strip())
        if segment is not None:
            excluded.add(segment)
    return frozenset(excluded)


async def load_exclusions(
    session: ClientSession,
    root: RootDomain,
    *,
    timeout: Optional[float] = None,
) -> FrozenSet[str]:
    """
    Fetch ``robots.txt`` for *root* and return the excluded root segments.

    A missing or unusable policy means nothing is excluded, so every failure
    yields an empty set instead of an exception.
    """
    robots_url = root.resolve(ROBOTS_PATH)
    kwargs = {"timeout": ClientTimeout(total=timeout)} if timeout is not None else {}
    try:
        async with session.get(robots_url, **kwargs) as resp:
            if not 200 <= resp.status < 300:
                logger.debug("robots.txt %s -> HTTP %s", robots_url, resp.status)
                return frozenset()
            text = await resp.text()
    except (ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
        logger.warning("Error loading robots.txt %s: %s", robots_url, e)
        return frozenset()

    excluded = parse_exclusions(text)
    logger.info("robots.txt %s: %d excluded segment(s)", robots_url, len(excluded))
    return excluded
