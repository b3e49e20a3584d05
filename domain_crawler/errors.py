# File: domain_crawler/errors.py
"""domain_crawler.errors: exception hierarchy for the crawler."""

from __future__ import annotations


class CrawlerError(Exception):
    """Base class for all crawler errors."""


class InvalidURLError(CrawlerError, ValueError):
    """The seed URL cannot be parsed or has no host."""

    def __init__(self, url: str, reason: str = "cannot be parsed") -> None:
        super().__init__(f"Invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class SharedStateError(CrawlerError, RuntimeError):
    """The crawl results store could not be updated; the crawl cannot continue."""


__all__ = ["CrawlerError", "InvalidURLError", "SharedStateError"]
