# File: domain_crawler/crawler/__init__.py
"""domain_crawler.crawler: exclusion policy, link extraction, fetching and traversal."""

from .crawler import AsyncCrawler
from .link_extractor import extract_links, validate_link
from .models import LinkRejectReason, LinkVerdict, PageData
from .robots import load_exclusions, parse_exclusions

__all__ = [
    "AsyncCrawler",
    "LinkRejectReason",
    "LinkVerdict",
    "PageData",
    "extract_links",
    "load_exclusions",
    "parse_exclusions",
    "validate_link",
]
