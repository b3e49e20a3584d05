# File: domain_crawler/crawler/link_extractor.py
"""
Link extraction and validation for same-domain crawling.
"""
from __future__ import annotations

from collections import Counter
from typing import AbstractSet, Set, Tuple
from urllib.parse import urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from domain_crawler.crawler.models import LinkRejectReason, LinkVerdict
from domain_crawler.utils import RootDomain, normalize_url, root_path_segment

__all__ = ("validate_link", "classify_links", "extract_links")


def validate_link(href: str, root: RootDomain, excluded: AbstractSet[str]) -> LinkVerdict:
    """
    Resolve *href* against *root* and decide whether it should be followed.

    Only root-relative (``/path``) and ``http``/``https`` hrefs are considered;
    protocol-relative, fragment-only, ``mailto:`` and similar are rejected.
    """
    if href.startswith("http"):
        absolute = href
    elif href.startswith("/") and not href.startswith("//"):
        absolute = root.resolve(href)
    else:
        return LinkVerdict.reject(href, LinkRejectReason.UNSUPPORTED_HREF)

    try:
        parsed = urlsplit(absolute)
        host = parsed.hostname
        parsed.port  # raises on a non-numeric or out-of-range port
    except ValueError:
        return LinkVerdict.reject(href, LinkRejectReason.MALFORMED)
    if parsed.scheme.lower() not in ("http", "https") or not host:
        return LinkVerdict.reject(href, LinkRejectReason.MALFORMED)

    if host != root.host:
        return LinkVerdict.reject(href, LinkRejectReason.EXTERNAL_DOMAIN)

    # links without a root segment (the home page) can never be excluded
    if root_path_segment(parsed.path) in excluded:
        return LinkVerdict.reject(href, LinkRejectReason.EXCLUDED_PATH)

    return LinkVerdict.accept(href, normalize_url(absolute))


def classify_links(
    html: str, root: RootDomain, excluded: AbstractSet[str]
) -> Tuple[Set[str], Counter]:
    """Return the accepted links of *html* and a count of rejections per reason."""
    soup = BeautifulSoup(html, "html.parser")
    accepted: Set[str] = set()
    rejected: Counter = Counter()
    for tag in soup.find_all("a"):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        verdict = validate_link(href.strip(), root, excluded)
        if verdict.accepted:
            accepted.add(verdict.url)  # type: ignore[arg-type]
        else:
            rejected[verdict.reason] += 1
    return accepted, rejected


def extract_links(html: str, root: RootDomain, excluded: AbstractSet[str]) -> Set[str]:
    """Set of canonical same-domain links in *html* that are not excluded."""
    accepted, _ = classify_links(html, root, excluded)
    return accepted
