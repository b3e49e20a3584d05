# File: domain_crawler/crawler/models.py
"""
Data models for the crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(slots=True)
class PageData:
    """Holds the URL and HTML body of a fetched page."""

    url: str
    content: str


class LinkRejectReason(str, Enum):
    """Why a candidate href was not followed."""

    UNSUPPORTED_HREF = "unsupported_href"
    MALFORMED = "malformed"
    EXTERNAL_DOMAIN = "external_domain"
    EXCLUDED_PATH = "excluded_path"


@dataclass(frozen=True, slots=True)
class LinkVerdict:
    """Outcome of validating one href: a canonical URL or a rejection reason."""

    href: str
    url: Optional[str] = None
    reason: Optional[LinkRejectReason] = None

    @property
    def accepted(self) -> bool:
        return self.url is not None

    @classmethod
    def accept(cls, href: str, url: str) -> LinkVerdict:
        return cls(href=href, url=url)

    @classmethod
    def reject(cls, href: str, reason: LinkRejectReason) -> LinkVerdict:
        return cls(href=href, reason=reason)
