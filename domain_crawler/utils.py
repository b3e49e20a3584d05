# File: domain_crawler/utils.py
"""domain_crawler.utils: URL helpers shared by the exclusion policy, extractor and orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence
from urllib.parse import urlsplit, urlunsplit

from domain_crawler.errors import InvalidURLError

__all__: Sequence[str] = (
    "RootDomain",
    "root_domain",
    "canonicalize",
    "root_path_segment",
    "normalize_url",
)

_SCHEMES = ("http", "https")


@dataclass(frozen=True, slots=True)
class RootDomain:
    """Scheme and host of the crawled site, e.g. ``https://example.com``."""

    scheme: str
    host: str
    netloc: str

    def __str__(self) -> str:
        return f"{self.scheme}://{self.netloc}"

    def resolve(self, path: str) -> str:
        """Turn a root-relative href (``/about``) into an absolute URL."""
        return f"{self}{path}"


def root_domain(url: str) -> RootDomain:
    """Extract the :class:`RootDomain` of *url* or raise :class:`InvalidURLError`."""
    try:
        parsed = urlsplit(url.strip())
        host = parsed.hostname
        parsed.port  # raises on a non-numeric or out-of-range port
    except ValueError as exc:
        raise InvalidURLError(url, str(exc)) from exc
    scheme = parsed.scheme.lower()
    if scheme not in _SCHEMES:
        raise InvalidURLError(url, "scheme must be http or https")
    if not host:
        raise InvalidURLError(url, "no host component")
    return RootDomain(scheme=scheme, host=host, netloc=parsed.netloc.lower())


def canonicalize(url: str) -> str:
    """Strip the trailing slash so ``/page/`` and ``/page`` map to one key."""
    return url.rstrip("/")


def root_path_segment(path: str) -> Optional[str]:
    """Return ``/`` plus the first non-empty segment of *path*, or ``None``."""
    for part in path.split("/"):
        if part:
            return f"/{part}"
    return None


def normalize_url(url: str) -> str:
    """Serialize an absolute URL canonically: lower-case scheme/host, no fragment, no trailing slash."""
    parsed = urlsplit(url)
    return canonicalize(
        urlunsplit((parsed.scheme.lower(), parsed.netloc.lower(), parsed.path, parsed.query, ""))
    )
