# File: domain_crawler/aggregator.py
"""domain_crawler.aggregator: общее хранилище результатов обхода."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import AbstractSet, Dict, FrozenSet, Iterator, List, Set

from domain_crawler.errors import SharedStateError

__all__ = ["CrawlResults"]


class CrawlResults:
    """
    Посещённые страницы и ссылки, найденные на каждой из них.

    Один экземпляр на обход; все изменения идут под одной блокировкой,
    поэтому ``claim`` атомарен и для задач asyncio, и для потоков.
    """

    def __init__(self, lock_timeout: float = 5.0) -> None:
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout
        self._visited: Set[str] = set()
        self._links_by_page: Dict[str, FrozenSet[str]] = {}

    @contextmanager
    def _locked(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise SharedStateError(
                f"Не удалось захватить блокировку результатов за {self._lock_timeout} с"
            )
        try:
            yield
        finally:
            self._lock.release()

    def claim(self, url: str) -> bool:
        """Атомарно добавляет URL; True только для первого вызвавшего."""
        with self._locked():
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def record_page(self, url: str, links: AbstractSet[str]) -> None:
        """Сохраняет ссылки страницы; каждая страница записывается один раз."""
        with self._locked():
            if url not in self._visited:
                raise SharedStateError(f"Страница {url} не была занята перед записью")
            if url in self._links_by_page:
                raise SharedStateError(f"Ссылки страницы {url} уже записаны")
            self._links_by_page[url] = frozenset(links)

    def is_visited(self, url: str) -> bool:
        with self._locked():
            return url in self._visited

    def visited(self) -> List[str]:
        """Отсортированный снимок всех занятых URL."""
        with self._locked():
            return sorted(self._visited)

    def links_by_page(self) -> Dict[str, List[str]]:
        """Снимок ``страница -> отсортированные ссылки``."""
        with self._locked():
            return {page: sorted(links) for page, links in sorted(self._links_by_page.items())}

    def __len__(self) -> int:
        with self._locked():
            return len(self._visited)
