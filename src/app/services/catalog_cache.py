"""In-memory TTL cache for the service catalog.

Categories and per-category services change rarely, so they are kept
for one hour. A failed refresh never reaches the caller: the previous
value is served, or an empty list when nothing was ever loaded.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from app.protocols.catalog_provider import CatalogCacheProtocol
from config.logging import log_fallback
from config.settings.bookio import CATALOG_TTL_SECONDS
from utils.errors import ProviderError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from app.domain.catalog import Category, Service
    from app.protocols.catalog_provider import CatalogProviderProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "catalog_cache"
_CATEGORIES_KEY = "categories"

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    fetched_at: float


class CatalogCache(CatalogCacheProtocol):
    """Catalog cache owned by the application, one instance per process.

    Reads of a fresh entry never await. Refreshes of the same key are
    serialised by a per-key lock and a waiter re-checks freshness after
    acquiring it, so a burst of callers triggers a single upstream call.
    """

    __slots__ = (
        "_clock",
        "_entries",
        "_locks",
        "_popular_categories",
        "_provider",
        "_stats",
        "_ttl_seconds",
    )

    def __init__(
        self,
        provider: CatalogProviderProtocol,
        *,
        popular_categories: Iterable[int] = (),
        ttl_seconds: float = CATALOG_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._provider = provider
        self._popular_categories = tuple(popular_categories)
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry[list[Any]]] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._stats = {"hits": 0, "misses": 0, "refresh_failures": 0, "stale_served": 0}

    @property
    def popular_categories(self) -> tuple[int, ...]:
        return self._popular_categories

    async def get_categories(self) -> list[Category]:
        return await self._read(_CATEGORIES_KEY, self._provider.fetch_categories)

    async def get_services(self, category_id: int) -> list[Service]:
        return await self._read(
            f"services:{category_id}",
            lambda: self._provider.fetch_services(category_id),
        )

    async def warm_up(self) -> None:
        """Preload categories and the popular categories' services."""
        started = time.perf_counter()
        categories = await self.get_categories()
        service_lists = await asyncio.gather(
            *(self.get_services(category_id) for category_id in self._popular_categories)
        )
        logger.info(
            "catalog_cache_warmed",
            extra={
                "component": _COMPONENT,
                "action": "warm_up",
                "result": "ok" if categories else "empty",
                "categories": len(categories),
                "services": sum(len(services) for services in service_lists),
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )

    def invalidate(self, category_id: int | None = None) -> None:
        """Drop one category's services, or everything when no id is given."""
        if category_id is None:
            count = len(self._entries)
            self._entries.clear()
        else:
            count = 1 if self._entries.pop(f"services:{category_id}", None) else 0
        logger.info(
            "catalog_cache_invalidated",
            extra={
                "component": _COMPONENT,
                "action": "invalidate",
                "result": "ok",
                "items_cleared": count,
            },
        )

    def get_stats(self) -> dict[str, Any]:
        now = self._clock()
        return {
            **self._stats,
            "total_entries": len(self._entries),
            "fresh_entries": sum(1 for entry in self._entries.values() if self._is_fresh(entry, now)),
            "ttl_seconds": self._ttl_seconds,
        }

    async def _read(self, key: str, fetch: Callable[[], Awaitable[list[T]]]) -> list[T]:
        entry = self._entries.get(key)
        if entry is not None and self._is_fresh(entry, self._clock()):
            self._stats["hits"] += 1
            return list(entry.value)

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            entry = self._entries.get(key)
            if entry is not None and self._is_fresh(entry, self._clock()):
                self._stats["hits"] += 1
                return list(entry.value)

            self._stats["misses"] += 1
            try:
                value = await fetch()
            except ProviderError as exc:
                return self._fallback(key, entry, exc)

            self._entries[key] = CacheEntry(value=list(value), fetched_at=self._clock())
            logger.debug(
                "catalog_cache_refreshed",
                extra={
                    "component": _COMPONENT,
                    "action": "refresh",
                    "result": "ok",
                    "key": key,
                    "items": len(value),
                },
            )
            return list(value)

    def _fallback(self, key: str, entry: CacheEntry[list[Any]] | None, exc: ProviderError) -> list[Any]:
        self._stats["refresh_failures"] += 1
        if entry is not None:
            self._stats["stale_served"] += 1
        logger.warning(
            "catalog_cache_refresh_failed",
            extra={
                "component": _COMPONENT,
                "action": "refresh",
                "result": "stale" if entry is not None else "empty",
                "key": key,
                "status_code": exc.status_code,
                "transient": exc.is_transient,
            },
        )
        log_fallback(logger, _COMPONENT, reason="stale_served" if entry is not None else "empty")
        return list(entry.value) if entry is not None else []

    def _is_fresh(self, entry: CacheEntry[Any], now: float) -> bool:
        return now - entry.fetched_at < self._ttl_seconds
