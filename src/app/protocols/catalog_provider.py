"""Contracts for the service catalog: raw provider and cached view."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.catalog import Category, Service


@runtime_checkable
class CatalogProviderProtocol(Protocol):
    """Uncached catalog reads. Failures raise ProviderError."""

    async def fetch_categories(self) -> list[Category]: ...

    async def fetch_services(self, category_id: int) -> list[Service]: ...


@runtime_checkable
class CatalogCacheProtocol(Protocol):
    """Cached catalog reads that never raise for provider failures."""

    async def get_categories(self) -> list[Category]: ...

    async def get_services(self, category_id: int) -> list[Service]: ...

    async def warm_up(self) -> None: ...

    def get_stats(self) -> dict[str, Any]: ...
