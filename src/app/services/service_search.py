"""Find services in the cached catalog by a spoken search term.

Category titles are matched first; when a category matches, its first
services are offered. Otherwise the services of the popular categories
are searched by title, with a few spoken synonyms.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.domain.catalog import Service
    from app.protocols.catalog_provider import CatalogCacheProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "service_search"

SERVICES_PER_CATEGORY = 5

# Catalog keyword -> words callers use for it.
_SYNONYMS: dict[str, tuple[str, ...]] = {
    "hydrafacial": ("hydra", "facial", "plet"),
    "laser": ("epilacia", "odstranenie"),
    "tetovanie": ("tetovanie", "obocie", "permanent"),
    "peeling": ("peeling", "chemicky"),
    "esthederm": ("esthederm", "institut"),
    "akne": ("akne", "akné", "pupienky"),
}


def normalize_text(value: str) -> str:
    """Lower-case and strip diacritics and trademark signs."""
    # NFKD expands the trademark sign to "TM", so drop it first.
    decomposed = unicodedata.normalize("NFKD", value.replace("™", ""))
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.lower().strip()


def matches_title(title: str, term: str) -> bool:
    """True when ``term`` names ``title`` directly or through a synonym."""
    text = normalize_text(title)
    search = normalize_text(term)
    if not search:
        return False
    if search in text or (text and text in search):
        return True
    for keyword, spoken in _SYNONYMS.items():
        if keyword in text and any(normalize_text(word) in search for word in spoken):
            return True
    words = [word for word in search.split() if len(word) > 2]
    return bool(words) and all(word in text for word in words)


async def search_services(
    catalog: CatalogCacheProtocol,
    term: str,
    *,
    popular_categories: Iterable[int],
    limit: int = SERVICES_PER_CATEGORY,
) -> list[Service]:
    """Return up to ``limit`` services matching ``term``, best source first."""
    categories = await catalog.get_categories()
    results: list[Service] = []

    for category in categories:
        if matches_title(category.title, term):
            services = await catalog.get_services(category.category_id)
            results.extend(services[:SERVICES_PER_CATEGORY])
        if len(results) >= limit:
            break

    source = "category"
    if not results:
        source = "service"
        for category_id in popular_categories:
            services = await catalog.get_services(category_id)
            results.extend(service for service in services if matches_title(service.title, term))
            if len(results) >= limit:
                break

    logger.info(
        "service_search_completed",
        extra={
            "component": _COMPONENT,
            "action": "search",
            "result": "found" if results else "empty",
            "source": source,
            "matches": len(results),
        },
    )
    return _dedupe(results)[:limit]


def _dedupe(services: list[Service]) -> list[Service]:
    seen: set[int] = set()
    unique: list[Service] = []
    for service in services:
        if service.service_id in seen:
            continue
        seen.add(service.service_id)
        unique.append(service)
    return unique
