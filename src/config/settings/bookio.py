"""Settings for the Bookio widget API and the studio it serves.

Read once from the environment; everything else receives an instance.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator

BOOKIO_API_BASE_URL = "https://services.bookio.com/widget/api"

# Catalog entries expire after one hour; not configurable.
CATALOG_TTL_SECONDS = 3600.0

SOONEST_MAX_DAYS_LIMIT = 30

DEFAULT_POPULAR_CATEGORIES = (14149, 14142, 23984, 29976)


class LocationInfo(BaseModel):
    """A studio branch as spoken to the caller."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    key: str
    name: str
    address: str
    facility: str
    opening_hours: tuple[str, ...] = ()


DEFAULT_LOCATIONS: tuple[LocationInfo, ...] = (
    LocationInfo(
        key="bratislava",
        name="Bratislava",
        address="Lazaretská 13, Bratislava",
        facility="refresh-laserove-a-esteticke-studio-zu0yxr5l",
        opening_hours=("Po-Pi: 9:00 - 18:00", "So: 9:00 - 14:00", "Ne: Zatvorené"),
    ),
    LocationInfo(
        key="pezinok",
        name="Pezinok",
        address="Pezinok",
        facility="refresh-laserove-a-esteticke-studio",
        opening_hours=("Po-Pi: 9:00 - 17:00", "So-Ne: Zatvorené"),
    ),
)


class BookioSettings(BaseModel):
    """Upstream API and studio defaults."""

    model_config = ConfigDict(extra="ignore")

    base_url: str = Field(
        default=BOOKIO_API_BASE_URL,
        description="Base URL of the Bookio widget API.",
    )
    facility: str = Field(
        default="refresh-laserove-a-esteticke-studio-zu0yxr5l",
        description="Facility slug used for catalog lookups.",
    )
    studio_name: str = Field(
        default="REFRESH laserové a estetické štúdio",
        description="Studio name used in spoken responses.",
    )
    lang: str = Field(default="sk", description="Language sent to the widget API.")
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for a single availability request.",
    )
    catalog_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for a single catalog request.",
    )
    default_service_id: int = Field(
        default=130113,
        description="Service used when the caller did not pick one.",
    )
    default_worker_id: int = Field(
        default=31576,
        description="Worker used when the caller asks for any worker (-1).",
    )
    popular_categories: tuple[int, ...] = Field(
        default=DEFAULT_POPULAR_CATEGORIES,
        description="Categories preloaded at startup and searched by title.",
    )
    soonest_max_days: int = Field(
        default=14,
        ge=1,
        le=SOONEST_MAX_DAYS_LIMIT,
        description="Days scanned when looking for the soonest slot.",
    )
    overview_days: int = Field(
        default=3,
        ge=1,
        le=7,
        description="Days covered by an availability overview.",
    )
    timezone: str = Field(
        default="Europe/Bratislava",
        description="Timezone that defines 'today' for the studio.",
    )
    contact_phone: str = Field(
        default="+421 907 888 048",
        description="Phone number read to callers.",
    )
    locations: tuple[LocationInfo, ...] = Field(default=DEFAULT_LOCATIONS)
    warm_up_on_startup: bool = Field(
        default=True,
        description="Preload the catalog when the app starts.",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def catalog_ttl_seconds(self) -> float:
        return CATALOG_TTL_SECONDS

    def get_location(self, key: str | None) -> LocationInfo | None:
        """Find a location by key or spoken name, ignoring case.

        Inflected forms match as well ("v Bratislave", "Pezinku").
        """
        if not key:
            return None
        needle = key.strip().lower()
        for location in self.locations:
            if needle in (location.key, location.name.lower()):
                return location
            if location.key[:5] in needle:
                return location
        return None


def _parse_int_list(value: str) -> tuple[int, ...]:
    """Parse a comma separated list of ints, skipping blanks."""
    return tuple(int(part) for part in value.split(",") if part.strip())


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_bookio_from_env() -> BookioSettings:
    popular_raw = os.getenv("BOOKIO_POPULAR_CATEGORIES", "")
    return BookioSettings(
        base_url=os.getenv("BOOKIO_BASE_URL", BOOKIO_API_BASE_URL),
        facility=os.getenv("BOOKIO_FACILITY", "refresh-laserove-a-esteticke-studio-zu0yxr5l"),
        lang=os.getenv("BOOKIO_LANG", "sk"),
        request_timeout_seconds=float(os.getenv("BOOKIO_REQUEST_TIMEOUT_SECONDS", "10")),
        catalog_timeout_seconds=float(os.getenv("BOOKIO_CATALOG_TIMEOUT_SECONDS", "5")),
        default_service_id=int(os.getenv("BOOKIO_DEFAULT_SERVICE_ID", "130113")),
        default_worker_id=int(os.getenv("BOOKIO_DEFAULT_WORKER_ID", "31576")),
        popular_categories=(
            _parse_int_list(popular_raw) if popular_raw else DEFAULT_POPULAR_CATEGORIES
        ),
        soonest_max_days=int(os.getenv("BOOKIO_SOONEST_MAX_DAYS", "14")),
        overview_days=int(os.getenv("BOOKIO_OVERVIEW_DAYS", "3")),
        timezone=os.getenv("BOOKIO_TIMEZONE", "Europe/Bratislava"),
        contact_phone=os.getenv("STUDIO_CONTACT_PHONE", "+421 907 888 048"),
        warm_up_on_startup=_parse_bool(os.getenv("BOOKIO_WARM_UP", "true")),
    )


@lru_cache(maxsize=1)
def get_bookio_settings() -> BookioSettings:
    """Return the cached BookioSettings instance."""
    return _load_bookio_from_env()


__all__ = [
    "BOOKIO_API_BASE_URL",
    "CATALOG_TTL_SECONDS",
    "SOONEST_MAX_DAYS_LIMIT",
    "BookioSettings",
    "LocationInfo",
    "get_bookio_settings",
]
