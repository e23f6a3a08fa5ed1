"""Factories for outbound clients."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.bookio import BookioClient
from app.infra.http import HttpClient, HttpClientConfig

if TYPE_CHECKING:
    import httpx

    from config.settings.bookio import BookioSettings

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def create_http_client(
    settings: BookioSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HttpClient:
    """Pooled HTTP client; one per process, closed on shutdown.

    ``transport`` replaces the network in tests.
    """
    client = HttpClient(
        HttpClientConfig(
            timeout_seconds=settings.request_timeout_seconds,
            default_headers=dict(_DEFAULT_HEADERS),
            transport=transport,
        )
    )
    logger.info(
        "http_client_created",
        extra={"component": "bootstrap", "timeout_seconds": settings.request_timeout_seconds},
    )
    return client


def create_bookio_client(http: HttpClient, settings: BookioSettings) -> BookioClient:
    return BookioClient(http=http, settings=settings)
