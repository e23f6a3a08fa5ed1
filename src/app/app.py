"""Entrypoint of the Bookio voice webhook service.

Initializes the bootstrap and exposes the ASGI application (FastAPI).

Usage (production):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Usage (development):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.clients import create_bookio_client, create_http_client
from app.bootstrap.dependencies import create_catalog_cache, create_tool_call_use_case
from config.logging import get_logger
from config.settings import get_base_settings, get_bookio_settings, get_webhook_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from app.services.catalog_cache import CatalogCache

# Logging must be configured before any module logs.
initialize_app()

logger = get_logger(__name__)


async def _warm_up_catalog(cache: CatalogCache, timeout_seconds: float) -> None:
    """Preload the catalog; the service starts even if Bookio is slow."""
    try:
        await asyncio.wait_for(cache.warm_up(), timeout=timeout_seconds)
    except TimeoutError:
        logger.warning(
            "catalog_warm_up_timeout",
            extra={"component": "bootstrap", "timeout_seconds": timeout_seconds},
        )
    except Exception:
        logger.exception(
            "catalog_warm_up_failed",
            extra={"component": "bootstrap", "action": "warm_up", "result": "error"},
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifecycle.

    Startup:
    - Validates settings
    - Creates the pooled HTTP client and the Bookio connector
    - Wires the tool-call use case and preloads the catalog

    Shutdown:
    - Closes the HTTP client
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()

    bookio_settings = get_bookio_settings()
    http_client = create_http_client(bookio_settings)
    bookio = create_bookio_client(http_client, bookio_settings)
    catalog_cache = create_catalog_cache(bookio, bookio_settings)

    app.state.http_client = http_client
    app.state.catalog_cache = catalog_cache
    app.state.tool_call_use_case = create_tool_call_use_case(
        availability=bookio,
        catalog=catalog_cache,
        reservations=bookio,
        settings=bookio_settings,
    )

    if bookio_settings.warm_up_on_startup:
        await _warm_up_catalog(catalog_cache, get_webhook_settings().warm_up_timeout_seconds)

    yield

    logger.info("app_shutting_down", extra={"service": service_name})
    await http_client.aclose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    fastapi_app = FastAPI(
        title="Bookio Voice Webhook",
        description="ElevenLabs voice-agent tools over the Bookio booking widget",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})

    return fastapi_app


# ASGI application exposed to uvicorn
app = create_app()


def main() -> None:
    """Run the service directly (development)."""
    import uvicorn

    settings = get_base_settings()
    logger.info("Starting bookio voice webhook in development mode")
    uvicorn.run(
        "app.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
