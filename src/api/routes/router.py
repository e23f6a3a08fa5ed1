"""Route aggregator.

Usage:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.elevenlabs.router import router as elevenlabs_router
from api.routes.health.router import router as health_router


def create_api_router() -> APIRouter:
    """Build the main router with every sub-router registered."""
    api_router = APIRouter()

    # /health and /ready at the root
    api_router.include_router(health_router, tags=["health"])

    # /webhook/elevenlabs, prefix set by the channel router
    api_router.include_router(elevenlabs_router, tags=["elevenlabs"])

    return api_router
