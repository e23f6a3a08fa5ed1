"""Health and readiness endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Result of one dependency check."""

    status: Literal["ok", "degraded", "failed"]
    detail: dict[str, Any] | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "detail": self.detail,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe.

    Ready once the tool-call use case is wired. An empty catalog only
    degrades readiness: availability answers do not depend on it.
    """
    handler_check = _check_handler(getattr(request.app.state, "tool_call_use_case", None))
    catalog_check = _check_catalog(getattr(request.app.state, "catalog_cache", None))

    ready = handler_check.status == "ok" and catalog_check.status != "failed"
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "voice_handler": handler_check.as_dict(),
            "catalog_cache": catalog_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_handler(use_case: Any | None) -> DependencyCheck:
    if use_case is None:
        return DependencyCheck(status="failed", error="not_configured")
    return DependencyCheck(status="ok")


def _check_catalog(catalog: Any | None) -> DependencyCheck:
    if catalog is None:
        return DependencyCheck(status="failed", error="not_configured")
    stats = catalog.get_stats()
    if stats.get("total_entries", 0) == 0:
        return DependencyCheck(status="degraded", detail=stats, error="empty")
    return DependencyCheck(status="ok", detail=stats)
