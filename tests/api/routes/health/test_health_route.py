"""Tests for the health and readiness endpoints."""

from __future__ import annotations

import json
from types import SimpleNamespace

import httpx
import pytest
from fastapi import FastAPI, Request

from api.routes.health.router import readiness_check, router
from app.domain.catalog import Category
from app.services.catalog_cache import CatalogCache
from tests.fakes.fake_bookio import FakeCatalogProvider


def _build_request_with_state(state: SimpleNamespace) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/ready",
        "raw_path": b"/ready",
        "query_string": b"",
        "headers": [],
        "app": SimpleNamespace(state=state),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, _receive)


@pytest.mark.asyncio
async def test_health_reports_service_name() -> None:
    app = FastAPI()
    app.include_router(router)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["service"] == "bookio_voice"


@pytest.mark.asyncio
async def test_readiness_not_ready_without_dependencies() -> None:
    request = _build_request_with_state(SimpleNamespace())

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "not_ready"
    assert payload["checks"]["voice_handler"]["status"] == "failed"
    assert payload["checks"]["catalog_cache"]["status"] == "failed"


@pytest.mark.asyncio
async def test_readiness_degraded_with_empty_catalog() -> None:
    cache = CatalogCache(FakeCatalogProvider())
    request = _build_request_with_state(
        SimpleNamespace(tool_call_use_case=object(), catalog_cache=cache)
    )

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["checks"]["catalog_cache"]["status"] == "degraded"


@pytest.mark.asyncio
async def test_readiness_ok_after_warm_up() -> None:
    cache = CatalogCache(FakeCatalogProvider([Category(category_id=1, title="Hydrafacial")]))
    await cache.warm_up()
    request = _build_request_with_state(
        SimpleNamespace(tool_call_use_case=object(), catalog_cache=cache)
    )

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert payload["checks"]["catalog_cache"]["status"] == "ok"
    assert payload["checks"]["catalog_cache"]["detail"]["total_entries"] == 1
