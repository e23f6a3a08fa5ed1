"""Tests for the composition root."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import httpx
import pytest

from app.app import _warm_up_catalog
from app.bootstrap import validate_runtime_settings
from app.bootstrap.clients import create_bookio_client, create_http_client
from app.bootstrap.dependencies import create_catalog_cache, create_tool_call_use_case
from app.use_cases.voice import VoiceToolCall
from config.settings import BookioSettings, get_base_settings, get_bookio_settings


def _handler(request: httpx.Request) -> httpx.Response:
    endpoint = request.url.path.rsplit("/", 1)[-1]
    if endpoint == "categories":
        return httpx.Response(200, json={"data": [{"categoryId": 14149, "title": "Hydrafacial"}]})
    if endpoint == "services":
        return httpx.Response(200, json={"data": []})
    return httpx.Response(200, json={"data": {"times": {"all": [{"id": "10:00"}]}}})


@pytest.mark.asyncio
async def test_wiring_over_mock_transport() -> None:
    settings = BookioSettings(base_url="https://bookio.test/api")
    http = create_http_client(settings, transport=httpx.MockTransport(_handler))
    bookio = create_bookio_client(http, settings)
    cache = create_catalog_cache(bookio, settings)
    use_case = create_tool_call_use_case(
        availability=bookio,
        catalog=cache,
        reservations=bookio,
        settings=settings,
    )

    await cache.warm_up()
    result = await use_case.execute(VoiceToolCall(tool_name="get_soonest_available"))
    await http.aclose()

    assert cache.get_stats()["total_entries"] == 1 + len(settings.popular_categories)
    assert result.success is True
    assert result.data["time"] == "10:00"
    assert result.data["days_from_now"] == 0


class TestValidateRuntimeSettings:
    @pytest.fixture(autouse=True)
    def _clear_caches(self) -> Iterator[None]:
        get_base_settings.cache_clear()
        get_bookio_settings.cache_clear()
        yield
        get_base_settings.cache_clear()
        get_bookio_settings.cache_clear()

    def test_strict_in_production(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("BOOKIO_BASE_URL", "bookio.local")
        with pytest.raises(RuntimeError, match="Invalid configuration for production"):
            validate_runtime_settings()

    def test_warns_in_development(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.setenv("BOOKIO_BASE_URL", "bookio.local")
        validate_runtime_settings()


class _FailingCache:
    async def warm_up(self) -> None:
        raise httpx.DecodingError("incorrect header check")


@pytest.mark.asyncio
async def test_warm_up_failure_does_not_abort_startup(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        await _warm_up_catalog(_FailingCache(), timeout_seconds=1.0)  # type: ignore[arg-type]

    assert "catalog_warm_up_failed" in caplog.messages
