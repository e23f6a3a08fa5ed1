"""Tests for the Bookio widget API client over a mocked transport."""

from __future__ import annotations

import json
from datetime import date
from typing import Any

import httpx
import pytest

from app.domain.booking import CustomerInfo
from app.infra.bookio import BookioClient
from app.infra.http import HttpClient, HttpClientConfig
from app.services.catalog_cache import CatalogCache
from config.settings import BookioSettings
from utils.errors import ProviderError

BASE_URL = "https://bookio.test/widget/api"
DAY = date(2025, 1, 10)

ALLOWED_TIMES = {
    "data": {
        "times": {
            "all": [
                {"id": "09:00", "name": "9:00", "nameSuffix": "AM"},
                {"id": "14:30", "name": "2:30", "nameSuffix": "PM"},
            ],
            "mornings": {"data": [{"id": "09:00", "name": "9:00", "nameSuffix": "AM"}]},
            "afternoon": {"data": [{"id": "14:30", "name": "2:30", "nameSuffix": "PM"}]},
        }
    }
}


class Recorder:
    """MockTransport handler replaying scripted responses per endpoint."""

    def __init__(self, responses: dict[str, list[httpx.Response]]) -> None:
        self._responses = responses
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.path.rsplit("/", 1)[-1]
        return self._responses[endpoint].pop(0)

    def body(self, index: int = 0) -> dict[str, Any]:
        return json.loads(self.requests[index].content)


def _client(recorder: Recorder) -> BookioClient:
    http = HttpClient(
        HttpClientConfig(transport=httpx.MockTransport(recorder), backoff_base_seconds=0.0)
    )
    return BookioClient(http=http, settings=BookioSettings(base_url=BASE_URL))


class TestFetchDaySlots:
    @pytest.mark.asyncio
    async def test_request_body_and_parsing(self) -> None:
        recorder = Recorder({"allowedTimes": [httpx.Response(200, json=ALLOWED_TIMES)]})
        day_slots = await _client(recorder).fetch_day_slots(130113, 31576, DAY)

        assert str(recorder.requests[0].url) == f"{BASE_URL}/allowedTimes"
        body = recorder.body()
        assert body["serviceId"] == 130113
        assert body["workerId"] == 31576
        assert body["date"] == "10.01.2025 00:00"
        assert body["count"] == 1
        assert body["lang"] == "sk"

        assert day_slots.date == DAY
        assert day_slots.ids() == ["09:00", "14:30"]
        assert [slot.id for slot in day_slots.afternoons] == ["14:30"]
        assert day_slots.all[1].name_suffix == "PM"

    @pytest.mark.asyncio
    async def test_any_worker_forwarded(self) -> None:
        recorder = Recorder({"allowedTimes": [httpx.Response(200, json={"data": {}})]})
        day_slots = await _client(recorder).fetch_day_slots(1, -1, DAY)
        assert recorder.body()["workerId"] == -1
        assert day_slots.is_empty

    @pytest.mark.asyncio
    async def test_server_error_is_transient_and_not_retried(self) -> None:
        recorder = Recorder({"allowedTimes": [httpx.Response(502), httpx.Response(200, json={})]})
        with pytest.raises(ProviderError) as exc_info:
            await _client(recorder).fetch_day_slots(1, 1, DAY)
        assert exc_info.value.status_code == 502
        assert exc_info.value.is_transient is True
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_bad_request_is_rejection(self) -> None:
        recorder = Recorder({"allowedTimes": [httpx.Response(400, json={"error": "bad"})]})
        with pytest.raises(ProviderError) as exc_info:
            await _client(recorder).fetch_day_slots(1, 1, DAY)
        assert exc_info.value.is_transient is False

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        recorder = Recorder({"allowedTimes": [httpx.Response(200, content=b"<html>")]})
        with pytest.raises(ProviderError) as exc_info:
            await _client(recorder).fetch_day_slots(1, 1, DAY)
        assert exc_info.value.is_transient is False

    @pytest.mark.asyncio
    async def test_non_object_payload(self) -> None:
        recorder = Recorder({"allowedTimes": [httpx.Response(200, json=[1, 2])]})
        with pytest.raises(ProviderError):
            await _client(recorder).fetch_day_slots(1, 1, DAY)


class TestCatalog:
    @pytest.mark.asyncio
    async def test_categories(self) -> None:
        payload = {"data": [{"categoryId": 14149, "title": "Hydrafacial"}, {"title": "no id"}]}
        recorder = Recorder({"categories": [httpx.Response(200, json=payload)]})
        categories = await _client(recorder).fetch_categories()
        assert [category.category_id for category in categories] == [14149]
        assert recorder.body()["facility"] == "refresh-laserove-a-esteticke-studio-zu0yxr5l"

    @pytest.mark.asyncio
    async def test_services_retry_once(self) -> None:
        payload = {
            "data": [
                {"serviceId": 11, "title": "Signature", "priceNumber": 120, "duration": 60},
                {"serviceId": 12, "title": "Deluxe", "price": "150 €", "durationString": "1h 30min"},
            ]
        }
        recorder = Recorder(
            {"services": [httpx.Response(503), httpx.Response(200, json=payload)]}
        )
        services = await _client(recorder).fetch_services(14149)

        assert len(recorder.requests) == 2
        assert recorder.body()["categoryId"] == 14149
        assert services[0].price == "120 €"
        assert services[0].duration_text == "60 min"
        assert services[0].category_id == 14149
        assert services[1].price == "150 €"
        assert services[1].duration_text == "1h 30min"

    @pytest.mark.asyncio
    async def test_undecodable_body_leaves_cache_empty(self) -> None:
        def corrupt() -> httpx.Response:
            return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip")

        recorder = Recorder(
            {
                "categories": [corrupt(), corrupt()],
                "services": [corrupt(), corrupt()],
            }
        )
        cache = CatalogCache(_client(recorder), popular_categories=(14149,), ttl_seconds=3600)

        await cache.warm_up()

        stats = cache.get_stats()
        assert stats["refresh_failures"] == 2
        assert stats["total_entries"] == 0
        assert len(recorder.requests) == 4


class TestCreateReservation:
    @pytest.mark.asyncio
    async def test_body_and_result(self) -> None:
        payload = {"data": {"success": True, "order": {"orderId": 991}}}
        recorder = Recorder({"createReservation": [httpx.Response(200, json=payload)]})
        customer = CustomerInfo(
            first_name="Jana", last_name="Nováková", email="jana@example.sk", phone="0900"
        )

        result = await _client(recorder).create_reservation(
            service_id=130113, worker_id=31576, day=DAY, time="10:00", customer=customer
        )

        assert result.success is True
        assert result.order == {"orderId": 991}
        request = recorder.requests[0]
        assert request.url.params["lang"] == "sk"
        body = recorder.body()
        assert body["date"] == "10.01.2025"
        assert body["hour"] == "10:00"
        assert body["personalInfo"]["firstName"] == "Jana"
        assert body["personalInfo"]["email"] == "jana@example.sk"
        assert body["firstService"] == {"termId": 130113, "count": None}

    @pytest.mark.asyncio
    async def test_rejection_errors_collected(self) -> None:
        payload = {"data": {"success": False, "errors": {"hour": "taken"}}}
        recorder = Recorder({"createReservation": [httpx.Response(200, json=payload)]})
        result = await _client(recorder).create_reservation(
            service_id=1, worker_id=1, day=DAY, time="10:00", customer=CustomerInfo(first_name="J")
        )
        assert result.success is False
        assert result.errors == ["hour: taken"]
