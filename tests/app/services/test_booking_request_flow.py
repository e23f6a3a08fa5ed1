"""Tests for the guided booking request flow."""

from __future__ import annotations

from datetime import date

import pytest

from app.domain.booking import BookingRequest
from app.services.booking_request_flow import BookingRequestFlow
from app.services.slot_scanner import SlotScanner
from config.settings import BookioSettings
from tests.fakes.fake_bookio import FakeAvailabilityProvider, RecordingNotifier
from utils.errors import DateInputError, ProviderError, VoiceInputError

TODAY = date(2025, 1, 6)
TOMORROW = date(2025, 1, 7)


def _flow(
    days: dict[date, list[str] | Exception] | None = None,
    notifier: RecordingNotifier | None = None,
) -> tuple[BookingRequestFlow, RecordingNotifier]:
    notifier = notifier or RecordingNotifier()
    flow = BookingRequestFlow(
        scanner=SlotScanner(FakeAvailabilityProvider(days)),
        notifier=notifier,
        settings=BookioSettings(),
    )
    return flow, notifier


def _request(**fields: str) -> BookingRequest:
    base = {"service": "Hydrafacial", "location": "Bratislava"}
    return BookingRequest(**{**base, **fields})


class TestSteps:
    @pytest.mark.asyncio
    async def test_asks_for_service_first(self) -> None:
        flow, _ = _flow()
        step = await flow.advance(BookingRequest(), today=TODAY)
        assert step.step == "service"
        assert "Aké ošetrenie" in step.response
        assert step.completed is False

    @pytest.mark.asyncio
    async def test_unknown_location_asks_again(self) -> None:
        flow, _ = _flow()
        step = await flow.advance(_request(location="Košice"), today=TODAY)
        assert step.step == "location"
        assert "V ktorej pobočke" in step.response

    @pytest.mark.asyncio
    async def test_date_step_offers_overview(self) -> None:
        flow, _ = _flow({TODAY: ["09:00", "10:00", "11:00"]})
        step = await flow.advance(_request(), today=TODAY)
        assert step.step == "date"
        assert step.response.startswith("Výborne, Hydrafacial v pobočke Bratislava. Najbližšie voľné termíny:")
        assert "Dnes o 09:00 alebo 10:00" in step.response

    @pytest.mark.asyncio
    async def test_date_step_survives_provider_outage(self) -> None:
        error = ProviderError("down")
        flow, _ = _flow({TODAY: error, date(2025, 1, 7): error, date(2025, 1, 8): error})
        step = await flow.advance(_request(), today=TODAY)
        assert step.step == "date"
        assert "Aký deň by vám vyhovoval?" in step.response

    @pytest.mark.asyncio
    async def test_time_step_lists_free_times(self) -> None:
        flow, _ = _flow({TOMORROW: ["09:00", "10:00"]})
        step = await flow.advance(_request(date="zajtra"), today=TODAY)
        assert step.step == "time"
        assert step.response == (
            "Dátum utorok 7. januára mám zapísaný. "
            "Voľné časy sú o 09:00 alebo 10:00. Ktorý vám vyhovuje?"
        )

    @pytest.mark.asyncio
    async def test_free_time_asks_for_name(self) -> None:
        flow, _ = _flow({TOMORROW: ["09:00", "10:00"]})
        step = await flow.advance(_request(date="zajtra", time="10"), today=TODAY)
        assert step.step == "customer_name"
        assert "utorok 7. januára o 10:00 je voľný" in step.response

    @pytest.mark.asyncio
    async def test_taken_time_offers_alternatives(self) -> None:
        flow, _ = _flow({TOMORROW: ["09:00", "13:00"]})
        step = await flow.advance(_request(date="zajtra", time="10:00"), today=TODAY)
        assert step.step == "time"
        assert "už nie je voľné" in step.response
        assert "09:00 alebo 13:00" in step.response

    @pytest.mark.asyncio
    async def test_asks_for_phone_after_name(self) -> None:
        flow, _ = _flow({TOMORROW: ["10:00"]})
        step = await flow.advance(
            _request(date="zajtra", time="10:00", customer_name="Jana Nováková"), today=TODAY
        )
        assert step.step == "phone"
        assert step.response.startswith("Ďakujem, Jana Nováková.")


class TestCompletion:
    @pytest.mark.asyncio
    async def test_complete_request_is_notified(self) -> None:
        flow, notifier = _flow({TOMORROW: ["10:00"]})
        step = await flow.advance(
            _request(
                location="v Pezinku",
                date="zajtra",
                time="10.00",
                customer_name="Jana Nováková",
                phone="+421900111222",
            ),
            today=TODAY,
        )
        assert step.step == "done"
        assert step.completed is True
        assert step.success is True
        assert "požiadavka na rezerváciu bola odoslaná" in step.response
        assert len(notifier.requests) == 1
        submitted = notifier.requests[0]
        assert submitted.time == "10:00"
        assert submitted.location == "pezinok"

    @pytest.mark.asyncio
    async def test_notifier_failure_reported(self) -> None:
        flow, _ = _flow({TOMORROW: ["10:00"]}, RecordingNotifier(delivered=False))
        step = await flow.advance(
            _request(date="zajtra", time="10:00", customer_name="Jana", phone="0900"),
            today=TODAY,
        )
        assert step.completed is True
        assert step.success is False
        assert "+421 907 888 048" in step.response


class TestInvalidInput:
    @pytest.mark.asyncio
    async def test_past_date(self) -> None:
        flow, _ = _flow()
        with pytest.raises(DateInputError):
            await flow.advance(_request(date="01.01.2025"), today=TODAY)

    @pytest.mark.asyncio
    async def test_unreadable_time(self) -> None:
        flow, _ = _flow()
        with pytest.raises(VoiceInputError) as exc_info:
            await flow.advance(_request(date="zajtra", time="niekedy"), today=TODAY)
        assert exc_info.value.field == "time"
