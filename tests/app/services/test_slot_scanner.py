"""Tests for the day-by-day availability scanner."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from app.services.deadline import Deadline
from app.services.slot_scanner import SlotScanner
from tests.fakes.fake_bookio import FakeAvailabilityProvider
from utils.errors import ProviderError, SlotScanError

START = date(2025, 1, 6)


def _day(offset: int) -> date:
    return START + timedelta(days=offset)


class TestFindSoonest:
    @pytest.mark.asyncio
    async def test_returns_first_day_with_slots(self) -> None:
        provider = FakeAvailabilityProvider(
            {_day(4): ["09:00", "09:30", "10:00", "10:30", "11:00"]}
        )
        scanner = SlotScanner(provider)

        result = await scanner.find_soonest(130113, 31576, START, 14)

        assert result.found is True
        assert result.date == _day(4)
        assert result.time == "09:00"
        assert result.days_from_now == 4
        assert result.total_slots == 5
        assert [slot.id for slot in result.alternative_slots] == ["09:30", "10:00", "10:30"]
        assert result.days_checked == 5
        assert [call[2] for call in provider.calls] == [_day(i) for i in range(5)]

    @pytest.mark.asyncio
    async def test_thirty_day_window_finds_offset_four(self) -> None:
        start = date(2025, 1, 10)
        provider = FakeAvailabilityProvider({start + timedelta(days=4): ["09:00", "10:30"]})

        result = await SlotScanner(provider).find_soonest(130113, 31576, start, 30)

        assert result.found is True
        assert result.days_from_now == 4
        assert result.time == "09:00"
        assert [slot.id for slot in result.alternative_slots] == ["10:30"]
        assert result.days_checked == 5

    @pytest.mark.asyncio
    async def test_forwards_service_and_worker(self) -> None:
        provider = FakeAvailabilityProvider({START: ["10:00"]})
        await SlotScanner(provider).find_soonest(42, -1, START, 1)
        assert provider.calls == [(42, -1, START)]

    @pytest.mark.asyncio
    async def test_failed_days_are_skipped(self) -> None:
        provider = FakeAvailabilityProvider(
            {
                _day(0): ProviderError("boom", status_code=503),
                _day(1): ["14:00"],
            }
        )
        result = await SlotScanner(provider).find_soonest(1, 1, START, 5)
        assert result.found is True
        assert result.date == _day(1)
        assert result.failed_days == 1

    @pytest.mark.asyncio
    async def test_no_slots_in_window(self) -> None:
        provider = FakeAvailabilityProvider()
        result = await SlotScanner(provider).find_soonest(1, 1, START, 3)
        assert result.found is False
        assert result.days_checked == 3
        assert result.slot is None
        assert len(provider.calls) == 3

    @pytest.mark.asyncio
    async def test_every_day_failed_raises(self) -> None:
        error = ProviderError("down", status_code=502)
        provider = FakeAvailabilityProvider({_day(i): error for i in range(3)})
        with pytest.raises(SlotScanError) as exc_info:
            await SlotScanner(provider).find_soonest(1, 1, START, 3)
        assert exc_info.value.failed_days == 3
        assert exc_info.value.rejected is False

    @pytest.mark.asyncio
    async def test_rejection_is_reported(self) -> None:
        provider = FakeAvailabilityProvider(
            {START: ProviderError("bad request", status_code=400, is_transient=False)}
        )
        with pytest.raises(SlotScanError) as exc_info:
            await SlotScanner(provider).find_soonest(1, 1, START, 1)
        assert exc_info.value.rejected is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_days", [0, 31])
    async def test_window_bounds(self, max_days: int) -> None:
        with pytest.raises(ValueError, match="max_days"):
            await SlotScanner(FakeAvailabilityProvider()).find_soonest(1, 1, START, max_days)

    @pytest.mark.asyncio
    async def test_expired_deadline_stops_scan(self) -> None:
        provider = FakeAvailabilityProvider()
        deadline = Deadline(expires_at=0.0, clock=lambda: 1.0)
        result = await SlotScanner(provider).find_soonest(1, 1, START, 14, deadline=deadline)
        assert result.found is False
        assert result.timed_out is True
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_slow_provider_times_out(self) -> None:
        provider = FakeAvailabilityProvider({START: ["10:00"]}, delay=0.5)
        result = await SlotScanner(provider).find_soonest(
            1, 1, START, 3, deadline=Deadline.after(0.05)
        )
        assert result.timed_out is True
        assert result.found is False


class TestScanOverview:
    @pytest.mark.asyncio
    async def test_collects_every_day(self) -> None:
        provider = FakeAvailabilityProvider({START: ["09:00"], _day(2): ["10:00", "11:00"]})
        overview = await SlotScanner(provider).scan_overview(1, 1, START, days=3)
        assert [item.date for item in overview] == [START, _day(1), _day(2)]
        assert [item.total for item in overview] == [1, 0, 2]
        assert not any(item.failed for item in overview)

    @pytest.mark.asyncio
    async def test_failed_day_marked(self) -> None:
        provider = FakeAvailabilityProvider({_day(1): ProviderError("down")})
        overview = await SlotScanner(provider).scan_overview(1, 1, START, days=3)
        assert [item.failed for item in overview] == [False, True, False]
        assert overview[1].total == 0

    @pytest.mark.asyncio
    async def test_all_failed_raises(self) -> None:
        provider = FakeAvailabilityProvider({_day(i): ProviderError("down") for i in range(2)})
        with pytest.raises(SlotScanError):
            await SlotScanner(provider).scan_overview(1, 1, START, days=2)


class TestFetchDay:
    @pytest.mark.asyncio
    async def test_provider_error_becomes_scan_error(self) -> None:
        provider = FakeAvailabilityProvider({START: ProviderError("x", is_transient=False)})
        with pytest.raises(SlotScanError) as exc_info:
            await SlotScanner(provider).fetch_day(1, 1, START)
        assert exc_info.value.failed_days == 1
        assert exc_info.value.rejected is True
