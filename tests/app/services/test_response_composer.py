"""Tests for the Slovak response sentences."""

from __future__ import annotations

from datetime import date

import pytest

from app.domain.booking import ReservationResult
from app.domain.catalog import Category, Service
from app.domain.slots import DayOverview, MatchResult, Slot, SoonestResult
from app.services import response_composer as compose
from config.settings.bookio import DEFAULT_LOCATIONS
from tests.fakes.fake_bookio import make_day

TODAY = date(2025, 1, 6)
FRIDAY = date(2025, 1, 10)


def _slots(*times: str) -> list[Slot]:
    return [Slot(id=time) for time in times]


class TestHelpers:
    @pytest.mark.parametrize(
        ("items", "expected"),
        [
            ([], ""),
            (["09:00"], "09:00"),
            (["09:00", "10:00"], "09:00 a 10:00"),
            (["09:00", "10:00", "11:00"], "09:00, 10:00 a 11:00"),
        ],
    )
    def test_join_slovak(self, items: list[str], expected: str) -> None:
        assert compose.join_slovak(items) == expected

    def test_join_with_alebo(self) -> None:
        assert compose.join_slovak(["a1", "b2"], "alebo") == "a1 alebo b2"

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(1, "1 termín"), (3, "3 termíny"), (5, "5 termínov")],
    )
    def test_count_terms(self, count: int, expected: str) -> None:
        assert compose.count_terms(count) == expected

    def test_available_times_singular_and_plural(self) -> None:
        assert compose.available_times_sentence(_slots("09:00")) == "Dostupný je termín o 09:00."
        assert (
            compose.available_times_sentence(_slots("09:00", "10:00"))
            == "Dostupné sú termíny o 09:00 a 10:00."
        )


class TestSoonest:
    def test_found_in_four_days(self) -> None:
        result = SoonestResult(
            found=True,
            service_id=1,
            worker_id=1,
            date=FRIDAY,
            slot=Slot(id="09:00"),
            days_from_now=4,
            total_slots=5,
            alternative_slots=_slots("09:30", "10:00"),
        )
        text = compose.soonest_available(result, TODAY)
        assert text.startswith("Najbližší voľný termín je piatok 10. januára, teda o 4 dni, o 09:00.")
        assert "09:30 alebo 10:00" in text
        assert text.endswith("Vyhovuje vám?")

    def test_found_today_and_tomorrow(self) -> None:
        today = SoonestResult(
            found=True, service_id=1, worker_id=1, date=TODAY, slot=Slot(id="15:00"), days_from_now=0
        )
        tomorrow = today.model_copy(update={"date": date(2025, 1, 7), "days_from_now": 1})
        assert "je dnes o 15:00" in compose.soonest_available(today, TODAY)
        assert "je zajtra, utorok 7. januára, o 15:00" in compose.soonest_available(tomorrow, TODAY)

    def test_five_days_uses_genitive_plural(self) -> None:
        result = SoonestResult(
            found=True, service_id=1, worker_id=1, date=date(2025, 1, 11), slot=Slot(id="9:00"), days_from_now=5
        )
        assert "o 5 dní" in compose.soonest_available(result, TODAY)

    def test_scan_started_later_is_spoken_relative_to_today(self) -> None:
        result = SoonestResult(
            found=True,
            service_id=1,
            worker_id=1,
            date=date(2025, 1, 13),
            slot=Slot(id="09:00"),
            days_from_now=0,
        )
        text = compose.soonest_available(result, TODAY)
        assert "dnes" not in text
        assert "teda o 7 dní" in text

    def test_not_found(self) -> None:
        text = compose.soonest_available(SoonestResult(found=False, service_id=1, worker_id=1), TODAY)
        assert "nie sú dostupné žiadne voľné termíny" in text

    def test_timed_out(self) -> None:
        text = compose.soonest_available(
            SoonestResult(found=False, service_id=1, worker_id=1, timed_out=True), TODAY
        )
        assert "nestihla som overiť" in text


class TestDesiredSlot:
    def test_available(self) -> None:
        match = MatchResult(available=True, requested_time="10:00", slot=Slot(id="10:00"))
        assert "Termín piatok 10. januára o 10:00 je voľný" in compose.desired_slot(match, FRIDAY)

    def test_alternatives(self) -> None:
        match = MatchResult(
            available=False, requested_time="10:00", alternatives=_slots("09:00", "11:00", "14:00")
        )
        text = compose.desired_slot(match, FRIDAY)
        assert "o 10:00 nie je dostupný" in text
        assert "09:00, 11:00 alebo 14:00" in text

    def test_empty_day(self) -> None:
        match = MatchResult(available=False, requested_time="10:00")
        assert "nie sú dostupné žiadne termíny" in compose.desired_slot(match, FRIDAY)


class TestDayTimes:
    def test_first_page(self) -> None:
        text = compose.day_times(FRIDAY, _slots("09:00", "10:00"), follow_up=False, has_more=True)
        assert text == "Dostupné sú termíny o 09:00 a 10:00."

    def test_follow_up_with_more(self) -> None:
        text = compose.day_times(FRIDAY, _slots("11:00", "12:00"), follow_up=True, has_more=True)
        assert text == "Mám ešte o 11:00 alebo 12:00. Vyhovuje niečo?"

    def test_follow_up_last(self) -> None:
        text = compose.day_times(FRIDAY, _slots("15:00"), follow_up=True, has_more=False)
        assert text == "Posledný termín je o 15:00. Vyhovuje?"

    def test_follow_up_exhausted(self) -> None:
        text = compose.day_times(FRIDAY, [], follow_up=True, has_more=False)
        assert text == "Na piatok 10. januára už nemám ďalšie termíny."

    def test_empty_period(self) -> None:
        text = compose.day_times(FRIDAY, [], follow_up=False, has_more=False, period="ráno")
        assert text == "Na piatok 10. januára nie sú dostupné žiadne termíny ráno."


class TestOverview:
    def test_summarizes_days(self) -> None:
        days = [
            DayOverview(date=TODAY, slots=make_day(TODAY, "09:00", "10:00", "11:00")),
            DayOverview(date=date(2025, 1, 7), failed=True),
            DayOverview(date=date(2025, 1, 8), slots=make_day(date(2025, 1, 8), "14:00")),
        ]
        text = compose.overview(days, TODAY)
        assert "Dnes o 09:00 alebo 10:00 a ďalšie 1 termín." in text
        assert "Pozajtra o 14:00." in text
        assert "Zajtra" not in text

    def test_nothing_available(self) -> None:
        days = [DayOverview(date=TODAY, slots=make_day(TODAY))]
        assert compose.overview(days, TODAY) == "V najbližších dňoch nie sú dostupné žiadne termíny."


class TestCatalogSentences:
    def test_services_overview(self) -> None:
        categories = [Category(category_id=i, title=f"Kategória {i}") for i in range(8)]
        text = compose.services_overview(categories)
        assert "Kategória 5" in text
        assert "Kategória 6" not in text
        assert "a ďalšie" in text

    def test_search_results(self) -> None:
        services = [
            Service(service_id=1, title="Hydrafacial Signature", price="120 €", duration_text="1h"),
            Service(service_id=2, title="Hydrafacial Deluxe"),
        ]
        text = compose.search_results("hydrafacial", services)
        assert text.startswith("Našla som 2 služby pre „hydrafacial“.")
        assert "1. Hydrafacial Signature, cena 120 €, trvanie 1h." in text
        assert "2. Hydrafacial Deluxe." in text

    def test_search_without_results(self) -> None:
        assert "nenašla som službu „botox“" in compose.search_results("botox", [])


class TestBookingSentences:
    def test_reservation_confirmed_with_order(self) -> None:
        result = ReservationResult(success=True, order={"orderId": 991})
        text = compose.reservation_confirmed(result, FRIDAY, "10:00")
        assert "piatok 10. januára o 10:00" in text
        assert "Číslo objednávky je 991." in text

    def test_opening_hours_lists_locations(self) -> None:
        text = compose.opening_hours("REFRESH", DEFAULT_LOCATIONS, "+421 907 888 048")
        assert "Pobočka Bratislava, Lazaretská 13, Bratislava" in text
        assert "Pobočka Pezinok" in text
        assert text.endswith("Kontakt: +421 907 888 048.")

    def test_ask_location(self) -> None:
        text = compose.booking_ask_location(DEFAULT_LOCATIONS)
        assert text.endswith("Bratislava, Lazaretská 13, Bratislava alebo Pezinok.")

    def test_contact_phone_in_failure_texts(self) -> None:
        for text in (
            compose.provider_unavailable("0900"),
            compose.timed_out("0900"),
            compose.reservation_failed("0900"),
            compose.cancellation_guidance("0900"),
        ):
            assert "0900" in text

    def test_unrecognized(self) -> None:
        assert compose.unrecognized("fly_me").startswith("Nepoznám nástroj: fly_me.")
        assert compose.unrecognized(None).startswith("Nerozumiem")
