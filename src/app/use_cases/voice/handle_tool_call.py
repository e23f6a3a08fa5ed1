"""Use case: answer one voice-agent tool call.

Maps the tool name to a ``VoiceIntent`` and dispatches to the scanner,
matcher, catalog or reservation passthrough. Every outcome, including
missing input and provider outages, becomes a Slovak sentence.
"""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any, assert_never

from app.domain.booking import BookingRequest, CustomerInfo
from app.domain.intents import VoiceIntent, parse_intent
from app.observability import get_correlation_id, record_intent, record_latency
from app.services import response_composer as compose
from app.services.dates import (
    display_time,
    format_display_date,
    normalize_time,
    parse_date_input,
    period_bounds,
    today_in,
)
from app.services.service_search import search_services
from app.services.slot_matcher import check_desired, find_earlier
from app.use_cases.voice.models import VoiceToolResult
from utils.errors import ProviderError, SlotScanError, VoiceInputError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from app.domain.slots import DaySlots, Slot
    from app.protocols.catalog_provider import CatalogCacheProtocol
    from app.protocols.reservation_provider import ReservationProviderProtocol
    from app.services.booking_request_flow import BookingRequestFlow
    from app.services.deadline import Deadline
    from app.services.slot_scanner import SlotScanner
    from app.use_cases.voice.models import VoiceToolCall
    from config.settings.bookio import BookioSettings

logger = logging.getLogger(__name__)

_COMPONENT = "voice_tool_call"

PAGE_SIZE = 2
EARLIER_LIMIT = 2

_MISSING_SLOT_FIELDS = "Potrebujem vedieť dátum a čas, ktorý vás zaujíma."
_MISSING_EARLIER_FIELDS = "Pre vyhľadanie skorších termínov potrebujem dátum a požadovaný čas."
_MISSING_BOOKING_FIELDS = "Pre rezerváciu je potrebné zadať dátum, čas a údaje zákazníka."
_MISSING_SEARCH_TERM = "Nerozumiem, akú službu hľadáte. Môžete byť konkrétnejší?"
_INVALID_CUSTOMER = "Neplatné údaje zákazníka."
_INVALID_TIME = "Nerozumela som času. Povedzte ho prosím napríklad ako 14:30."
_CUSTOMER_FIELD_NAMES = {"name": "meno", "email": "e-mail", "phone": "telefónne číslo"}


class HandleToolCallUseCase:
    """Dispatch a tool call and compose the spoken answer."""

    def __init__(
        self,
        *,
        scanner: SlotScanner,
        catalog: CatalogCacheProtocol,
        reservations: ReservationProviderProtocol,
        booking_flow: BookingRequestFlow,
        settings: BookioSettings,
        today_provider: Callable[[], date] | None = None,
    ) -> None:
        self._scanner = scanner
        self._catalog = catalog
        self._reservations = reservations
        self._booking_flow = booking_flow
        self._settings = settings
        self._today = today_provider or (lambda: today_in(settings.timezone))

    @property
    def contact_phone(self) -> str:
        return self._settings.contact_phone

    async def execute(self, call: VoiceToolCall, *, deadline: Deadline | None = None) -> VoiceToolResult:
        intent = parse_intent(call.raw_tool)
        started = time.perf_counter()
        try:
            result = await self._dispatch(intent, call, self._today(), deadline)
        except VoiceInputError as exc:
            result = self._result(intent, exc.prompt, success=False, error="invalid_input", field=exc.field)
        except SlotScanError as exc:
            result = self._result(
                intent,
                compose.provider_unavailable(self._settings.contact_phone),
                success=False,
                error="provider_rejected" if exc.rejected else "provider_unreachable",
            )
        except ProviderError as exc:
            result = self._result(
                intent,
                compose.provider_unavailable(self._settings.contact_phone),
                success=False,
                error="provider_unreachable" if exc.is_transient else "provider_rejected",
            )
        except TimeoutError:
            result = self._result(
                intent,
                compose.timed_out(self._settings.contact_phone),
                success=False,
                error="timeout",
            )

        latency_ms = (time.perf_counter() - started) * 1000
        record_latency(_COMPONENT, intent.value, latency_ms, get_correlation_id())
        record_intent(intent.value, result.success, get_correlation_id())
        logger.info(
            "voice_tool_call_handled",
            extra={
                "component": _COMPONENT,
                "action": intent.value,
                "result": "ok" if result.success else "error",
                "latency_ms": round(latency_ms, 2),
            },
        )
        return result

    async def _dispatch(
        self,
        intent: VoiceIntent,
        call: VoiceToolCall,
        today: date,
        deadline: Deadline | None,
    ) -> VoiceToolResult:
        match intent:
            case VoiceIntent.GET_AVAILABLE_TIMES:
                return await self._available_times(call, today, deadline)
            case VoiceIntent.GET_SOONEST_AVAILABLE:
                return await self._soonest(call, today, deadline)
            case VoiceIntent.CHECK_SPECIFIC_SLOT:
                return await self._check_slot(call, today, deadline)
            case VoiceIntent.GET_EARLIER_TIMES:
                return await self._earlier_times(call, today, deadline)
            case VoiceIntent.BOOK_APPOINTMENT:
                return await self._book(call, today)
            case VoiceIntent.CANCEL_APPOINTMENT:
                return self._result(intent, compose.cancellation_guidance(self._settings.contact_phone))
            case VoiceIntent.SEARCH_SERVICE:
                return await self._search(call)
            case VoiceIntent.GET_SERVICES_OVERVIEW:
                return await self._services_overview()
            case VoiceIntent.GET_OPENING_HOURS:
                return self._result(
                    intent,
                    compose.opening_hours(
                        self._settings.studio_name,
                        self._settings.locations,
                        self._settings.contact_phone,
                    ),
                )
            case VoiceIntent.REQUEST_BOOKING:
                return await self._request_booking(call, today, deadline)
            case VoiceIntent.UNRECOGNIZED:
                return self._result(intent, compose.unrecognized(call.raw_tool), success=False)
            case _:
                assert_never(intent)

    async def _available_times(
        self,
        call: VoiceToolCall,
        today: date,
        deadline: Deadline | None,
    ) -> VoiceToolResult:
        intent = VoiceIntent.GET_AVAILABLE_TIMES
        if not call.date:
            raise VoiceInputError(compose.missing_date(), field="date")
        day = parse_date_input(call.date, today)
        day_slots = await self._fetch_day(call, day, deadline)

        bounds = period_bounds(call.time_period)
        if bounds is not None:
            day_slots = day_slots.filter_period(*bounds)

        follow_up = bool(call.previous_time)
        start = _page_start(day_slots, call.previous_time) if follow_up else 0
        page = day_slots.all[start : start + PAGE_SIZE]
        has_more = day_slots.total > start + PAGE_SIZE
        text = compose.day_times(
            day,
            page,
            follow_up=follow_up,
            has_more=has_more,
            period=call.time_period if bounds is not None else None,
        )
        return self._result(
            intent,
            text,
            date=format_display_date(day),
            available_times=_slot_payload(page),
            total_slots=day_slots.total,
            has_more=has_more,
            is_follow_up=follow_up,
        )

    async def _soonest(
        self,
        call: VoiceToolCall,
        today: date,
        deadline: Deadline | None,
    ) -> VoiceToolResult:
        start = parse_date_input(call.date, today) if call.date else today
        result = await self._scanner.find_soonest(
            self._service_id(call),
            self._worker_id(call),
            start,
            self._settings.soonest_max_days,
            deadline=deadline,
        )
        return self._result(
            VoiceIntent.GET_SOONEST_AVAILABLE,
            compose.soonest_available(result, today),
            found=result.found,
            date=format_display_date(result.date) if result.date else None,
            time=result.time,
            days_from_now=(result.date - today).days if result.date else None,
            total_slots=result.total_slots,
            alternative_times=[slot.id for slot in result.alternative_slots],
            days_checked=result.days_checked,
            timed_out=result.timed_out,
        )

    async def _check_slot(
        self,
        call: VoiceToolCall,
        today: date,
        deadline: Deadline | None,
    ) -> VoiceToolResult:
        if not call.date or not call.desired_time:
            raise VoiceInputError(_MISSING_SLOT_FIELDS, field="time")
        day = parse_date_input(call.date, today)
        desired = _require_time(call.desired_time)
        day_slots = await self._fetch_day(call, day, deadline)
        match = check_desired(day_slots, desired)
        return self._result(
            VoiceIntent.CHECK_SPECIFIC_SLOT,
            compose.desired_slot(match, day),
            available=match.available,
            date=format_display_date(day),
            time=desired,
            alternatives=[slot.id for slot in match.alternatives],
            total_slots=match.total_slots,
        )

    async def _earlier_times(
        self,
        call: VoiceToolCall,
        today: date,
        deadline: Deadline | None,
    ) -> VoiceToolResult:
        if not call.date or not call.desired_time:
            raise VoiceInputError(_MISSING_EARLIER_FIELDS, field="requested_time")
        day = parse_date_input(call.date, today)
        desired = _require_time(call.desired_time)
        day_slots = await self._fetch_day(call, day, deadline)
        earlier = find_earlier(day_slots, desired, EARLIER_LIMIT)
        return self._result(
            VoiceIntent.GET_EARLIER_TIMES,
            compose.earlier_times(day, desired, earlier),
            date=format_display_date(day),
            available_times=_slot_payload(earlier),
        )

    async def _book(self, call: VoiceToolCall, today: date) -> VoiceToolResult:
        intent = VoiceIntent.BOOK_APPOINTMENT
        if not call.date or not call.time or not (call.customer or call.customer_name):
            raise VoiceInputError(_MISSING_BOOKING_FIELDS, field="customer")
        day = parse_date_input(call.date, today)
        slot_time = _require_time(call.time)
        customer = _customer_from_call(call)
        missing = customer.missing_fields()
        if missing:
            names = [_CUSTOMER_FIELD_NAMES[field] for field in missing]
            raise VoiceInputError(
                f"Pre rezerváciu potrebujem ešte {compose.join_slovak(names)}.",
                field=missing[0],
            )

        reservation = await self._reservations.create_reservation(
            service_id=self._service_id(call),
            worker_id=self._worker_id(call),
            day=day,
            time=slot_time,
            customer=customer,
        )
        if not reservation.success:
            return self._result(
                intent,
                compose.reservation_failed(self._settings.contact_phone),
                success=False,
                error="reservation_rejected",
                details=reservation.errors,
            )
        return self._result(
            intent,
            compose.reservation_confirmed(reservation, day, slot_time),
            order=reservation.order,
        )

    async def _search(self, call: VoiceToolCall) -> VoiceToolResult:
        term = call.search_term or call.service_name
        if not term:
            raise VoiceInputError(_MISSING_SEARCH_TERM, field="search_term")
        services = await search_services(
            self._catalog,
            term,
            popular_categories=self._settings.popular_categories,
        )
        return self._result(
            VoiceIntent.SEARCH_SERVICE,
            compose.search_results(term, services),
            found=len(services),
            services=[
                {
                    "service_id": service.service_id,
                    "title": service.title,
                    "price": service.price,
                    "duration": service.duration_text,
                }
                for service in services
            ],
        )

    async def _services_overview(self) -> VoiceToolResult:
        categories = await self._catalog.get_categories()
        return self._result(
            VoiceIntent.GET_SERVICES_OVERVIEW,
            compose.services_overview(categories),
            categories=[
                {"category_id": category.category_id, "title": category.title}
                for category in categories
            ],
        )

    async def _request_booking(
        self,
        call: VoiceToolCall,
        today: date,
        deadline: Deadline | None,
    ) -> VoiceToolResult:
        request = BookingRequest(
            service=call.service_name or call.search_term,
            service_id=call.service_id,
            location=call.location,
            date=call.date,
            time=call.time,
            customer_name=call.customer_name,
            phone=call.phone,
            note=call.note,
        )
        step = await self._booking_flow.advance(request, today=today, deadline=deadline)
        return self._result(
            VoiceIntent.REQUEST_BOOKING,
            step.response,
            success=step.success,
            step=step.step,
            completed=step.completed,
        )

    async def _fetch_day(self, call: VoiceToolCall, day: date, deadline: Deadline | None) -> DaySlots:
        return await self._scanner.fetch_day(
            self._service_id(call),
            self._worker_id(call),
            day,
            deadline,
        )

    def _service_id(self, call: VoiceToolCall) -> int:
        return call.service_id or self._settings.default_service_id

    def _worker_id(self, call: VoiceToolCall) -> int:
        return call.worker_id if call.worker_id is not None else self._settings.default_worker_id

    @staticmethod
    def _result(
        intent: VoiceIntent,
        response: str,
        *,
        success: bool = True,
        **data: Any,
    ) -> VoiceToolResult:
        return VoiceToolResult(response=response, success=success, intent=intent.value, data=data)


def _page_start(day_slots: DaySlots, previous_time: str | None) -> int:
    """Index after ``previous_time`` when it is one of the day's slots, else 2."""
    previous = normalize_time(previous_time)
    for index, slot in enumerate(day_slots.all):
        if slot.id == previous:
            return index + 1
    return PAGE_SIZE


def _require_time(value: str) -> str:
    normalized = normalize_time(value)
    if normalized is None:
        raise VoiceInputError(_INVALID_TIME, field="time")
    return normalized


def _slot_payload(slots: list[Slot]) -> list[dict[str, str]]:
    return [{"time": slot.id, "display": display_time(slot)} for slot in slots]


def _customer_from_call(call: VoiceToolCall) -> CustomerInfo:
    raw: Any = call.customer
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise VoiceInputError(_INVALID_CUSTOMER, field="customer") from None
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise VoiceInputError(_INVALID_CUSTOMER, field="customer")

    extra = {
        "email": str(raw.get("email") or call.email or ""),
        "phone": str(raw.get("phone") or call.phone or ""),
        "note": str(raw.get("note") or call.note or ""),
    }
    first_name = raw.get("firstName") or raw.get("first_name")
    if first_name:
        return CustomerInfo(
            first_name=str(first_name),
            last_name=str(raw.get("lastName") or raw.get("last_name") or ""),
            **extra,
        )
    return CustomerInfo.from_full_name(str(raw.get("name") or call.customer_name or ""), **extra)
