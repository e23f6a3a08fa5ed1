"""Guided booking request, one question per turn.

The voice agent replays every field gathered so far on each call; this
module only decides which field is still missing and what to say next.
Steps in order: service, location, date, time, customer name, phone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.services import response_composer as compose
from app.services.dates import normalize_time, parse_date_input
from app.services.slot_matcher import check_desired
from utils.errors import SlotScanError, VoiceInputError

if TYPE_CHECKING:
    from datetime import date

    from app.domain.booking import BookingRequest
    from app.protocols.booking_notifier import BookingNotifierProtocol
    from app.services.deadline import Deadline
    from app.services.slot_scanner import SlotScanner
    from config.settings.bookio import BookioSettings

logger = logging.getLogger(__name__)

_COMPONENT = "booking_request_flow"

_ASK_DAY_FALLBACK = (
    "Aký deň by vám vyhovoval? Môžete povedať napríklad 'zajtra o 14:00' alebo 'pondelok ráno'."
)
_ASK_TIME_FALLBACK = "Ktorý čas vám vyhovuje?"
_INVALID_TIME_PROMPT = "Nerozumela som času. Povedzte ho prosím napríklad ako 14:30."


@dataclass(frozen=True)
class BookingStep:
    step: str
    response: str
    completed: bool = False
    success: bool = True


class BookingRequestFlow:
    __slots__ = ("_notifier", "_scanner", "_settings")

    def __init__(
        self,
        *,
        scanner: SlotScanner,
        notifier: BookingNotifierProtocol,
        settings: BookioSettings,
    ) -> None:
        self._scanner = scanner
        self._notifier = notifier
        self._settings = settings

    async def advance(
        self,
        request: BookingRequest,
        *,
        today: date,
        deadline: Deadline | None = None,
    ) -> BookingStep:
        """Return the prompt for the first missing field, or submit the request.

        Raises:
            DateInputError: The date given is in the past or not understood.
            VoiceInputError: The time given is not understood.
        """
        if not request.service:
            return BookingStep("service", compose.booking_ask_service())

        location = self._settings.get_location(request.location)
        if location is None:
            return BookingStep("location", compose.booking_ask_location(self._settings.locations))

        service_id = request.service_id or self._settings.default_service_id
        worker_id = self._settings.default_worker_id

        if not request.date:
            return BookingStep(
                "date",
                compose.booking_ask_date(
                    request.service,
                    location,
                    await self._days_summary(service_id, worker_id, today, deadline),
                ),
            )

        day = parse_date_input(request.date, today)

        if not request.time:
            return BookingStep("time", await self._times_prompt(service_id, worker_id, day, deadline))

        time = normalize_time(request.time)
        if time is None:
            raise VoiceInputError(_INVALID_TIME_PROMPT, field="time")

        if not request.customer_name:
            taken = await self._slot_taken_prompt(service_id, worker_id, day, time, deadline)
            if taken is not None:
                return BookingStep("time", taken)
            return BookingStep("customer_name", compose.booking_ask_name(day, time))

        if not request.phone:
            return BookingStep("phone", compose.booking_ask_phone(request.customer_name))

        submitted = request.model_copy(update={"time": time, "location": location.key})
        delivered = await self._notifier.notify(submitted)
        logger.info(
            "booking_request_submitted",
            extra={
                "component": _COMPONENT,
                "action": "notify",
                "result": "ok" if delivered else "error",
                "location": location.key,
            },
        )
        if not delivered:
            return BookingStep(
                "done",
                compose.booking_request_failed(self._settings.contact_phone),
                completed=True,
                success=False,
            )
        return BookingStep(
            "done",
            compose.booking_request_done(submitted, location, day),
            completed=True,
        )

    async def _days_summary(
        self,
        service_id: int,
        worker_id: int,
        today: date,
        deadline: Deadline | None,
    ) -> str:
        try:
            days = await self._scanner.scan_overview(
                service_id,
                worker_id,
                today,
                days=self._settings.overview_days,
                deadline=deadline,
            )
        except SlotScanError:
            return _ASK_DAY_FALLBACK
        return compose.overview(days, today)

    async def _times_prompt(
        self,
        service_id: int,
        worker_id: int,
        day: date,
        deadline: Deadline | None,
    ) -> str:
        try:
            day_slots = await self._scanner.fetch_day(service_id, worker_id, day, deadline)
        except (SlotScanError, TimeoutError):
            return _ASK_TIME_FALLBACK
        return compose.booking_ask_time(day, day_slots.all)

    async def _slot_taken_prompt(
        self,
        service_id: int,
        worker_id: int,
        day: date,
        time: str,
        deadline: Deadline | None,
    ) -> str | None:
        """Prompt for another time when ``time`` is not free; None otherwise.

        When availability cannot be checked the request goes ahead; the
        studio confirms every request by phone.
        """
        try:
            day_slots = await self._scanner.fetch_day(service_id, worker_id, day, deadline)
        except (SlotScanError, TimeoutError):
            return None
        match = check_desired(day_slots, time)
        if match.available:
            return None
        return compose.booking_slot_taken(day, time, match.alternatives)
