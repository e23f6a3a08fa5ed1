"""Notifier that records completed booking requests in the structured log.

Staff pick requests up from the log pipeline. Contact details stay out
of the record; only the booking coordinates are logged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from app.protocols.booking_notifier import BookingNotifierProtocol

if TYPE_CHECKING:
    from app.domain.booking import BookingRequest

logger = logging.getLogger(__name__)

_COMPONENT = "booking_notifier"


class LoggingBookingNotifier(BookingNotifierProtocol):
    __slots__ = ()

    async def notify(self, request: BookingRequest) -> bool:
        logger.info(
            "booking_request_received",
            extra={
                "component": _COMPONENT,
                "action": "notify",
                "result": "ok",
                "booking_service": request.service,
                "service_id": request.service_id,
                "location": request.location,
                "date": request.date,
                "time": request.time,
                "has_note": bool(request.note),
                "correlation_id": get_correlation_id(),
            },
        )
        return True
