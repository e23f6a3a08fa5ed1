"""Contract for handing a completed booking request to the studio staff."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.booking import BookingRequest


@runtime_checkable
class BookingNotifierProtocol(Protocol):
    async def notify(self, request: BookingRequest) -> bool:
        """Deliver the request. Returns False when delivery failed."""
        ...
