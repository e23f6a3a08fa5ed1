"""Contract for fetching one day of bookable slots."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import date

    from app.domain.slots import DaySlots


@runtime_checkable
class AvailabilityProviderProtocol(Protocol):
    """Read-only access to the provider's allowed times."""

    async def fetch_day_slots(self, service_id: int, worker_id: int, day: date) -> DaySlots:
        """Return the day's slots in provider order.

        Raises ProviderError when the provider cannot be reached or rejects
        the request.
        """
        ...
