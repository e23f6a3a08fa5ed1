"""Contract for submitting a reservation upstream."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import date

    from app.domain.booking import CustomerInfo, ReservationResult


@runtime_checkable
class ReservationProviderProtocol(Protocol):
    async def create_reservation(
        self,
        *,
        service_id: int,
        worker_id: int,
        day: date,
        time: str,
        customer: CustomerInfo,
    ) -> ReservationResult: ...
