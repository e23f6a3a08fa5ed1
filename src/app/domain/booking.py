"""Booking models for the reservation passthrough and the guided flow."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CustomerInfo(BaseModel):
    """Customer contact data for a reservation. Never logged."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""
    phone: str = ""
    note: str = ""

    @classmethod
    def from_full_name(cls, full_name: str, **fields: str) -> CustomerInfo:
        """Split a spoken full name into first and last name."""
        parts = full_name.split()
        first = parts[0] if parts else ""
        last = " ".join(parts[1:])
        return cls(first_name=first, last_name=last, **fields)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def missing_fields(self) -> list[str]:
        missing = []
        if not self.first_name:
            missing.append("name")
        if not self.email:
            missing.append("email")
        if not self.phone:
            missing.append("phone")
        return missing


class ReservationResult(BaseModel):
    """Outcome of a single create-reservation call."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    order: dict[str, object] = Field(default_factory=dict)
    errors: list[str] = Field(default_factory=list)


class BookingRequest(BaseModel):
    """Fields gathered so far by the guided booking conversation.

    The voice agent replays every field on each turn, nothing is stored
    on the server between calls.
    """

    model_config = ConfigDict(extra="ignore")

    service: str | None = None
    service_id: int | None = None
    location: str | None = None
    date: str | None = None
    time: str | None = None
    customer_name: str | None = None
    phone: str | None = None
    note: str | None = None


__all__ = ["BookingRequest", "CustomerInfo", "ReservationResult"]
