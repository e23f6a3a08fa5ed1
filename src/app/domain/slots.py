"""Availability models: provider slots, per-day lists and scan results.

Provider order is authoritative everywhere: index 0 of a day is the
earliest slot and ties are never reordered.
"""

from __future__ import annotations

import datetime as dt  # noqa: TC003 - used at runtime by the pydantic schema
import re

from pydantic import BaseModel, ConfigDict, Field

_CLOCK_RE = re.compile(r"^\s*(\d{1,2})(?:[:.](\d{1,2}))?\s*$")


def clock_to_minutes(value: str | None) -> int | None:
    """Return minutes since midnight for ``HH:MM`` / ``H.MM`` / ``H``, else None."""
    if not value:
        return None
    match = _CLOCK_RE.match(value)
    if match is None:
        return None
    hours = int(match.group(1))
    minutes = int(match.group(2) or 0)
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


class Slot(BaseModel):
    """One bookable start time as returned by the provider."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str = Field(..., description="Time label, e.g. '14:30'. Unique within a day.")
    name: str | None = Field(default=None, description="Provider display label.")
    name_suffix: str | None = Field(
        default=None,
        alias="nameSuffix",
        description="AM/PM suffix when the provider uses a 12 h label.",
    )

    @property
    def minutes(self) -> int | None:
        """Minutes since midnight, or None when the id is not a clock time."""
        return clock_to_minutes(self.id)


class DaySlots(BaseModel):
    """All slots of one calendar day.

    ``mornings`` and ``afternoons`` are the provider's own classification
    and are kept as received.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    date: dt.date
    all: list[Slot] = Field(default_factory=list)
    mornings: list[Slot] = Field(default_factory=list)
    afternoons: list[Slot] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.all

    @property
    def total(self) -> int:
        return len(self.all)

    def ids(self) -> list[str]:
        return [slot.id for slot in self.all]

    def find(self, slot_id: str) -> Slot | None:
        for slot in self.all:
            if slot.id == slot_id:
                return slot
        return None

    def filter_period(self, start_hour: int, end_hour: int) -> DaySlots:
        """Restrict to slots starting in ``[start_hour, end_hour)``.

        Slots whose id is not a clock time are dropped.
        """

        def _keep(slot: Slot) -> bool:
            minutes = slot.minutes
            return minutes is not None and start_hour * 60 <= minutes < end_hour * 60

        return DaySlots(
            date=self.date,
            all=[s for s in self.all if _keep(s)],
            mornings=[s for s in self.mornings if _keep(s)],
            afternoons=[s for s in self.afternoons if _keep(s)],
        )


class SoonestResult(BaseModel):
    """Outcome of a soonest-available scan."""

    model_config = ConfigDict(extra="ignore")

    found: bool
    service_id: int
    worker_id: int
    date: dt.date | None = None
    slot: Slot | None = None
    days_from_now: int | None = Field(default=None, ge=0)
    total_slots: int = Field(default=0, ge=0)
    alternative_slots: list[Slot] = Field(default_factory=list, max_length=3)
    days_checked: int = Field(default=0, ge=0)
    failed_days: int = Field(default=0, ge=0)
    timed_out: bool = False

    @property
    def time(self) -> str | None:
        return self.slot.id if self.slot else None


class MatchResult(BaseModel):
    """Outcome of checking a desired time against one day."""

    model_config = ConfigDict(extra="ignore")

    available: bool
    requested_time: str
    slot: Slot | None = None
    alternatives: list[Slot] = Field(default_factory=list, max_length=5)
    total_slots: int = 0


class DayOverview(BaseModel):
    """One day of a multi-day overview. A failed day counts as empty."""

    model_config = ConfigDict(extra="ignore")

    date: dt.date
    slots: DaySlots | None = None
    failed: bool = False

    @property
    def total(self) -> int:
        return self.slots.total if self.slots is not None else 0


__all__ = [
    "DayOverview",
    "DaySlots",
    "MatchResult",
    "Slot",
    "SoonestResult",
    "clock_to_minutes",
]
