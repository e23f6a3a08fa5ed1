"""Reconcile a caller's desired time with one day's slots."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.slots import MatchResult, clock_to_minutes

if TYPE_CHECKING:
    from app.domain.slots import DaySlots, Slot

MAX_ALTERNATIVES = 5

# Slots without a clock id sort after every real distance.
_UNRANKED = 24 * 60 + 1


def check_desired(day_slots: DaySlots, desired_time: str) -> MatchResult:
    """Check ``desired_time`` (``HH:MM``) against the day's slots.

    An exact id match is available. Otherwise up to five alternatives are
    returned, closest first by absolute minute distance; equal distances
    keep provider order.
    """
    exact = day_slots.find(desired_time)
    if exact is not None:
        return MatchResult(
            available=True,
            requested_time=desired_time,
            slot=exact,
            total_slots=day_slots.total,
        )

    target = clock_to_minutes(desired_time)
    ranked = sorted(day_slots.all, key=lambda slot: _distance(slot, target))
    return MatchResult(
        available=False,
        requested_time=desired_time,
        alternatives=ranked[:MAX_ALTERNATIVES],
        total_slots=day_slots.total,
    )


def find_earlier(day_slots: DaySlots, desired_time: str, limit: int = 2) -> list[Slot]:
    """The last ``limit`` slots that start strictly before ``desired_time``."""
    target = clock_to_minutes(desired_time)
    if target is None or limit <= 0:
        return []
    earlier = [
        slot for slot in day_slots.all if slot.minutes is not None and slot.minutes < target
    ]
    return earlier[-limit:]


def _distance(slot: Slot, target: int | None) -> int:
    minutes = slot.minutes
    if minutes is None or target is None:
        return _UNRANKED
    return abs(minutes - target)
