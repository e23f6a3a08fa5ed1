"""Closed set of tool calls the voice agent can make."""

from __future__ import annotations

from enum import StrEnum


class VoiceIntent(StrEnum):
    GET_AVAILABLE_TIMES = "get_available_times"
    GET_SOONEST_AVAILABLE = "get_soonest_available"
    CHECK_SPECIFIC_SLOT = "check_specific_slot"
    GET_EARLIER_TIMES = "get_earlier_times"
    BOOK_APPOINTMENT = "book_appointment"
    CANCEL_APPOINTMENT = "cancel_appointment"
    SEARCH_SERVICE = "search_service"
    GET_SERVICES_OVERVIEW = "get_services_overview"
    GET_OPENING_HOURS = "get_opening_hours"
    REQUEST_BOOKING = "request_booking"
    UNRECOGNIZED = "unrecognized"


_ALIASES: dict[str, VoiceIntent] = {
    "search_services": VoiceIntent.SEARCH_SERVICE,
    "find_soonest_slot": VoiceIntent.GET_SOONEST_AVAILABLE,
    "quick_booking": VoiceIntent.BOOK_APPOINTMENT,
}


def parse_intent(raw: str | None) -> VoiceIntent:
    """Map a raw ``tool_name``/``action`` value to a VoiceIntent.

    Unknown or empty values map to ``UNRECOGNIZED``.
    """
    if not raw:
        return VoiceIntent.UNRECOGNIZED
    key = raw.strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        intent = VoiceIntent(key)
    except ValueError:
        return VoiceIntent.UNRECOGNIZED
    return intent


def public_tool_names() -> list[str]:
    """Tool names advertised to the voice agent."""
    return [intent.value for intent in VoiceIntent if intent is not VoiceIntent.UNRECOGNIZED]


__all__ = ["VoiceIntent", "parse_intent", "public_tool_names"]
