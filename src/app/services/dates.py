"""Date and time helpers for the Slovak voice channel.

Pure functions: no I/O and no clock reads except ``today_in``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from app.domain.slots import clock_to_minutes
from utils.errors import DateInputError

if TYPE_CHECKING:
    from app.domain.slots import Slot

MONTHS_GENITIVE = (
    "januára",
    "februára",
    "marca",
    "apríla",
    "mája",
    "júna",
    "júla",
    "augusta",
    "septembra",
    "októbra",
    "novembra",
    "decembra",
)

WEEKDAYS = ("pondelok", "utorok", "streda", "štvrtok", "piatok", "sobota", "nedeľa")

PAST_DATE_PROMPT = "Nemôžem rezervovať termín v minulosti. Prosím, vyberte dátum od dneška."
INVALID_DATE_PROMPT = (
    "Neplatný formát dátumu. Použite DD.MM.YYYY alebo 'dnes', 'zajtra', 'pondelok', atď."
)

# Stems cover inflected forms ("v stredu", "v nedeľu").
_WEEKDAY_KEYWORDS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (0, ("pondel", "monday")),
    (1, ("utor", "tuesday")),
    (2, ("stred", "wednesday")),
    (3, ("štvrt", "stvrt", "thursday")),
    (4, ("piat", "friday")),
    (5, ("sobot", "saturday")),
    (6, ("nedeľ", "nedel", "sunday")),
)

_PERIODS: tuple[tuple[tuple[str, ...], tuple[int, int]], ...] = (
    (("dopoludnie", "dopoludnia", "ráno", "rano", "morning"), (6, 12)),
    (("popoludnie", "popoludní", "poobede", "afternoon"), (12, 18)),
    (("poludnie", "obed", "noon"), (11, 14)),
    (("večer", "vecer", "evening"), (18, 23)),
)

_NUMERIC_DATE_RE = re.compile(r"^(\d{1,2})\.\s*(\d{1,2})\.\s*(\d{4})?")
_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
_AMPM_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*([AaPp][Mm])\s*$")


def today_in(timezone: str) -> date:
    """Return today's date in ``timezone``."""
    return datetime.now(ZoneInfo(timezone)).date()


def format_api_date(day: date) -> str:
    """``DD.MM.YYYY 00:00`` as the availability endpoint expects."""
    return day.strftime("%d.%m.%Y 00:00")


def format_display_date(day: date) -> str:
    return day.strftime("%d.%m.%Y")


def format_voice_date(day: date) -> str:
    """Spoken form, e.g. ``piatok 10. januára``."""
    return f"{WEEKDAYS[day.weekday()]} {day.day}. {MONTHS_GENITIVE[day.month - 1]}"


def relative_day_phrase(offset: int, day: date) -> str:
    """Phrase for a day ``offset`` days from today."""
    if offset == 0:
        return "dnes"
    if offset == 1:
        return "zajtra"
    if offset == 2:
        return "pozajtra"
    return format_voice_date(day)


def parse_date_input(text: str, today: date) -> date:
    """Parse a caller supplied date relative to ``today``.

    Accepts ``DD.MM.YYYY`` (optionally followed by a time), ``D.M.``
    without a year, ISO ``YYYY-MM-DD`` and Slovak or English keywords
    (dnes, zajtra, pozajtra, budúci týždeň, weekday names).

    Raises:
        DateInputError: Unknown format, impossible date or a past day.
    """
    raw = (text or "").strip()
    if not raw:
        raise DateInputError(INVALID_DATE_PROMPT)

    target = _parse_explicit_date(raw, today)
    if target is None:
        target = _parse_keyword_date(raw.lower(), today)
    if target is None:
        raise DateInputError(INVALID_DATE_PROMPT)
    if target < today:
        raise DateInputError(PAST_DATE_PROMPT)
    return target


def _parse_explicit_date(raw: str, today: date) -> date | None:
    iso = _ISO_DATE_RE.match(raw)
    if iso:
        return _build_date(int(iso.group(1)), int(iso.group(2)), int(iso.group(3)))

    numeric = _NUMERIC_DATE_RE.match(raw)
    if numeric is None:
        return None
    day_num, month_num = int(numeric.group(1)), int(numeric.group(2))
    if numeric.group(3):
        return _build_date(int(numeric.group(3)), month_num, day_num)

    candidate = _build_date(today.year, month_num, day_num)
    if candidate < today:
        candidate = _build_date(today.year + 1, month_num, day_num)
    return candidate


def _build_date(year: int, month: int, day: int) -> date:
    try:
        return date(year, month, day)
    except ValueError:
        raise DateInputError(INVALID_DATE_PROMPT) from None


def _parse_keyword_date(lowered: str, today: date) -> date | None:
    if "dnes" in lowered or "today" in lowered:
        return today
    if "pozajtra" in lowered:
        return today + timedelta(days=2)
    if "zajtra" in lowered or "tomorrow" in lowered:
        return today + timedelta(days=1)
    if "budúci týždeň" in lowered or "next week" in lowered:
        return today + timedelta(days=7)
    for weekday, keywords in _WEEKDAY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return next_weekday(today, weekday)
    return None


def next_weekday(today: date, weekday: int) -> date:
    """Next occurrence of ``weekday`` strictly after ``today``."""
    days_ahead = (weekday - today.weekday()) % 7 or 7
    return today + timedelta(days=days_ahead)


def normalize_time(text: str | None) -> str | None:
    """Normalize ``14:30``, ``14.30``, ``9``, ``2:30 PM`` to ``HH:MM``."""
    if not text:
        return None
    ampm = _AMPM_RE.match(text)
    if ampm:
        minutes = _ampm_to_minutes(int(ampm.group(1)), int(ampm.group(2) or 0), ampm.group(3))
    else:
        minutes = clock_to_minutes(text)
    if minutes is None:
        return None
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _ampm_to_minutes(hour: int, minute: int, marker: str) -> int | None:
    if not 1 <= hour <= 12 or minute > 59:
        return None
    marker = marker.upper()
    if marker == "PM" and hour != 12:
        hour += 12
    if marker == "AM" and hour == 12:
        hour = 0
    return hour * 60 + minute


def display_time(slot: Slot) -> str:
    """Spoken form of a slot.

    Provider labels in 12 h format are converted to 24 h and tagged with
    the part of day; plain ``HH:MM`` labels are returned unchanged.
    """
    label = slot.name or slot.id
    suffix = (slot.name_suffix or "").strip()
    if suffix.upper() in ("AM", "PM"):
        label = f"{label} {suffix}"
    elif suffix:
        label = suffix
    ampm = _AMPM_RE.match(label)
    if ampm is None:
        return label
    minutes = _ampm_to_minutes(int(ampm.group(1)), int(ampm.group(2) or 0), ampm.group(3))
    if minutes is None:
        return label
    hour, minute = divmod(minutes, 60)
    clock = f"{hour:02d}:{minute:02d}"
    if hour < 12:
        return f"{clock} dopoludnie"
    if hour == 12:
        return f"{clock} v poludnie"
    return f"{clock} poobede"


def period_bounds(period: str | None) -> tuple[int, int] | None:
    """``(start_hour, end_hour)`` for a spoken part of day, else None."""
    if not period:
        return None
    lowered = period.strip().lower()
    for keywords, bounds in _PERIODS:
        if any(keyword in lowered for keyword in keywords):
            return bounds
    return None


def slovak_count(count: int, one: str, few: str, many: str) -> str:
    """Pick the Slovak noun form for ``count`` (1 / 2-4 / 0 and 5+)."""
    if count == 1:
        return one
    if 2 <= count <= 4:
        return few
    return many
