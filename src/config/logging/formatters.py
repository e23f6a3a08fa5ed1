"""Structured logging formatter.

Every JSON record carries:
- correlation_id
- service
- asctime
- level (levelname)
- logger (name)
- message

Spoken replies and catalog titles are Slovak, so records are written as
UTF-8 instead of ``\\u`` escapes.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Build the JSON formatter with the standard field names.

    Returns:
        JsonFormatter for structured records.

    Example output:
        {
            "asctime": "2025-01-10 10:30:00,120",
            "level": "INFO",
            "logger": "app.services.slot_scanner",
            "message": "slot_scan_completed",
            "correlation_id": "conv_abc123",
            "service": "bookio_voice",
            "operation": "find_soonest",
            "days_checked": 4
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        json_ensure_ascii=False,
    )
