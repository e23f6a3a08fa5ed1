"""Logging filters that enrich or scrub records before formatting.

Filters add context to the records so callers do not pass it by hand,
and remove customer data that must never reach the log sink.

Injected fields:
- correlation_id: the webhook request / ElevenLabs conversation id
- service: service name (e.g. bookio_voice)

Scrubbed fields: see ``CUSTOMER_FIELDS``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Record attributes that may carry what a caller said about themselves.
CUSTOMER_FIELDS = frozenset(
    {
        "customer",
        "customer_name",
        "first_name",
        "last_name",
        "phone",
        "email",
        "note",
    }
)

REDACTED = "[redacted]"


class CorrelationIdFilter(logging.Filter):
    """Stamp ``correlation_id`` and ``service`` on every record.

    Args:
        service_name: Service name shown in every record.
        correlation_id_getter: Callable returning the current correlation
            id. Without it the field is an empty string.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Add correlation_id and service to the record.

        A correlation id passed explicitly through ``extra`` is kept.

        Args:
            record: LogRecord to enrich.

        Returns:
            Always True (enriches, never drops).
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class CustomerDataFilter(logging.Filter):
    """Replace customer-supplied values passed via ``extra`` with a marker.

    Booking requests carry names, phone numbers and e-mails read out by the
    caller. A field name from ``CUSTOMER_FIELDS`` keeps its key in the
    record so the log still shows the field was present.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact customer fields in place.

        Args:
            record: LogRecord to scrub.

        Returns:
            Always True.
        """
        for field in CUSTOMER_FIELDS:
            if getattr(record, field, None):
                setattr(record, field, REDACTED)
        return True
