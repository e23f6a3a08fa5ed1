"""Structured logging configuration.

Re-exports the helpers used to set up JSON logging.

Usage:
    from config.logging import configure_logging, get_logger

    # at startup (app/bootstrap/)
    configure_logging(level="INFO", service_name="bookio_voice")

    # in any module
    logger = get_logger(__name__)
    logger.info("slot_scan_completed", extra={"days_checked": 4})

Every record carries:
- correlation_id
- service
- level
- logger
- message
- asctime

Customer names, phone numbers and e-mails are never logged; the
CustomerDataFilter scrubs them if a caller passes them through ``extra``.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CUSTOMER_FIELDS, CorrelationIdFilter, CustomerDataFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "CUSTOMER_FIELDS",
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "CustomerDataFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
