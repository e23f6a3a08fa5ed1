"""Central logging setup.

Configures structured JSON logging with:
- the fixed record fields (correlation_id, service, level, logger, message)
- customer fields scrubbed before formatting
- httpx/httpcore request lines kept out of INFO

Usage:
    from config.logging import configure_logging, get_logger

    # once, from app/bootstrap/
    configure_logging(level="INFO", service_name="bookio_voice")

    # in any module
    logger = get_logger(__name__)
    logger.info("slot_scan_completed", extra={"days_checked": 4})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, CustomerDataFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "bookio_voice"

# httpx logs every Bookio request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configure structured JSON logging for the service.

    Called once from app/bootstrap/, before anything logs.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Service name stamped on every record.
        correlation_id_getter: Optional callable returning the correlation
            id of the current context (see app.observability).

    Raises:
        ValueError: If the level is not a known level name.

    Example:
        configure_logging(
            level="INFO",
            service_name="bookio_voice",
            correlation_id_getter=get_correlation_id,
        )
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {level}. "
            f"Valid: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(CustomerDataFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]

    quiet_level = logging.DEBUG if level_upper == "DEBUG" else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually ``__name__``)."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Record that a deterministic fallback answered instead of live data.

    Typical cases: a stale catalog entry served after a failed refresh,
    or the apology text returned after the request budget ran out.

    Args:
        logger: Logger instance.
        component: Component name (e.g. "catalog_cache").
        reason: Short machine-readable reason, without PII.
        elapsed_ms: Elapsed time in ms when relevant.

    Example:
        log_fallback(logger, "elevenlabs_webhook", reason="request_budget_exceeded")
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms

    logger.info(
        "Fallback applied for %s",
        component,
        extra=extra,
    )
