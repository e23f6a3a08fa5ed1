"""Application bootstrap, initialization and wiring.

This module is the composition root: it configures logging, validates
settings and connects concrete implementations to the protocols.

Usage:
    from app.bootstrap import initialize_app, validate_runtime_settings

    # Once, at service start
    initialize_app()
"""

from __future__ import annotations

import logging

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_bookio_settings

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configure JSON logging with the correlation id getter.

    Must be called once, before the app logs anything.
    """
    settings = get_base_settings()
    configure_logging(
        level=settings.log_level,
        service_name=settings.service_name,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Validate required settings at startup.

    Fails fast in ``staging``/``production``; only warns elsewhere.
    """
    base = get_base_settings()
    errors = [f"base: {error}" for error in base.validate()]

    bookio = get_bookio_settings()
    if not bookio.base_url.startswith(("http://", "https://")):
        errors.append(f"bookio: invalid BOOKIO_BASE_URL: {bookio.base_url}")
    if not bookio.locations:
        errors.append("bookio: no studio locations configured")

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Invalid configuration for {base.environment}:\n{details}")
