"""Settings aggregator for the Bookio voice webhook.

One module per concern, each with a cached ``get_*_settings()`` factory.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.bookio import (
    BOOKIO_API_BASE_URL,
    BookioSettings,
    LocationInfo,
    get_bookio_settings,
)
from config.settings.webhook import (
    VOICE_AGENT_TIMEOUT_SECONDS,
    WebhookSettings,
    get_webhook_settings,
)

__all__ = [
    "BOOKIO_API_BASE_URL",
    "VOICE_AGENT_TIMEOUT_SECONDS",
    "BaseSettings",
    "BookioSettings",
    "Environment",
    "LocationInfo",
    "WebhookSettings",
    "get_base_settings",
    "get_bookio_settings",
    "get_webhook_settings",
]
