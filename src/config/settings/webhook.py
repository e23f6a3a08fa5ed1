"""Settings for the voice-agent webhook surface."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

# The voice agent gives up on a tool call after this many seconds.
VOICE_AGENT_TIMEOUT_SECONDS = 30.0


class WebhookSettings(BaseModel):
    """Time budget and warm-up limits for webhook handling."""

    model_config = ConfigDict(extra="ignore")

    request_budget_seconds: float = Field(
        default=25.0,
        gt=0,
        lt=VOICE_AGENT_TIMEOUT_SECONDS,
        description="Wall-clock budget for answering one tool call.",
    )
    warm_up_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Upper bound for catalog warm-up during startup.",
    )


def _load_webhook_from_env() -> WebhookSettings:
    return WebhookSettings(
        request_budget_seconds=float(os.getenv("WEBHOOK_REQUEST_BUDGET_SECONDS", "25")),
        warm_up_timeout_seconds=float(os.getenv("WEBHOOK_WARM_UP_TIMEOUT_SECONDS", "15")),
    )


@lru_cache(maxsize=1)
def get_webhook_settings() -> WebhookSettings:
    """Return the cached WebhookSettings instance."""
    return _load_webhook_from_env()


__all__ = ["VOICE_AGENT_TIMEOUT_SECONDS", "WebhookSettings", "get_webhook_settings"]
