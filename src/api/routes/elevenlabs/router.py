"""ElevenLabs router, aggregates the voice-agent endpoints.

The prefix lives here so the JSON endpoint answers at
``/webhook/elevenlabs`` itself, without a trailing-slash redirect.
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.elevenlabs.webhook import router as webhook_router

WEBHOOK_PREFIX = "/webhook/elevenlabs"

router = APIRouter()

router.include_router(webhook_router, prefix=WEBHOOK_PREFIX)
