"""Parse a tool-call request body into a ``VoiceToolCall``."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from app.use_cases.voice.models import VoiceToolCall

logger = logging.getLogger(__name__)


class WebhookRequestError(ValueError):
    """Base for webhook request failures."""


class InvalidJsonError(WebhookRequestError):
    """Body is not JSON or not a JSON object."""


def parse_tool_call_body(raw_body: bytes) -> dict[str, Any]:
    """Decode the body into a dict.

    Raises:
        InvalidJsonError: Body is not JSON or not an object.
    """
    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc
    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")
    return payload


def parse_tool_call(payload: dict[str, Any]) -> VoiceToolCall:
    """Build a ``VoiceToolCall``, dropping fields whose values are unusable.

    A bad ``service_id`` should not cost the caller the whole answer, so
    invalid fields fall back to their defaults.
    """
    try:
        return VoiceToolCall.model_validate(payload)
    except ValidationError as exc:
        invalid = {str(error["loc"][0]) for error in exc.errors() if error.get("loc")}
        logger.info(
            "tool_call_fields_dropped",
            extra={
                "component": "elevenlabs_receive",
                "action": "parse",
                "result": "partial",
                "fields": sorted(invalid),
            },
        )
        cleaned = {key: value for key, value in payload.items() if key not in invalid}
        nested = cleaned.get("parameters")
        if isinstance(nested, dict):
            cleaned["parameters"] = {k: v for k, v in nested.items() if k not in invalid}
        return VoiceToolCall.model_validate(cleaned)
