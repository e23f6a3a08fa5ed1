"""ElevenLabs voice-agent webhook endpoints.

Endpoints:
- GET /webhook/elevenlabs: readiness banner with the available tools
- POST /webhook/elevenlabs: tool call, JSON answer
- POST /webhook/elevenlabs/text: tool call, plain-text answer

Every POST answers HTTP 200 with a speakable ``response``; failures are
signalled through ``success: false`` because the caller is a TTS pipeline.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from api.connectors.elevenlabs import InvalidJsonError, parse_tool_call, parse_tool_call_body
from app.domain.intents import parse_intent, public_tool_names
from app.observability import (
    get_correlation_id,
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from app.services import response_composer as compose
from app.services.deadline import Deadline
from app.use_cases.voice.models import VoiceToolCall, VoiceToolResult
from config.logging import log_fallback
from config.settings import get_base_settings, get_webhook_settings

if TYPE_CHECKING:
    from app.use_cases.voice import HandleToolCallUseCase

logger = logging.getLogger(__name__)

router = APIRouter()

_COMPONENT = "elevenlabs_webhook"

# Time kept back from the scanner so the answer is composed before the budget ends.
_COMPOSE_MARGIN_SECONDS = 1.0


@router.get("")
async def describe_webhook() -> dict[str, Any]:
    return {
        "status": "ready",
        "service": get_base_settings().service_name,
        "tools": public_tool_names(),
        "endpoints": {
            "json": "POST /webhook/elevenlabs",
            "text": "POST /webhook/elevenlabs/text",
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.post("", response_model=None)
async def receive_tool_call(request: Request) -> JSONResponse:
    result = await _handle_request(request)
    return JSONResponse(content=result.to_payload(), status_code=200)


@router.post("/text", response_model=None)
async def receive_tool_call_text(request: Request) -> PlainTextResponse:
    result = await _handle_request(request)
    return PlainTextResponse(content=result.response, media_type="text/plain; charset=utf-8")


async def _handle_request(request: Request) -> VoiceToolResult:
    raw_body = await request.body()
    try:
        payload = parse_tool_call_body(raw_body)
    except InvalidJsonError as exc:
        logger.warning(
            "webhook_json_invalid",
            extra={"component": _COMPONENT, "action": "parse", "error": str(exc)},
        )
        payload = {}

    token = set_correlation_id(
        resolve_correlation_id(
            request.headers.get("x-correlation-id"),
            payload.get("conversation_id"),
        )
    )
    started = time.perf_counter()
    try:
        call = parse_tool_call(payload)
        logger.info(
            "webhook_received",
            extra={
                "component": _COMPONENT,
                "action": "receive",
                "tool": call.raw_tool,
                "payload_size": len(raw_body),
                "correlation_id": get_correlation_id(),
            },
        )
        return await _execute(request.app.state.tool_call_use_case, call, started)
    except Exception:
        logger.exception(
            "webhook_processing_failed",
            extra={"component": _COMPONENT, "correlation_id": get_correlation_id()},
        )
        return VoiceToolResult(
            response=compose.GENERIC_APOLOGY,
            success=False,
            intent=parse_intent(str(payload.get("tool_name") or payload.get("action") or "")).value,
            data={"error": "internal_error"},
        )
    finally:
        reset_correlation_id(token)


async def _execute(use_case: HandleToolCallUseCase, call: VoiceToolCall, started: float) -> VoiceToolResult:
    budget = get_webhook_settings().request_budget_seconds
    deadline = Deadline.after(max(budget - _COMPOSE_MARGIN_SECONDS, budget / 2))
    try:
        return await asyncio.wait_for(use_case.execute(call, deadline=deadline), timeout=budget)
    except TimeoutError:
        elapsed_ms = (time.perf_counter() - started) * 1000
        log_fallback(logger, _COMPONENT, reason="request_budget_exceeded", elapsed_ms=elapsed_ms)
        contact_phone = use_case.contact_phone
        return VoiceToolResult(
            response=compose.timed_out(contact_phone),
            success=False,
            intent=parse_intent(call.raw_tool).value,
            data={"error": "timeout"},
        )
