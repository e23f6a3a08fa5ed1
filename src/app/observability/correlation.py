"""Correlation id tracking for webhook requests.

One voice conversation produces many tool calls, so the ElevenLabs
conversation id is the natural correlation id: every log line of a call
can be grouped with the rest of the conversation. An explicit
``x-correlation-id`` header still wins. Held in a ContextVar, so it is
per-request under asyncio.

Usage:
    from app.observability import reset_correlation_id, set_correlation_id

    # in the webhook handler
    token = set_correlation_id(
        resolve_correlation_id(request.headers.get("x-correlation-id"), conversation_id)
    )
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Longer values are truncated.
MAX_CORRELATION_ID_LENGTH = 128


def get_correlation_id() -> str:
    """Return the correlation id of the current context.

    Returns:
        The correlation id, or an empty string outside a request.
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Set the correlation id for the current context.

    Args:
        correlation_id: Id to set. A new UUID is generated when None.

    Returns:
        Token for ``reset_correlation_id``.
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restore the previous correlation id.

    Args:
        token: Token returned by ``set_correlation_id``.
    """
    _correlation_id.reset(token)


def resolve_correlation_id(header_value: str | None, conversation_id: object = None) -> str:
    """Pick the id for one tool call.

    Args:
        header_value: Value of the ``x-correlation-id`` header, if any.
        conversation_id: ``conversation_id`` from the tool-call payload.
            Anything other than a non-blank string is ignored.

    Returns:
        The header value, else the conversation id, else a new UUID,
        stripped and truncated to ``MAX_CORRELATION_ID_LENGTH``.
    """
    for candidate in (header_value, conversation_id):
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()[:MAX_CORRELATION_ID_LENGTH]
    return generate_correlation_id()


def generate_correlation_id() -> str:
    """Generate a new correlation id (UUID v4)."""
    return str(uuid.uuid4())
