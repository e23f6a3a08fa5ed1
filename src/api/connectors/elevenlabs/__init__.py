"""ElevenLabs voice-agent webhook connector."""

from .receive import InvalidJsonError, WebhookRequestError, parse_tool_call, parse_tool_call_body

__all__ = [
    "InvalidJsonError",
    "WebhookRequestError",
    "parse_tool_call",
    "parse_tool_call_body",
]
