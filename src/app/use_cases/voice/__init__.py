"""Voice-agent use cases."""

from .handle_tool_call import HandleToolCallUseCase
from .models import VoiceToolCall, VoiceToolResult

__all__ = [
    "HandleToolCallUseCase",
    "VoiceToolCall",
    "VoiceToolResult",
]
