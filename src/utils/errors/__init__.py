"""Shared exceptions."""

from .exceptions import (
    DateInputError,
    InfrastructureError,
    ProviderError,
    SlotScanError,
    VoiceInputError,
)

__all__ = [
    "DateInputError",
    "InfrastructureError",
    "ProviderError",
    "SlotScanError",
    "VoiceInputError",
]
