"""Domain exceptions for provider failures and caller input."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base for failures of external systems."""


class ProviderError(InfrastructureError):
    """The booking provider failed to answer a request.

    Attributes:
        status_code: HTTP status when the provider answered, else None.
        is_transient: True for network errors, timeouts, 429 and 5xx.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        is_transient: bool = True,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_transient = is_transient


class SlotScanError(InfrastructureError):
    """Every day examined by a slot scan failed at the provider.

    Distinct from an empty result: the scan could not tell whether
    slots exist.
    """

    def __init__(self, message: str, *, failed_days: int, rejected: bool) -> None:
        super().__init__(message)
        self.failed_days = failed_days
        self.rejected = rejected


class VoiceInputError(ValueError):
    """A tool call is missing a field or carries an unusable value.

    ``prompt`` is the Slovak sentence read back to the caller.
    """

    def __init__(self, prompt: str, *, field: str | None = None) -> None:
        super().__init__(prompt)
        self.prompt = prompt
        self.field = field


class DateInputError(VoiceInputError):
    """The date given by the caller is in the past or not understood."""

    def __init__(self, prompt: str) -> None:
        super().__init__(prompt, field="date")
