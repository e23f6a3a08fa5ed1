"""Input and output contracts of a voice tool call."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class VoiceToolCall(BaseModel):
    """Parameters sent by the voice agent.

    The tool is named by ``tool_name`` or ``action``. Parameters may be
    sent flat or nested under ``parameters``; flat values win.
    """

    model_config = ConfigDict(extra="ignore")

    tool_name: str | None = None
    action: str | None = None
    conversation_id: str | None = None
    service_id: int | None = None
    worker_id: int | None = None
    search_term: str | None = None
    service_name: str | None = None
    date: str | None = None
    time: str | None = None
    time_period: str | None = None
    previous_time: str | None = None
    requested_time: str | None = None
    location: str | None = None
    customer_name: str | None = None
    customer: dict[str, Any] | str | None = None
    phone: str | None = None
    email: str | None = None
    note: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _merge_nested_parameters(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        nested = data.get("parameters")
        if isinstance(nested, dict):
            return {**nested, **{k: v for k, v in data.items() if v not in (None, "")}}
        return data

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or None
        return value

    @property
    def raw_tool(self) -> str | None:
        return self.tool_name or self.action

    @property
    def desired_time(self) -> str | None:
        return self.requested_time or self.time


class VoiceToolResult(BaseModel):
    """Answer returned to the voice agent. ``response`` is always speakable."""

    model_config = ConfigDict(extra="ignore")

    response: str
    success: bool
    intent: str
    data: dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {
            "response": self.response,
            "success": self.success,
            "intent": self.intent,
            **self.data,
        }
