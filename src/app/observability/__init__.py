"""Observability: correlation ids and metrics as structured logs.

Usage:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_scan_outcome
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_intent,
    record_latency,
    record_provider_failure,
    record_scan_outcome,
)

__all__ = [
    "generate_correlation_id",
    "get_correlation_id",
    "record_intent",
    "record_latency",
    "record_provider_failure",
    "record_scan_outcome",
    "reset_correlation_id",
    "resolve_correlation_id",
    "set_correlation_id",
]
