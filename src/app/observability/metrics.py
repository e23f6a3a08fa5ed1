"""Metrics recorded as structured logs.

Records are aggregated downstream by the log pipeline.

Supported metrics:
- latency: duration per component/operation
- intent: counter of tool calls per intent and outcome
- provider_failure: counter of failed upstream calls
- scan_outcome: result of each availability scan

Usage:
    start = time.perf_counter()
    ...
    record_latency("voice_webhook", "get_soonest_available", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_intent(
    intent: str,
    success: bool,
    correlation_id: str | None = None,
) -> None:
    """Count one handled tool call."""
    logger.info(
        "metric_intent",
        extra={
            "metric_type": "intent",
            "component": "voice_webhook",
            "intent": intent,
            "success": success,
            "correlation_id": correlation_id,
        },
    )


def record_provider_failure(
    operation: str,
    *,
    status_code: int | None,
    transient: bool,
    correlation_id: str | None = None,
) -> None:
    """Count one failed call to the booking provider.

    Args:
        operation: Provider operation (e.g. "allowed_times", "categories").
        status_code: HTTP status when the provider answered.
        transient: Whether the failure is worth retrying later.
        correlation_id: Correlation id for tracing.
    """
    logger.info(
        "metric_provider_failure",
        extra={
            "metric_type": "provider_failure",
            "component": "bookio",
            "operation": operation,
            "status_code": status_code,
            "transient": transient,
            "correlation_id": correlation_id,
        },
    )


def record_scan_outcome(
    operation: str,
    *,
    outcome: str,
    days_checked: int,
    failed_days: int,
    correlation_id: str | None = None,
) -> None:
    """Record how a slot scan ended.

    Args:
        operation: "find_soonest" or "scan_overview".
        outcome: "found", "not_found", "timed_out" or "failed".
        days_checked: Days examined before the scan ended.
        failed_days: Days whose provider call failed.
        correlation_id: Correlation id for tracing.
    """
    logger.info(
        "metric_scan_outcome",
        extra={
            "metric_type": "scan_outcome",
            "component": "slot_scanner",
            "operation": operation,
            "outcome": outcome,
            "days_checked": days_checked,
            "failed_days": failed_days,
            "correlation_id": correlation_id,
        },
    )
