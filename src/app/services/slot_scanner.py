"""Availability scans over a window of calendar days.

Days are polled one after another in ascending order. A day whose
provider call fails is logged and skipped; only when every examined day
failed does the scan raise ``SlotScanError``, so callers can tell
"no availability" from "could not check".
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from app.domain.slots import DayOverview, SoonestResult
from app.observability import get_correlation_id, record_scan_outcome
from config.settings.bookio import SOONEST_MAX_DAYS_LIMIT
from utils.errors import ProviderError, SlotScanError

if TYPE_CHECKING:
    from datetime import date

    from app.domain.slots import DaySlots
    from app.protocols.availability_provider import AvailabilityProviderProtocol
    from app.services.deadline import Deadline

logger = logging.getLogger(__name__)

_COMPONENT = "slot_scanner"

_ALTERNATIVES = 3


class _FailureTally:
    __slots__ = ("count", "rejected")

    def __init__(self) -> None:
        self.count = 0
        self.rejected = False

    def add(self, exc: ProviderError) -> None:
        self.count += 1
        self.rejected = self.rejected or not exc.is_transient


class SlotScanner:
    """Scans the availability provider day by day.

    Stateless apart from the provider reference; safe to share between
    concurrent requests.
    """

    __slots__ = ("_provider",)

    def __init__(self, provider: AvailabilityProviderProtocol) -> None:
        self._provider = provider

    async def fetch_day(
        self,
        service_id: int,
        worker_id: int,
        day: date,
        deadline: Deadline | None = None,
    ) -> DaySlots:
        """Fetch a single day.

        Raises:
            SlotScanError: The provider call failed.
            TimeoutError: The deadline ran out first.
        """
        try:
            return await self._fetch(service_id, worker_id, day, deadline)
        except ProviderError as exc:
            self._log_day_failure("fetch_day", day, exc)
            raise SlotScanError(
                "slot_scan_failed",
                failed_days=1,
                rejected=not exc.is_transient,
            ) from exc

    async def find_soonest(
        self,
        service_id: int,
        worker_id: int,
        start_date: date,
        max_days: int,
        deadline: Deadline | None = None,
    ) -> SoonestResult:
        """Return the earliest day in the window that has any slot.

        Examines offsets ``0 .. max_days-1`` from ``start_date`` and stops at
        the first non-empty day. When the deadline expires the scan stops
        and reports ``timed_out``.

        Raises:
            ValueError: ``max_days`` outside 1..30.
            SlotScanError: Every examined day failed at the provider.
        """
        if not 1 <= max_days <= SOONEST_MAX_DAYS_LIMIT:
            raise ValueError(f"max_days must be between 1 and {SOONEST_MAX_DAYS_LIMIT}")

        failures = _FailureTally()
        days_checked = 0
        timed_out = False

        for offset in range(max_days):
            if deadline is not None and deadline.expired:
                timed_out = True
                break
            day = start_date + timedelta(days=offset)
            try:
                day_slots = await self._fetch(service_id, worker_id, day, deadline)
            except ProviderError as exc:
                days_checked += 1
                failures.add(exc)
                self._log_day_failure("find_soonest", day, exc)
                continue
            except TimeoutError:
                timed_out = True
                break
            days_checked += 1

            if not day_slots.is_empty:
                self._record("find_soonest", "found", days_checked, failures.count)
                return SoonestResult(
                    found=True,
                    service_id=service_id,
                    worker_id=worker_id,
                    date=day,
                    slot=day_slots.all[0],
                    days_from_now=offset,
                    total_slots=day_slots.total,
                    alternative_slots=day_slots.all[1 : 1 + _ALTERNATIVES],
                    days_checked=days_checked,
                    failed_days=failures.count,
                )

        self._raise_if_all_failed("find_soonest", days_checked, failures)
        self._record(
            "find_soonest",
            "timed_out" if timed_out else "not_found",
            days_checked,
            failures.count,
        )
        return SoonestResult(
            found=False,
            service_id=service_id,
            worker_id=worker_id,
            days_checked=days_checked,
            failed_days=failures.count,
            timed_out=timed_out,
        )

    async def scan_overview(
        self,
        service_id: int,
        worker_id: int,
        start_date: date,
        days: int = 3,
        deadline: Deadline | None = None,
    ) -> list[DayOverview]:
        """Collect ``days`` consecutive days without stopping early.

        Failed days and days left when the deadline expires appear with
        ``failed=True`` and count as zero slots.

        Raises:
            SlotScanError: Every examined day failed at the provider.
        """
        overview: list[DayOverview] = []
        failures = _FailureTally()
        examined = 0
        timed_out = False

        for offset in range(days):
            day = start_date + timedelta(days=offset)
            if timed_out or (deadline is not None and deadline.expired):
                timed_out = True
                overview.append(DayOverview(date=day, failed=True))
                continue
            try:
                day_slots = await self._fetch(service_id, worker_id, day, deadline)
            except ProviderError as exc:
                examined += 1
                failures.add(exc)
                self._log_day_failure("scan_overview", day, exc)
                overview.append(DayOverview(date=day, failed=True))
                continue
            except TimeoutError:
                timed_out = True
                overview.append(DayOverview(date=day, failed=True))
                continue
            examined += 1
            overview.append(DayOverview(date=day, slots=day_slots))

        self._raise_if_all_failed("scan_overview", examined, failures)
        self._record(
            "scan_overview",
            "timed_out" if timed_out else "found",
            examined,
            failures.count,
        )
        return overview

    async def _fetch(
        self,
        service_id: int,
        worker_id: int,
        day: date,
        deadline: Deadline | None,
    ) -> DaySlots:
        call = self._provider.fetch_day_slots(service_id, worker_id, day)
        if deadline is None:
            return await call
        return await asyncio.wait_for(call, timeout=deadline.remaining())

    def _raise_if_all_failed(self, operation: str, examined: int, failures: _FailureTally) -> None:
        if examined == 0 or failures.count < examined:
            return
        self._record(operation, "failed", examined, failures.count)
        raise SlotScanError(
            "slot_scan_failed",
            failed_days=failures.count,
            rejected=failures.rejected,
        )

    def _log_day_failure(self, operation: str, day: date, exc: ProviderError) -> None:
        logger.warning(
            "slot_scan_day_failed",
            extra={
                "component": _COMPONENT,
                "action": operation,
                "result": "skipped",
                "day": day.isoformat(),
                "status_code": exc.status_code,
                "transient": exc.is_transient,
            },
        )

    def _record(self, operation: str, outcome: str, days_checked: int, failed_days: int) -> None:
        record_scan_outcome(
            operation,
            outcome=outcome,
            days_checked=days_checked,
            failed_days=failed_days,
            correlation_id=get_correlation_id(),
        )
