"""Bookio widget API client: availability, catalog and reservations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.infra.bookio.parsers import (
    parse_categories,
    parse_day_slots,
    parse_reservation,
    parse_services,
)
from app.infra.http import HttpError
from app.observability import get_correlation_id, record_provider_failure
from app.protocols.availability_provider import AvailabilityProviderProtocol
from app.protocols.catalog_provider import CatalogProviderProtocol
from app.protocols.reservation_provider import ReservationProviderProtocol
from app.services.dates import format_api_date, format_display_date
from utils.errors import ProviderError

if TYPE_CHECKING:
    from datetime import date

    from app.domain.booking import CustomerInfo, ReservationResult
    from app.domain.catalog import Category, Service
    from app.domain.slots import DaySlots
    from app.infra.http import HttpClient
    from config.settings.bookio import BookioSettings

logger = logging.getLogger(__name__)

_COMPONENT = "bookio_client"

_BROWSER_HEADERS = {
    "Accept": "application/json, text/plain, */*",
    "X-Requested-With": "XMLHttpRequest",
}

# Catalog reads are idempotent and tolerate one retry.
_CATALOG_RETRIES = 1


class BookioClient(
    AvailabilityProviderProtocol,
    CatalogProviderProtocol,
    ReservationProviderProtocol,
):
    """Stateless client for the Bookio widget API.

    Every method performs exactly the upstream calls it names. Failures
    surface as ``ProviderError``; nothing is cached here.
    """

    __slots__ = ("_http", "_settings")

    def __init__(self, *, http: HttpClient, settings: BookioSettings) -> None:
        self._http = http
        self._settings = settings

    async def fetch_day_slots(self, service_id: int, worker_id: int, day: date) -> DaySlots:
        """Return the provider's slots for one day.

        ``worker_id`` -1 means any worker and is forwarded as is.
        """
        body = {
            "serviceId": int(service_id),
            "workerId": int(worker_id),
            "date": format_api_date(day),
            "count": 1,
            "participantsCount": 0,
            "addons": [],
            "lang": self._settings.lang,
        }
        payload = await self._post(
            "allowedTimes",
            body,
            timeout_seconds=self._settings.request_timeout_seconds,
            max_retries=0,
        )
        return self._parse("allowed_times", parse_day_slots, payload, day)

    async def fetch_categories(self) -> list[Category]:
        body = {"facility": self._settings.facility, "lang": self._settings.lang}
        payload = await self._post(
            "categories",
            body,
            timeout_seconds=self._settings.catalog_timeout_seconds,
            max_retries=_CATALOG_RETRIES,
        )
        return self._parse("categories", parse_categories, payload)

    async def fetch_services(self, category_id: int) -> list[Service]:
        body = {
            "facility": self._settings.facility,
            "categoryId": int(category_id),
            "lang": self._settings.lang,
        }
        payload = await self._post(
            "services",
            body,
            timeout_seconds=self._settings.catalog_timeout_seconds,
            max_retries=_CATALOG_RETRIES,
        )
        return self._parse("services", parse_services, payload, category_id)

    async def create_reservation(
        self,
        *,
        service_id: int,
        worker_id: int,
        day: date,
        time: str,
        customer: CustomerInfo,
    ) -> ReservationResult:
        """Submit one reservation. Not retried and not idempotent."""
        body = _reservation_body(
            service_id=service_id,
            worker_id=worker_id,
            day=day,
            time=time,
            customer=customer,
            lang=self._settings.lang,
        )
        payload = await self._post(
            "createReservation",
            body,
            params={"lang": self._settings.lang},
            timeout_seconds=self._settings.request_timeout_seconds,
            max_retries=0,
        )
        result = self._parse("create_reservation", parse_reservation, payload)
        logger.info(
            "bookio_reservation_submitted",
            extra={
                "component": _COMPONENT,
                "action": "create_reservation",
                "result": "ok" if result.success else "rejected",
                "service_id": service_id,
                "correlation_id": get_correlation_id(),
            },
        )
        return result

    async def _post(
        self,
        endpoint: str,
        body: dict[str, Any],
        *,
        params: dict[str, str] | None = None,
        timeout_seconds: float,
        max_retries: int,
    ) -> Any:
        url = f"{self._settings.base_url}/{endpoint}"
        try:
            response = await self._http.post(
                url,
                json=body,
                headers=_BROWSER_HEADERS,
                params=params,
                timeout_seconds=timeout_seconds,
                max_retries=max_retries,
            )
        except HttpError as exc:
            self._log_failure(endpoint, status_code=exc.status_code, transient=exc.is_retryable)
            raise ProviderError(
                f"bookio_{endpoint}_failed",
                status_code=exc.status_code,
                is_transient=exc.is_retryable,
            ) from exc
        try:
            return response.json()
        except ValueError as exc:
            self._log_failure(endpoint, status_code=response.status_code, transient=False)
            raise ProviderError(
                f"bookio_{endpoint}_invalid_json",
                status_code=response.status_code,
                is_transient=False,
            ) from exc

    def _parse(self, operation: str, parser: Any, payload: Any, *args: Any) -> Any:
        try:
            return parser(payload, *args)
        except ValueError as exc:
            self._log_failure(operation, status_code=None, transient=False)
            raise ProviderError(f"bookio_{operation}_malformed", is_transient=False) from exc

    def _log_failure(self, operation: str, *, status_code: int | None, transient: bool) -> None:
        logger.warning(
            "bookio_request_failed",
            extra={
                "component": _COMPONENT,
                "action": operation,
                "result": "error",
                "status_code": status_code,
                "transient": transient,
                "correlation_id": get_correlation_id(),
            },
        )
        record_provider_failure(
            operation,
            status_code=status_code,
            transient=transient,
            correlation_id=get_correlation_id(),
        )


def _reservation_body(
    *,
    service_id: int,
    worker_id: int,
    day: date,
    time: str,
    customer: CustomerInfo,
    lang: str,
) -> dict[str, Any]:
    return {
        "serviceId": int(service_id),
        "termId": None,
        "workerId": int(worker_id),
        "date": format_display_date(day),
        "hour": time,
        "addons": [],
        "cashGiftCard": None,
        "count": 1,
        "courseParticipants": [],
        "firstService": {"termId": int(service_id), "count": None},
        "items": None,
        "lang": lang,
        "note": customer.note,
        "personalInfo": {
            "subscribe": False,
            "isBuyer": True,
            "giftCard": {"countOfUse": 1, "id": 0},
            "firstName": customer.first_name,
            "lastName": customer.last_name,
            "email": customer.email,
            "phone": customer.phone,
            "acceptGenTerms": True,
            "selectedCountry": lang,
        },
        "priceLevels": None,
        "requiredCustomersInfo": True,
        "reservationSource": {
            "source": "WIDGET_WEB",
            "url": "",
            "isZlavaDnaSource": False,
            "code": "reservationSource.title.widget.web",
        },
        "secondService": None,
        "tags": [],
        "thirdService": None,
    }
