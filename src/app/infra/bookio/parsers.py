"""Parsing helpers for Bookio widget API responses.

Missing keys become empty lists. Bodies that are not JSON objects at
the expected level raise ValueError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.domain.booking import ReservationResult
from app.domain.catalog import Category, Service
from app.domain.slots import DaySlots, Slot

if TYPE_CHECKING:
    from datetime import date


def parse_day_slots(payload: Any, day: date) -> DaySlots:
    data = _data_section(payload)
    times = data.get("times") if isinstance(data.get("times"), dict) else {}
    return DaySlots(
        date=day,
        all=_parse_slot_list(times.get("all")),
        mornings=_parse_slot_list(_nested_data(times.get("mornings"))),
        afternoons=_parse_slot_list(_nested_data(times.get("afternoon"))),
    )


def parse_categories(payload: Any) -> list[Category]:
    data = _data_list(payload)
    categories: list[Category] = []
    for item in data:
        if not isinstance(item, dict) or item.get("categoryId") is None:
            continue
        categories.append(
            Category(
                category_id=int(item["categoryId"]),
                title=str(item.get("title") or ""),
                select_service_title=str(item.get("selectServiceTitle") or ""),
            )
        )
    return categories


def parse_services(payload: Any, category_id: int | None = None) -> list[Service]:
    data = _data_list(payload)
    services: list[Service] = []
    for item in data:
        if not isinstance(item, dict) or item.get("serviceId") is None:
            continue
        price_number = _as_float(item.get("priceNumber"))
        duration = _as_int(item.get("duration"))
        services.append(
            Service(
                service_id=int(item["serviceId"]),
                category_id=category_id,
                title=str(item.get("title") or ""),
                price=str(item.get("price") or _format_price(price_number)),
                price_number=price_number,
                duration_minutes=duration,
                duration_text=str(item.get("durationString") or f"{duration} min"),
                description=str(item.get("description") or ""),
            )
        )
    return services


def parse_reservation(payload: Any) -> ReservationResult:
    data = _data_section(payload)
    success = bool(data.get("success"))
    order = data.get("order") if isinstance(data.get("order"), dict) else {}
    raw_errors = data.get("errors")
    if isinstance(raw_errors, list):
        errors = [str(error) for error in raw_errors]
    elif isinstance(raw_errors, dict):
        errors = [f"{key}: {value}" for key, value in raw_errors.items()]
    elif raw_errors:
        errors = [str(raw_errors)]
    else:
        errors = []
    return ReservationResult(success=success, order=order, errors=errors)


def _data_section(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValueError("bookio_payload_not_object")
    data = payload.get("data")
    return data if isinstance(data, dict) else {}


def _data_list(payload: Any) -> list[Any]:
    if not isinstance(payload, dict):
        raise ValueError("bookio_payload_not_object")
    data = payload.get("data")
    return data if isinstance(data, list) else []


def _nested_data(value: Any) -> Any:
    return value.get("data") if isinstance(value, dict) else None


def _parse_slot_list(value: Any) -> list[Slot]:
    if not isinstance(value, list):
        return []
    slots: list[Slot] = []
    for item in value:
        if isinstance(item, dict) and item.get("id") is not None:
            slots.append(
                Slot(
                    id=str(item["id"]),
                    name=_as_optional_str(item.get("name")),
                    name_suffix=_as_optional_str(item.get("nameSuffix")),
                )
            )
    return slots


def _format_price(price_number: float | None) -> str:
    if price_number is None:
        return ""
    if price_number.is_integer():
        return f"{int(price_number)} €"
    return f"{price_number:.2f} €".replace(".", ",")


def _as_optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_float(value: Any) -> float | None:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _as_int(value: Any) -> int:
    try:
        return int(value) if value is not None else 0
    except (TypeError, ValueError):
        return 0
