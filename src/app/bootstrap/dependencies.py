"""Factories for the application services.

Each factory takes its collaborators explicitly so tests can wire fakes
in place of the Bookio connector.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.notifications import LoggingBookingNotifier
from app.services.booking_request_flow import BookingRequestFlow
from app.services.catalog_cache import CatalogCache
from app.services.slot_scanner import SlotScanner
from app.use_cases.voice import HandleToolCallUseCase

if TYPE_CHECKING:
    from app.protocols.availability_provider import AvailabilityProviderProtocol
    from app.protocols.booking_notifier import BookingNotifierProtocol
    from app.protocols.catalog_provider import CatalogProviderProtocol
    from app.protocols.reservation_provider import ReservationProviderProtocol
    from config.settings.bookio import BookioSettings

logger = logging.getLogger(__name__)


def create_catalog_cache(provider: CatalogProviderProtocol, settings: BookioSettings) -> CatalogCache:
    return CatalogCache(
        provider,
        popular_categories=settings.popular_categories,
        ttl_seconds=settings.catalog_ttl_seconds,
    )


def create_slot_scanner(provider: AvailabilityProviderProtocol) -> SlotScanner:
    return SlotScanner(provider)


def create_booking_flow(
    scanner: SlotScanner,
    settings: BookioSettings,
    notifier: BookingNotifierProtocol | None = None,
) -> BookingRequestFlow:
    """Guided booking flow; requests go to the log notifier by default."""
    return BookingRequestFlow(
        scanner=scanner,
        notifier=notifier or LoggingBookingNotifier(),
        settings=settings,
    )


def create_tool_call_use_case(
    *,
    availability: AvailabilityProviderProtocol,
    catalog: CatalogCache,
    reservations: ReservationProviderProtocol,
    settings: BookioSettings,
    notifier: BookingNotifierProtocol | None = None,
) -> HandleToolCallUseCase:
    """Wire the tool-call use case over the given providers."""
    scanner = create_slot_scanner(availability)
    use_case = HandleToolCallUseCase(
        scanner=scanner,
        catalog=catalog,
        reservations=reservations,
        booking_flow=create_booking_flow(scanner, settings, notifier),
        settings=settings,
    )
    logger.info("tool_call_use_case_created", extra={"component": "bootstrap"})
    return use_case
