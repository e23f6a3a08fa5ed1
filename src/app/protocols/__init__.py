"""Protocols implemented by infrastructure and consumed by services."""

from .availability_provider import AvailabilityProviderProtocol
from .booking_notifier import BookingNotifierProtocol
from .catalog_provider import CatalogCacheProtocol, CatalogProviderProtocol
from .reservation_provider import ReservationProviderProtocol

__all__ = [
    "AvailabilityProviderProtocol",
    "BookingNotifierProtocol",
    "CatalogCacheProtocol",
    "CatalogProviderProtocol",
    "ReservationProviderProtocol",
]
