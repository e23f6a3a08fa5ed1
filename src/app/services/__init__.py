"""Application services.

Orchestration over protocols, without direct I/O. Concrete I/O lives in
app/infra/.
"""

from app.services.booking_request_flow import BookingRequestFlow, BookingStep
from app.services.catalog_cache import CatalogCache
from app.services.deadline import Deadline
from app.services.slot_scanner import SlotScanner

__all__ = [
    "BookingRequestFlow",
    "BookingStep",
    "CatalogCache",
    "Deadline",
    "SlotScanner",
]
