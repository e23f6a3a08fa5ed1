"""Booking request notifiers."""

from app.infra.notifications.log_notifier import LoggingBookingNotifier

__all__ = ["LoggingBookingNotifier"]
