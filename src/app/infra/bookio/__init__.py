"""Bookio widget API connector."""

from app.infra.bookio.client import BookioClient

__all__ = ["BookioClient"]
