"""Catalog models: service categories and bookable services."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    """A group of services, e.g. 'HYDRAFACIAL™'."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    category_id: int = Field(..., description="Provider category id.")
    title: str = Field(..., description="Display title.")
    select_service_title: str = Field(default="", description="Provider hint text.")


class Service(BaseModel):
    """A bookable service with its price and duration already formatted."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    service_id: int = Field(..., description="Provider service id.")
    category_id: int | None = Field(default=None, description="Owning category.")
    title: str = Field(..., description="Display title.")
    price: str = Field(default="", description="Currency formatted price.")
    price_number: float | None = Field(default=None, description="Numeric price.")
    duration_minutes: int = Field(default=0, ge=0)
    duration_text: str = Field(default="", description="Human duration, e.g. '1h'.")
    description: str = Field(default="")


__all__ = ["Category", "Service"]
