from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..dates import to_calendar_date

CustomerSortField = Literal["name", "created_at", "total_order_value", "order_count"]


class OrderFilters(BaseModel):
    """Filters for the order data."""
    delivery_date: Optional[date] = Field(default=None, description="Delivery date filter (calendar-date equality)")
    customer_id: Optional[str | list[str]] = Field(default=None, description="Customer ID filter (single customer or list of customers)")
    status: Optional[str | list[str]] = Field(default=None, description="Status filter (single status or list of statuses)")

    @field_validator("delivery_date", mode="before")
    @classmethod
    def _calendar_date(cls, value):
        if value is None:
            return None
        return to_calendar_date(value)


class CustomerFilters(BaseModel):
    """Filters and sort options for the customer list."""
    search_term: Optional[str] = Field(default=None, description="Case-insensitive substring matched against name, phone or email")
    min_order_value: Optional[Decimal] = Field(default=None, description="Exclude customers whose total order value is below this")
    min_order_count: Optional[int] = Field(default=None, description="Exclude customers with fewer orders than this")
    sort_by: CustomerSortField = Field(default="name", description="Field to sort by")
    sort_order: Literal["asc", "desc"] = Field(default="asc", description="Sort direction")
