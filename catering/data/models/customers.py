from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Customer(BaseModel):
    """A customer record. ``phone`` doubles as the dedup and search key."""
    model_config = ConfigDict(str_strip_whitespace=True)

    customer_id: Optional[str] = Field(default=None, description="Record id, assigned by the record store")
    name: str = Field(min_length=1, description="Customer name")
    phone: str = Field(min_length=1, description="Customer phone number")
    email: Optional[str] = Field(default=None, description="Customer email")
    address: Optional[str] = Field(default=None, description="Delivery address")
    created_at: Optional[datetime] = Field(default=None, description="When the customer record was created")

    @field_validator("email", "address", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CustomerWithTotals(Customer):
    """Customer row enriched with order aggregates for list filtering and sorting."""
    total_order_value: Decimal = Field(default=Decimal("0.00"), description="Sum of total_amount over the customer's orders")
    order_count: int = Field(default=0, description="Number of orders placed by the customer")


class CustomerMetrics(BaseModel):
    """Summary statistics over one customer's order history."""
    total_orders: int = Field(description="Number of orders")
    total_spent: Decimal = Field(description="Sum of order totals")
    average_order_value: Decimal = Field(description="total_spent / total_orders, 0 when there are no orders")
