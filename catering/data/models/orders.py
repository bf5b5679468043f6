from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...pricing.money import round2, to_decimal
from ..dates import to_calendar_date
from .order_items import OrderItem

OrderStatus = Literal["received", "delivered", "paid"]
DiscountType = Literal["percentage", "fixed"]


class Order(BaseModel):
    """An order for one delivery date, with its line items and stored pricing fields."""
    order_number: Optional[str] = Field(default=None, description="Human-facing order number, assigned by the record store")
    customer_id: Optional[str] = Field(default=None, description="Linked customer record, if any")
    customer_name: Optional[str] = Field(default=None, description="Stand-alone customer name snapshot")
    customer_phone: Optional[str] = Field(default=None, description="Stand-alone customer phone snapshot")
    delivery_date: date = Field(description="Calendar date of delivery")
    delivery_time: Optional[str] = Field(default=None, description="Free-form delivery time, e.g. '6pm'")
    status: OrderStatus = Field(default="received", description="Lifecycle status")
    discount_type: Optional[DiscountType] = Field(default=None, description="Discount policy type, None for no discount")
    discount_value: Decimal = Field(default=Decimal("0"), description="Percentage points or currency amount, per discount_type")
    subtotal_amount: Optional[Decimal] = Field(default=None, description="Sum of line totals")
    discount_amount: Optional[Decimal] = Field(default=None, description="Amount taken off the subtotal")
    total_amount: Optional[Decimal] = Field(default=None, description="subtotal_amount - discount_amount, never negative")
    created_at: Optional[datetime] = Field(default=None, description="When the order was placed")
    items: List[OrderItem] = Field(default_factory=list, description="Line items owned by this order")

    @field_validator("delivery_date", mode="before")
    @classmethod
    def _calendar_date(cls, value):
        return to_calendar_date(value)

    @field_validator("discount_type", mode="before")
    @classmethod
    def _blank_discount_type(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("discount_value", mode="before")
    @classmethod
    def _lenient_discount_value(cls, value):
        # Bad discount input is clamped by pricing rather than rejected here.
        return to_decimal(value)

    @field_validator("subtotal_amount", "discount_amount", "total_amount", mode="before")
    @classmethod
    def _money(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return round2(value)
