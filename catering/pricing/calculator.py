"""
Order pricing.

``compute_totals`` turns line items plus a discount policy into the three stored
money fields of an order. It is pure: no storage access, no hidden state, and
the same input always yields the same output. Out-of-range discount values are
clamped, never rejected.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..data.models import DiscountType, Order, OrderItem
from ..logging import get_logger
from .money import HUNDRED, ZERO, clamp, multiply, round2, subtract, to_decimal, total

logger = get_logger(__name__)


class PricingInput(BaseModel):
    """Immutable snapshot of everything that determines an order's price."""
    model_config = ConfigDict(frozen=True)

    items: Tuple[OrderItem, ...] = Field(default=(), description="Line items to price")
    discount_type: Optional[DiscountType] = Field(default=None, description="Discount policy type")
    discount_value: Any = Field(default=0, description="Raw discount value, clamped during pricing")

    @classmethod
    def from_order(cls, order: Order) -> "PricingInput":
        return cls(items=tuple(order.items), discount_type=order.discount_type, discount_value=order.discount_value)


class OrderTotals(BaseModel):
    """Result of pricing an order."""
    model_config = ConfigDict(frozen=True)

    subtotal: Decimal = Field(description="Sum of independently rounded line totals")
    discount_amount: Decimal = Field(description="Amount taken off the subtotal")
    total: Decimal = Field(description="subtotal - discount_amount, never negative")


def line_total(item: OrderItem) -> Decimal:
    return multiply(item.unit_price, item.quantity)


def effective_discount_value(discount_type: Optional[str], discount_value: Any, subtotal: Decimal) -> Decimal:
    """Apply the clamp policy to a raw discount value.

    percentage: clamped to [0, 100]. fixed: clamped to [0, subtotal].
    No discount type: 0. Non-numeric or NaN input counts as 0.
    """
    raw = to_decimal(discount_value)
    if discount_type == "percentage":
        value = clamp(raw, 0, HUNDRED)
    elif discount_type == "fixed":
        value = clamp(raw, 0, subtotal)
    else:
        return ZERO
    if value != raw:
        logger.debug(f"Clamped {discount_type} discount value {discount_value!r} to {value}")
    return value


def discount_amount_for(discount_type: Optional[str], discount_value: Any, subtotal: Decimal) -> Decimal:
    value = effective_discount_value(discount_type, discount_value, subtotal)
    if discount_type == "percentage":
        return round2(subtotal * value / HUNDRED)
    if discount_type == "fixed":
        return round2(value)
    return ZERO


def compute_totals(
    items: Iterable[OrderItem],
    discount_type: Optional[str] = None,
    discount_value: Any = 0,
) -> OrderTotals:
    """Compute subtotal, discount and total for a list of line items.

    Each line total is rounded on its own before summing, matching how line
    items are stored and displayed.
    """
    subtotal = total(line_total(item) for item in items)
    discount = discount_amount_for(discount_type, discount_value, subtotal)
    return OrderTotals(
        subtotal=subtotal,
        discount_amount=discount,
        total=subtract(subtotal, discount),
    )


def price(pricing: PricingInput) -> OrderTotals:
    return compute_totals(pricing.items, pricing.discount_type, pricing.discount_value)


def apply_totals(order: Order) -> Order:
    """Return a copy of ``order`` with its three pricing fields recomputed."""
    totals = price(PricingInput.from_order(order))
    return order.model_copy(update={
        "subtotal_amount": totals.subtotal,
        "discount_amount": totals.discount_amount,
        "total_amount": totals.total,
    })
