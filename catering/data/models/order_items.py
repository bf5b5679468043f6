from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, computed_field, field_validator

from ...pricing.money import multiply, round2

SizeType = Literal["plate", "half_tray", "full_tray"]
SIZE_TYPES: tuple[str, ...] = ("plate", "half_tray", "full_tray")


class OrderItem(BaseModel):
    """A dish at one serving size within an order.

    ``item_name`` and ``unit_price`` are snapshots taken when the order was placed;
    they are never cross-checked against the menu catalog.
    """
    item_name: str = Field(description="Dish name as it was when the order was placed")
    size_type: SizeType = Field(description="Serving size of the dish")
    quantity: int = Field(gt=0, description="Number of servings ordered")
    unit_price: Decimal = Field(ge=0, description="Price of one serving at order time")

    @field_validator("unit_price")
    @classmethod
    def _two_places(cls, value: Decimal) -> Decimal:
        return round2(value)

    @computed_field(description="unit_price x quantity, rounded half-up to cents")
    @property
    def total_price(self) -> Decimal:
        return multiply(self.unit_price, self.quantity)
