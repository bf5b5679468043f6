from __future__ import annotations

from pydantic import BaseModel, Field


class PreparationSummaryItem(BaseModel):
    """Total servings of one dish at one size needed for a delivery date."""
    item_name: str = Field(description="Dish name snapshot from the order items")
    size_type: str = Field(description="Serving size")
    total_quantity: int = Field(description="Sum of quantities across qualifying order items")
