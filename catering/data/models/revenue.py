from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class DailyRevenue(BaseModel):
    """Revenue for one delivery date."""
    delivery_date: date = Field(description="Delivery date")
    total: Decimal = Field(description="Sum of order totals delivered on this date")
    order_count: int = Field(description="Number of orders delivered on this date")
    average_order_value: Decimal = Field(description="total / order_count, 0 when there are no orders")
    moving_average: Decimal = Field(description="Trailing moving average of daily totals")


class ItemSales(BaseModel):
    """Sales of one dish across a set of orders."""
    item_name: str = Field(description="Dish name snapshot")
    quantity: int = Field(description="Servings sold")
    total_sales: Decimal = Field(description="Sum of line totals")
