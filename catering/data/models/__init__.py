from .data_filters import (
    CustomerFilters,
    CustomerSortField,
    OrderFilters,
)

from .order_items import OrderItem, SizeType, SIZE_TYPES
from .orders import Order, OrderStatus, DiscountType
from .customers import Customer, CustomerWithTotals, CustomerMetrics
from .preparation import PreparationSummaryItem
from .revenue import DailyRevenue, ItemSales

__all__ = [
    # Filter classes
    "CustomerFilters",
    "CustomerSortField",
    "OrderFilters",
    # Record models
    "OrderItem",
    "SizeType",
    "SIZE_TYPES",
    "Order",
    "OrderStatus",
    "DiscountType",
    "Customer",
    # Derived models
    "CustomerWithTotals",
    "CustomerMetrics",
    "PreparationSummaryItem",
    "DailyRevenue",
    "ItemSales",
]
