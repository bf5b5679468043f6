"""
Per-customer order statistics for the admin customer list.

Order totals are taken from each order's stored ``total_amount``, which the
pricing calculator produced, so a customer's spend always agrees with the sum
of their orders. A missing ``total_amount`` counts as zero.
"""
from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from ..data.models import Customer, CustomerFilters, CustomerMetrics, CustomerWithTotals, Order
from ..logging import get_logger
from ..pricing.money import ZERO, round2, to_decimal, total

logger = get_logger(__name__)


def summarize(orders: Sequence[Order]) -> CustomerMetrics:
    """Order count, total spend and average order value for one customer's orders."""
    total_orders = len(orders)
    total_spent = total(order.total_amount for order in orders)
    average = round2(total_spent / total_orders) if total_orders > 0 else ZERO
    return CustomerMetrics(total_orders=total_orders, total_spent=total_spent, average_order_value=average)


def attach_order_totals(customers: Iterable[Customer], orders: Iterable[Order]) -> List[CustomerWithTotals]:
    """Join each customer with the count and value of the orders linked to them."""
    by_customer: Dict[str, List[Order]] = defaultdict(list)
    for order in orders:
        if order.customer_id is not None:
            by_customer[order.customer_id].append(order)

    rows = []
    for customer in customers:
        metrics = summarize(by_customer.get(customer.customer_id, []))
        rows.append(CustomerWithTotals(
            **customer.model_dump(),
            total_order_value=metrics.total_spent,
            order_count=metrics.total_orders,
        ))
    return rows


def matches_search(customer: Customer, search_term: Optional[str]) -> bool:
    """Case-insensitive substring match against name, phone or email."""
    if not search_term or not search_term.strip():
        return True
    needle = search_term.strip().lower()
    return any(
        needle in value.lower()
        for value in (customer.name, customer.phone, customer.email)
        if value
    )


def _sort_key(sort_by: str):
    if sort_by == "name":
        return lambda row: row.name.lower()
    if sort_by == "created_at":
        # rows without a timestamp sort as the oldest
        return lambda row: (row.created_at is not None, row.created_at.timestamp() if row.created_at else 0.0)
    if sort_by == "total_order_value":
        return lambda row: row.total_order_value
    if sort_by == "order_count":
        return lambda row: row.order_count
    raise ValueError(f"Unsupported sort field: {sort_by}")


def filter_and_sort(customers: Iterable[CustomerWithTotals], filters: CustomerFilters) -> List[CustomerWithTotals]:
    """Apply search, threshold filters and a stable sort to a customer list."""
    min_value: Optional[Decimal] = to_decimal(filters.min_order_value) if filters.min_order_value is not None else None

    rows = [
        row for row in customers
        if matches_search(row, filters.search_term)
        and (min_value is None or row.total_order_value >= min_value)
        and (filters.min_order_count is None or row.order_count >= filters.min_order_count)
    ]
    # sorted() is stable in both directions, so ties keep their input order
    rows = sorted(rows, key=_sort_key(filters.sort_by), reverse=filters.sort_order == "desc")
    logger.debug(f"Customer list filtered to {len(rows)} rows, sorted by {filters.sort_by} {filters.sort_order}")
    return rows
