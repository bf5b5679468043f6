from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Collection, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..customers.metrics import attach_order_totals, filter_and_sort, summarize
from ..customers.validation import validate_customer
from ..data.interface import RecordStore
from ..data.models import (
    Customer,
    CustomerFilters,
    CustomerMetrics,
    CustomerWithTotals,
    Order,
    OrderFilters,
    OrderItem,
    PreparationSummaryItem,
)
from ..exceptions import OrderValidationError
from ..kitchen.preparation import aggregate, export_manifest
from ..logging import get_logger
from ..pricing.calculator import apply_totals
from .lifecycle import INITIAL_STATUS, change_status


class OrderService:
    """Order workflows against a record store.

    Every create or edit re-prices the order and saves the pricing fields in the
    same write as the items that produced them. Store failures propagate as
    RecordStoreError; nothing here retries.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self.logger = get_logger(__name__)

    # ---------- orders ----------

    def create_order(self, order: Order) -> Order:
        """Price and persist a new order. New orders always start as received.

        Raises DuplicateRecordError if the order carries an order_number that is already taken.
        """
        order = apply_totals(order.model_copy(update={"status": INITIAL_STATUS}))
        saved = self.store.insert_order(order)
        self.logger.info(f"Created order {saved.order_number}: total {saved.total_amount}")
        return saved

    def update_items(self, order_number: str, items: Iterable[OrderItem]) -> Order:
        """Replace an order's line items and re-price it."""
        order = self.store.get_order(order_number)
        order = apply_totals(order.model_copy(update={"items": list(items)}))
        return self.store.save_order(order)

    def apply_discount(self, order_number: str, discount_type: Optional[str], discount_value: Any = 0) -> Order:
        """Change an order's discount policy and re-price it.

        Raises OrderValidationError for a discount type other than percentage or fixed.
        """
        order = self.store.get_order(order_number)
        try:
            order = Order.model_validate({
                **order.model_dump(),
                "discount_type": discount_type,
                "discount_value": discount_value,
            })
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            raise OrderValidationError(fields or ["order"]) from e
        return self.store.save_order(apply_totals(order))

    def change_status(self, order_number: str, status: str, enforce: Optional[bool] = None) -> Order:
        """Move an order to a new status. Pricing fields are left untouched."""
        order = self.store.get_order(order_number)
        updated = change_status(order, status, enforce=enforce)
        if updated is order:
            return order
        return self.store.save_order(updated)

    # ---------- kitchen ----------

    def preparation_manifest(
        self,
        delivery_date: Union[date, str],
        statuses: Optional[Collection[str]] = None,
    ) -> List[PreparationSummaryItem]:
        orders = self.store.get_orders(OrderFilters(delivery_date=delivery_date))
        return aggregate(orders, delivery_date, statuses)

    def export_preparation_list(
        self,
        delivery_date: Union[date, str],
        output_dir: Union[str, Path],
        statuses: Optional[Collection[str]] = None,
    ) -> Path:
        manifest = self.preparation_manifest(delivery_date, statuses)
        return export_manifest(manifest, delivery_date, output_dir)

    # ---------- customers ----------

    def register_customer(self, payload: Union[Customer, Mapping[str, Any]]) -> Customer:
        """Validate and save a customer, reusing an existing record with the same phone."""
        customer = validate_customer(payload)
        existing = self.store.find_customer_by_phone(customer.phone)
        if existing is not None:
            self.logger.info(f"Customer with phone {customer.phone} already exists: {existing.customer_id}")
            return existing
        return self.store.save_customer(customer)

    def customer_metrics(self, customer_id: str) -> CustomerMetrics:
        self.store.get_customer(customer_id)
        return summarize(self.store.get_orders(OrderFilters(customer_id=customer_id)))

    def customer_list(self, filters: Optional[CustomerFilters] = None) -> List[CustomerWithTotals]:
        rows = attach_order_totals(self.store.get_customers(), self.store.get_orders())
        return filter_and_sort(rows, filters or CustomerFilters())
