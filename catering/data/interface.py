from __future__ import annotations

from typing import List, Optional, Protocol

from .models import Customer, Order, OrderFilters


# ---- Record store protocol ----

class RecordStore(Protocol):
    """
    Backend-agnostic contract for persisting customers and orders.

    The store is the sole owner of persistence and of order-number uniqueness.
    Implementations raise RecordStoreError on any read or write failure and
    never retry; retry policy, if any, belongs to the caller.
    """

    # Order queries

    def get_orders(self, filters: Optional[OrderFilters] = None) -> List[Order]:
        """Get orders (with their items) matching the filters."""
        ...

    def get_order(self, order_number: str) -> Order:
        """Get one order by number. Raises RecordNotFoundError if it does not exist."""
        ...

    # Order writes

    def save_order(self, order: Order) -> Order:
        """Insert or replace an order together with its items and pricing fields.

        Orders without an order_number are assigned one.
        """
        ...

    def insert_order(self, order: Order) -> Order:
        """Persist a new order. Orders without an order_number are assigned one.

        Raises DuplicateRecordError if the order_number is already taken.
        """
        ...

    # Customer queries

    def get_customers(self) -> List[Customer]:
        """List all customers ordered by name."""
        ...

    def get_customer(self, customer_id: str) -> Customer:
        """Get one customer by id. Raises RecordNotFoundError if it does not exist."""
        ...

    def find_customer_by_phone(self, phone: str) -> Optional[Customer]:
        """Find a customer by exact phone number."""
        ...

    # Customer writes

    def save_customer(self, customer: Customer) -> Customer:
        """Insert or replace a customer. Customers without an id are assigned one."""
        ...
