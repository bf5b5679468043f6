from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from pydantic import ValidationError

from ...config import get_config
from ...exceptions import DuplicateRecordError, RecordNotFoundError, RecordStoreError
from ...logging import get_logger
from ..interface import RecordStore
from ..models import Customer, Order, OrderFilters, OrderItem

ORDER_COLUMNS = [
    "order_number", "customer_id", "customer_name", "customer_phone",
    "delivery_date", "delivery_time", "status",
    "discount_type", "discount_value",
    "subtotal_amount", "discount_amount", "total_amount",
    "created_at",
]
ORDER_ITEM_COLUMNS = [
    "order_number", "line_number", "item_name", "size_type", "quantity", "unit_price", "total_price",
]
CUSTOMER_COLUMNS = ["customer_id", "name", "phone", "email", "address", "created_at"]

FILES = {
    "orders": "orders.csv",
    "order_items": "order_items.csv",
    "customers": "customers.csv",
}

ORDER_NUMBER_PATTERN = re.compile(r"^ORD-(\d+)$")


@dataclass
class _Tables:
    orders: pd.DataFrame
    order_items: pd.DataFrame
    customers: pd.DataFrame


def _cell(value: Any) -> str:
    """Serialize a model value to its CSV text form."""
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    return str(value)


def _clean(row: Dict[str, str]) -> Dict[str, Optional[str]]:
    return {key: (value if value != "" else None) for key, value in row.items()}


def _matches(series: pd.Series, wanted: str | list[str]) -> pd.Series:
    if isinstance(wanted, str):
        return series == wanted
    return series.isin(wanted)


class CsvRecordStore(RecordStore):
    """
    CSV-backed record store.
    - Loads CSVs from `data_dir` once at construction; missing files start as empty tables.
    - Every read performs a fresh filter pass over the loaded frames.
    - Every write updates the frames and rewrites the CSV files.
    Cells are kept as strings so money values round-trip exactly.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            data_dir = get_config().data_dir

        self.data_dir = Path(data_dir)
        if not self.data_dir.is_absolute():
            self.data_dir = Path.cwd() / self.data_dir

        self.logger = get_logger(__name__)
        self._tables = self._load_tables(self.data_dir)
        self.logger.info(
            f"Loaded {len(self._tables.orders)} orders, {len(self._tables.order_items)} order items "
            f"and {len(self._tables.customers)} customers from {self.data_dir}"
        )

    # ---------- loading / writing helpers ----------

    @staticmethod
    def _read_table(path: Path, columns: List[str]) -> pd.DataFrame:
        if not path.exists():
            return pd.DataFrame(columns=columns, dtype=str)
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise RecordStoreError(f"{path} is missing columns: {', '.join(missing)}")
        return df[columns].copy()

    @staticmethod
    def _load_tables(data_dir: Path) -> _Tables:
        if not data_dir.exists():
            raise RecordStoreError(
                f"Data directory not found: {data_dir}\n"
                f"Please either:\n"
                f"  1. Generate sample data: catering-seed --output-dir {data_dir}\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory"
            )
        try:
            return _Tables(
                orders=CsvRecordStore._read_table(data_dir / FILES["orders"], ORDER_COLUMNS),
                order_items=CsvRecordStore._read_table(data_dir / FILES["order_items"], ORDER_ITEM_COLUMNS),
                customers=CsvRecordStore._read_table(data_dir / FILES["customers"], CUSTOMER_COLUMNS),
            )
        except RecordStoreError:
            raise
        except (OSError, ValueError, pd.errors.ParserError) as e:
            raise RecordStoreError(f"Error reading CSV files from {data_dir}: {e}") from e

    def _flush(self, tables: _Tables) -> None:
        try:
            tables.orders.to_csv(self.data_dir / FILES["orders"], index=False)
            tables.order_items.to_csv(self.data_dir / FILES["order_items"], index=False)
            tables.customers.to_csv(self.data_dir / FILES["customers"], index=False)
        except OSError as e:
            raise RecordStoreError(f"Error writing CSV files to {self.data_dir}: {e}") from e

    # ---------- row <-> model conversion ----------

    def _build_order(self, row: Dict[str, str], items: pd.DataFrame) -> Order:
        try:
            order_items = [
                OrderItem(**_clean(item))
                for item in items.sort_values("line_number", key=lambda s: s.astype(int)).to_dict("records")
            ]
            return Order(**_clean(row), items=order_items)
        except (ValidationError, ValueError) as e:
            raise RecordStoreError(f"Corrupt order record {row.get('order_number')}: {e}") from e

    @staticmethod
    def _build_customer(row: Dict[str, str]) -> Customer:
        try:
            return Customer(**_clean(row))
        except ValidationError as e:
            raise RecordStoreError(f"Corrupt customer record {row.get('customer_id')}: {e}") from e

    def _next_order_number(self) -> str:
        numbers = [
            int(m.group(1))
            for m in self._tables.orders["order_number"].map(ORDER_NUMBER_PATTERN.match)
            if m
        ]
        return f"ORD-{max(numbers, default=0) + 1:05d}"

    # ---------- order queries ----------

    def get_orders(self, filters: Optional[OrderFilters] = None) -> List[Order]:
        filters = filters or OrderFilters()
        df = self._tables.orders

        mask = pd.Series(True, index=df.index)
        if filters.delivery_date:
            mask &= df["delivery_date"].str[:10] == filters.delivery_date.isoformat()
        if filters.customer_id:
            mask &= _matches(df["customer_id"], filters.customer_id)
        if filters.status:
            mask &= _matches(df["status"], filters.status)

        selected = df.loc[mask].sort_values("created_at", ascending=False, kind="mergesort")
        items = self._tables.order_items
        items_by_order = {number: group for number, group in items.groupby("order_number", sort=False)}
        empty = items.iloc[0:0]

        orders = [
            self._build_order(row, items_by_order.get(row["order_number"], empty))
            for row in selected.to_dict("records")
        ]
        self.logger.debug(f"get_orders({filters.model_dump(exclude_none=True)}) returned {len(orders)} orders")
        return orders

    def get_order(self, order_number: str) -> Order:
        df = self._tables.orders
        rows = df[df["order_number"] == order_number].to_dict("records")
        if not rows:
            raise RecordNotFoundError(f"Order not found: {order_number}")
        items = self._tables.order_items
        return self._build_order(rows[0], items[items["order_number"] == order_number])

    # ---------- order writes ----------

    def _order_rows(self, order: Order) -> tuple[Order, Dict[str, str], List[Dict[str, str]]]:
        updates: Dict[str, Any] = {}
        if not order.order_number:
            updates["order_number"] = self._next_order_number()
        if order.created_at is None:
            updates["created_at"] = datetime.now(timezone.utc)
        if updates:
            order = order.model_copy(update=updates)

        order_row = {column: _cell(getattr(order, column)) for column in ORDER_COLUMNS}
        # Full precision: percentages may carry more than two places.
        order_row["discount_value"] = str(order.discount_value)
        item_rows = [
            {
                "order_number": order.order_number,
                "line_number": str(line_number),
                "item_name": item.item_name,
                "size_type": item.size_type,
                "quantity": str(item.quantity),
                "unit_price": _cell(item.unit_price),
                "total_price": _cell(item.total_price),
            }
            for line_number, item in enumerate(order.items, start=1)
        ]
        return order, order_row, item_rows

    def _write_order(self, order: Order, order_row: Dict[str, str], item_rows: List[Dict[str, str]]) -> Order:
        orders = self._tables.orders
        order_items = self._tables.order_items
        tables = _Tables(
            orders=pd.concat(
                [orders[orders["order_number"] != order.order_number], pd.DataFrame([order_row], columns=ORDER_COLUMNS)],
                ignore_index=True,
            ),
            order_items=pd.concat(
                [order_items[order_items["order_number"] != order.order_number], pd.DataFrame(item_rows, columns=ORDER_ITEM_COLUMNS)],
                ignore_index=True,
            ),
            customers=self._tables.customers,
        )
        self._flush(tables)
        self._tables = tables
        self.logger.info(f"Saved order {order.order_number} with {len(order.items)} items")
        return order

    def save_order(self, order: Order) -> Order:
        return self._write_order(*self._order_rows(order))

    def insert_order(self, order: Order) -> Order:
        if order.order_number and (self._tables.orders["order_number"] == order.order_number).any():
            raise DuplicateRecordError(f"Order {order.order_number} already exists")
        return self._write_order(*self._order_rows(order))

    # ---------- customer queries ----------

    def get_customers(self) -> List[Customer]:
        df = self._tables.customers
        df = df.sort_values("name", key=lambda s: s.str.lower(), kind="mergesort")
        return [self._build_customer(row) for row in df.to_dict("records")]

    def get_customer(self, customer_id: str) -> Customer:
        df = self._tables.customers
        rows = df[df["customer_id"] == customer_id].to_dict("records")
        if not rows:
            raise RecordNotFoundError(f"Customer not found: {customer_id}")
        return self._build_customer(rows[0])

    def find_customer_by_phone(self, phone: str) -> Optional[Customer]:
        df = self._tables.customers
        rows = df[df["phone"] == phone.strip()].to_dict("records")
        return self._build_customer(rows[0]) if rows else None

    # ---------- customer writes ----------

    def save_customer(self, customer: Customer) -> Customer:
        updates: Dict[str, Any] = {}
        if not customer.customer_id:
            updates["customer_id"] = str(uuid.uuid4())
        if customer.created_at is None:
            updates["created_at"] = datetime.now(timezone.utc)
        if updates:
            customer = customer.model_copy(update=updates)

        row = {column: _cell(getattr(customer, column)) for column in CUSTOMER_COLUMNS}
        customers = self._tables.customers
        tables = _Tables(
            orders=self._tables.orders,
            order_items=self._tables.order_items,
            customers=pd.concat(
                [customers[customers["customer_id"] != customer.customer_id], pd.DataFrame([row], columns=CUSTOMER_COLUMNS)],
                ignore_index=True,
            ),
        )
        self._flush(tables)
        self._tables = tables
        self.logger.info(f"Saved customer {customer.customer_id}")
        return customer
