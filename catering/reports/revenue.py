"""
Revenue reporting over delivered orders.

Money is carried through pandas as integer cents so grouped sums stay exact;
values are converted back to two-place Decimals on the way out.
"""
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Collection, Iterable, List, Optional

import pandas as pd

from ..config import get_config
from ..data.dates import to_calendar_date
from ..data.models import DailyRevenue, ItemSales, Order
from ..logging import get_logger
from ..pricing.money import ZERO, from_cents, round2, to_cents, total

logger = get_logger(__name__)


def _selected(orders: Iterable[Order], statuses: Optional[Collection[str]], customer_id: Optional[str]) -> List[Order]:
    return [
        order for order in orders
        if (statuses is None or order.status in statuses)
        and (customer_id is None or order.customer_id == customer_id)
    ]


def daily_revenue(
    orders: Iterable[Order],
    start_date: Any,
    end_date: Any,
    statuses: Optional[Collection[str]] = ("paid",),
    customer_id: Optional[str] = None,
    window: int = 7,
) -> List[DailyRevenue]:
    """One row per calendar day in [start_date, end_date], grouped by delivery date.

    Days without orders are reported with zero revenue. ``moving_average`` is the
    trailing mean of daily totals over up to ``window`` days.
    """
    start = to_calendar_date(start_date)
    end = to_calendar_date(end_date)
    if end < start:
        raise ValueError(f"end_date {end} is before start_date {start}")
    if window < 1:
        raise ValueError("window must be at least 1")

    df = pd.DataFrame(
        [
            {"delivery_date": order.delivery_date, "cents": to_cents(order.total_amount)}
            for order in _selected(orders, statuses, customer_id)
        ],
        columns=["delivery_date", "cents"],
    )
    df["delivery_date"] = pd.to_datetime(df["delivery_date"])
    df["cents"] = df["cents"].astype("int64")

    days = pd.date_range(start, end, freq="D")
    daily = (
        df.groupby("delivery_date")
          .agg(cents=("cents", "sum"), order_count=("cents", "size"))
          .reindex(days, fill_value=0)
          .astype("int64")
    )
    moving = daily["cents"].rolling(window=window, min_periods=1).mean()

    rows = []
    for day, cents, count, moving_cents in zip(daily.index, daily["cents"], daily["order_count"], moving):
        day_total = from_cents(int(cents))
        count = int(count)
        rows.append(DailyRevenue(
            delivery_date=day.date(),
            total=day_total,
            order_count=count,
            average_order_value=round2(day_total / count) if count else ZERO,
            moving_average=from_cents(moving_cents),
        ))
    logger.debug(f"Computed daily revenue for {len(rows)} days from {start} to {end}")
    return rows


def pending_revenue(orders: Iterable[Order], customer_id: Optional[str] = None):
    """Sum of order totals that have not been paid yet."""
    return total(
        order.total_amount
        for order in _selected(orders, None, customer_id)
        if order.status != "paid"
    )


def top_selling_items(
    orders: Iterable[Order],
    limit: Optional[int] = None,
    statuses: Optional[Collection[str]] = ("paid",),
) -> List[ItemSales]:
    """Dishes ranked by total sales, highest first; ties keep first-seen order.

    ``limit`` defaults to the configured ``top_items_limit``.
    """
    if limit is None:
        limit = get_config().top_items_limit
    df = pd.DataFrame(
        [
            {"item_name": item.item_name, "quantity": item.quantity, "cents": to_cents(item.total_price)}
            for order in _selected(orders, statuses, None)
            for item in order.items
        ],
        columns=["item_name", "quantity", "cents"],
    )
    if df.empty:
        return []

    ranked = (
        df.groupby("item_name", sort=False)
          .agg(quantity=("quantity", "sum"), cents=("cents", "sum"))
          .sort_values("cents", ascending=False, kind="mergesort")
          .head(limit)
    )
    return [
        ItemSales(item_name=name, quantity=int(row.quantity), total_sales=from_cents(int(row.cents)))
        for name, row in ranked.iterrows()
    ]


def revenue_report_csv(rows: Iterable[DailyRevenue], currency_symbol: Optional[str] = None, window: Optional[int] = None) -> str:
    """Render daily revenue rows as CSV text with two-decimal money columns."""
    config = get_config()
    symbol = currency_symbol if currency_symbol is not None else config.currency_symbol
    window = window if window is not None else config.moving_average_window

    columns = [
        "Date",
        f"Revenue ({symbol})",
        "Order Count",
        f"Average Order Value ({symbol})",
        f"{window}-Day Moving Average ({symbol})",
    ]
    df = pd.DataFrame(
        [
            [
                row.delivery_date.isoformat(),
                f"{row.total:.2f}",
                row.order_count,
                f"{row.average_order_value:.2f}",
                f"{row.moving_average:.2f}",
            ]
            for row in rows
        ],
        columns=columns,
    )
    return df.to_csv(index=False, lineterminator="\n")


def report_filename(report_date: date) -> str:
    return f"financial-report-{report_date.isoformat()}.csv"


def export_revenue_report(
    rows: Iterable[DailyRevenue],
    output_dir: str | Path,
    report_date: Optional[date] = None,
) -> Path:
    """Write the revenue CSV to ``output_dir`` and return the file path."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / report_filename(report_date or date.today())
    path.write_text(revenue_report_csv(rows), encoding="utf-8")
    logger.info(f"Wrote revenue report to {path}")
    return path
