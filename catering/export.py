#!/usr/bin/env python3
"""
export.py

Writes kitchen and finance exports from the configured record store.

Run:
  catering-export preparation --date 2024-05-01
  catering-export preparation --date 2024-05-01 --status received --status delivered
  catering-export revenue --start 2024-04-01 --end 2024-04-30
"""

from __future__ import annotations
import argparse
import sys
from datetime import date
from typing import List, Optional

from .config import get_config
from .data.util import get_record_store
from .exceptions import CateringError
from .logging import get_logger
from .orders.service import OrderService
from .reports.revenue import daily_revenue, export_revenue_report


def _export_preparation(args: argparse.Namespace) -> int:
    config = get_config()
    statuses = args.status or config.preparation_statuses or None
    service = OrderService(get_record_store())
    path = service.export_preparation_list(args.date, args.output_dir or config.export_dir, statuses)
    print(path)
    return 0


def _export_revenue(args: argparse.Namespace) -> int:
    config = get_config()
    store = get_record_store()
    rows = daily_revenue(
        store.get_orders(),
        args.start,
        args.end,
        statuses=args.status or config.revenue_statuses or None,
        customer_id=args.customer_id,
        window=config.moving_average_window,
    )
    path = export_revenue_report(rows, args.output_dir or config.export_dir)
    print(path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Export catering reports.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    prep = subparsers.add_parser("preparation", help="Kitchen preparation list for one delivery date.")
    prep.add_argument("--date", type=date.fromisoformat, default=date.today(), help="YYYY-MM-DD (defaults to today)")
    prep.add_argument("--status", action="append", help="Only include orders in this status (repeatable).")
    prep.add_argument("--output-dir", type=str, default=None)
    prep.set_defaults(handler=_export_preparation)

    revenue = subparsers.add_parser("revenue", help="Daily revenue CSV for a date range.")
    revenue.add_argument("--start", type=date.fromisoformat, required=True, help="YYYY-MM-DD")
    revenue.add_argument("--end", type=date.fromisoformat, required=True, help="YYYY-MM-DD")
    revenue.add_argument("--customer-id", type=str, default=None)
    revenue.add_argument("--status", action="append", help="Only include orders in this status (repeatable).")
    revenue.add_argument("--output-dir", type=str, default=None)
    revenue.set_defaults(handler=_export_revenue)

    args = parser.parse_args(argv)
    try:
        return args.handler(args)
    except CateringError as e:
        get_logger(__name__).error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
