#!/usr/bin/env python3
"""
seed_data.py

Generates realistic fake catering data to CSVs under a local folder (default: sample_data),
in the layout read by CsvRecordStore.

Entities:
- customers, orders, order_items

Order totals are priced with the same calculator the application uses, so the
stored pricing fields are consistent with the stored items.

Run:
  catering-seed --days 14 --orders-per-day 6
"""

from __future__ import annotations
import argparse
import csv
import os
import random
import sys
import uuid
from datetime import datetime, timedelta, date, time, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from ..config import get_config
from ..pricing.calculator import compute_totals
from .backends.csv_backend import CUSTOMER_COLUMNS, FILES, ORDER_COLUMNS, ORDER_ITEM_COLUMNS
from .models import OrderItem

# -----------------------------
# Config & helper structures
# -----------------------------

# dish -> price per size (plate, half_tray, full_tray)
MENU: Dict[str, Dict[str, str]] = {
    "Dal Fry": {"plate": "8.99", "half_tray": "45.00", "full_tray": "85.00"},
    "Paneer Tikka Masala": {"plate": "12.99", "half_tray": "65.00", "full_tray": "120.00"},
    "Chicken Biryani": {"plate": "13.49", "half_tray": "70.00", "full_tray": "130.00"},
    "Veg Pulao": {"plate": "9.99", "half_tray": "50.00", "full_tray": "95.00"},
    "Butter Naan": {"plate": "2.99", "half_tray": "20.00", "full_tray": "38.00"},
    "Gulab Jamun": {"plate": "4.99", "half_tray": "30.00", "full_tray": "55.00"},
    "Samosa": {"plate": "5.49", "half_tray": "32.00", "full_tray": "60.00"},
}

FIRST_NAMES = ["Asha", "Ravi", "Meera", "Karan", "Priya", "Sanjay", "Anita", "Vikram", "Neha", "Arjun"]
LAST_NAMES = ["Patel", "Shah", "Reddy", "Iyer", "Gupta", "Nair", "Singh", "Desai"]
DELIVERY_TIMES = ["11:30 AM", "12:00 PM", "1:00 PM", "5:30 PM", "6:00 PM", "7:00 PM"]


# -----------------------------
# Utility functions
# -----------------------------

def ensure_dir(path: str) -> None:
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def gen_customers(n: int) -> List[Dict]:
    customers = []
    used_phones = set()
    for _ in range(n):
        first, last = random.choice(FIRST_NAMES), random.choice(LAST_NAMES)
        phone = f"555-{random.randint(100, 999)}-{random.randint(1000, 9999)}"
        while phone in used_phones:
            phone = f"555-{random.randint(100, 999)}-{random.randint(1000, 9999)}"
        used_phones.add(phone)
        customers.append({
            "customer_id": str(uuid.UUID(int=random.getrandbits(128))),
            "name": f"{first} {last}",
            "phone": phone,
            "email": f"{first.lower()}.{last.lower()}@example.com" if random.random() < 0.7 else "",
            "address": f"{random.randint(10, 999)} Main St" if random.random() < 0.6 else "",
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc).isoformat(),
        })
    return customers


def gen_items() -> List[OrderItem]:
    dishes = random.sample(list(MENU), k=random.randint(1, 4))
    items = []
    for dish in dishes:
        size = random.choices(["plate", "half_tray", "full_tray"], weights=[0.5, 0.3, 0.2])[0]
        items.append(OrderItem(
            item_name=dish,
            size_type=size,
            quantity=random.randint(1, 10) if size == "plate" else random.randint(1, 3),
            unit_price=Decimal(MENU[dish][size]),
        ))
    return items


def gen_discount() -> tuple[Optional[str], Decimal]:
    r = random.random()
    if r < 0.15:
        return "percentage", Decimal(random.choice([5, 10, 15]))
    if r < 0.25:
        return "fixed", Decimal(random.choice(["5.00", "10.00", "20.00"]))
    return None, Decimal("0")


def status_for(delivery: date, today: date) -> str:
    if delivery > today:
        return "paid" if random.random() < 0.1 else "received"
    return random.choices(["received", "delivered", "paid"], weights=[0.1, 0.2, 0.7])[0]


def gen_orders_and_items(
    customers: List[Dict],
    start_d: date,
    days: int,
    orders_per_day: int,
    today: date,
) -> tuple[List[Dict], List[Dict]]:
    orders, order_items = [], []
    seq = 0
    for offset in range(days):
        delivery = start_d + timedelta(days=offset)
        for _ in range(max(0, int(random.gauss(orders_per_day, orders_per_day / 4)))):
            seq += 1
            number = f"ORD-{seq:05d}"
            items = gen_items()
            discount_type, discount_value = gen_discount()
            totals = compute_totals(items, discount_type, discount_value)
            customer = random.choice(customers)
            placed = datetime.combine(delivery - timedelta(days=random.randint(1, 7)), time(random.randint(8, 20), 0), tzinfo=timezone.utc)

            orders.append({
                "order_number": number,
                "customer_id": customer["customer_id"],
                "customer_name": customer["name"],
                "customer_phone": customer["phone"],
                "delivery_date": delivery.isoformat(),
                "delivery_time": random.choice(DELIVERY_TIMES),
                "status": status_for(delivery, today),
                "discount_type": discount_type or "",
                "discount_value": str(discount_value),
                "subtotal_amount": f"{totals.subtotal:.2f}",
                "discount_amount": f"{totals.discount_amount:.2f}",
                "total_amount": f"{totals.total:.2f}",
                "created_at": placed.isoformat(),
            })
            for line_number, item in enumerate(items, start=1):
                order_items.append({
                    "order_number": number,
                    "line_number": line_number,
                    "item_name": item.item_name,
                    "size_type": item.size_type,
                    "quantity": item.quantity,
                    "unit_price": f"{item.unit_price:.2f}",
                    "total_price": f"{item.total_price:.2f}",
                })
    return orders, order_items


# -----------------------------
# CSV writer
# -----------------------------

def write_csv(path: str, rows: List[Dict], headers: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        for r in rows:
            w.writerow(r)


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate fake catering data to CSVs.")
    parser.add_argument("--days", type=int, default=config.default_seed_days, help="Number of delivery days to generate.")
    parser.add_argument("--start-date", type=str, default=None, help="YYYY-MM-DD (defaults to today - days/2)")
    parser.add_argument("--orders-per-day", type=int, default=config.default_seed_orders_per_day)
    parser.add_argument("--customers", type=int, default=40)
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if CSVs already exist.")
    args = parser.parse_args(argv)

    random.seed(args.seed)

    outdir = args.output_dir
    ensure_dir(outdir)

    # file paths
    files = {name: os.path.join(outdir, filename) for name, filename in FILES.items()}
    if args.no_overwrite:
        for p in files.values():
            if os.path.exists(p):
                print(f"Refusing to overwrite existing file: {p}", file=sys.stderr)
                return 2

    today = datetime.now(timezone.utc).date()
    if args.start_date:
        start_d = date.fromisoformat(args.start_date)
    else:
        start_d = today - timedelta(days=args.days // 2)

    customers = gen_customers(args.customers)
    orders, items = gen_orders_and_items(customers, start_d, args.days, args.orders_per_day, today)

    write_csv(files["customers"], customers, CUSTOMER_COLUMNS)
    write_csv(files["orders"], orders, ORDER_COLUMNS)
    write_csv(files["order_items"], items, ORDER_ITEM_COLUMNS)

    # simple summary
    print(f"Generated data in {outdir}")
    print(f" customers: {len(customers)} | orders: {len(orders)} | order_items: {len(items)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
