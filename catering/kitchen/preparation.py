"""
Kitchen preparation manifest.

Collapses the line items of every order delivered on a given date into one
total per (dish, serving size). Dish names are matched exactly and
case-sensitively, using the name snapshot stored on each order item.
"""
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Collection, Dict, Iterable, List, Optional

from ..data.dates import to_calendar_date
from ..data.models import SIZE_TYPES, Order, PreparationSummaryItem
from ..logging import get_logger

logger = get_logger(__name__)

SIZE_LABELS = {
    "plate": "Plate",
    "half_tray": "Half Tray",
    "full_tray": "Full Tray",
}


def _size_rank(size_type: str) -> int:
    try:
        return SIZE_TYPES.index(size_type)
    except ValueError:
        return len(SIZE_TYPES)


def qualifying_orders(
    orders: Iterable[Order],
    delivery_date: Any,
    status_filter: Optional[Collection[str]] = None,
) -> List[Order]:
    """Orders delivered on ``delivery_date`` whose status passes ``status_filter``.

    ``status_filter`` of None means no status filtering.
    """
    target = to_calendar_date(delivery_date)
    return [
        order for order in orders
        if order.delivery_date == target
        and (status_filter is None or order.status in status_filter)
    ]


def aggregate(
    orders: Iterable[Order],
    delivery_date: Any,
    status_filter: Optional[Collection[str]] = None,
) -> List[PreparationSummaryItem]:
    """Build the preparation manifest for one delivery date.

    Output is grouped by dish in first-seen order; within a dish, sizes follow
    plate, half_tray, full_tray.
    """
    totals: Dict[str, Dict[str, int]] = {}
    selected = qualifying_orders(orders, delivery_date, status_filter)
    for order in selected:
        for item in order.items:
            sizes = totals.setdefault(item.item_name, {})
            sizes[item.size_type] = sizes.get(item.size_type, 0) + item.quantity

    manifest = [
        PreparationSummaryItem(item_name=name, size_type=size, total_quantity=quantity)
        for name, sizes in totals.items()
        for size, quantity in sorted(sizes.items(), key=lambda pair: _size_rank(pair[0]))
    ]
    logger.debug(f"Aggregated {len(selected)} orders into {len(manifest)} preparation lines")
    return manifest


def render_manifest_text(items: Iterable[PreparationSummaryItem], delivery_date: Any) -> str:
    """Render a manifest as plain text.

    One line per (dish, size) entry, e.g. ``Dal Fry (Plate): 5``, with a blank
    line between dishes.
    """
    target = to_calendar_date(delivery_date)
    lines = [f"Preparation List - {target.isoformat()}", ""]

    grouped: Dict[str, List[PreparationSummaryItem]] = {}
    for item in items:
        grouped.setdefault(item.item_name, []).append(item)

    if not grouped:
        lines.append("No items to prepare for this date.")
    for name, entries in grouped.items():
        for entry in entries:
            label = SIZE_LABELS.get(entry.size_type, entry.size_type)
            lines.append(f"{name} ({label}): {entry.total_quantity}")
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"


def manifest_filename(delivery_date: Any) -> str:
    return f"preparation-list-{to_calendar_date(delivery_date).isoformat()}.txt"


def export_manifest(
    items: Iterable[PreparationSummaryItem],
    delivery_date: date,
    output_dir: str | Path,
) -> Path:
    """Write the rendered manifest to ``output_dir`` and return the file path."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / manifest_filename(delivery_date)
    path.write_text(render_manifest_text(items, delivery_date), encoding="utf-8")
    logger.info(f"Wrote preparation list to {path}")
    return path
