from datetime import date, datetime

import pytest

from catering.config import set_config_for_test
from catering.data.models import Order, OrderItem, PreparationSummaryItem
from catering.kitchen.preparation import aggregate, export_manifest, manifest_filename, render_manifest_text

DAY = date(2024, 5, 1)


@pytest.fixture(autouse=True)
def quiet_config():
    set_config_for_test(log_level="WARNING")


def make_order(items, delivery_date=DAY, status="received"):
    return Order(
        delivery_date=delivery_date,
        status=status,
        items=[
            OrderItem(item_name=name, size_type=size, quantity=quantity, unit_price="10.00")
            for name, size, quantity in items
        ],
    )


def as_tuples(manifest):
    return [(entry.item_name, entry.size_type, entry.total_quantity) for entry in manifest]


def test_same_dish_and_size_is_summed():
    orders = [make_order([("Dal Fry", "plate", 3)]), make_order([("Dal Fry", "plate", 2)])]
    assert as_tuples(aggregate(orders, DAY)) == [("Dal Fry", "plate", 5)]


def test_only_orders_for_the_date_are_included():
    orders = [
        make_order([("Dal Fry", "plate", 3)]),
        make_order([("Dal Fry", "plate", 7)], delivery_date=date(2024, 5, 2)),
    ]
    assert as_tuples(aggregate(orders, DAY)) == [("Dal Fry", "plate", 3)]


def test_delivery_date_comparison_ignores_time_of_day():
    orders = [make_order([("Samosa", "plate", 4)], delivery_date="2024-05-01T18:30:00")]
    assert as_tuples(aggregate(orders, datetime(2024, 5, 1, 9, 0))) == [("Samosa", "plate", 4)]


def test_status_filter():
    orders = [
        make_order([("Dal Fry", "plate", 3)], status="received"),
        make_order([("Dal Fry", "plate", 2)], status="paid"),
    ]
    assert as_tuples(aggregate(orders, DAY, {"received"})) == [("Dal Fry", "plate", 3)]
    assert as_tuples(aggregate(orders, DAY)) == [("Dal Fry", "plate", 5)]


def test_dish_names_match_exactly():
    orders = [make_order([("Dal Fry", "plate", 1), ("dal fry", "plate", 1), ("Dal Fry ", "plate", 1)])]
    assert len(aggregate(orders, DAY)) == 3


def test_grouping_is_first_seen_dish_then_size_order():
    orders = [
        make_order([("Veg Pulao", "full_tray", 1), ("Dal Fry", "half_tray", 2)]),
        make_order([("Dal Fry", "plate", 4), ("Veg Pulao", "plate", 6)]),
    ]
    assert as_tuples(aggregate(orders, DAY)) == [
        ("Veg Pulao", "plate", 6),
        ("Veg Pulao", "full_tray", 1),
        ("Dal Fry", "plate", 4),
        ("Dal Fry", "half_tray", 2),
    ]


def test_totals_do_not_depend_on_input_order():
    orders = [
        make_order([("Dal Fry", "plate", 3), ("Samosa", "half_tray", 1)]),
        make_order([("Samosa", "half_tray", 2)]),
        make_order([("Dal Fry", "plate", 5)]),
    ]
    forward = {(e.item_name, e.size_type): e.total_quantity for e in aggregate(orders, DAY)}
    backward = {(e.item_name, e.size_type): e.total_quantity for e in aggregate(list(reversed(orders)), DAY)}
    assert forward == backward == {("Dal Fry", "plate"): 8, ("Samosa", "half_tray"): 3}


def test_empty_inputs_give_empty_manifest():
    assert aggregate([], DAY) == []
    assert aggregate([make_order([])], DAY) == []
    assert aggregate([make_order([("Dal Fry", "plate", 1)], status="paid")], DAY, {"received"}) == []


def test_render_manifest_text_groups_by_dish():
    manifest = [
        PreparationSummaryItem(item_name="Dal Fry", size_type="plate", total_quantity=5),
        PreparationSummaryItem(item_name="Dal Fry", size_type="full_tray", total_quantity=1),
        PreparationSummaryItem(item_name="Samosa", size_type="half_tray", total_quantity=2),
    ]
    assert render_manifest_text(manifest, DAY) == (
        "Preparation List - 2024-05-01\n"
        "\n"
        "Dal Fry (Plate): 5\n"
        "Dal Fry (Full Tray): 1\n"
        "\n"
        "Samosa (Half Tray): 2\n"
    )


def test_render_empty_manifest():
    assert render_manifest_text([], DAY) == "Preparation List - 2024-05-01\n\nNo items to prepare for this date.\n"


def test_export_manifest_writes_dated_file(tmp_path):
    manifest = [PreparationSummaryItem(item_name="Chicken Biryani", size_type="plate", total_quantity=12)]
    path = export_manifest(manifest, DAY, tmp_path / "exports")
    assert path.name == manifest_filename(DAY) == "preparation-list-2024-05-01.txt"
    assert "Chicken Biryani (Plate): 12" in path.read_text(encoding="utf-8")
