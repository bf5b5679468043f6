from datetime import date
from decimal import Decimal

import pytest

from catering.config import set_config_for_test
from catering.data.models import Order, OrderItem
from catering.exceptions import InvalidStatusError, StatusTransitionError
from catering.orders.lifecycle import change_status, is_forward_transition, is_terminal
from catering.pricing.calculator import apply_totals


@pytest.fixture(autouse=True)
def default_config():
    set_config_for_test(log_level="WARNING", enforce_forward_transitions=False)


@pytest.fixture
def order():
    return apply_totals(Order(
        order_number="ORD-00001",
        delivery_date=date(2024, 5, 1),
        discount_type="fixed",
        discount_value=5,
        items=[OrderItem(item_name="Dal Fry", size_type="plate", quantity=3, unit_price="8.99")],
    ))


@pytest.mark.parametrize("current, requested", [
    ("received", "delivered"),
    ("delivered", "paid"),
    ("received", "paid"),
])
def test_forward_transitions(current, requested):
    assert is_forward_transition(current, requested)


@pytest.mark.parametrize("current, requested", [
    ("paid", "received"),
    ("paid", "delivered"),
    ("delivered", "received"),
    ("received", "received"),
])
def test_backward_or_same_transitions_are_not_forward(current, requested):
    assert not is_forward_transition(current, requested)


def test_paid_is_terminal():
    assert is_terminal("paid")
    assert not is_terminal("received")


def test_change_status_keeps_pricing(order):
    delivered = change_status(order, "delivered")
    assert delivered.status == "delivered"
    assert delivered.subtotal_amount == order.subtotal_amount == Decimal("26.97")
    assert delivered.discount_amount == order.discount_amount == Decimal("5.00")
    assert delivered.total_amount == order.total_amount == Decimal("21.97")
    assert order.status == "received"


def test_backward_change_is_accepted_by_default(order):
    paid = change_status(order, "paid")
    assert change_status(paid, "received").status == "received"


def test_backward_change_rejected_when_enforced(order):
    paid = change_status(order, "paid")
    with pytest.raises(StatusTransitionError):
        change_status(paid, "received", enforce=True)


def test_enforcement_follows_config(order):
    set_config_for_test(log_level="WARNING", enforce_forward_transitions=True)
    paid = change_status(order, "paid")
    with pytest.raises(StatusTransitionError):
        change_status(paid, "delivered")


def test_unknown_status_is_rejected(order):
    with pytest.raises(InvalidStatusError):
        change_status(order, "cancelled")


def test_same_status_is_a_no_op(order):
    assert change_status(order, "received") is order
