"""
Order status lifecycle: received -> delivered -> paid, with received -> paid allowed
for prepaid orders.

Backward moves (e.g. paid -> received, to correct a mis-click) are accepted by
default and only logged; set ``enforce_forward_transitions`` to reject them.
Status changes never touch the pricing fields.
"""
from __future__ import annotations

from typing import Dict, FrozenSet, Optional

from ..config import get_config
from ..data.models import Order
from ..exceptions import InvalidStatusError, StatusTransitionError
from ..logging import get_logger

logger = get_logger(__name__)

STATUSES = ("received", "delivered", "paid")
INITIAL_STATUS = "received"

FORWARD_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    "received": frozenset({"delivered", "paid"}),
    "delivered": frozenset({"paid"}),
    "paid": frozenset(),
}


def validate_status(status: str) -> str:
    if status not in STATUSES:
        raise InvalidStatusError(f"Unknown order status {status!r}; expected one of {', '.join(STATUSES)}")
    return status


def is_forward_transition(current: str, requested: str) -> bool:
    """True when ``current -> requested`` is part of the intended business flow."""
    return requested in FORWARD_TRANSITIONS.get(current, frozenset())


def is_terminal(status: str) -> bool:
    return not FORWARD_TRANSITIONS.get(validate_status(status))


def change_status(order: Order, requested: str, enforce: Optional[bool] = None) -> Order:
    """Return a copy of ``order`` with its status set to ``requested``.

    Args:
        order: The order to update.
        requested: Target status.
        enforce: Reject backward transitions; defaults to the
            ``enforce_forward_transitions`` setting.
    Raises:
        InvalidStatusError: ``requested`` is not a known status.
        StatusTransitionError: the move is backward and enforcement is on.
    """
    validate_status(requested)
    if requested == order.status:
        return order
    if enforce is None:
        enforce = get_config().enforce_forward_transitions

    if not is_forward_transition(order.status, requested):
        if enforce:
            raise StatusTransitionError(order.status, requested)
        logger.warning(
            f"Order {order.order_number}: status {order.status} -> {requested} is not a forward transition"
        )
    return order.model_copy(update={"status": requested})
