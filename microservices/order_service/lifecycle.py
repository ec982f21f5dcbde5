"""
Order Lifecycle State Machine

Valid transitions:
- each stage -> the next stage of FORWARD_SEQUENCE
- any non-terminal stage -> CANCELLED

DELIVERED and CANCELLED are terminal. Side effects per target:
- PICKED_UP: cloth/blanket counts and the actual pickup time (caller supplied)
- READY: ready_at_time = now
- DELIVERED: actual_delivery_time = now, payment COMPLETED unless already settled
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .models import Order, OrderStatus, PaymentStatus
from .protocols import IncompleteInputError, InvalidTransitionError

logger = logging.getLogger(__name__)


FORWARD_SEQUENCE = (
    OrderStatus.CREATED,
    OrderStatus.PARTNER_ASSIGNED,
    OrderStatus.PICKED_UP,
    OrderStatus.IN_PROCESSING,
    OrderStatus.READY,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

# Payment states that delivery leaves untouched
SETTLED_PAYMENT_STATUSES = frozenset({PaymentStatus.COMPLETED, PaymentStatus.COD})


def is_terminal(status: OrderStatus) -> bool:
    return status in TERMINAL_STATUSES


def next_status(current: OrderStatus) -> Optional[OrderStatus]:
    """Stage following ``current``, or None for terminal/last stages"""
    if current in TERMINAL_STATUSES:
        return None
    idx = FORWARD_SEQUENCE.index(current)
    if idx + 1 < len(FORWARD_SEQUENCE):
        return FORWARD_SEQUENCE[idx + 1]
    return None


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """Check if transition is valid"""
    if target == OrderStatus.CANCELLED:
        return not is_terminal(current)
    return target == next_status(current)


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def missing_transition_inputs(
    target: OrderStatus,
    cloth_count: Optional[int] = None,
    blanket_count: Optional[int] = None,
    actual_pickup_time: Optional[datetime] = None,
) -> List[str]:
    """
    Names of required inputs that are absent or invalid for ``target``.

    Only PICKED_UP needs caller input; every other target returns [].
    """
    if target != OrderStatus.PICKED_UP:
        return []
    missing = []
    if not _is_count(cloth_count):
        missing.append("cloth_count")
    if not _is_count(blanket_count):
        missing.append("blanket_count")
    if not isinstance(actual_pickup_time, datetime):
        missing.append("actual_pickup_time")
    return missing


def apply_transition(
    order: Order,
    requested_status: OrderStatus,
    *,
    cloth_count: Optional[int] = None,
    blanket_count: Optional[int] = None,
    actual_pickup_time: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Order:
    """
    Move ``order`` to ``requested_status`` and apply the stage side effects.

    Args:
        order: Current record (left untouched)
        requested_status: Must be the next stage, or CANCELLED from a non-terminal stage
        cloth_count: Items collected (PICKED_UP only)
        blanket_count: Blankets collected (PICKED_UP only)
        actual_pickup_time: When the pickup really happened; may be earlier than now
        now: Clock override for READY/DELIVERED timestamps

    Returns:
        New Order record; callers must replace their reference

    Raises:
        InvalidTransitionError: target is not reachable from the current status
        IncompleteInputError: PICKED_UP inputs missing
    """
    current = order.status
    if not can_transition(current, requested_status):
        raise InvalidTransitionError(
            f"Cannot move order {order.order_number} from {current.value} to {requested_status.value}",
            current_status=current,
            requested_status=requested_status,
        )

    updates: Dict[str, Any] = {"status": requested_status}
    moment = now or datetime.now(timezone.utc)

    if requested_status == OrderStatus.PICKED_UP:
        missing = missing_transition_inputs(
            requested_status, cloth_count, blanket_count, actual_pickup_time
        )
        if missing:
            raise IncompleteInputError(
                f"Pickup of {order.order_number} needs: {', '.join(missing)}",
                missing_fields=missing,
            )
        updates["cloth_count"] = cloth_count
        updates["blanket_count"] = blanket_count
        updates["actual_pickup_time"] = actual_pickup_time
    elif requested_status == OrderStatus.READY:
        updates["ready_at_time"] = moment
    elif requested_status == OrderStatus.DELIVERED:
        updates["actual_delivery_time"] = moment
        if order.payment_status not in SETTLED_PAYMENT_STATUSES:
            updates["payment_status"] = PaymentStatus.COMPLETED

    logger.debug(f"Order {order.order_number}: {current.value} -> {requested_status.value}")
    return order.model_copy(update=updates)
