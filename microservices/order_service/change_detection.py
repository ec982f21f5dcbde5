"""
Change Detection

Pure comparison of two snapshots of what a view can see. Each affected order
id yields at most one change:

- STATUS_CHANGED: the focused order has a different status than the view's copy
- NO_LONGER_VISIBLE: the order left the view (typically reassigned away)
- NEWLY_VISIBLE: the order was not in the previous snapshot
"""

from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .models import Order


class ChangeKind(str, Enum):
    """Classification of an externally caused change"""
    NEWLY_VISIBLE = "newly_visible"
    NO_LONGER_VISIBLE = "no_longer_visible"
    STATUS_CHANGED = "status_changed"


class OrderChange(BaseModel):
    """One classified change for one order id"""
    model_config = ConfigDict(frozen=True)

    kind: ChangeKind
    order_id: str
    previous: Optional[Order] = None
    current: Optional[Order] = None

    @property
    def order(self) -> Optional[Order]:
        """Most recent known version of the order"""
        return self.current or self.previous


def index_orders(
    orders: Iterable[Order],
    visible: Optional[Callable[[Order], bool]] = None,
) -> Mapping[str, Order]:
    """Read-only id -> order mapping, keeping only ``visible`` orders"""
    return MappingProxyType({
        order.id: order for order in orders if visible is None or visible(order)
    })


def diff_snapshots(
    previous: Mapping[str, Order],
    current: Mapping[str, Order],
    focused: Optional[Order] = None,
) -> List[OrderChange]:
    """
    Classify what changed between two snapshots.

    Args:
        previous: Snapshot the view last observed (may be empty)
        current: Snapshot just broadcast
        focused: The view's own copy of the order it is focused on

    Returns:
        Changes in a stable order: status change first, then departures in
        previous-snapshot order, then arrivals in current-snapshot order
    """
    changes: List[OrderChange] = []
    seen = set()

    if focused is not None:
        remote = current.get(focused.id)
        if remote is not None and remote.status != focused.status:
            changes.append(OrderChange(
                kind=ChangeKind.STATUS_CHANGED,
                order_id=focused.id,
                previous=focused,
                current=remote,
            ))
            seen.add(focused.id)
        elif remote is None and focused.id not in previous:
            # focus survived a snapshot it was never part of
            changes.append(OrderChange(
                kind=ChangeKind.NO_LONGER_VISIBLE,
                order_id=focused.id,
                previous=focused,
            ))
            seen.add(focused.id)

    for order_id, order in previous.items():
        if order_id not in current and order_id not in seen:
            changes.append(OrderChange(
                kind=ChangeKind.NO_LONGER_VISIBLE,
                order_id=order_id,
                previous=order,
            ))
            seen.add(order_id)

    for order_id, order in current.items():
        if order_id not in previous and order_id not in seen:
            changes.append(OrderChange(
                kind=ChangeKind.NEWLY_VISIBLE,
                order_id=order_id,
                current=order,
            ))

    return changes
