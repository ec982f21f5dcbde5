"""
Order Store

The single authoritative collection of Order records shared by every view.
Inserts and replacements notify subscribers synchronously with the new
snapshot; there is no other write path.
"""

import logging
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .models import Order
from .protocols import DuplicateOrderError, DuplicateTrackingIdError, StoreListener

logger = logging.getLogger(__name__)


class OrderStore:
    """
    In-memory order collection, most recent first.

    Replacement is last-write-wins: concurrent edits to the same order are
    not merged, the later ``replace`` overwrites the whole record.
    """

    def __init__(self, orders: Iterable[Order] = ()):
        self._orders: List[Order] = []
        self._order_numbers = set()
        self._listeners: List[StoreListener] = []
        for order in orders:
            self._check_unique(order)
            self._orders.append(order)
            self._order_numbers.add(order.order_number)

    # -------------------- writes --------------------

    def insert(self, order: Order) -> Order:
        """
        Add a new order at the front of the collection.

        Only identity is checked here; lifecycle rules are the caller's job.

        Raises:
            DuplicateTrackingIdError: order_number already in use
            DuplicateOrderError: id already in use
        """
        self._check_unique(order)
        self._orders.insert(0, order)
        self._order_numbers.add(order.order_number)
        logger.debug(f"Inserted order {order.id} ({order.order_number})")
        self._broadcast()
        return order

    def replace(self, order: Order) -> bool:
        """
        Replace the stored record with the same id.

        Unknown ids are a no-op (returns False) rather than an error.
        """
        for idx, existing in enumerate(self._orders):
            if existing.id == order.id:
                self._orders[idx] = order
                # codes stay reserved for the store's lifetime
                self._order_numbers.add(order.order_number)
                self._broadcast()
                return True
        logger.warning(f"Replace ignored, no order with id {order.id} ({order.order_number})")
        return False

    # -------------------- reads --------------------

    def get(self, order_id: str) -> Optional[Order]:
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    def snapshot(self) -> Tuple[Order, ...]:
        return tuple(self._orders)

    def order_numbers(self) -> frozenset:
        return frozenset(self._order_numbers)

    def has_order_number(self, order_number: str) -> bool:
        return order_number in self._order_numbers

    def __len__(self) -> int:
        return len(self._orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(self.snapshot())

    # -------------------- subscriptions --------------------

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register ``listener`` for every future write.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _broadcast(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Store listener {listener!r} failed: {e}")

    def _check_unique(self, order: Order) -> None:
        if order.order_number in self._order_numbers:
            raise DuplicateTrackingIdError(order.order_number)
        if any(existing.id == order.id for existing in self._orders):
            raise DuplicateOrderError(f"Order id already exists: {order.id}")
