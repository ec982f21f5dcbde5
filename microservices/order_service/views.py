"""
Role Views

Operator, customer and partner views over the shared order store. Each view
keeps the snapshot it last saw, diffs it against every store broadcast and
turns changes made by other actors into notifications.

Writes issued by a view itself still come back through the broadcast; the
view accepts the new state silently instead of notifying about its own change.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from core.scheduler import SchedulerProtocol

from .catalog import status_label
from .change_detection import ChangeKind, OrderChange, diff_snapshots, index_orders
from .commit_gesture import CommitGestureController, GesturePhase
from .lifecycle import is_terminal, missing_transition_inputs, next_status
from .models import (
    Order,
    OrderCreateRequest,
    OrderStatus,
    PaymentStatus,
    PickupDetails,
    ServiceType,
    UserRole,
)
from .notifications import NotificationCenter
from .order_service import OrderService
from .protocols import OrderNotFoundError

logger = logging.getLogger(__name__)


LIST_SCREEN = "list"
DETAIL_SCREEN = "detail"


class RoleView:
    """Base view: snapshot tracking, focus and notifications"""

    role: UserRole = UserRole.ADMIN

    def __init__(
        self,
        service: OrderService,
        scheduler: SchedulerProtocol,
        notification_ttl: Optional[float] = None,
    ):
        self.service = service
        self.store = service.store
        self.scheduler = scheduler
        self.notifications = NotificationCenter(
            scheduler,
            ttl_seconds=notification_ttl if notification_ttl is not None
            else service.config.notification_ttl_seconds,
        )
        self.focused: Optional[Order] = None
        self.screen = LIST_SCREEN
        self._writing = False
        # initial load is the baseline, not news
        self._visible: Mapping[str, Order] = index_orders(self.store.snapshot(), self.is_visible)
        self._unsubscribe: Optional[Callable[[], None]] = self.store.subscribe(self._on_store_change)

    # -------------------- role hooks --------------------

    def is_visible(self, order: Order) -> bool:
        return True

    def arrival_message(self, order: Order) -> Optional[str]:
        return None

    def status_message(self, order: Order) -> Optional[str]:
        return None

    def departure_message(self, order: Order) -> Optional[str]:
        return None

    def _after_sync(self) -> None:
        pass

    # -------------------- navigation --------------------

    @property
    def orders(self) -> List[Order]:
        """Visible orders, most recent first"""
        return list(self._visible.values())

    def open(self, order_id: str) -> Order:
        """Focus an order and show its detail screen"""
        order = self._visible.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order not visible to {self.role.value}: {order_id}")
        self.focused = order
        self.screen = DETAIL_SCREEN
        self._after_sync()
        return order

    def back(self) -> None:
        """Drop focus and return to the list"""
        self.focused = None
        self.screen = LIST_SCREEN
        self._after_sync()

    def close(self) -> None:
        """Stop following the store"""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.notifications.clear()

    # -------------------- sync --------------------

    @contextmanager
    def _own_write(self):
        self._writing = True
        try:
            yield
        finally:
            self._writing = False

    def _on_store_change(self, snapshot: Tuple[Order, ...]) -> None:
        current = index_orders(snapshot, self.is_visible)
        changes = diff_snapshots(self._visible, current, self.focused)
        self._visible = current

        for change in changes:
            self._handle_change(change)

        # pick up field edits that do not touch the status
        if self.focused is not None and self.focused.id in current:
            self.focused = current[self.focused.id]
        self._after_sync()

    def _handle_change(self, change: OrderChange) -> None:
        order = change.order
        if change.kind == ChangeKind.STATUS_CHANGED:
            self.focused = change.current
            if not self._writing:
                self._notify(change, self.status_message(change.current))
        elif change.kind == ChangeKind.NO_LONGER_VISIBLE:
            if self.focused is not None and self.focused.id == change.order_id:
                self.focused = None
                self.screen = LIST_SCREEN
                self._notify(change, self.departure_message(order))
        elif change.kind == ChangeKind.NEWLY_VISIBLE:
            self._notify(change, self.arrival_message(order))

    def _notify(self, change: OrderChange, message: Optional[str]) -> None:
        if message:
            self.notifications.push(change.kind, change.order_id, message)


class OperatorView(RoleView):
    """Admin dashboard: every order, search and direct status control"""

    role = UserRole.ADMIN

    def arrival_message(self, order: Order) -> Optional[str]:
        return f"New order {order.order_number} received."

    def status_message(self, order: Order) -> Optional[str]:
        return f"Order {order.order_number} changed to {status_label(order.status)} by another user."

    def search(self, query: Optional[str] = None, status: Optional[OrderStatus] = None) -> List[Order]:
        return self.service.list_orders(search=query, status=status)

    def set_status(self, order_id: str, status: OrderStatus) -> Order:
        with self._own_write():
            return self.service.override_status(order_id, status)

    def assign(self, order_id: str, partner_id: str) -> Order:
        with self._own_write():
            return self.service.assign_partner(order_id, partner_id)


class CustomerView(RoleView):
    """Customer app: booking and tracking of the customer's own orders"""

    role = UserRole.CUSTOMER

    def __init__(
        self,
        service: OrderService,
        scheduler: SchedulerProtocol,
        customer_id: str,
        customer_name: str,
        customer_phone: str,
        notification_ttl: Optional[float] = None,
    ):
        self.customer_id = customer_id
        self.customer_name = customer_name
        self.customer_phone = customer_phone
        super().__init__(service, scheduler, notification_ttl)

    def is_visible(self, order: Order) -> bool:
        return order.customer_id == self.customer_id

    def arrival_message(self, order: Order) -> Optional[str]:
        return f"Order {order.order_number} placed."

    def status_message(self, order: Order) -> Optional[str]:
        return f"Order {order.order_number} is now {status_label(order.status)}."

    @property
    def active_orders(self) -> List[Order]:
        return [o for o in self.orders if not is_terminal(o.status)]

    @property
    def past_orders(self) -> List[Order]:
        return [o for o in self.orders if is_terminal(o.status)]

    def book(
        self,
        service_type: ServiceType,
        address: str = "Store Pickup",
        payment_status: PaymentStatus = PaymentStatus.PENDING,
        notes: Optional[str] = None,
    ) -> Order:
        """Place a booking and show its tracking screen"""
        request = OrderCreateRequest(
            customer_id=self.customer_id,
            customer_name=self.customer_name,
            customer_phone=self.customer_phone,
            service_type=service_type,
            address=address,
            payment_status=payment_status,
            notes=notes,
        )
        order = self.service.create_order(request)
        self.open(order.id)
        return order

    def cancel(self, order_id: str) -> Order:
        with self._own_write():
            return self.service.cancel_order(order_id, changed_by=UserRole.CUSTOMER)


class PartnerView(RoleView):
    """
    Partner app: assigned tasks and the swipe-to-advance control.

    The gesture is bound to the focused order and the stage after its
    current status. PICKED_UP stays locked until counts and pickup time
    are filled in. After a DELIVERED commit settles the view goes back
    to the task list.
    """

    role = UserRole.PARTNER

    def __init__(
        self,
        service: OrderService,
        scheduler: SchedulerProtocol,
        partner_id: str,
        notification_ttl: Optional[float] = None,
        threshold: Optional[float] = None,
        settle_seconds: Optional[float] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.partner_id = partner_id
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.pickup = PickupDetails()
        self.last_committed: Optional[Order] = None
        config = service.config
        self.gesture = CommitGestureController(
            scheduler,
            on_commit=self._commit,
            on_settled=self._on_settled,
            gate=self._gate,
            threshold=threshold if threshold is not None else config.commit_threshold,
            settle_seconds=settle_seconds if settle_seconds is not None else config.commit_settle_seconds,
        )
        super().__init__(service, scheduler, notification_ttl)

    def is_visible(self, order: Order) -> bool:
        return order.partner_id == self.partner_id

    def arrival_message(self, order: Order) -> Optional[str]:
        return f"New task assigned: {order.order_number}"

    def status_message(self, order: Order) -> Optional[str]:
        if order.status == OrderStatus.CANCELLED:
            return f"Current order {order.order_number} was CANCELLED by customer."
        return f"Order {order.order_number} is now {status_label(order.status)}."

    def departure_message(self, order: Order) -> Optional[str]:
        return f"Order {order.order_number} has been REASSIGNED to another partner."

    @property
    def tasks(self) -> List[Order]:
        return [o for o in self.orders if not is_terminal(o.status)]

    @property
    def target_status(self) -> Optional[OrderStatus]:
        """Stage the gesture would move the focused order to"""
        if self.focused is None:
            return None
        return next_status(self.focused.status)

    # -------------------- pickup inputs --------------------

    def open(self, order_id: str) -> Order:
        order = super().open(order_id)
        self.pickup = PickupDetails(actual_pickup_time=self.clock())
        return order

    def set_pickup_details(
        self,
        cloth_count: Optional[int] = None,
        blanket_count: Optional[int] = None,
        actual_pickup_time: Optional[datetime] = None,
    ) -> None:
        """Update the collection form; omitted values keep their current entry"""
        updates: Dict[str, object] = {}
        if cloth_count is not None:
            updates["cloth_count"] = cloth_count
        if blanket_count is not None:
            updates["blanket_count"] = blanket_count
        if actual_pickup_time is not None:
            updates["actual_pickup_time"] = actual_pickup_time
        self.pickup = self.pickup.model_copy(update=updates)

    @property
    def missing_inputs(self) -> List[str]:
        target = self.target_status
        if target is None:
            return []
        return missing_transition_inputs(
            target,
            cloth_count=self.pickup.cloth_count,
            blanket_count=self.pickup.blanket_count,
            actual_pickup_time=self.pickup.actual_pickup_time,
        )

    # -------------------- gesture --------------------

    def swipe(self, distance: float) -> GesturePhase:
        """Drag the handle ``distance`` and let go"""
        self.gesture.drag_to(distance)
        return self.gesture.release()

    def _gate(self) -> bool:
        return self.target_status is not None and not self.missing_inputs

    def _after_sync(self) -> None:
        # a running commit keeps its binding until it settles
        if self.gesture.phase in (GesturePhase.COMMITTING, GesturePhase.SETTLED):
            return
        target = self.target_status
        self.gesture.bind(
            self.focused.id if self.focused is not None else None,
            status_label(target) if target is not None else None,
        )

    def _commit(self) -> None:
        target = self.target_status
        if self.focused is None or target is None:
            raise OrderNotFoundError("No order to advance")

        inputs = {}
        if target == OrderStatus.PICKED_UP:
            inputs = self.pickup.model_dump()
        with self._own_write():
            updated = self.service.advance_order(
                self.focused.id, target, changed_by=UserRole.PARTNER, **inputs
            )
        self.focused = updated
        self.last_committed = updated

    def _on_settled(self) -> None:
        self.gesture.reset()
        if self.focused is not None and self.focused.status == OrderStatus.DELIVERED:
            logger.info(f"Partner {self.partner_id} finished {self.focused.order_number}")
            self.back()
            return
        self.pickup = PickupDetails(actual_pickup_time=self.clock())
        self._after_sync()
