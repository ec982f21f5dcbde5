"""
Order Service Business Logic

Business logic layer for the laundry order lifecycle. Every write goes
through the shared OrderStore, whose broadcast keeps the role views in sync.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from core.config import LaundryConfig

from .catalog import price_for
from .lifecycle import apply_transition, is_terminal
from .models import (
    Order,
    OrderCreateRequest,
    OrderStatus,
    PaymentStatus,
    UserRole,
)
from .protocols import (
    DuplicateTrackingIdError,
    EventBusProtocol,
    InvalidTransitionError,
    OrderNotFoundError,
    OrderStoreProtocol,
    OrderValidationError,
    TrackingIdExhaustedError,
)
from .tracking import TrackingIdGenerator

# Import event publishers
from .events.publishers import (
    publish_order_created,
    publish_order_status_changed,
    publish_order_cancelled,
    publish_order_delivered,
    publish_order_reassigned,
)

logger = logging.getLogger(__name__)


# Payment states a booking may start in
BOOKING_PAYMENT_STATUSES = frozenset({PaymentStatus.PENDING, PaymentStatus.COD})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderService:
    """
    Order management business logic service

    Handles booking, lifecycle transitions and operator corrections.
    """

    def __init__(
        self,
        store: OrderStoreProtocol,
        generator: Optional[TrackingIdGenerator] = None,
        event_bus: Optional[EventBusProtocol] = None,
        config: Optional[LaundryConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize Order Service

        Args:
            store: Shared order store (the only write path)
            generator: Tracking code generator; built from config when omitted
            event_bus: Event bus for domain events (optional)
            config: Engine settings (optional)
            clock: Source of "now" for timestamps (optional, for tests)
        """
        self.config = config or LaundryConfig()
        self.store = store
        self.generator = generator or TrackingIdGenerator(
            prefix=self.config.tracking_prefix,
            alphabet=self.config.tracking_alphabet,
            length=self.config.tracking_code_length,
            max_attempts=self.config.tracking_max_attempts,
        )
        self.event_bus = event_bus
        self.clock = clock or _utcnow

        logger.info("✅ OrderService initialized")

    # Order Lifecycle Operations

    def create_order(self, request: OrderCreateRequest) -> Order:
        """
        Create a new order

        Args:
            request: Order creation request

        Returns:
            The stored order

        Raises:
            OrderValidationError: request rejected
            TrackingIdExhaustedError: no free tracking code
        """
        self._validate_order_create_request(request)

        total_amount = request.total_amount
        if total_amount is None:
            total_amount = price_for(request.service_type)

        partner_id = (request.partner_id or "").strip() or self.config.default_partner_id
        status = OrderStatus.PARTNER_ASSIGNED if partner_id else OrderStatus.CREATED

        order_id = f"ord_{uuid.uuid4().hex[:12]}"
        for _ in range(self.generator.max_attempts):
            order = Order(
                id=order_id,
                order_number=self.generator.generate(self.store.has_order_number),
                customer_id=request.customer_id,
                customer_name=request.customer_name,
                customer_phone=request.customer_phone.strip(),
                address=request.address.strip() or "Store Pickup",
                service_type=request.service_type,
                status=status,
                pickup_time=request.pickup_time,
                delivery_time=request.delivery_time,
                total_amount=total_amount,
                payment_status=request.payment_status,
                partner_id=partner_id,
                created_at=self.clock(),
                notes=request.notes,
            )
            try:
                self.store.insert(order)
            except DuplicateTrackingIdError as e:
                logger.warning(f"Tracking code {e.order_number} taken at insert, drawing another")
                continue

            publish_order_created(self.event_bus, order)
            logger.info(
                f"Order created: {order.order_number} ({order.id}) for customer {order.customer_id}, "
                f"{order.service_type.value} at {order.total_amount}"
            )
            return order

        raise TrackingIdExhaustedError(
            f"Could not insert order after {self.generator.max_attempts} attempts"
        )

    def update_order(self, order: Order) -> None:
        """
        Replace the stored record with ``order``.

        Callers are responsible for validating the status; unknown ids are
        ignored by the store.

        Raises:
            OrderValidationError: order_number or created_at differs from the stored record
        """
        previous = self.store.get(order.id)
        if previous is not None:
            if order.order_number != previous.order_number:
                raise OrderValidationError(
                    f"order_number of {previous.order_number} cannot change to {order.order_number}",
                    field="order_number",
                )
            if order.created_at != previous.created_at:
                raise OrderValidationError(
                    f"created_at of {previous.order_number} cannot change",
                    field="created_at",
                )
        if not self.store.replace(order):
            return
        if previous is not None and previous.status != order.status:
            publish_order_status_changed(self.event_bus, order, previous.status, changed_by="update")
        logger.info(f"Order updated: {order.order_number}")

    def advance_order(
        self,
        order_id: str,
        requested_status: OrderStatus,
        *,
        cloth_count: Optional[int] = None,
        blanket_count: Optional[int] = None,
        actual_pickup_time: Optional[datetime] = None,
        changed_by: UserRole = UserRole.PARTNER,
    ) -> Order:
        """
        Apply a validated lifecycle transition to the canonical record

        Args:
            order_id: Store id
            requested_status: Next stage, or CANCELLED
            cloth_count: Items collected (PICKED_UP only)
            blanket_count: Blankets collected (PICKED_UP only)
            actual_pickup_time: When the pickup happened (PICKED_UP only)
            changed_by: Role issuing the change

        Raises:
            OrderNotFoundError: unknown order
            InvalidTransitionError: not a legal next step
            IncompleteInputError: PICKED_UP inputs missing
        """
        current = self.get_order(order_id)
        updated = apply_transition(
            current,
            requested_status,
            cloth_count=cloth_count,
            blanket_count=blanket_count,
            actual_pickup_time=actual_pickup_time,
            now=self.clock(),
        )
        self.store.replace(updated)

        publish_order_status_changed(self.event_bus, updated, current.status, changed_by=changed_by.value)
        if updated.status == OrderStatus.CANCELLED:
            publish_order_cancelled(self.event_bus, updated, current.status)
        elif updated.status == OrderStatus.DELIVERED:
            publish_order_delivered(self.event_bus, updated)

        logger.info(
            f"Order {updated.order_number}: {current.status.value} -> {updated.status.value} "
            f"by {changed_by.value}"
        )
        return updated

    def cancel_order(self, order_id: str, changed_by: UserRole = UserRole.CUSTOMER) -> Order:
        """Cancel an order that has not finished yet"""
        return self.advance_order(order_id, OrderStatus.CANCELLED, changed_by=changed_by)

    def override_status(self, order_id: str, status: OrderStatus) -> Order:
        """
        Operator correction: set any status directly.

        Skips the single-step rule and the stage side effects; timestamps and
        payment are left as they are.
        """
        current = self.get_order(order_id)
        updated = current.model_copy(update={"status": status})
        self.store.replace(updated)

        if current.status != status:
            publish_order_status_changed(
                self.event_bus, updated, current.status, changed_by=UserRole.ADMIN.value, override=True
            )
            logger.info(f"Order {updated.order_number} overridden: {current.status.value} -> {status.value}")
        return updated

    def assign_partner(self, order_id: str, partner_id: str) -> Order:
        """
        Assign or reassign the partner of an order.

        A CREATED order moves to PARTNER_ASSIGNED; later stages keep their
        status and only change hands.

        Raises:
            OrderValidationError: blank partner id
            OrderNotFoundError: unknown order
            InvalidTransitionError: order already finished
        """
        if not partner_id or not partner_id.strip():
            raise OrderValidationError("partner_id is required", field="partner_id")
        partner_id = partner_id.strip()

        current = self.get_order(order_id)
        if is_terminal(current.status):
            raise InvalidTransitionError(
                f"Cannot assign a partner to {current.status.value} order {current.order_number}",
                current_status=current.status,
            )
        if current.partner_id == partner_id:
            return current

        updated = current.model_copy(update={"partner_id": partner_id})
        if updated.status == OrderStatus.CREATED:
            updated = apply_transition(updated, OrderStatus.PARTNER_ASSIGNED, now=self.clock())
        self.store.replace(updated)

        publish_order_reassigned(self.event_bus, updated, current.partner_id)
        if updated.status != current.status:
            publish_order_status_changed(
                self.event_bus, updated, current.status, changed_by=UserRole.ADMIN.value
            )
        logger.info(
            f"Order {updated.order_number} assigned to partner {partner_id} "
            f"(was {current.partner_id or 'unassigned'})"
        )
        return updated

    # Queries

    def get_order(self, order_id: str) -> Order:
        """Get order by ID"""
        order = self.store.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order not found: {order_id}")
        return order

    def list_orders(
        self,
        search: Optional[str] = None,
        status: Optional[OrderStatus] = None,
    ) -> List[Order]:
        """
        Operator listing, most recent first

        Args:
            search: Case-insensitive match on customer name or order number
            status: Only orders in this status
        """
        needle = (search or "").strip().lower()
        orders = []
        for order in self.store.snapshot():
            if status is not None and order.status != status:
                continue
            if needle and needle not in order.customer_name.lower() and needle not in order.order_number.lower():
                continue
            orders.append(order)
        return orders

    def get_customer_orders(self, customer_id: str, active: Optional[bool] = None) -> List[Order]:
        """Orders of one customer; ``active`` splits ongoing from finished"""
        orders = []
        for order in self.store.snapshot():
            if order.customer_id != customer_id:
                continue
            if active is not None and active == is_terminal(order.status):
                continue
            orders.append(order)
        return orders

    def get_partner_tasks(self, partner_id: str) -> List[Order]:
        """Unfinished orders assigned to a partner"""
        return [
            order for order in self.store.snapshot()
            if order.partner_id == partner_id and not is_terminal(order.status)
        ]

    # Validation Methods

    def _validate_order_create_request(self, request: OrderCreateRequest) -> None:
        """Validate order creation request"""
        if not request.customer_phone or not request.customer_phone.strip():
            raise OrderValidationError("customer_phone is required", field="customer_phone")

        if request.payment_status not in BOOKING_PAYMENT_STATUSES:
            raise OrderValidationError(
                f"payment_status must be PENDING or COD at booking, got {request.payment_status.value}",
                field="payment_status",
            )

        if request.total_amount is None and price_for(request.service_type) <= 0:
            raise OrderValidationError(
                f"No catalog price for {request.service_type.value}", field="service_type"
            )

        if request.partner_id is not None and not request.partner_id.strip():
            raise OrderValidationError("partner_id must not be blank", field="partner_id")
