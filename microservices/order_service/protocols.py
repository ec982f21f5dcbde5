"""
Order Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Callable, Iterable, List, Optional, Protocol, Tuple, runtime_checkable

# Import only models (no I/O dependencies)
from .models import Order, OrderStatus


# ============================================================================
# Custom Exceptions - defined here to avoid importing the store
# ============================================================================

class OrderServiceError(Exception):
    """Base exception for order service errors"""
    pass


class OrderNotFoundError(OrderServiceError):
    """Order not found error"""
    pass


class OrderValidationError(OrderServiceError):
    """Order validation error"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class DuplicateOrderError(OrderServiceError):
    """An order with the same store id already exists"""
    pass


class DuplicateTrackingIdError(OrderServiceError):
    """Tracking code already used by another order"""

    def __init__(self, order_number: str):
        super().__init__(f"Tracking code already in use: {order_number}")
        self.order_number = order_number


class TrackingIdExhaustedError(OrderServiceError):
    """No free tracking code found within the attempt budget"""
    pass


class InvalidTransitionError(OrderServiceError):
    """Requested status is neither the next stage nor a legal cancellation"""

    def __init__(
        self,
        message: str,
        current_status: Optional[OrderStatus] = None,
        requested_status: Optional[OrderStatus] = None,
    ):
        super().__init__(message)
        self.current_status = current_status
        self.requested_status = requested_status


class IncompleteInputError(OrderServiceError):
    """Inputs required by a transition are missing or invalid"""

    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


# ============================================================================
# Store Protocol
# ============================================================================

StoreListener = Callable[[Tuple[Order, ...]], None]


@runtime_checkable
class OrderStoreProtocol(Protocol):
    """
    Interface for the Order Store.

    Implementations must provide these methods.
    Used for dependency injection to enable testing.
    """

    def insert(self, order: Order) -> Order:
        """Add a new order"""
        ...

    def replace(self, order: Order) -> bool:
        """Replace the order with the same id; False when unknown"""
        ...

    def get(self, order_id: str) -> Optional[Order]:
        """Get order by id"""
        ...

    def snapshot(self) -> Tuple[Order, ...]:
        """Current collection, most recent first"""
        ...

    def has_order_number(self, order_number: str) -> bool:
        """Whether a tracking code is in use"""
        ...

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener; returns an unsubscribe callable"""
        ...


# ============================================================================
# Event Bus Protocol
# ============================================================================

@runtime_checkable
class EventBusProtocol(Protocol):
    """Interface for Event Bus - no I/O imports"""

    def publish_event(self, event: Any) -> None:
        """Publish an event"""
        ...


# ============================================================================
# Persistence Protocol
# ============================================================================

@runtime_checkable
class OrderMirrorProtocol(Protocol):
    """Interface for whatever keeps a copy of the store across restarts"""

    def load(self) -> Optional[List[Order]]:
        """Saved orders, or None when nothing was saved"""
        ...

    def save(self, orders: Iterable[Order]) -> None:
        """Persist the full collection"""
        ...
