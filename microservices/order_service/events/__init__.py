"""
Order Service Events Module

Exports all event-related functionality for order service
"""

from .models import (
    OrderCreatedEvent,
    OrderStatusChangedEvent,
    OrderCancelledEvent,
    OrderDeliveredEvent,
    OrderReassignedEvent,
)

from .publishers import (
    publish_order_created,
    publish_order_status_changed,
    publish_order_cancelled,
    publish_order_delivered,
    publish_order_reassigned,
)

__all__ = [
    # Event Models
    "OrderCreatedEvent",
    "OrderStatusChangedEvent",
    "OrderCancelledEvent",
    "OrderDeliveredEvent",
    "OrderReassignedEvent",
    # Publishers
    "publish_order_created",
    "publish_order_status_changed",
    "publish_order_cancelled",
    "publish_order_delivered",
    "publish_order_reassigned",
]
