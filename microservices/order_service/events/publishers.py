"""
Order Service Event Publishers

Functions to publish events from order service
"""

import logging
from typing import Optional

from core.event_bus import Event, EventType, ServiceSource
from ..models import Order, OrderStatus
from .models import (
    OrderCreatedEvent,
    OrderStatusChangedEvent,
    OrderCancelledEvent,
    OrderDeliveredEvent,
    OrderReassignedEvent,
)

logger = logging.getLogger(__name__)


def _publish(event_bus, event_type: EventType, data: dict, order_number: str) -> bool:
    if not event_bus:
        logger.debug(f"Event bus not available, skipping {event_type.value} event")
        return False

    try:
        event = Event(
            event_type=event_type,
            source=ServiceSource.ORDER_SERVICE,
            data=data,
            subject=order_number,
        )
        event_bus.publish_event(event)
        logger.info(f"✅ Published {event_type.value} event for order {order_number}")
        return True

    except Exception as e:
        logger.error(f"❌ Failed to publish {event_type.value} event: {e}")
        return False


def publish_order_created(event_bus, order: Order) -> bool:
    """Publish order.created event"""
    event_data = OrderCreatedEvent(
        order_id=order.id,
        order_number=order.order_number,
        customer_id=order.customer_id,
        service_type=order.service_type.value,
        status=order.status.value,
        total_amount=float(order.total_amount),
        payment_status=order.payment_status.value,
        partner_id=order.partner_id,
    )
    return _publish(
        event_bus, EventType.ORDER_CREATED, event_data.model_dump(mode='json'), order.order_number
    )


def publish_order_status_changed(
    event_bus,
    order: Order,
    old_status: OrderStatus,
    changed_by: str,
    override: bool = False,
) -> bool:
    """Publish order.status_changed event"""
    event_data = OrderStatusChangedEvent(
        order_id=order.id,
        order_number=order.order_number,
        old_status=old_status.value,
        new_status=order.status.value,
        changed_by=changed_by,
        override=override,
    )
    return _publish(
        event_bus, EventType.ORDER_STATUS_CHANGED, event_data.model_dump(mode='json'), order.order_number
    )


def publish_order_cancelled(event_bus, order: Order, previous_status: OrderStatus) -> bool:
    """Publish order.cancelled event"""
    event_data = OrderCancelledEvent(
        order_id=order.id,
        order_number=order.order_number,
        customer_id=order.customer_id,
        previous_status=previous_status.value,
        partner_id=order.partner_id,
    )
    return _publish(
        event_bus, EventType.ORDER_CANCELLED, event_data.model_dump(mode='json'), order.order_number
    )


def publish_order_delivered(event_bus, order: Order) -> bool:
    """Publish order.delivered event"""
    if order.actual_delivery_time is None:
        logger.warning(f"Order {order.order_number} has no delivery time, skipping order.delivered event")
        return False
    event_data = OrderDeliveredEvent(
        order_id=order.id,
        order_number=order.order_number,
        customer_id=order.customer_id,
        total_amount=float(order.total_amount),
        payment_status=order.payment_status.value,
        delivered_at=order.actual_delivery_time,
    )
    return _publish(
        event_bus, EventType.ORDER_DELIVERED, event_data.model_dump(mode='json'), order.order_number
    )


def publish_order_reassigned(event_bus, order: Order, old_partner_id: Optional[str]) -> bool:
    """Publish order.reassigned event"""
    event_data = OrderReassignedEvent(
        order_id=order.id,
        order_number=order.order_number,
        old_partner_id=old_partner_id,
        new_partner_id=order.partner_id or "",
    )
    return _publish(
        event_bus, EventType.ORDER_REASSIGNED, event_data.model_dump(mode='json'), order.order_number
    )
