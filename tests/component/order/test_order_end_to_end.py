"""
End-to-End Order Journey

A booking travels from the customer app through operator assignment and
every partner stage until delivery, with all three views attached.
"""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from core.event_bus import InMemoryEventBus
from core.scheduler import ManualScheduler
from microservices.order_service.lifecycle import FORWARD_SEQUENCE
from microservices.order_service.models import OrderStatus, PaymentStatus, ServiceType
from microservices.order_service.order_service import OrderService
from microservices.order_service.order_store import OrderStore
from microservices.order_service.views import LIST_SCREEN, CustomerView, OperatorView, PartnerView

pytestmark = [pytest.mark.component]


def test_wash_and_fold_journey(config):
    scheduler = ManualScheduler()
    bus = InMemoryEventBus()
    history = []
    bus.subscribe_to_events("order.status_changed", lambda event: history.append(event.data["new_status"]))
    service = OrderService(store=OrderStore(), event_bus=bus, config=config)

    pickup_at = datetime.now(timezone.utc).replace(microsecond=0) - timedelta(minutes=20)
    operator = OperatorView(service, scheduler)
    customer = CustomerView(service, scheduler, "c1", "Rahul Sharma", "+91 9123456780")
    partner = PartnerView(service, scheduler, "p1")

    # customer books
    order = customer.book(ServiceType.WASH_FOLD)
    assert order.total_amount == Decimal("49")
    assert order.status == OrderStatus.CREATED
    assert operator.notifications.latest.message == f"New order {order.order_number} received."

    # operator assigns
    operator.assign(order.id, "p1")
    assert partner.notifications.latest.message == f"New task assigned: {order.order_number}"

    # partner collects
    partner.open(order.id)
    partner.set_pickup_details(cloth_count=12, blanket_count=0, actual_pickup_time=pickup_at)
    partner.swipe(220)
    picked_up = service.get_order(order.id)
    assert picked_up.status == OrderStatus.PICKED_UP
    assert picked_up.actual_pickup_time == pickup_at
    assert picked_up.cloth_count == 12
    assert customer.notifications.latest.message == f"Order {order.order_number} is now Picked Up."
    scheduler.advance(1.2)

    # processing and ready
    partner.swipe(220)
    scheduler.advance(1.2)
    assert service.get_order(order.id).ready_at_time is None
    partner.swipe(220)
    ready = service.get_order(order.id)
    assert ready.status == OrderStatus.READY
    assert ready.ready_at_time is not None
    scheduler.advance(1.2)

    # out for delivery and delivered
    partner.swipe(220)
    scheduler.advance(1.2)
    partner.swipe(220)
    delivered = service.get_order(order.id)
    assert delivered.status == OrderStatus.DELIVERED
    assert delivered.actual_delivery_time is not None
    assert delivered.payment_status == PaymentStatus.COMPLETED

    scheduler.advance(1.2)
    assert partner.screen == LIST_SCREEN
    assert partner.tasks == []
    assert [o.id for o in customer.past_orders] == [order.id]
    assert tuple(OrderStatus(s) for s in history) == FORWARD_SEQUENCE[1:]

    scheduler.advance(5)
    for view in (operator, customer, partner):
        assert view.notifications.active == []
        view.close()
