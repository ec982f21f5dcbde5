"""
Demo orders loaded into an empty store.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from .models import Order, OrderStatus, PaymentStatus, ServiceType


def _at(year: int, month: int, day: int, hour: int, minute: int) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def demo_orders() -> List[Order]:
    """One delivered order and one in progress, both for customer c1"""
    return [
        Order(
            id="o1",
            order_number="#1001",
            customer_id="c1",
            customer_name="Rahul Sharma",
            customer_phone="+91 9123456780",
            address="Flat 402, Sunshine Apts, Mumbai",
            service_type=ServiceType.WASH_FOLD,
            status=OrderStatus.DELIVERED,
            cloth_count=12,
            pickup_time="2023-10-25 10:00 AM",
            actual_pickup_time=_at(2023, 10, 25, 10, 15),
            ready_at_time=_at(2023, 10, 26, 14, 30),
            actual_delivery_time=_at(2023, 10, 27, 18, 0),
            delivery_time="2023-10-27 06:00 PM",
            total_amount=Decimal("588"),
            payment_status=PaymentStatus.COMPLETED,
            partner_id="p1",
            created_at=_at(2023, 10, 25, 8, 30),
        ),
        Order(
            id="o2",
            order_number="#1002",
            customer_id="c1",
            customer_name="Rahul Sharma",
            customer_phone="+91 9123456781",
            address="Flat 402, Sunshine Apts, Mumbai",
            service_type=ServiceType.DRY_CLEAN,
            status=OrderStatus.PICKED_UP,
            cloth_count=5,
            pickup_time="2023-10-26 02:00 PM",
            actual_pickup_time=_at(2023, 10, 26, 14, 10),
            delivery_time="2023-10-29 11:00 AM",
            total_amount=Decimal("745"),
            payment_status=PaymentStatus.PENDING,
            partner_id="p2",
            created_at=_at(2023, 10, 26, 12, 15),
        ),
    ]
