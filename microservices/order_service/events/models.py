"""
Order Service Event Models

Pydantic models for events published by order service
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderCreatedEvent(BaseModel):
    """Event published when order is created"""
    order_id: str
    order_number: str
    customer_id: str
    service_type: str
    status: str
    total_amount: float
    payment_status: str
    partner_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)


class OrderStatusChangedEvent(BaseModel):
    """Event published on every status change"""
    order_id: str
    order_number: str
    old_status: str
    new_status: str
    changed_by: str
    override: bool = False
    timestamp: datetime = Field(default_factory=_utcnow)


class OrderCancelledEvent(BaseModel):
    """Event published when order is cancelled"""
    order_id: str
    order_number: str
    customer_id: str
    previous_status: str
    partner_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)


class OrderDeliveredEvent(BaseModel):
    """Event published when order reaches the customer"""
    order_id: str
    order_number: str
    customer_id: str
    total_amount: float
    payment_status: str
    delivered_at: datetime
    timestamp: datetime = Field(default_factory=_utcnow)


class OrderReassignedEvent(BaseModel):
    """Event published when an order moves to another partner"""
    order_id: str
    order_number: str
    old_partner_id: Optional[str] = None
    new_partner_id: str
    timestamp: datetime = Field(default_factory=_utcnow)
