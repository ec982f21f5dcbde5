"""
Order Service Data Models

Pydantic models for laundry orders, their lifecycle enums and request payloads.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum


class OrderStatus(str, Enum):
    """Order status enumeration (forward order, CANCELLED last)"""
    CREATED = "CREATED"
    PARTNER_ASSIGNED = "PARTNER_ASSIGNED"
    PICKED_UP = "PICKED_UP"
    IN_PROCESSING = "IN_PROCESSING"
    READY = "READY"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class ServiceType(str, Enum):
    """Laundry service offered"""
    WASH_FOLD = "Wash & Fold"
    WASH_IRON = "Wash & Iron"
    DRY_CLEAN = "Dry Clean"
    SHOE_WASH = "Shoe Wash"
    BLANKET_CLEANING = "Blanket Cleaning"
    EXPRESS = "Express Service"
    QUICK_SERVICE = "Quick Service"
    STEAM_IRON = "Steam Iron"


class PaymentStatus(str, Enum):
    """Payment status enumeration"""
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    COD = "COD"


class UserRole(str, Enum):
    """Actor viewing the shared order collection"""
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"
    PARTNER = "PARTNER"


# Core Order Model

class Order(BaseModel):
    """
    Core order model.

    Records are immutable; every change produces a new instance that
    replaces the old one in the store.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    order_number: str
    customer_id: str
    customer_name: str
    customer_phone: str
    address: str = "Store Pickup"
    service_type: ServiceType
    status: OrderStatus
    cloth_count: Optional[int] = Field(None, ge=0)
    blanket_count: Optional[int] = Field(None, ge=0)
    pickup_time: str
    actual_pickup_time: Optional[datetime] = None
    ready_at_time: Optional[datetime] = None
    actual_delivery_time: Optional[datetime] = None
    delivery_time: str
    total_amount: Decimal = Field(..., ge=0)
    payment_status: PaymentStatus
    partner_id: Optional[str] = None
    created_at: datetime
    notes: Optional[str] = None


# Request Models

class OrderCreateRequest(BaseModel):
    """Create order request (customer booking)"""
    customer_id: str = Field(..., description="Customer placing the order")
    customer_name: str = Field(..., description="Customer display name")
    customer_phone: str = Field(..., description="Mobile number or email used to reach the customer")
    service_type: ServiceType = Field(..., description="Laundry service booked")
    address: str = Field(default="Store Pickup", description="Pickup and delivery address")
    total_amount: Optional[Decimal] = Field(None, ge=0, description="Price; catalog price when omitted")
    payment_status: PaymentStatus = Field(default=PaymentStatus.PENDING, description="PENDING or COD at booking")
    partner_id: Optional[str] = Field(None, description="Partner to assign immediately")
    pickup_time: str = Field(default="Tomorrow, 10:00 AM", description="Scheduled pickup estimate")
    delivery_time: str = Field(default="2 Days later, 06:00 PM", description="Scheduled delivery estimate")
    notes: Optional[str] = Field(None, description="Free-text instructions")

    @field_validator('customer_id', 'customer_name')
    @classmethod
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('must not be empty')
        return v.strip()


class PickupDetails(BaseModel):
    """Inputs the partner supplies when collecting an order"""
    cloth_count: Optional[int] = None
    blanket_count: Optional[int] = None
    actual_pickup_time: Optional[datetime] = None
