"""
Service catalog and status labels.
"""

from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel

from .models import OrderStatus, ServiceType


class ServiceOffering(BaseModel):
    """A bookable laundry service"""
    id: str
    name: ServiceType
    price: Decimal


SERVICES_CATALOG: List[ServiceOffering] = [
    ServiceOffering(id="wash_fold", name=ServiceType.WASH_FOLD, price=Decimal("49")),
    ServiceOffering(id="wash_iron", name=ServiceType.WASH_IRON, price=Decimal("69")),
    ServiceOffering(id="quick_service", name=ServiceType.QUICK_SERVICE, price=Decimal("89")),
    ServiceOffering(id="steam_iron", name=ServiceType.STEAM_IRON, price=Decimal("29")),
    ServiceOffering(id="dry_clean", name=ServiceType.DRY_CLEAN, price=Decimal("149")),
    ServiceOffering(id="shoe_wash", name=ServiceType.SHOE_WASH, price=Decimal("199")),
    ServiceOffering(id="blanket", name=ServiceType.BLANKET_CLEANING, price=Decimal("299")),
    ServiceOffering(id="express", name=ServiceType.EXPRESS, price=Decimal("99")),
]

STATUS_LABELS: Dict[OrderStatus, str] = {
    OrderStatus.CREATED: "Order Created",
    OrderStatus.PARTNER_ASSIGNED: "Partner Assigned",
    OrderStatus.PICKED_UP: "Picked Up",
    OrderStatus.IN_PROCESSING: "Processing",
    OrderStatus.READY: "Ready",
    OrderStatus.OUT_FOR_DELIVERY: "Out for Delivery",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELLED: "Cancelled",
}


def price_for(service_type: ServiceType) -> Decimal:
    """Catalog price of a service; zero for services not in the catalog"""
    for offering in SERVICES_CATALOG:
        if offering.name == service_type:
            return offering.price
    return Decimal("0")


def status_label(status: OrderStatus) -> str:
    return STATUS_LABELS.get(status, status.value)
