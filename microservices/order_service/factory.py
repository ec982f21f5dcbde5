"""
Order Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that touches the order file on disk.

Usage:
    from .factory import create_order_service
    service = create_order_service(config, event_bus)
"""
import logging
from typing import Optional

from core.config import LaundryConfig, get_laundry_config
from core.logger import setup_service_logger

from .order_service import OrderService
from .order_store import OrderStore
from .protocols import EventBusProtocol, OrderMirrorProtocol, OrderStoreProtocol

logger = logging.getLogger(__name__)


def create_order_service(
    config: Optional[LaundryConfig] = None,
    event_bus: Optional[EventBusProtocol] = None,
    store: Optional[OrderStoreProtocol] = None,
    mirror: Optional[OrderMirrorProtocol] = None,
) -> OrderService:
    """
    Create OrderService with real dependencies.

    Without an explicit store one is built from the saved order file
    (ORDER_STORE_PATH), falling back to the demo orders when nothing was
    saved and seeding is enabled. The mirror then follows every write.

    Args:
        config: Engine settings (loaded from env when omitted)
        event_bus: Event bus for publishing events
        store: Pre-built order store; skips loading and mirroring
        mirror: Persistence stub overriding ORDER_STORE_PATH

    Returns:
        Configured OrderService instance
    """
    config = config or get_laundry_config()
    setup_service_logger("microservices.order_service")

    if store is None:
        # Import persistence here (not at module level)
        from .persistence import JsonOrderMirror
        from .seed import demo_orders

        if mirror is None and config.order_store_path:
            mirror = JsonOrderMirror(config.order_store_path)

        orders = mirror.load() if mirror is not None else None
        if orders is None and config.seed_demo_orders:
            orders = demo_orders()
            logger.info(f"Seeded {len(orders)} demo orders")

        store = OrderStore(orders or ())
        if mirror is not None:
            store.subscribe(mirror.save)

    return OrderService(store=store, event_bus=event_bus, config=config)
