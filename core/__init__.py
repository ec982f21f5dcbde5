#!/usr/bin/env python3
"""
Core Module for the Laundry Order Engine

Shared infrastructure used by the order service.

COMPONENTS:
    - config/: Environment-driven configuration (dotenv + dataclasses)
    - logger.py: Service logger setup
    - event_bus.py: In-process domain event bus
    - scheduler.py: Deferred callbacks (asyncio loop or manual clock)

USAGE:
    from core.config import get_laundry_config
    from core.event_bus import InMemoryEventBus

    config = get_laundry_config()
    bus = InMemoryEventBus("order_service")
"""

from .event_bus import Event, EventType, InMemoryEventBus, ServiceSource
from .scheduler import AsyncioScheduler, ManualScheduler

# Export public API
__all__ = [
    "Event",
    "EventType",
    "InMemoryEventBus",
    "ServiceSource",
    "AsyncioScheduler",
    "ManualScheduler",
]

__version__ = "0.1.0"
