"""
In-process Event Bus

Synchronous publish/subscribe for domain events. Subscribers are matched by
fnmatch-style patterns on the event type (``order.*``). There is no network
transport: every handler runs inside the publishing call.
"""

import fnmatch
import json
import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class DecimalEncoder(json.JSONEncoder):
    """Custom JSON encoder that handles Decimal types"""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        return super().default(obj)


class EventType(Enum):
    """Event types published by the order engine"""

    ORDER_CREATED = "order.created"
    ORDER_STATUS_CHANGED = "order.status_changed"
    ORDER_CANCELLED = "order.cancelled"
    ORDER_DELIVERED = "order.delivered"
    ORDER_REASSIGNED = "order.reassigned"


class ServiceSource(Enum):
    """Event sources"""

    ORDER_SERVICE = "order_service"


class Event:
    """Event model"""

    def __init__(
        self,
        event_type: EventType,
        source: ServiceSource,
        data: Dict[str, Any],
        subject: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ):
        self.id = str(uuid.uuid4())
        self.type = event_type.value
        self.source = source.value
        self.data = data
        self.subject = subject
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.metadata = metadata or {}
        self.version = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "source": self.source,
            "subject": self.subject,
            "timestamp": self.timestamp,
            "data": self.data,
            "metadata": self.metadata,
            "version": self.version,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), cls=DecimalEncoder)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        event = cls.__new__(cls)
        event.id = data.get("id")
        event.type = data.get("type")
        event.source = data.get("source")
        event.subject = data.get("subject")
        event.timestamp = data.get("timestamp")
        event.data = data.get("data", {})
        event.metadata = data.get("metadata", {})
        event.version = data.get("version", "1.0.0")
        return event


EventHandler = Callable[[Event], None]


class InMemoryEventBus:
    """
    Synchronous in-process event bus.

    Handler failures are logged and do not reach the publisher, so one
    broken subscriber cannot block the order write path.
    """

    def __init__(self, service_name: str = "order_service"):
        self.service_name = service_name
        self._subscriptions: List[Tuple[str, EventHandler]] = []

    def publish_event(self, event: Event) -> None:
        """Deliver an event to every matching subscriber"""
        matched = 0
        for pattern, handler in list(self._subscriptions):
            if not fnmatch.fnmatch(event.type, pattern):
                continue
            matched += 1
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Handler for {pattern} failed on {event.type}: {e}")
        logger.debug(f"Published {event.type} to {matched} subscriber(s)")

    def subscribe_to_events(self, pattern: str, handler: EventHandler) -> Callable[[], None]:
        """
        Subscribe to events whose type matches ``pattern``.

        Returns:
            Callable that removes the subscription
        """
        entry = (pattern, handler)
        self._subscriptions.append(entry)
        logger.debug(f"Subscribed to {pattern}")

        def unsubscribe() -> None:
            if entry in self._subscriptions:
                self._subscriptions.remove(entry)

        return unsubscribe

    def close(self) -> None:
        """Drop all subscriptions"""
        self._subscriptions.clear()
