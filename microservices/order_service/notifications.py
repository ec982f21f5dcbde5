"""
View Notifications

Transient alerts raised by a role view. Each notification expires on its own
after a fixed interval; expiry only hides the alert, it never touches orders.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.scheduler import ScheduledHandle, SchedulerProtocol

from .change_detection import ChangeKind

logger = logging.getLogger(__name__)


class Notification(BaseModel):
    """A transient, view-level alert"""
    model_config = ConfigDict(frozen=True)

    notification_id: str = Field(default_factory=lambda: f"ntf_{uuid.uuid4().hex[:12]}")
    kind: ChangeKind
    order_id: str
    message: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationCenter:
    """Holds the active notifications of one view"""

    def __init__(self, scheduler: SchedulerProtocol, ttl_seconds: float = 5.0):
        self.scheduler = scheduler
        self.ttl_seconds = ttl_seconds
        self._active: List[Notification] = []
        self._timers: Dict[str, ScheduledHandle] = {}

    @property
    def active(self) -> List[Notification]:
        return list(self._active)

    @property
    def latest(self) -> Optional[Notification]:
        return self._active[-1] if self._active else None

    def push(self, kind: ChangeKind, order_id: str, message: str) -> Notification:
        """Raise a notification and schedule its expiry"""
        notification = Notification(kind=kind, order_id=order_id, message=message)
        self._active.append(notification)
        self._timers[notification.notification_id] = self.scheduler.call_later(
            self.ttl_seconds,
            lambda: self._expire(notification.notification_id),
        )
        logger.info(f"Notification [{kind.value}] {message}")
        return notification

    def dismiss(self, notification_id: str) -> bool:
        """Remove a notification before it expires"""
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()
        return self._remove(notification_id)

    def clear(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._active.clear()

    def _expire(self, notification_id: str) -> None:
        self._timers.pop(notification_id, None)
        self._remove(notification_id)

    def _remove(self, notification_id: str) -> bool:
        before = len(self._active)
        self._active = [n for n in self._active if n.notification_id != notification_id]
        return len(self._active) != before
