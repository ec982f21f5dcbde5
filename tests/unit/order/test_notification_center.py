"""
Unit Tests for View Notifications and the Manual Scheduler
"""

import pytest

from core.scheduler import ManualScheduler
from microservices.order_service.change_detection import ChangeKind
from microservices.order_service.notifications import NotificationCenter

pytestmark = [pytest.mark.unit]


class TestNotificationCenter:

    def test_expires_after_ttl(self, scheduler):
        center = NotificationCenter(scheduler, ttl_seconds=5.0)

        notification = center.push(ChangeKind.NEWLY_VISIBLE, "ord_1", "New task assigned: LP-AB23CD")

        assert notification.notification_id.startswith("ntf_")
        assert center.latest == notification
        scheduler.advance(4.9)
        assert center.active == [notification]
        scheduler.advance(0.2)
        assert center.active == []

    def test_each_notification_has_its_own_timer(self, scheduler):
        center = NotificationCenter(scheduler, ttl_seconds=5.0)
        first = center.push(ChangeKind.NEWLY_VISIBLE, "ord_1", "first")
        scheduler.advance(3)
        second = center.push(ChangeKind.STATUS_CHANGED, "ord_2", "second")

        scheduler.advance(2)

        assert center.active == [second]
        assert first not in center.active

    def test_dismiss(self, scheduler):
        center = NotificationCenter(scheduler)
        notification = center.push(ChangeKind.NO_LONGER_VISIBLE, "ord_1", "gone")

        assert center.dismiss(notification.notification_id)
        assert not center.dismiss(notification.notification_id)
        assert scheduler.pending == 0

    def test_clear(self, scheduler):
        center = NotificationCenter(scheduler)
        center.push(ChangeKind.NEWLY_VISIBLE, "ord_1", "a")
        center.push(ChangeKind.NEWLY_VISIBLE, "ord_2", "b")

        center.clear()

        assert center.active == []
        assert center.latest is None
        assert scheduler.pending == 0


class TestManualScheduler:

    def test_runs_in_due_order(self):
        scheduler = ManualScheduler()
        calls = []
        scheduler.call_later(2, lambda: calls.append("late"))
        scheduler.call_later(1, lambda: calls.append("early"))
        scheduler.call_later(1, lambda: calls.append("early-second"))

        assert scheduler.advance(2) == 3
        assert calls == ["early", "early-second", "late"]
        assert scheduler.now == 2

    def test_cancelled_callbacks_are_skipped(self):
        scheduler = ManualScheduler()
        calls = []
        handle = scheduler.call_later(1, lambda: calls.append("x"))

        handle.cancel()

        assert scheduler.pending == 0
        assert scheduler.advance(5) == 0
        assert calls == []

    def test_callbacks_scheduled_while_advancing(self):
        scheduler = ManualScheduler()
        calls = []
        scheduler.call_later(1, lambda: scheduler.call_later(1, lambda: calls.append("chained")))

        scheduler.advance(2)

        assert calls == ["chained"]
