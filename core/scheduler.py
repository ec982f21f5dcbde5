"""
Callback Schedulers

Deferred callbacks for the view layer (notification expiry, gesture settle).
Nothing here sleeps: callers get a handle they can cancel.

- AsyncioScheduler: runs callbacks on an asyncio event loop
- ManualScheduler: virtual clock advanced explicitly (simulations, tests)
"""

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple


class ScheduledHandle(Protocol):
    """Handle returned by ``call_later``"""

    def cancel(self) -> None:
        ...


class SchedulerProtocol(Protocol):
    """Interface for deferred callbacks"""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledHandle:
        """Run ``callback`` once after ``delay`` seconds"""
        ...


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop"""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        # Without an explicit loop this must be called from inside a running one
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(0.0, delay), callback)


class _ManualHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual-clock scheduler.

    Callbacks run only when ``advance`` moves the clock past their due time,
    in due-time order (ties in scheduling order).
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, _ManualHandle, Callable[[], None]]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle()
        due = self.now + max(0.0, delay)
        heapq.heappush(self._queue, (due, next(self._seq), handle, callback))
        return handle

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and run every callback that fell due.

        Returns:
            Number of callbacks run
        """
        target = self.now + max(0.0, seconds)
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            self.now = due
            if handle.cancelled:
                continue
            callback()
            ran += 1
        self.now = target
        return ran

    @property
    def pending(self) -> int:
        """Callbacks still waiting (cancelled ones excluded)"""
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)
