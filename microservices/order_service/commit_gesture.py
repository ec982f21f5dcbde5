"""
Commit Gesture Controller

Two-phase "confirm then apply" used by the partner view to advance an order.

    IDLE --drag--> CONFIRMING --release >= threshold--> COMMITTING --settle delay--> SETTLED
                        |
                        +--release < threshold--> IDLE

The commit callback runs as soon as the threshold release is accepted; the
settle delay that follows only gives the acknowledgement time to show before
``on_settled`` returns the view to where it was.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from core.scheduler import ScheduledHandle, SchedulerProtocol

logger = logging.getLogger(__name__)


class GesturePhase(str, Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"
    COMMITTING = "committing"
    SETTLED = "settled"


class CommitGestureController:
    """Swipe-to-commit state machine, independent of the input device"""

    def __init__(
        self,
        scheduler: SchedulerProtocol,
        on_commit: Callable[[], None],
        on_settled: Optional[Callable[[], None]] = None,
        gate: Optional[Callable[[], bool]] = None,
        threshold: float = 220.0,
        settle_seconds: float = 1.2,
    ):
        if threshold <= 0:
            raise ValueError("threshold must be positive")
        self.scheduler = scheduler
        self.on_commit = on_commit
        self.on_settled = on_settled
        self.gate = gate
        self.threshold = threshold
        self.settle_seconds = settle_seconds

        self.phase = GesturePhase.IDLE
        self.position = 0.0
        self.order_id: Optional[str] = None
        self.label: Optional[str] = None
        self._settle_handle: Optional[ScheduledHandle] = None

    # -------------------- binding --------------------

    def bind(self, order_id: Optional[str], label: Optional[str]) -> None:
        """Attach to an order/target; any change resets the gesture"""
        if order_id == self.order_id and label == self.label:
            return
        self.order_id = order_id
        self.label = label
        self.reset()

    def reset(self) -> None:
        """Back to the uncommitted starting position"""
        if self._settle_handle is not None:
            self._settle_handle.cancel()
            self._settle_handle = None
        self.phase = GesturePhase.IDLE
        self.position = 0.0

    # -------------------- state --------------------

    @property
    def enabled(self) -> bool:
        """False while the bound transition's preconditions are unmet"""
        if self.order_id is None:
            return False
        return self.gate() if self.gate is not None else True

    @property
    def progress(self) -> float:
        return min(1.0, self.position / self.threshold)

    # -------------------- input --------------------

    def drag_to(self, position: float) -> GesturePhase:
        """Continuous input; ignored while disabled or once committed"""
        if self.phase not in (GesturePhase.IDLE, GesturePhase.CONFIRMING):
            return self.phase
        if not self.enabled:
            self.position = 0.0
            return self.phase
        self.position = max(0.0, min(float(position), self.threshold))
        self.phase = GesturePhase.CONFIRMING if self.position > 0 else GesturePhase.IDLE
        return self.phase

    def release(self) -> GesturePhase:
        """
        End the gesture.

        Below the threshold the handle snaps back. At the threshold the
        commit callback runs and the settle callback is scheduled.

        Raises:
            Whatever the commit callback raises; the gesture is reset first
        """
        if self.phase != GesturePhase.CONFIRMING:
            return self.phase
        if self.position < self.threshold or not self.enabled:
            self.reset()
            return self.phase

        self.phase = GesturePhase.COMMITTING
        try:
            self.on_commit()
        except Exception:
            logger.warning(f"Commit for order {self.order_id} ({self.label}) rejected, resetting gesture")
            self.reset()
            raise

        self._settle_handle = self.scheduler.call_later(self.settle_seconds, self._settle)
        return self.phase

    def _settle(self) -> None:
        self._settle_handle = None
        if self.phase != GesturePhase.COMMITTING:
            return
        self.phase = GesturePhase.SETTLED
        if self.on_settled is not None:
            self.on_settled()
