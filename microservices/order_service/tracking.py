"""
Tracking-ID Generator

Human-facing order codes such as ``LP-7KQ2MX``: a fixed prefix plus a
fixed-length draw from an alphabet without the look-alike characters
I, O, 0 and 1. Uniqueness is checked through an injected predicate and
collisions are retried.
"""

import logging
import random
from typing import Callable, Iterable, Optional

from core.config.laundry_config import DEFAULT_TRACKING_ALPHABET

from .models import Order
from .protocols import TrackingIdExhaustedError

logger = logging.getLogger(__name__)


class TrackingIdGenerator:
    """Draws tracking codes until one is free"""

    def __init__(
        self,
        prefix: str = "LP-",
        alphabet: str = DEFAULT_TRACKING_ALPHABET,
        length: int = 6,
        max_attempts: int = 1_000_000,
        rng: Optional[random.Random] = None,
    ):
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        if length < 1:
            raise ValueError("length must be positive")
        self.prefix = prefix
        self.alphabet = alphabet
        self.length = length
        self.max_attempts = max_attempts
        self._rng = rng or random.SystemRandom()

    @property
    def space_size(self) -> int:
        """Number of distinct codes this generator can produce"""
        return len(self.alphabet) ** self.length

    def draw(self) -> str:
        """One candidate code, not checked for uniqueness"""
        body = "".join(self._rng.choice(self.alphabet) for _ in range(self.length))
        return f"{self.prefix}{body}"

    def generate(self, is_taken: Callable[[str], bool]) -> str:
        """
        Draw until ``is_taken`` rejects nothing.

        Args:
            is_taken: Returns True when a code is already in use

        Raises:
            TrackingIdExhaustedError: max_attempts draws all collided
        """
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.draw()
            if not is_taken(candidate):
                return candidate
            logger.debug(f"Tracking code collision on {candidate} (attempt {attempt})")
        raise TrackingIdExhaustedError(
            f"No free tracking code after {self.max_attempts} attempts"
        )

    def generate_for(self, existing_orders: Iterable[Order]) -> str:
        """Code unique against every order_number in ``existing_orders``"""
        taken = {order.order_number for order in existing_orders}
        return self.generate(taken.__contains__)
