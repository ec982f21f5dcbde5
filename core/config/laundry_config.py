#!/usr/bin/env python3
"""Laundry order engine configuration

Tunables for tracking codes, view notifications and the partner
commit gesture. Every value can be overridden from the environment.
"""
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_TRACKING_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class LaundryConfig:
    """Order lifecycle engine settings"""

    # ===========================================
    # Tracking codes (e.g. LP-7KQ2MX)
    # ===========================================
    tracking_prefix: str = "LP-"
    tracking_code_length: int = 6
    tracking_alphabet: str = DEFAULT_TRACKING_ALPHABET
    tracking_max_attempts: int = 1_000_000

    # ===========================================
    # Views
    # ===========================================
    notification_ttl_seconds: float = 5.0
    commit_settle_seconds: float = 1.2
    commit_threshold: float = 220.0

    # ===========================================
    # Orders
    # ===========================================
    # New bookings are handed to this partner straight away; empty disables it
    default_partner_id: Optional[str] = "p1"

    # ===========================================
    # Persistence stub
    # ===========================================
    order_store_path: str = ""
    seed_demo_orders: bool = True

    @classmethod
    def from_env(cls) -> 'LaundryConfig':
        """Load laundry configuration from environment variables"""
        return cls(
            tracking_prefix=os.getenv("TRACKING_PREFIX", "LP-"),
            tracking_code_length=_int(os.getenv("TRACKING_CODE_LENGTH", "6"), 6),
            tracking_alphabet=os.getenv("TRACKING_ALPHABET") or DEFAULT_TRACKING_ALPHABET,
            tracking_max_attempts=_int(os.getenv("TRACKING_MAX_ATTEMPTS", ""), 1_000_000),

            notification_ttl_seconds=_float(os.getenv("NOTIFICATION_TTL_SECONDS", ""), 5.0),
            commit_settle_seconds=_float(os.getenv("COMMIT_SETTLE_SECONDS", ""), 1.2),
            commit_threshold=_float(os.getenv("COMMIT_THRESHOLD", ""), 220.0),

            default_partner_id=os.getenv("DEFAULT_PARTNER_ID", "p1") or None,

            order_store_path=os.getenv("ORDER_STORE_PATH", ""),
            seed_demo_orders=_bool(os.getenv("SEED_DEMO_ORDERS", "true")),
        )
