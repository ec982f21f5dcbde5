"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace collaborators with observable in-memory versions.
"""

from .nats_mock import MockEventBus

__all__ = [
    'MockEventBus',
]
