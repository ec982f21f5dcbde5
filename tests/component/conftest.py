"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── order/       Store, service, role views, persistence
    └── mocks/       Mock implementations

Usage:
    pytest tests/component -v
    pytest tests/component/order -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core.config import LaundryConfig
from core.scheduler import ManualScheduler
from microservices.order_service.order_service import OrderService
from microservices.order_service.order_store import OrderStore
from tests.component.mocks import MockEventBus


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def config():
    """Engine settings without auto-assignment or seeding"""
    return LaundryConfig(default_partner_id=None, seed_demo_orders=False)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def store():
    return OrderStore()


@pytest.fixture
def mock_event_bus():
    bus = MockEventBus()
    yield bus
    bus.clear()


@pytest.fixture
def service(store, mock_event_bus, config):
    return OrderService(store=store, event_bus=mock_event_bus, config=config)
