"""
Root conftest.py - Global configuration for all test layers.

Test Layers:
    - component/  : Component tests (service and views with in-memory collaborators)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys

import pytest

# Set testing environment BEFORE any project imports
os.environ.setdefault("ENV", "testing")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (pure logic, no I/O)"
    )
    config.addinivalue_line(
        "markers", "component: marks tests as component tests (in-memory collaborators)"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests that draw many tracking codes"
    )


@pytest.fixture
def factory():
    """Order test data factory"""
    from tests.contracts.order.data_contract import OrderTestDataFactory
    return OrderTestDataFactory
