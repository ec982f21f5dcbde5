"""
Unit Test Layer Configuration

Structure:
    tests/unit/
    └── order/       Lifecycle, tracking codes, diffing, gesture, models

Usage:
    pytest tests/unit -v                 # All unit tests
    pytest tests/unit -m unit -v         # By marker
"""
import os
import sys

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core.scheduler import ManualScheduler


@pytest.fixture
def scheduler():
    """Virtual clock; advance() runs due callbacks"""
    return ManualScheduler()
