"""
Order Service Contracts

Test data contract for the laundry order engine.
"""

from .data_contract import OrderTestDataFactory

__all__ = [
    "OrderTestDataFactory",
]
