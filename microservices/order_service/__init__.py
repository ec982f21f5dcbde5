"""
Order Service

Laundry order lifecycle engine providing:
- Booking with collision-free tracking codes (LP-XXXXXX)
- Lifecycle state machine with per-stage side effects
- Operator, customer and partner views kept in sync through one store
- Swipe-to-commit stage advancement for partners
"""

__version__ = "0.1.0"
__service__ = "order_service"
