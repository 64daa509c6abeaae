"""Aggregates package.


All aggregates are defined in this package and inherit from the base `Aggregate`
class in `base.py`. They are re-exported here to provide a single, convenient
import path.
"""

from .base import Aggregate
from .order import Order, OrderStatus
from .user import User, UserStatus

__all__ = ["Aggregate", "Order", "OrderStatus", "User", "UserStatus"]
