"""Repository ports for the aggregates of ORDERDESK."""

from .errors import AggregateNotFoundError, ConcurrencyConflictError, RepositoryError
from .order_repository import OrderRepository
from .user_repository import UserRepository

__all__ = [
    "AggregateNotFoundError",
    "ConcurrencyConflictError",
    "OrderRepository",
    "RepositoryError",
    "UserRepository",
]
