"""Unit of Work interface for ORDERDESK.

Defines the AbstractUnitOfWork contract: a context-managed unit of work
exposing the repositories and the event store, with abstract commit/rollback.
"""

from __future__ import annotations

import abc

from .eventstore import EventStore
from .repositories import OrderRepository, UserRepository


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work."""

    orders: OrderRepository
    users: UserRepository
    eventstore: EventStore

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here.
        """
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back on exit; a committed unit has nothing
        left to roll back.
        """
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction."""

    @abc.abstractmethod
    def rollback(self):
        """Revert changes and clean up transactional resources."""
