"""Unit of Work implementations for ORDERDESK.

- `SqlAlchemyUnitOfWork`: one Connection (and transaction) per `with` block,
  shared by the repositories and the event store.
- `InMemoryUnitOfWork`: stages changes on a copy of its data and swaps it in
  on commit.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

from orderdesk.adapters.eventstore.sqlalchemy_adapters import SqlAlchemyEventStore
from orderdesk.adapters.repositories import (
    InMemoryData,
    InMemoryOrderRepository,
    InMemoryUserRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyUserRepository,
)
from orderdesk.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.connection: Connection

    def __enter__(self):
        self.connection = self.engine.connect()
        self.orders = SqlAlchemyOrderRepository(self.connection)
        self.users = SqlAlchemyUserRepository(self.connection)
        self.eventstore = SqlAlchemyEventStore(self.connection)
        return super().__enter__()

    def __exit__(self, *args):
        super().__exit__(*args)
        self.connection.close()

    def commit(self):
        self.connection.commit()
        logger.debug("Committed unit of work")

    def rollback(self):
        self.connection.rollback()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """In-memory Unit of Work for tests and ephemeral use.

    Args:
        data: The committed state; a fresh empty store if omitted.
    """

    def __init__(self, data: InMemoryData | None = None):
        self.data = data if data is not None else InMemoryData()
        self._staged = self._stage()

    def __enter__(self):
        self._staged = self._stage()
        return super().__enter__()

    def _stage(self) -> InMemoryData:
        staged = copy.deepcopy(self.data)
        self.orders = InMemoryOrderRepository(staged)
        self.users = InMemoryUserRepository(staged)
        self.eventstore = staged.eventstore
        return staged

    def commit(self):
        self.data = self._staged
        self._staged = self._stage()
        logger.debug("Committed unit of work")

    def rollback(self):
        self._staged = self._stage()
