"""Fixtures for EventStore contract tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from orderdesk.adapters.eventstore.in_memory_adapters import InMemoryEventStore
from orderdesk.adapters.eventstore.sqlalchemy_adapters import SqlAlchemyEventStore
from orderdesk.interfaces.eventstore import EventStore


@pytest.fixture(params=["memory", "sqlite"])
def eventstore(request: pytest.FixtureRequest, sqlite_engine_memory) -> Iterator[EventStore]:
    """Yield a fresh event store for each backend.

    - ``"memory"``: `InMemoryEventStore`
    - ``"sqlite"``: `SqlAlchemyEventStore` on an in-memory SQLite connection,
      rolled back afterwards.
    """
    match request.param:
        case "memory":
            yield InMemoryEventStore()
        case "sqlite":
            with sqlite_engine_memory.connect() as connection:
                yield SqlAlchemyEventStore(connection)
                connection.rollback()
        case _:
            raise ValueError(f"unknown store type: {request.param}")
