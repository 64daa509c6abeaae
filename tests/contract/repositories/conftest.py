"""Fixtures for repository contract tests.

Each backend yields a namespace with ``orders`` and ``users`` repositories
sharing one store, so cross-aggregate behavior is exercised the same way.
"""

from __future__ import annotations

from collections.abc import Iterator
from types import SimpleNamespace

import pytest

from orderdesk.adapters.repositories import (
    InMemoryData,
    InMemoryOrderRepository,
    InMemoryUserRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyUserRepository,
)


@pytest.fixture(params=["memory", "sqlite"])
def repos(request: pytest.FixtureRequest, sqlite_engine_memory) -> Iterator[SimpleNamespace]:
    match request.param:
        case "memory":
            data = InMemoryData()
            yield SimpleNamespace(
                orders=InMemoryOrderRepository(data), users=InMemoryUserRepository(data)
            )
        case "sqlite":
            with sqlite_engine_memory.connect() as connection:
                yield SimpleNamespace(
                    orders=SqlAlchemyOrderRepository(connection),
                    users=SqlAlchemyUserRepository(connection),
                )
                connection.rollback()
        case _:
            raise ValueError(f"unknown repository backend: {request.param}")
