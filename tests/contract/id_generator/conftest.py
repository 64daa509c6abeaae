"""Fixtures for id_generator contract tests."""

from collections.abc import Iterable

import pytest

from orderdesk.adapters.id_generators import SimpleIdGenerator, ULIDGenerator
from orderdesk.interfaces.id_generator import IdGenerator


@pytest.fixture(params=["ulid", "simple"])
def id_generator(request: pytest.FixtureRequest) -> Iterable[IdGenerator]:
    """Yield a brand-new IdGenerator for each backend."""
    match request.param:
        case "ulid":
            yield ULIDGenerator()
        case "simple":
            yield SimpleIdGenerator()
        case _:
            raise ValueError(f"unknown id generator type: {request.param}")


@pytest.fixture
def monotonic_id_generator() -> IdGenerator:
    """An IdGenerator whose ids sort in creation order."""
    return ULIDGenerator()
