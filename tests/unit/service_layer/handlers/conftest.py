"""Fixtures for the command handler tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from .fakes import FakeUoW, bootstrap_test_bus

if TYPE_CHECKING:
    from orderdesk.service_layer.messagebus import MessageBus


@pytest.fixture
def make_test_bus() -> Callable[[], MessageBus]:
    """Factory of buses over a fresh `FakeUoW`, with sequential event ids."""
    return lambda: bootstrap_test_bus(FakeUoW())
