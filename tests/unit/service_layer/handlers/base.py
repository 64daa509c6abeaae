"""Base class for handler tests."""

from __future__ import annotations

from types import SimpleNamespace
from typing import TYPE_CHECKING

import pytest

from orderdesk.service_layer import commands

if TYPE_CHECKING:
    from orderdesk.interfaces.eventstore import EventEnvelope
    from orderdesk.service_layer.messagebus import MessageBus

P1 = "00000000-0000-0000-0000-000000000001"
P2 = "00000000-0000-0000-0000-000000000002"


class HandlerTestBase:
    """Base class for handler tests providing common setup and utilities."""

    bus: MessageBus

    # declare what fixtures seeding needs (subclasses can override)
    seed_uses: tuple[str, ...] = ()
    fx: SimpleNamespace

    @pytest.fixture(autouse=True)
    def _attach_bus(self, request, make_test_bus):
        """Fresh bus per test; seed using any fixtures declared in seed_uses."""
        self.bus = make_test_bus()

        fx = {name: request.getfixturevalue(name) for name in self.seed_uses}
        self.fx = SimpleNamespace(**fx)

        self._seed_bus(request)
        self.reset_committed()

    def _seed_bus(self, request) -> None:
        """Override to preload the bus. Use request.getfixturevalue(...) as needed."""

    # --- Helpers ---

    def register(self, name: str = "Ada Lovelace", email: str = "ada@example.com") -> str:
        """Register a user through the bus and return its id."""
        return self.bus.handle(commands.RegisterUser(name=name, email=email))

    def place(self, user_id: str, *lines: commands.OrderLine, currency: str = "JPY") -> str:
        """Place an order through the bus (default: 2 x Widget at 1000) and return its id."""
        lines = lines or (commands.OrderLine(P1, "Widget", "1000", 2),)
        return self.bus.handle(
            commands.PlaceOrder(user_id=user_id, currency=currency, lines=lines)
        )

    def stream(self, stream_id: str) -> list[EventEnvelope]:
        """Committed events of one stream."""
        with self.bus.uow as uow:
            return list(uow.eventstore.read_stream(stream_id))

    def event_types(self, stream_id: str) -> list[str]:
        """Committed event types of one stream, in order."""
        return [e.event_type for e in self.stream(stream_id)]

    # --- Assertions ---

    def assert_committed(self) -> None:
        """Assert that the unit of work was committed."""
        assert hasattr(self.bus.uow, "committed")
        assert self.bus.uow.committed is True

    def assert_not_committed(self) -> None:
        """Assert that the unit of work was not committed."""
        assert hasattr(self.bus.uow, "committed")
        assert self.bus.uow.committed is False

    def reset_committed(self) -> None:
        """Reset the committed flag on the unit of work."""
        if hasattr(self.bus.uow, "committed"):
            self.bus.uow.committed = False
