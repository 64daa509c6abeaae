"""Global pytest fixtures for ORDERDESK."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from orderdesk.domain.aggregates import order as order_module
from orderdesk.domain.aggregates import user as user_module

pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.datagen",
]


class Clock:  # pylint: disable=too-few-public-methods
    """Mutable stand-in for the aggregates' clock."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def frozen_clock(monkeypatch: pytest.MonkeyPatch) -> Clock:
    """Freeze the time seen by the aggregates; assign ``.now`` to move it.

    Example:
        ```py
        def test_touch(frozen_clock):
            frozen_clock.now = datetime(2025, 1, 2, tzinfo=timezone.utc)
        ```
    """
    clock = Clock(datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc))
    monkeypatch.setattr(order_module, "utc_now", clock)
    monkeypatch.setattr(user_module, "utc_now", clock)
    return clock
