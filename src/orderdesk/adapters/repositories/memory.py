"""In-memory repositories.

Aggregates are stored as plain snapshots (dicts of primitive values) and
rebuilt with `reconstruct` on every `get`, so callers never share state with
the store and pending events never leak through it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from orderdesk.adapters.eventstore.in_memory_adapters import InMemoryEventStore
from orderdesk.domain.aggregates import Order, User
from orderdesk.domain.entities import OrderLineItem
from orderdesk.domain.value_objects import (
    Email,
    Money,
    Name,
    OrderId,
    ProductId,
    UserId,
)
from orderdesk.interfaces.repositories import (
    AggregateNotFoundError,
    ConcurrencyConflictError,
    OrderRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

Snapshot = dict[str, Any]


@dataclass
class InMemoryData:
    """Everything an in-memory unit of work persists."""

    orders: dict[str, Snapshot] = field(default_factory=dict)
    users: dict[str, Snapshot] = field(default_factory=dict)
    eventstore: InMemoryEventStore = field(default_factory=InMemoryEventStore)


def _check_version(
    bucket: dict[str, Snapshot], kind: str, key: str, version: int
) -> None:
    stored = bucket.get(key)
    stored_version = 0 if stored is None else stored["version"]
    if stored_version != version:
        raise ConcurrencyConflictError(kind, key, version)


# ============================================================================
#                                  Orders
# ============================================================================


class InMemoryOrderRepository(OrderRepository):
    """OrderRepository over a dict of snapshots keyed by order id."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def get(self, order_id: OrderId) -> Order:
        if (snapshot := self._data.orders.get(str(order_id))) is None:
            raise AggregateNotFoundError("Order", str(order_id))
        return _order_from_snapshot(snapshot)

    def save(self, order: Order) -> None:
        _check_version(self._data.orders, "Order", order.aggregate_id, order.version)
        snapshot = _order_to_snapshot(order, order.version + 1)
        self._data.orders[order.aggregate_id] = snapshot
        order.advance_version()
        logger.debug("Saved order %s at version %d", order.aggregate_id, order.version)

    def list_for_user(self, user_id: UserId) -> Sequence[Order]:
        snapshots = [
            s for s in self._data.orders.values() if s["user_id"] == str(user_id)
        ]
        snapshots.sort(key=lambda s: s["created_at"])
        return [_order_from_snapshot(s) for s in snapshots]


def _order_to_snapshot(order: Order, version: int) -> Snapshot:
    return {
        "order_id": str(order.order_id),
        "user_id": str(order.user_id),
        "items": [
            (
                str(item.product_id),
                item.product_name,
                item.unit_price.amount,
                item.unit_price.currency.code,
                item.quantity,
            )
            for item in order.items
        ],
        "total_amount": order.total_amount.amount,
        "currency": order.currency.code,
        "status": order.status.value,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "version": version,
    }


def _order_from_snapshot(snapshot: Snapshot) -> Order:
    return Order.reconstruct(
        order_id=OrderId.of(snapshot["order_id"]),
        user_id=UserId.of(snapshot["user_id"]),
        items=[
            OrderLineItem(ProductId.of(pid), name, Money.of(amount, currency), qty)
            for pid, name, amount, currency, qty in snapshot["items"]
        ],
        total_amount=Money.of(snapshot["total_amount"], snapshot["currency"]),
        status=snapshot["status"],
        created_at=snapshot["created_at"],
        updated_at=snapshot["updated_at"],
        version=snapshot["version"],
    )


# ============================================================================
#                                   Users
# ============================================================================


class InMemoryUserRepository(UserRepository):
    """UserRepository over a dict of snapshots keyed by user id."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def get(self, user_id: UserId) -> User:
        if (snapshot := self._data.users.get(str(user_id))) is None:
            raise AggregateNotFoundError("User", str(user_id))
        return _user_from_snapshot(snapshot)

    def find_by_email(self, email: Email) -> User | None:
        for snapshot in self._data.users.values():
            if snapshot["email"] == email.value:
                return _user_from_snapshot(snapshot)
        return None

    def save(self, user: User) -> None:
        _check_version(self._data.users, "User", user.aggregate_id, user.version)
        # Mirrors the unique email constraint of the users table
        if (owner := self.find_by_email(user.email)) is not None and (
            owner.aggregate_id != user.aggregate_id
        ):
            raise ConcurrencyConflictError("User", user.aggregate_id, user.version)
        self._data.users[user.aggregate_id] = {
            "user_id": str(user.user_id),
            "name": user.name.value,
            "email": user.email.value,
            "status": user.status.value,
            "created_at": user.created_at,
            "updated_at": user.updated_at,
            "version": user.version + 1,
        }
        user.advance_version()
        logger.debug("Saved user %s at version %d", user.aggregate_id, user.version)


def _user_from_snapshot(snapshot: Snapshot) -> User:
    return User.reconstruct(
        user_id=UserId.of(snapshot["user_id"]),
        name=Name.of(snapshot["name"]),
        email=Email.of(snapshot["email"]),
        status=snapshot["status"],
        created_at=snapshot["created_at"],
        updated_at=snapshot["updated_at"],
        version=snapshot["version"],
    )
