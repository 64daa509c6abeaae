"""Order repository port."""

from __future__ import annotations

import abc
from collections.abc import Sequence

from orderdesk.domain.aggregates import Order
from orderdesk.domain.value_objects import OrderId, UserId


class OrderRepository(abc.ABC):
    """Persistence contract for Order aggregates.

    `save` inserts an order whose version is 0 and otherwise updates it only if
    the stored version still equals the aggregate's version. A successful save
    bumps the aggregate's version. Events are never touched by repositories.
    """

    @abc.abstractmethod
    def get(self, order_id: OrderId) -> Order:
        """Load an order.

        Raises:
            AggregateNotFoundError: If no order has this id.
        """

    @abc.abstractmethod
    def save(self, order: Order) -> None:
        """Insert or update an order, including all of its line items.

        Raises:
            ConcurrencyConflictError: If the stored order has moved on since it
                was loaded, or a new order's id is already taken.
        """

    @abc.abstractmethod
    def list_for_user(self, user_id: UserId) -> Sequence[Order]:
        """Return every order placed by `user_id`, oldest first."""
