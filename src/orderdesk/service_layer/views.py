"""Read views over the order repositories, used by the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from orderdesk.domain.value_objects import OrderId, UserId

if TYPE_CHECKING:
    from orderdesk.domain.aggregates import Order
    from orderdesk.interfaces.unit_of_work import AbstractUnitOfWork

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class OrderLineView:
    """Read-only line of an order."""

    product_id: str
    product_name: str
    unit_price: Decimal
    quantity: int
    line_total: Decimal


@dataclass(frozen=True)
class OrderView:
    """Read-only snapshot of an order."""

    order_id: str
    user_id: str
    status: str
    currency: str
    total_amount: Decimal
    items: tuple[OrderLineView, ...]
    created_at: datetime
    updated_at: datetime
    version: int

    @classmethod
    def from_order(cls, order: Order) -> OrderView:
        """Snapshot an order through its public accessors."""
        return cls(
            order_id=str(order.order_id),
            user_id=str(order.user_id),
            status=order.status.value,
            currency=order.currency.code,
            total_amount=order.total_amount.amount,
            items=tuple(
                OrderLineView(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    unit_price=item.unit_price.amount,
                    quantity=item.quantity,
                    line_total=item.line_total.amount,
                )
                for item in order.items
            ),
            created_at=order.created_at,
            updated_at=order.updated_at,
            version=order.version,
        )


def get_order(order_id: str, uow: AbstractUnitOfWork) -> OrderView:
    """Return a snapshot of one order.

    Raises:
        InvalidFormatError: If `order_id` is not a valid id.
        AggregateNotFoundError: If the order does not exist.
    """
    oid = OrderId.of(order_id)
    with uow:
        return OrderView.from_order(uow.orders.get(oid))


def list_orders_for_user(user_id: str, uow: AbstractUnitOfWork) -> list[OrderView]:
    """Return snapshots of every order placed by a user, oldest first."""
    uid = UserId.of(user_id)
    with uow:
        return [OrderView.from_order(order) for order in uow.orders.list_for_user(uid)]
