"""SQLAlchemy Core repository for Order aggregates."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from sqlalchemy import RowMapping, delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from orderdesk.domain.aggregates import Order
from orderdesk.domain.entities import OrderLineItem
from orderdesk.domain.value_objects import Money, OrderId, ProductId, UserId
from orderdesk.interfaces.repositories import (
    AggregateNotFoundError,
    ConcurrencyConflictError,
    OrderRepository,
)

from .schema import order_line_items, orders

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

logger = logging.getLogger(__name__)


class SqlAlchemyOrderRepository(OrderRepository):
    """OrderRepository backed by the ``orders`` and ``order_line_items`` tables.

    Line items are rewritten wholesale on every save; their ``position``
    column preserves insertion order.
    """

    def __init__(self, connection: Connection):
        self.connection = connection

    # --- Loads ---

    def get(self, order_id: OrderId) -> Order:
        stmt = select(orders).where(orders.c.order_id == str(order_id))
        if (row := self.connection.execute(stmt).mappings().one_or_none()) is None:
            raise AggregateNotFoundError("Order", str(order_id))
        items = self._load_items([row["order_id"]])
        return self._to_aggregate(row, items.get(row["order_id"], []))

    def list_for_user(self, user_id: UserId) -> Sequence[Order]:
        stmt = (
            select(orders)
            .where(orders.c.user_id == str(user_id))
            .order_by(orders.c.created_at.asc(), orders.c.order_id.asc())
        )
        rows = self.connection.execute(stmt).mappings().all()
        if not rows:
            return []
        items = self._load_items([row["order_id"] for row in rows])
        return [self._to_aggregate(row, items.get(row["order_id"], [])) for row in rows]

    # --- Saves ---

    def save(self, order: Order) -> None:
        values = {
            "user_id": str(order.user_id),
            "status": order.status.value,
            "currency": order.currency.code,
            "total_amount": order.total_amount.amount,
            "created_at": order.created_at,
            "updated_at": order.updated_at,
            "version": order.version + 1,
        }

        if order.version == 0:
            try:
                self.connection.execute(
                    insert(orders).values(order_id=order.aggregate_id, **values)
                )
            except IntegrityError as e:
                raise ConcurrencyConflictError(
                    "Order", order.aggregate_id, order.version
                ) from e
        else:
            result = self.connection.execute(
                update(orders)
                .where(
                    orders.c.order_id == order.aggregate_id,
                    orders.c.version == order.version,
                )
                .values(**values)
            )
            if result.rowcount != 1:
                raise ConcurrencyConflictError(
                    "Order", order.aggregate_id, order.version
                )

        self._replace_items(order)
        order.advance_version()
        logger.debug("Saved order %s at version %d", order.aggregate_id, order.version)

    # --- Internals ---

    def _replace_items(self, order: Order) -> None:
        self.connection.execute(
            delete(order_line_items).where(
                order_line_items.c.order_id == order.aggregate_id
            )
        )
        rows = [
            {
                "order_id": order.aggregate_id,
                "product_id": str(item.product_id),
                "position": position,
                "product_name": item.product_name,
                "unit_price": item.unit_price.amount,
                "currency": item.unit_price.currency.code,
                "quantity": item.quantity,
            }
            for position, item in enumerate(order.items)
        ]
        if rows:
            self.connection.execute(insert(order_line_items), rows)

    def _load_items(self, order_ids: list[str]) -> dict[str, list[OrderLineItem]]:
        stmt = (
            select(order_line_items)
            .where(order_line_items.c.order_id.in_(order_ids))
            .order_by(order_line_items.c.order_id, order_line_items.c.position)
        )
        items: dict[str, list[OrderLineItem]] = {}
        for row in self.connection.execute(stmt).mappings():
            items.setdefault(row["order_id"], []).append(
                OrderLineItem(
                    product_id=ProductId.of(row["product_id"]),
                    product_name=row["product_name"],
                    unit_price=Money.of(row["unit_price"], row["currency"]),
                    quantity=row["quantity"],
                )
            )
        return items

    @staticmethod
    def _to_aggregate(row: RowMapping, items: list[OrderLineItem]) -> Order:
        return Order.reconstruct(
            order_id=OrderId.of(row["order_id"]),
            user_id=UserId.of(row["user_id"]),
            items=items,
            total_amount=Money.of(row["total_amount"], row["currency"]),
            status=row["status"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            version=row["version"],
        )
