"""Aggregate representing a customer order."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import ClassVar

from orderdesk.domain import errors, events
from orderdesk.domain.entities import OrderLineItem
from orderdesk.domain.utils import require_instance, require_utc, utc_now
from orderdesk.domain.value_objects import Currency, Money, OrderId, ProductId, UserId

from .base import Aggregate

# pylint: disable=too-many-arguments,too-many-instance-attributes


class OrderStatus(Enum):
    """Enumeration of possible Order statuses.

    PENDING is the initial state; CONFIRMED and CANCELLED are terminal.
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Order(Aggregate):
    """Aggregate root representing a customer order.

    Owns its line items (one per product) and keeps the total amount equal to
    the sum of their line totals. Every order has a fixed currency, taken from
    its first line item, which all line items must share; an order emptied by
    `remove_item` therefore still totals zero in that currency.

    Use `create` for new orders and `reconstruct` when loading from storage.
    """

    STREAM_TYPE: ClassVar[str] = "Order"

    def __init__(
        self,
        order_id: OrderId,
        user_id: UserId,
        currency: Currency,
        created_at: datetime,
        *,
        version: int = 0,
    ) -> None:
        super().__init__(str(order_id), version)
        self._order_id = order_id
        self._user_id = user_id
        self._currency = currency
        self._items: list[OrderLineItem] = []
        self._total_amount = Money.zero(currency)
        self._status = OrderStatus.PENDING
        self._created_at = created_at
        self._updated_at = created_at

    # --- Construction Paths ---

    @classmethod
    def create(cls, user_id: UserId, items: Iterable[OrderLineItem]) -> Order:
        """Place a new pending order.

        Line items sharing a product id are merged by summing their quantities.

        Args:
            user_id: The user placing the order.
            items: The initial line items; at least one is required.

        Returns:
            Order: The new order, holding a single `OrderCreated` event.

        Raises:
            MissingFieldError: If `user_id` or an item is missing.
            EmptyOrderError: If `items` is empty.
            CurrencyMismatchError: If the items use more than one currency.
        """

        require_instance("user_id", user_id, UserId)
        line_items = [require_instance("items", i, OrderLineItem) for i in items]
        if not line_items:
            raise errors.EmptyOrderError()

        now = utc_now()
        order = cls(OrderId.generate(), user_id, line_items[0].unit_price.currency, now)
        for item in line_items:
            order._check_currency(item)
        for item in line_items:
            order._replace_items(order._merged(item))

        order._record(
            events.OrderCreated(
                order_id=order.order_id,
                user_id=user_id,
                total_amount=order.total_amount,
                occurred_at=now,
            )
        )
        return order

    @classmethod
    def reconstruct(
        cls,
        order_id: OrderId,
        user_id: UserId,
        items: Iterable[OrderLineItem],
        total_amount: Money,
        status: OrderStatus | str,
        created_at: datetime,
        updated_at: datetime,
        *,
        version: int = 0,
    ) -> Order:
        """Rebuild an order from persisted state.

        Fields are validated, but the total is trusted rather than recomputed
        and no events are recorded.

        Args:
            order_id: The order's identity.
            user_id: The owning user.
            items: The persisted line items, in order.
            total_amount: The persisted total; its currency is the order's currency.
            status: The persisted status (enum member or its value).
            created_at: Creation timestamp (tz-aware).
            updated_at: Last-change timestamp (tz-aware, not before `created_at`).
            version: The persisted version, for optimistic concurrency.

        Raises:
            MissingFieldError: If a required field is None.
            InvalidFormatError: If a field has the wrong type or the values are
                mutually inconsistent (duplicate products, timestamps out of order).
            CurrencyMismatchError: If an item's currency differs from the total's.
        """

        require_instance("order_id", order_id, OrderId)
        require_instance("user_id", user_id, UserId)
        require_instance("total_amount", total_amount, Money)
        order_status = _parse_status(status)
        created = require_utc("created_at", created_at)
        updated = require_utc("updated_at", updated_at)
        if updated < created:
            raise errors.InvalidFormatError(
                "updated_at", updated_at, "must not precede created_at"
            )
        if isinstance(version, bool) or not isinstance(version, int) or version < 0:
            raise errors.InvalidFormatError("version", version, "must be >= 0")

        order = cls(order_id, user_id, total_amount.currency, created, version=version)
        seen: set[ProductId] = set()
        for item in items:
            require_instance("items", item, OrderLineItem)
            order._check_currency(item)
            if item.product_id in seen:
                raise errors.InvalidFormatError(
                    "items", str(item.product_id), "duplicate product id"
                )
            seen.add(item.product_id)
            order._items.append(copy.copy(item))

        order._total_amount = total_amount
        order._status = order_status
        order._updated_at = updated
        return order

    # --- Accessors ---

    @property
    def order_id(self) -> OrderId:
        """The order's identity."""
        return self._order_id

    @property
    def user_id(self) -> UserId:
        """The user who placed the order."""
        return self._user_id

    @property
    def currency(self) -> Currency:
        """The currency shared by every line item and the total."""
        return self._currency

    @property
    def items(self) -> tuple[OrderLineItem, ...]:
        """Read-only snapshot of the line items, in insertion order.

        The returned items are copies; changing them does not affect the order.
        """
        return tuple(copy.copy(item) for item in self._items)

    @property
    def total_amount(self) -> Money:
        """Sum of all line totals."""
        return self._total_amount

    @property
    def status(self) -> OrderStatus:
        """Current lifecycle status."""
        return self._status

    @property
    def created_at(self) -> datetime:
        """When the order was placed."""
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        """When the order last changed."""
        return self._updated_at

    # --- Item Changes ---

    def add_item(self, item: OrderLineItem) -> None:
        """Add a line item, merging it into an existing one for the same product.

        Merging sums the quantities; the existing item's name and price are kept.
        No event is recorded.

        Raises:
            InvalidStateTransitionError: If the order is not pending.
            MissingFieldError: If `item` is None.
            CurrencyMismatchError: If the item's currency differs from the order's.
            InvalidFormatError: If the new total exceeds the amount digits.
        """

        self._require_pending("add an item to")
        require_instance("item", item, OrderLineItem)
        self._check_currency(item)
        self._replace_items(self._merged(item))
        self._touch()

    def remove_item(self, product_id: ProductId) -> None:
        """Remove the line item for `product_id`; a no-op if there is none.

        Raises:
            InvalidStateTransitionError: If the order is not pending.
        """

        self._require_pending("remove an item from")
        remaining = [item for item in self._items if item.product_id != product_id]
        if len(remaining) == len(self._items):
            return  # Idempotent
        self._replace_items(remaining)
        self._touch()

    def change_item_quantity(self, product_id: ProductId, new_quantity: int) -> None:
        """Set the quantity of an existing line item.

        Raises:
            InvalidStateTransitionError: If the order is not pending.
            ItemNotFoundError: If no line item matches `product_id`.
            InvalidQuantityError: If `new_quantity` is not a positive integer.
            InvalidFormatError: If the new total exceeds the amount digits.
        """

        self._require_pending("change an item of")
        if (item := self._find(product_id)) is None:
            raise errors.ItemNotFoundError(self.aggregate_id, str(product_id))
        updated = copy.copy(item)
        updated.change_quantity(new_quantity)
        self._replace_items([updated if i is item else i for i in self._items])
        self._touch()

    # --- State Transitions ---

    def confirm(self) -> None:
        """Confirm a pending order.

        Raises:
            InvalidStateTransitionError: If the order is not pending.
            EmptyOrderError: If the order has no line items.
        """

        self._require_pending("confirm")
        if not self._items:
            raise errors.EmptyOrderError(self.aggregate_id)
        self._transition(OrderStatus.CONFIRMED, events.OrderConfirmed)

    def cancel(self) -> None:
        """Cancel a pending order.

        Confirmed orders cannot be cancelled here; that decision belongs to a
        higher-level workflow.

        Raises:
            InvalidStateTransitionError: If the order is confirmed or already cancelled.
        """

        self._require_pending("cancel")
        self._transition(OrderStatus.CANCELLED, events.OrderCancelled)

    # --- Internal Helpers ---

    def _require_pending(self, action: str) -> None:
        if self._status is not OrderStatus.PENDING:
            raise errors.InvalidStateTransitionError(
                self.aggregate_id, action, self._status.value
            )

    def _check_currency(self, item: OrderLineItem) -> None:
        if item.unit_price.currency != self._currency:
            raise errors.CurrencyMismatchError(
                self._currency.code, item.unit_price.currency.code
            )

    def _find(self, product_id: ProductId) -> OrderLineItem | None:
        for item in self._items:
            if item.product_id == product_id:
                return item
        return None

    def _merged(self, item: OrderLineItem) -> list[OrderLineItem]:
        items = list(self._items)
        for index, existing in enumerate(items):
            if existing.product_id == item.product_id:
                merged = copy.copy(existing)
                merged.change_quantity(existing.quantity + item.quantity)
                items[index] = merged
                return items
        items.append(copy.copy(item))
        return items

    def _replace_items(self, items: list[OrderLineItem]) -> None:
        # Nothing is assigned until the new total is known
        total = Money.zero(self._currency)
        for item in items:
            total = total.add(item.line_total)
        self._items = items
        self._total_amount = total

    def _touch(self) -> datetime:
        # updated_at never moves backwards, even if the clock does
        self._updated_at = max(utc_now(), self._updated_at)
        return self._updated_at

    def _transition(
        self, status: OrderStatus, event_type: type[events.OrderEvent]
    ) -> None:
        occurred_at = self._touch()
        self._status = status
        self._record(
            event_type(
                order_id=self._order_id,
                user_id=self._user_id,
                total_amount=self._total_amount,
                occurred_at=occurred_at,
            )
        )


def _parse_status(status: OrderStatus | str) -> OrderStatus:
    if status is None:
        raise errors.MissingFieldError("status")
    try:
        return OrderStatus(status)
    except ValueError as e:
        raise errors.InvalidFormatError("status", status, "unknown order status") from e
