"""Relational schema for the order and user aggregates.

Each aggregate root maps to one row (``users``, ``orders``); order line items
live in ``order_line_items`` keyed by (order_id, product_id). Money is
stored as an exact `MoneyAmount` (NUMERIC(18, 2), integer cents on SQLite)
next to its currency code. The ``version`` columns back optimistic
concurrency in the repositories.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
)

from orderdesk.adapters.db.metadata import metadata
from orderdesk.adapters.db.sa_types import MONEY_AMOUNT, UTCDateTime

__all__ = ["order_line_items", "orders", "users"]

users = Table(
    "users",
    metadata,
    Column("user_id", String(36), primary_key=True, comment="UUID of the user."),
    Column("name", String(100), nullable=False),
    Column("email", String(254), nullable=False, unique=True),
    Column("status", String(20), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    Column("version", Integer, nullable=False),
    CheckConstraint("version >= 1", name="positive_version"),
    comment="Current state of User aggregates.",
)

orders = Table(
    "orders",
    metadata,
    Column("order_id", String(36), primary_key=True, comment="UUID of the order."),
    Column("user_id", String(36), nullable=False),
    Column("status", String(20), nullable=False),
    Column("currency", String(3), nullable=False),
    Column("total_amount", MONEY_AMOUNT, nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    Column("version", Integer, nullable=False),
    CheckConstraint("version >= 1", name="positive_version"),
    CheckConstraint("total_amount >= 0", name="non_negative_total"),
    Index(None, "user_id", "created_at"),
    comment="Current state of Order aggregates.",
)

order_line_items = Table(
    "order_line_items",
    metadata,
    Column(
        "order_id",
        String(36),
        ForeignKey("orders.order_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("product_id", String(36), primary_key=True),
    Column("position", Integer, nullable=False, comment="Insertion order in the order."),
    Column("product_name", String(200), nullable=False),
    Column("unit_price", MONEY_AMOUNT, nullable=False),
    Column("currency", String(3), nullable=False),
    Column("quantity", Integer, nullable=False),
    CheckConstraint("quantity >= 1", name="positive_quantity"),
    CheckConstraint("unit_price >= 0", name="non_negative_unit_price"),
    comment="Line items owned by an order.",
)
