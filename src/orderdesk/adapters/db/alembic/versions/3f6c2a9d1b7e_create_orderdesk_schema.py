"""Create event_store, users, orders and order_line_items tables

Revision ID: 3f6c2a9d1b7e
Revises:
Create Date: 2026-10-19

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from orderdesk.adapters.db.dialects import DialectName
from orderdesk.adapters.db.sa_types import (
    BIGINT_PK,
    MONEY_AMOUNT,
    PORTABLE_JSON,
    UTCDateTime,
)

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f6c2a9d1b7e"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    dialect = DialectName.from_sqlalchemy(op.get_bind())

    _create_event_store()
    _create_users()
    _create_orders()

    if dialect is DialectName.POSTGRES:
        op.execute(
            """
            CREATE OR REPLACE FUNCTION event_store_forbid_mod() RETURNS trigger
            LANGUAGE plpgsql AS $$
            BEGIN
              RAISE EXCEPTION 'event_store is append-only; % not allowed', TG_OP
              USING ERRCODE = '0A000';
            END;
            $$;
            """
        )
        op.execute(
            """
            CREATE TRIGGER tr_event_store_append_only
            BEFORE UPDATE OR DELETE ON event_store
            FOR EACH ROW
            EXECUTE FUNCTION event_store_forbid_mod();
            """
        )
    else:
        op.execute(
            """
            CREATE TRIGGER tr_event_store_no_update
            BEFORE UPDATE ON event_store
            BEGIN
              SELECT RAISE(ABORT, 'event_store is append-only; UPDATE not allowed');
            END;
            """
        )
        op.execute(
            """
            CREATE TRIGGER tr_event_store_no_delete
            BEFORE DELETE ON event_store
            BEGIN
              SELECT RAISE(ABORT, 'event_store is append-only; DELETE not allowed');
            END;
            """
        )


def downgrade() -> None:
    """Downgrade schema."""
    dialect = DialectName.from_sqlalchemy(op.get_bind())

    if dialect is DialectName.POSTGRES:
        op.execute("DROP TRIGGER IF EXISTS tr_event_store_append_only ON event_store;")
        op.execute("DROP FUNCTION IF EXISTS event_store_forbid_mod();")
    else:
        op.execute("DROP TRIGGER IF EXISTS tr_event_store_no_delete;")
        op.execute("DROP TRIGGER IF EXISTS tr_event_store_no_update;")

    op.drop_table("order_line_items")
    op.drop_index(op.f("ix_orders_user_id_created_at"), table_name="orders")
    op.drop_table("orders")
    op.drop_table("users")
    op.drop_index(
        op.f("ix_event_store_stream_type_event_type"), table_name="event_store"
    )
    op.drop_index(
        op.f("ix_event_store_stream_id_global_seq"), table_name="event_store"
    )
    op.drop_index(op.f("ix_event_store_event_type"), table_name="event_store")
    op.drop_table("event_store")


# --------------------------------------------------------------------------- #
# Tables
# --------------------------------------------------------------------------- #


def _create_event_store() -> None:
    op.create_table(
        "event_store",
        sa.Column(
            "global_seq",
            BIGINT_PK,
            sa.Identity(always=False, start=1),
            nullable=False,
            comment="Global, monotonically increasing sequence across all streams.",
        ),
        sa.Column(
            "stream_id",
            sa.String(length=200),
            nullable=False,
            comment="Aggregate id of the stream.",
        ),
        sa.Column(
            "stream_type",
            sa.String(length=100),
            nullable=False,
            comment="Aggregate type of the stream (Order, User).",
        ),
        sa.Column(
            "version",
            sa.Integer(),
            nullable=False,
            comment="Per-stream version (starts at 1).",
        ),
        sa.Column(
            "event_id",
            sa.String(length=26),
            nullable=False,
            comment="ULID (26 chars). Uniquely identifies this event.",
        ),
        sa.Column(
            "event_type",
            sa.String(length=120),
            nullable=False,
            comment="Domain event class name.",
        ),
        sa.Column(
            "recorded_at",
            UTCDateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="Server-assigned UTC timestamp.",
        ),
        sa.Column(
            "payload",
            PORTABLE_JSON,
            nullable=False,
            comment="Domain event payload (JSON object).",
        ),
        sa.Column(
            "metadata",
            PORTABLE_JSON,
            nullable=True,
            comment="Transport headers.",
        ),
        sa.CheckConstraint(
            "length(event_id) = 26", name=op.f("ck_event_store_event_id_26_char")
        ),
        sa.CheckConstraint(
            "version >= 1", name=op.f("ck_event_store_positive_version")
        ),
        sa.PrimaryKeyConstraint("global_seq", name=op.f("pk_event_store")),
        sa.UniqueConstraint("event_id", name=op.f("uq_event_store_event_id")),
        sa.UniqueConstraint(
            "stream_id", "version", name=op.f("uq_event_store_stream_id_version")
        ),
        comment="Append-only event log. One row per domain event.",
    )
    op.create_index(
        op.f("ix_event_store_event_type"), "event_store", ["event_type"], unique=False
    )
    op.create_index(
        op.f("ix_event_store_stream_id_global_seq"),
        "event_store",
        ["stream_id", "global_seq"],
        unique=False,
    )
    op.create_index(
        op.f("ix_event_store_stream_type_event_type"),
        "event_store",
        ["stream_type", "event_type"],
        unique=False,
    )


def _create_users() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(length=36), nullable=False, comment="UUID of the user."),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=254), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.CheckConstraint("version >= 1", name=op.f("ck_users_positive_version")),
        sa.PrimaryKeyConstraint("user_id", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
        comment="Current state of User aggregates.",
    )


def _create_orders() -> None:
    op.create_table(
        "orders",
        sa.Column("order_id", sa.String(length=36), nullable=False, comment="UUID of the order."),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("total_amount", MONEY_AMOUNT, nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.CheckConstraint("version >= 1", name=op.f("ck_orders_positive_version")),
        sa.CheckConstraint(
            "total_amount >= 0", name=op.f("ck_orders_non_negative_total")
        ),
        sa.PrimaryKeyConstraint("order_id", name=op.f("pk_orders")),
        comment="Current state of Order aggregates.",
    )
    op.create_index(
        op.f("ix_orders_user_id_created_at"),
        "orders",
        ["user_id", "created_at"],
        unique=False,
    )
    op.create_table(
        "order_line_items",
        sa.Column("order_id", sa.String(length=36), nullable=False),
        sa.Column("product_id", sa.String(length=36), nullable=False),
        sa.Column(
            "position",
            sa.Integer(),
            nullable=False,
            comment="Insertion order in the order.",
        ),
        sa.Column("product_name", sa.String(length=200), nullable=False),
        sa.Column("unit_price", MONEY_AMOUNT, nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.CheckConstraint(
            "quantity >= 1", name=op.f("ck_order_line_items_positive_quantity")
        ),
        sa.CheckConstraint(
            "unit_price >= 0", name=op.f("ck_order_line_items_non_negative_unit_price")
        ),
        sa.ForeignKeyConstraint(
            ["order_id"],
            ["orders.order_id"],
            name=op.f("fk_order_line_items_order_id_orders"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint(
            "order_id", "product_id", name=op.f("pk_order_line_items")
        ),
        comment="Line items owned by an order.",
    )
