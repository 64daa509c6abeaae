"""The ``event_store`` table: one row per recorded domain event.

Rows are keyed by a global sequence and carry the aggregate stream they belong
to (``stream_type`` is ``Order`` or ``User``, ``stream_id`` the aggregate id)
with a per-stream ``version``. ``UNIQUE(stream_id, version)`` turns a racing
append into an integrity error; ``UNIQUE(event_id)`` rejects replays.

The table is append-only. The UPDATE/DELETE triggers that enforce this are
created by the migration, not by ``metadata.create_all``.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    Identity,
    Index,
    Integer,
    String,
    Table,
    UniqueConstraint,
    text,
)

from orderdesk.adapters.db.metadata import metadata
from orderdesk.adapters.db.sa_types import BIGINT_PK, PORTABLE_JSON, UTCDateTime

__all__ = ["event_store"]

event_store = Table(
    "event_store",
    metadata,
    Column(
        "global_seq",
        BIGINT_PK,
        Identity(start=1),
        primary_key=True,
        comment="Global, monotonically increasing sequence across all streams.",
    ),
    Column("stream_id", String(200), nullable=False, comment="Aggregate id of the stream."),
    Column(
        "stream_type",
        String(100),
        nullable=False,
        comment="Aggregate type of the stream (Order, User).",
    ),
    Column("version", Integer, nullable=False, comment="Per-stream version (starts at 1)."),
    Column(
        "event_id",
        String(26),
        nullable=False,
        unique=True,
        comment="ULID (26 chars). Uniquely identifies this event.",
    ),
    Column("event_type", String(120), nullable=False, comment="Domain event class name."),
    Column(
        "recorded_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="Server-assigned UTC timestamp.",
    ),
    Column("payload", PORTABLE_JSON, nullable=False, comment="Domain event payload (JSON object)."),
    Column("metadata", PORTABLE_JSON, comment="Transport headers."),
    UniqueConstraint("stream_id", "version"),
    CheckConstraint("version >= 1", name="positive_version"),
    CheckConstraint("length(event_id) = 26", name="event_id_26_char"),
    Index(None, "stream_type", "event_type"),
    Index(None, "stream_id", "global_seq"),
    Index(None, "event_type"),
    comment="Append-only event log. One row per domain event.",
)
