"""Database engine factory.

Every Engine in ORDERDESK comes from `make_engine`, so all connections get
the same backend-specific tuning.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.pool import StaticPool

from .dialects import DialectName

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

SQLITE_PRAGMAS = (
    "PRAGMA foreign_keys=ON;",
    "PRAGMA journal_mode=WAL;",
    "PRAGMA synchronous=NORMAL;",
    "PRAGMA temp_store=MEMORY;",
)


def is_sqlite(url: str | URL) -> bool:
    """Return True if `url` points at a SQLite database."""
    return make_url(str(url)).get_backend_name() == DialectName.SQLITE.value


def is_sqlite_memory(url: str | URL) -> bool:
    """Return True if `url` is an in-memory SQLite database."""
    u = make_url(str(url))
    return is_sqlite(u) and u.database in (None, "", ":memory:")


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    For SQLite, every new DBAPI connection runs `SQLITE_PRAGMAS` (foreign keys,
    WAL journal, NORMAL sync, in-memory temp store). In-memory SQLite
    databases share a single connection so that every unit of work sees the
    same data.

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """

    kwargs = {}
    if is_sqlite_memory(url):
        kwargs = {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    engine = create_engine(url, echo=echo, **kwargs)

    if is_sqlite(url):

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
            cur = dbapi_conn.cursor()
            for pragma in SQLITE_PRAGMAS:
                cur.execute(pragma)
            cur.close()

    logger.debug("Created engine for %s", engine.url.render_as_string(hide_password=True))
    return engine
