"""Alembic environment for the ORDERDESK schema.

The URL comes from ``-x url=...``, then the ``sqlalchemy.url`` option that
``orderdesk.config.build_alembic_config`` sets, then ``ORDERDESK_DB_URL``.
Online runs connect through `make_engine`, so migrations see the same SQLite
PRAGMAs (foreign keys on) as the application. A caller that already holds a
Connection can pass it as ``config.attributes["connection"]``.

Type and server default drift are compared on autogenerate; SQLite ALTERs run
in batch mode.
"""

import os
from logging.config import fileConfig

from alembic import context

# Table modules register themselves on the shared metadata when imported
import orderdesk.adapters.eventstore.schema  # noqa: F401 # pylint: disable=unused-import
import orderdesk.adapters.repositories.schema  # noqa: F401 # pylint: disable=unused-import
from orderdesk.adapters.db.dialects import DialectName
from orderdesk.adapters.db.engine import make_engine
from orderdesk.adapters.db.metadata import metadata

# pylint: disable=no-member

config = context.config

# An alembic.ini is only present when alembic is run by hand
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

COMPARE_OPTIONS = {"compare_type": True, "compare_server_default": True}


def get_url() -> str:
    """Return the database URL to migrate."""
    candidates = (
        context.get_x_argument(as_dictionary=True).get("url"),
        config.get_main_option("sqlalchemy.url"),
        os.environ.get("ORDERDESK_DB_URL"),
    )
    for url in candidates:
        # ini placeholders such as %(here)s count as unset
        if url and "%(" not in url:
            return url
    raise RuntimeError("Set ORDERDESK_DB_URL to your database URL.")


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout instead of executing it."""
    context.configure(
        url=get_url(),
        target_metadata=metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMPARE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_on(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=metadata,
        render_as_batch=DialectName.from_sqlalchemy(connection) is DialectName.SQLITE,
        **COMPARE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply the migrations over a live connection."""
    if (connection := config.attributes.get("connection")) is not None:
        _run_on(connection)
        return

    engine = make_engine(get_url())
    try:
        with engine.connect() as conn:
            _run_on(conn)
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
