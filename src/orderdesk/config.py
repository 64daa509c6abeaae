"""Configuration for ORDERDESK.

Configuration comes from the environment:

- ``ORDERDESK_DB_URL``: SQLAlchemy URL of the database (required by commands
  that touch the database).

The Alembic configuration is built programmatically; no ``alembic.ini`` ships
with the package.
"""

import os
import sys
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

DB_URL_ENV_VAR = "ORDERDESK_DB_URL"  # pragma: no mutate
ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate
ALEMBIC_SCRIPTS_PACKAGE = "orderdesk.adapters.db.alembic"  # pragma: no mutate


class DatabaseUrlNotSetError(Exception):
    """Raised when the ORDERDESK_DB_URL environment variable is not set."""


def get_db_url() -> str:
    """Get the database URL from the environment.

    Raises:
        DatabaseUrlNotSetError: If `ORDERDESK_DB_URL` is unset or empty.
    """
    if not (url := os.environ.get(DB_URL_ENV_VAR, "").strip()):
        raise DatabaseUrlNotSetError(f"{DB_URL_ENV_VAR} is not set.")
    return url


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Build an Alembic `Config` pointing at ORDERDESK's packaged migrations.

    Args:
        db_url: SQLAlchemy database URL. May be `None` for commands that do not
            connect (``heads``, plain ``history``).
        stdout: Stream Alembic writes its status lines to; tests pass a buffer.

    Returns:
        The `alembic.config.Config` to pass to `alembic.command` functions.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    cfg.set_main_option(
        ALEMBIC_SCRIPT_LOCATION_KEY, str(files(ALEMBIC_SCRIPTS_PACKAGE))
    )
    return cfg
