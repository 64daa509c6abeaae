"""ORDERDESK DB CLI: forward-only Alembic wrappers.

Destructive Alembic operations (``downgrade``, ``stamp``) are not
exposed.

Behavior
- Uses programmatic Alembic configuration; human-oriented notices go to
  **stderr**, Alembic output to **stdout**.
- ``upgrade`` asks for confirmation unless ``--force`` or ``--sql`` is given.
- ``ORDERDESK_DB_URL`` must be set; a missing, malformed or unreachable URL
  ends with a ``ClickException`` explaining what to fix.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import text
from sqlalchemy.exc import ArgumentError, OperationalError

from orderdesk import config
from orderdesk.adapters.db.engine import make_engine

from .helpers import error, sanitize_url, success, warn
from .helpers.dispatch import INVALID_URL_FORMAT_MSG, get_db_url

if TYPE_CHECKING:
    from alembic.config import Config
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

CANNOT_CONNECT_MSG = (
    "ORDERDESK_DB_URL is set, but the database is not reachable.\n"
    "Please ensure the database is running and the URL is correct."
)

UPGRADE_SCHEMA_WARNING = (
    "This will upgrade the database schema to the latest version.\n"
    "Please ensure you have a backup before proceeding."
)

UPGRADE_SCHEMA_INSTRUCTIONS = "Run 'orderdesk db upgrade' to update the schema."


def _check_connection(url: str) -> None:
    engine = make_engine(url)
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))  # pragma: no mutate
    engine.dispose()


def _get_url() -> str:
    url = get_db_url()
    try:
        _check_connection(url)
    except OperationalError as e:
        raise click.ClickException(CANNOT_CONNECT_MSG) from e
    except ArgumentError as e:
        raise click.ClickException(INVALID_URL_FORMAT_MSG) from e
    logger.debug("Using database %s", sanitize_url(url))
    return url


@click.group(cls=clickx.ExtraGroup)
def db() -> None:
    """Database management commands."""


@db.command()
@click.option(
    "--verbose", "-v", "verbose", is_flag=True, help="Show alembic's verbose output."
)
def current(verbose: bool) -> None:
    """Show current DB revision."""
    cfg = config.build_alembic_config(db_url=_get_url(), stdout=sys.stdout)
    command.current(cfg, verbose=verbose)


@db.command()
@click.option(
    "--verbose", "-v", "verbose", is_flag=True, help="Show alembic's verbose output."
)
def heads(verbose: bool) -> None:
    """Show available head revisions."""
    cfg = config.build_alembic_config(stdout=sys.stdout)
    command.heads(cfg, verbose=verbose)


@db.command()
@click.option(
    "--verbose", "-v", "verbose", is_flag=True, help="Show alembic's verbose output."
)
@click.option(
    "--indicate-current",
    "-i",
    "indicate_current",
    is_flag=True,
    help="Indicate the current revision.",
)
def history(verbose: bool, indicate_current: bool) -> None:
    """Show revision history."""
    url = _get_url() if indicate_current else None
    cfg = config.build_alembic_config(db_url=url, stdout=sys.stdout)
    command.history(cfg, verbose=verbose, indicate_current=indicate_current)


@db.command()
@click.option("--sql", is_flag=True, help="Generate SQL without executing.")
@click.option("--force", is_flag=True, help="Upgrade without confirmation.")
def upgrade(sql: bool, force: bool) -> None:
    """Upgrade the database to the head revision."""
    url = _get_url()
    cfg = config.build_alembic_config(db_url=url, stdout=sys.stdout)
    if not force and not sql:
        warn(UPGRADE_SCHEMA_WARNING)
        click.secho(f"db: {click.style(sanitize_url(url), underline=True)}", err=True)
        click.confirm("Are you sure you want to proceed?", abort=True, err=True)
    command.upgrade(cfg, revision="head", sql=sql)
    logger.info("Upgraded %s to head", sanitize_url(url))
    success("Upgrade complete!")


def _get_current_revision(engine: Engine) -> str | None:
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def _get_head_revision(cfg: Config) -> str | None:
    return ScriptDirectory.from_config(cfg).get_current_head()


class MigrationStatus(Enum):
    """Describes the migration status of the database schema."""

    UP_TO_DATE = "up to date"
    OUT_OF_DATE = "out of date"
    UNINITIALIZED = "uninitialized"


@db.command()
def status() -> None:
    """Show database connection and schema status."""
    try:
        url = _get_url()
    except click.ClickException as e:
        error("Cannot connect to database")
        click.echo(e.format_message())
        return

    engine = make_engine(url)
    success("Database reachable")
    click.echo(f"Backend : {engine.dialect.name}")
    click.echo(f"URL     : {sanitize_url(url)}")
    rev = _get_current_revision(engine)
    head = _get_head_revision(config.build_alembic_config(db_url=url))
    engine.dispose()

    if rev is None:
        migration_status = MigrationStatus.UNINITIALIZED
    elif rev == head:
        migration_status = MigrationStatus.UP_TO_DATE
    else:
        migration_status = MigrationStatus.OUT_OF_DATE

    message = (
        f"{rev} ({migration_status.value})"
        if rev is not None
        else migration_status.value
    )
    click.echo(f"Schema  : {message}")

    if migration_status is not MigrationStatus.UP_TO_DATE:
        warn(UPGRADE_SCHEMA_INSTRUCTIONS)
