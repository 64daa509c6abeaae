"""ORDERDESK CLI entry point.

Defines the top-level ``orderdesk`` command (via Click-Extra), configures
logging for the whole process, and registers the command groups:

- ``orderdesk db``    forward-only database management.
- ``orderdesk user``  register and manage users.
- ``orderdesk order`` place and manage orders.

Examples
    $ orderdesk --version
    $ orderdesk db upgrade
    $ orderdesk -v user register "Ada Lovelace" ada@example.com
"""

import logging
from collections.abc import Callable
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from orderdesk import __version__
from orderdesk.logging import (
    DEFAULT_FLIGHT_RECORDER_CAPACITY,
    configure_logging,
    log_startup,
    verbosity_to_level,
)

from .db import db as db_group
from .helpers.log_level_parser import parse_log_level
from .orders import order as order_group
from .users import user as user_group

logger = logging.getLogger(__name__)


HELP = """ORDERDESK command-line interface.

    ORDERDESK keeps customer orders and the users who place them. Orders move
    from pending to confirmed or cancelled; every change is recorded in an
    append-only event log next to the current state.
    """

DEFAULT_LOG_PATH = Path(user_log_dir("orderdesk", appauthor=False)) / "latest.log"

DEFAULT_LOGGER_LEVELS = ("sqlalchemy=WARNING", "alembic=WARNING")

LOGGING_OPTIONS = (
    click.option(
        "--verbose",
        "-v",
        "verbose_count",
        count=True,
        help="Show more on the console: -v for INFO, -vv for DEBUG.",
    ),
    click.option(
        "--quiet",
        "-q",
        "quiet_count",
        count=True,
        help="Show less on the console: -q for errors only, -qq for critical only.",
    ),
    click.option(
        "--debug/--no-debug",
        default=False,
        help="Log everything to the console with timestamps, logger names and source paths.",
    ),
    click.option(
        "--log-path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=DEFAULT_LOG_PATH,
        envvar="ORDERDESK_LOG_PATH",
        show_default=True,
        show_envvar=True,
        help="File the flight recorder writes to (overwritten on every dump).",
    ),
    click.option(
        "--flight-recorder-capacity",
        type=click.IntRange(min=1),
        default=DEFAULT_FLIGHT_RECORDER_CAPACITY,
        hidden=True,
        envvar="ORDERDESK_FLIGHT_RECORDER_CAPACITY",
        help="Number of log records the flight recorder keeps.",
    ),
    click.option(
        "--flight-recorder/--no-flight-recorder",
        default=True,
        envvar="ORDERDESK_FLIGHT_RECORDER",
        show_envvar=True,
        help=(
            "Buffer recent DEBUG records regardless of -v/-q and dump them to "
            "--log-path as soon as a WARNING or ERROR is logged."
        ),
    ),
    click.option(
        "--force-flush/--no-force-flush",
        "force_flush_flight_recorder",
        default=False,
        envvar="ORDERDESK_FORCE_FLUSH_FLIGHT_RECORDER",
        show_default=True,
        show_envvar=True,
        help="Dump the flight recorder when the command ends, even after a clean run.",
    ),
    click.option(
        "-L",
        "--logger-level",
        "logger_levels",
        multiple=True,
        callback=parse_log_level,
        default=DEFAULT_LOGGER_LEVELS,
        envvar="ORDERDESK_LOGGER_LEVEL",
        show_default=True,
        show_envvar=True,
        help=(
            "Minimum level of one logger as NAME=LEVEL, for the console and the "
            "flight recorder alike. Repeatable, e.g. -L orderdesk.adapters=DEBUG."
        ),
    ),
)


def logging_options(func: Callable) -> Callable:
    """Attach the logging options shared by every ``orderdesk`` invocation."""
    for option in reversed(LOGGING_OPTIONS):
        func = option(func)
    return func


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@logging_options
@clickx.pass_context
def orderdesk(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """ORDERDESK command-line interface."""

    level = verbosity_to_level(verbose_count, quiet_count)
    capacity = flight_recorder_capacity if flight_recorder else None

    handlers = configure_logging(
        level=level,
        debug_mode=debug,
        color=ctx.color is not False,  # None or True => allow color
        log_path=log_path if flight_recorder else None,
        flight_recorder_capacity=capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=capacity,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    # Flush the flight recorder and close files once the command returns
    ctx.call_on_close(logging.shutdown)


for group in (db_group, user_group, order_group):
    orderdesk.add_command(group)
