"""Logging setup for the ORDERDESK CLI.

Two handlers hang off the root logger:

- a Rich console handler on stderr whose level follows -v/-q, and
- an optional "flight recorder": a MemoryHandler buffering DEBUG records and
  dumping them to a file when a WARNING or worse is logged (or on close when
  forced).

Library code only ever calls ``logging.getLogger(__name__)``; nothing outside
this module touches handlers.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "orderdesk"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]

DEFAULT_FLIGHT_RECORDER_CAPACITY = 2000


def verbosity_to_level(verbose_count: int, quiet_count: int) -> int:
    """Map -v/-q counts onto a logging level, starting from WARNING.

    Each -v lowers the threshold by one level and each -q raises it; the
    result is clamped to DEBUG..CRITICAL.
    """
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


class ThirdPartyPrefixFilter(logging.Filter):
    """Prefix third-party records with their top-level package, e.g. "[alembic]".

    Records from ORDERDESK's own loggers get an empty prefix. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the Rich console handler (stderr).

    Args:
        level: Minimum level for console output (forced to DEBUG in debug mode).
        debug_mode: Show timestamps, logger names and source paths.
        color: Enable color output; mirrors click-extra's --color/--no-color.

    Returns:
        RichHandler: Handler to attach to the root logger.
    """

    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = DEFAULT_FLIGHT_RECORDER_CAPACITY,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder: a MemoryHandler in front of a FileHandler.

    Args:
        path: File the buffer is dumped to (overwritten per run).
        capacity: Number of records kept in memory.
        flush_level: Records at or above this level trigger a dump.
        flush_on_close: Also dump when the handler is closed.

    Returns:
        MemoryHandler: Handler to attach to the root logger.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] %(levelname)s "
            "%(name)s:%(lineno)d: %(message)s"
        )
    )

    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def configure_logging(  # pylint: disable=too-many-arguments
    *,
    level: int,
    debug_mode: bool = False,
    color: bool = True,
    log_path: Path | None = None,
    flight_recorder_capacity: int | None = None,
    force_flush: bool = False,
    logger_levels: dict[str, int] | None = None,
) -> list[logging.Handler]:
    """Install the console handler (and flight recorder) on the root logger.

    The flight recorder is enabled when both `log_path` and
    `flight_recorder_capacity` are given. Any existing root configuration is
    replaced.

    Returns:
        The installed handlers, console first.
    """

    handlers: list[logging.Handler] = [
        config_console_handler(level=level, debug_mode=debug_mode, color=color)
    ]
    if log_path is not None and flight_recorder_capacity is not None:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush,
            )
        )

    # Root captures everything; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(lvl)

    return handlers


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    flight_capacity: int | None,
    force_flush_fr: bool,
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line INFO summary, then DEBUG diagnostics for bug reports."""

    logger.info(
        "ORDERDESK %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Alembic: %s", alembic.__version__)
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            log_path if log_path else "<none>",
            flight_capacity,
            force_flush_fr,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
