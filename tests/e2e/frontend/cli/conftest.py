"""Fixtures for end-to-end CLI logging tests.

A test-only ``log-demo`` command emits one record per level on the
``orderdesk.demo`` logger and a few on a third-party logger, so verbosity
flags, per-logger levels and the flight recorder can be observed from the
outside.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from orderdesk.entrypoints.cli.main import orderdesk

# pylint: disable=redefined-outer-name

DEMO_COMMAND = "log-demo"


@click.command()
def log_demo():
    """Emit one message per level, then a trailing DEBUG record."""
    logger = logging.getLogger("orderdesk.demo")
    logger.debug("Loaded 3 pending orders.")
    logger.info("Order 7 confirmed.")
    logger.warning("Order 9 total is zero.")
    logger.error("Order 11 could not be saved.")
    logger.critical("Event log unreachable.")
    vendor = logging.getLogger("some.thirdparty")
    vendor.debug("vendor debug chatter")
    vendor.info("vendor info notice")
    vendor.warning("vendor warning notice")
    logger.debug("Shutting down.")


@pytest.fixture
def registered_log_demo():
    """Attach ``log-demo`` to the ``orderdesk`` group for one test."""
    orderdesk.add_command(log_demo, name=DEMO_COMMAND)
    try:
        yield
    finally:
        orderdesk.commands.pop(DEMO_COMMAND, None)
        # click-extra keeps its own per-section registry
        for section in getattr(orderdesk, "_sections", []):
            getattr(section, "commands", {}).pop(DEMO_COMMAND, None)
        if hasattr(orderdesk, "_default_section"):
            orderdesk._default_section.commands.pop(DEMO_COMMAND, None)  # pylint: disable=protected-access


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield
