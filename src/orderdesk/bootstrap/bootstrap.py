"""Bootstrap the message bus with handlers and unit of work."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from orderdesk import config
from orderdesk.adapters.db.engine import make_engine
from orderdesk.adapters.id_generators import ULIDGenerator
from orderdesk.adapters.unit_of_work import SqlAlchemyUnitOfWork
from orderdesk.service_layer.handlers import COMMAND_HANDLERS
from orderdesk.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from orderdesk.interfaces.id_generator import IdGenerator
    from orderdesk.interfaces.unit_of_work import AbstractUnitOfWork
    from orderdesk.service_layer.commands import Command


@dataclass(frozen=True)
class AppContainer:
    """Wired application objects handed to the entrypoints."""

    message_bus: MessageBus

    @property
    def uow(self) -> AbstractUnitOfWork:
        """The unit of work shared by the handlers, for read views."""
        return self.message_bus.uow


def build_write_uow(url: str) -> AbstractUnitOfWork:
    """Build a new unit of work for write operations."""
    return SqlAlchemyUnitOfWork(make_engine(url))


def build_message_bus(
    uow: AbstractUnitOfWork,
    command_handlers: Mapping[type[Command], Callable[..., Any]],
    event_id_generator: IdGenerator | None = None,
) -> MessageBus:
    """Build a message bus whose handlers get `uow` and the id generator injected."""
    dependencies = {
        "uow": uow,
        "event_id_generator": (
            event_id_generator if event_id_generator is not None else ULIDGenerator()
        ),
    }
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }

    return MessageBus(uow, command_handlers=injected_command_handlers)


def bootstrap(url: str | None = None) -> AppContainer:
    """Wire the application against the database at `url` (default: ORDERDESK_DB_URL).

    Raises:
        DatabaseUrlNotSetError: If no URL is given and ORDERDESK_DB_URL is unset.
    """
    uow = build_write_uow(url if url is not None else config.get_db_url())
    return AppContainer(message_bus=build_message_bus(uow, COMMAND_HANDLERS))


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Bind the dependencies a handler asks for by parameter name."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return lambda message: handler(message, **deps)
