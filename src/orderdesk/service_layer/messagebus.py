"""Message bus routing commands to their handlers."""

import logging
from collections.abc import Callable
from typing import Any

from orderdesk.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class NoHandlerForCommand(LookupError):
    """Exception raised when no handler is found for a command."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


class MessageBus:
    """A simple, synchronous message bus for commands.

    Routes each command to its handler and logs the dispatch. It is the single
    entrypoint to the service layer for writes.

    Args:
        uow: The unit of work injected into the handlers, exposed here so
            callers can run read views against the same storage.
        command_handlers: Mapping of command types to handlers taking only the
            command; other dependencies are bound beforehand (see bootstrap).
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        command_handlers: dict[type[Command], Callable[..., Any]],
    ) -> None:
        self.uow = uow
        self._command_handlers = command_handlers

    def handle(self, cmd: Command) -> Any:
        """Dispatch a command to its handler and return the handler's result.

        Raises:
            NoHandlerForCommand: If no handler is registered for the command type.
            Exception: Whatever the handler raises, after logging it.
        """

        if not (handler := self._command_handlers.get(type(cmd))):
            logger.error("No handler found for command %s", type(cmd).__name__)
            raise NoHandlerForCommand(cmd)

        handler_name = self._get_handler_name(handler)
        logger.debug("Handling command %s with handler %s", cmd, handler_name)
        try:
            return handler(cmd)
        except Exception:
            logger.exception(
                "Exception handling command %s with handler %s", cmd, handler_name
            )
            raise

    @staticmethod
    def _get_handler_name(fn: Callable[..., Any]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
