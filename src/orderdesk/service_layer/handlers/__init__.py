"""Service layer handlers."""

from collections.abc import Callable

from .order_handlers import COMMAND_HANDLERS as ORDER_COMMAND_HANDLERS
from .user_handlers import COMMAND_HANDLERS as USER_COMMAND_HANDLERS

__all__ = ["COMMAND_HANDLERS"]

COMMAND_HANDLERS: dict[type, Callable[..., str | None]] = {
    **USER_COMMAND_HANDLERS,
    **ORDER_COMMAND_HANDLERS,
}
