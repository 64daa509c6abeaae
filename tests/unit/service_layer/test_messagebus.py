"""Unit tests for the MessageBus.

The bus is built directly over stub handlers so routing, return values and
logging are checked without touching the real use cases.
"""

from functools import partial

import pytest

from orderdesk.adapters.unit_of_work import InMemoryUnitOfWork
from orderdesk.service_layer.commands import CancelOrder, ConfirmOrder, RegisterUser
from orderdesk.service_layer.messagebus import MessageBus, NoHandlerForCommand

# pylint: disable=unused-argument, too-few-public-methods, redefined-outer-name

ORDER_ID = "00000000-0000-0000-0000-0000000000aa"


def messages(caplog, level: str) -> list[str]:
    """Messages logged by the bus at `level`."""
    return [
        rec.getMessage()
        for rec in caplog.records
        if rec.name == "orderdesk.service_layer.messagebus" and rec.levelname == level
    ]


@pytest.fixture
def handled() -> list:
    return []


@pytest.fixture
def bus(handled) -> MessageBus:
    def confirm_order(cmd: ConfirmOrder) -> None:
        handled.append(cmd)

    def register_user(cmd: RegisterUser) -> str:
        handled.append(cmd)
        return "new-user-id"

    return MessageBus(
        InMemoryUnitOfWork(),
        command_handlers={ConfirmOrder: confirm_order, RegisterUser: register_user},
    )


def test_routes_each_command_to_its_own_handler(bus, handled, caplog):
    confirm = ConfirmOrder(order_id=ORDER_ID)

    with caplog.at_level("DEBUG"):
        result = bus.handle(confirm)

    assert result is None
    assert handled == [confirm]
    assert messages(caplog, "DEBUG") == [
        f"Handling command {confirm} with handler confirm_order"
    ]


def test_returns_what_the_handler_returns(bus):
    assert bus.handle(RegisterUser(name="Ada", email="ada@example.com")) == "new-user-id"


def test_unknown_command_is_logged_and_raised(bus, handled, caplog):
    with caplog.at_level("ERROR"):
        with pytest.raises(NoHandlerForCommand, match="No handler found for command CancelOrder"):
            bus.handle(CancelOrder(order_id=ORDER_ID))

    assert handled == []
    assert messages(caplog, "ERROR") == ["No handler found for command CancelOrder"]


def test_handler_errors_are_logged_with_traceback_and_reraised(caplog):
    def confirm_order(cmd: ConfirmOrder) -> None:
        raise LookupError(f"Order {cmd.order_id} not found")

    bus = MessageBus(InMemoryUnitOfWork(), command_handlers={ConfirmOrder: confirm_order})
    cmd = ConfirmOrder(order_id=ORDER_ID)

    with caplog.at_level("ERROR"):
        with pytest.raises(LookupError, match="not found"):
            bus.handle(cmd)

    (record,) = [r for r in caplog.records if r.levelname == "ERROR"]
    assert record.getMessage() == (
        f"Exception handling command {cmd} with handler confirm_order"
    )
    assert record.exc_info is not None


def test_injected_handlers_are_logged_by_their_function_name(caplog):
    """bootstrap binds dependencies; the log still names the wrapped function."""

    def cancel_order(cmd: CancelOrder, uow) -> None:
        assert uow is not None

    bus = MessageBus(
        InMemoryUnitOfWork(),
        command_handlers={CancelOrder: partial(cancel_order, uow=object())},
    )

    with caplog.at_level("DEBUG"):
        bus.handle(CancelOrder(order_id=ORDER_ID))

    assert messages(caplog, "DEBUG")[0].endswith("with handler cancel_order")


def test_handlers_without_a_name_are_logged_by_repr(caplog):
    class ConfirmOrderHandler:
        def __call__(self, cmd):
            return None

    bus = MessageBus(
        InMemoryUnitOfWork(), command_handlers={ConfirmOrder: ConfirmOrderHandler()}
    )

    with caplog.at_level("DEBUG"):
        bus.handle(ConfirmOrder(order_id=ORDER_ID))

    assert "ConfirmOrderHandler object at" in messages(caplog, "DEBUG")[0]


def test_exposes_its_unit_of_work():
    uow = InMemoryUnitOfWork()
    assert MessageBus(uow, command_handlers={}).uow is uow
