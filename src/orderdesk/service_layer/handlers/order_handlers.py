"""Handlers for the order use cases."""

import logging
from collections.abc import Callable

from orderdesk.domain.aggregates import Order
from orderdesk.domain.entities import OrderLineItem
from orderdesk.domain.value_objects import Currency, Money, OrderId, ProductId, UserId
from orderdesk.interfaces.id_generator import IdGenerator
from orderdesk.interfaces.unit_of_work import AbstractUnitOfWork
from orderdesk.service_layer import commands
from orderdesk.service_layer.errors import InactiveUserError
from orderdesk.service_layer.publishing import publish_pending_events

logger = logging.getLogger(__name__)


def place_order(
    cmd: commands.PlaceOrder,
    uow: AbstractUnitOfWork,
    event_id_generator: IdGenerator,
) -> str:
    """Place a new order for an active user and return its id.

    Raises:
        AggregateNotFoundError: If the user does not exist.
        InactiveUserError: If the user is deactivated.
    """

    user_id = UserId.of(cmd.user_id)
    currency = Currency.of(cmd.currency)
    items = [
        OrderLineItem.create(
            ProductId.of(line.product_id),
            line.product_name,
            Money.of(line.unit_price, currency),
            line.quantity,
        )
        for line in cmd.lines
    ]

    with uow:
        user = uow.users.get(user_id)
        if not user.is_active:
            raise InactiveUserError(str(user_id))
        order = Order.create(user_id, items)
        uow.orders.save(order)
        publish_pending_events(uow, event_id_generator, order)
        uow.commit()

    logger.info(
        "Placed order %s for user %s (%d item(s), total %s)",
        order.order_id,
        user_id,
        len(order.items),
        order.total_amount,
    )
    return str(order.order_id)


def add_order_item(
    cmd: commands.AddOrderItem,
    uow: AbstractUnitOfWork,
    event_id_generator: IdGenerator,
) -> None:
    """Add an item to a pending order."""

    order_id = OrderId.of(cmd.order_id)
    item = OrderLineItem.create(
        ProductId.of(cmd.product_id),
        cmd.product_name,
        Money.of(cmd.unit_price, cmd.currency),
        cmd.quantity,
    )

    with uow:
        order = uow.orders.get(order_id)
        order.add_item(item)
        uow.orders.save(order)
        publish_pending_events(uow, event_id_generator, order)
        uow.commit()

    logger.info("Added %s x%d to order %s", item.product_id, item.quantity, order_id)


def remove_order_item(
    cmd: commands.RemoveOrderItem,
    uow: AbstractUnitOfWork,
    event_id_generator: IdGenerator,
) -> None:
    """Remove a product's line item from a pending order."""

    order_id, product_id = OrderId.of(cmd.order_id), ProductId.of(cmd.product_id)

    with uow:
        order = uow.orders.get(order_id)
        order.remove_item(product_id)
        uow.orders.save(order)
        publish_pending_events(uow, event_id_generator, order)
        uow.commit()

    logger.info("Removed %s from order %s", product_id, order_id)


def change_order_item_quantity(
    cmd: commands.ChangeOrderItemQuantity,
    uow: AbstractUnitOfWork,
    event_id_generator: IdGenerator,
) -> None:
    """Set the quantity of a line item of a pending order."""

    order_id, product_id = OrderId.of(cmd.order_id), ProductId.of(cmd.product_id)

    with uow:
        order = uow.orders.get(order_id)
        order.change_item_quantity(product_id, cmd.quantity)
        uow.orders.save(order)
        publish_pending_events(uow, event_id_generator, order)
        uow.commit()

    logger.info(
        "Changed quantity of %s in order %s to %d", product_id, order_id, cmd.quantity
    )


def confirm_order(
    cmd: commands.ConfirmOrder,
    uow: AbstractUnitOfWork,
    event_id_generator: IdGenerator,
) -> None:
    """Confirm a pending order."""

    order_id = OrderId.of(cmd.order_id)

    with uow:
        order = uow.orders.get(order_id)
        order.confirm()
        uow.orders.save(order)
        publish_pending_events(uow, event_id_generator, order)
        uow.commit()

    logger.info("Confirmed order %s", order_id)


def cancel_order(
    cmd: commands.CancelOrder,
    uow: AbstractUnitOfWork,
    event_id_generator: IdGenerator,
) -> None:
    """Cancel a pending order."""

    order_id = OrderId.of(cmd.order_id)

    with uow:
        order = uow.orders.get(order_id)
        order.cancel()
        uow.orders.save(order)
        publish_pending_events(uow, event_id_generator, order)
        uow.commit()

    logger.info("Cancelled order %s", order_id)


COMMAND_HANDLERS: dict[type, Callable[..., str | None]] = {
    commands.PlaceOrder: place_order,
    commands.AddOrderItem: add_order_item,
    commands.RemoveOrderItem: remove_order_item,
    commands.ChangeOrderItemQuantity: change_order_item_quantity,
    commands.ConfirmOrder: confirm_order,
    commands.CancelOrder: cancel_order,
}
