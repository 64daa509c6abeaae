"""ORDERDESK order commands.

Examples
    $ orderdesk order place USER_ID --currency JPY \\
        --item 6f1c...:Widget:500:2 --item 0b7e...:Gadget:1000:1
    $ orderdesk order confirm ORDER_ID
    $ orderdesk order show ORDER_ID
"""

from __future__ import annotations

from decimal import Decimal

import click
import click_extra as clickx

from orderdesk.service_layer import commands, views

from .helpers import success
from .helpers.dispatch import cli_errors, dispatch, get_app

ITEM_FORMAT = "PRODUCT_ID:NAME:PRICE:QTY"  # pragma: no mutate


def parse_items(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: tuple[str, ...],
) -> tuple[commands.OrderLine, ...]:
    """Click callback turning PRODUCT_ID:NAME:PRICE:QTY strings into order lines.

    The name may itself contain colons; only the first and last two separators
    are significant.

    Raises:
        click.BadParameter: If an item is malformed or its quantity is not an integer.
    """

    lines = []
    for raw in value:
        try:
            product_id, rest = raw.split(":", 1)
            product_name, price, quantity = rest.rsplit(":", 2)
        except ValueError as e:
            raise click.BadParameter(f"Expected {ITEM_FORMAT}, got {raw!r}") from e
        try:
            qty = int(quantity)
        except ValueError as e:
            raise click.BadParameter(f"Quantity must be an integer, got {quantity!r}") from e
        lines.append(
            commands.OrderLine(
                product_id=product_id,
                product_name=product_name,
                unit_price=price,
                quantity=qty,
            )
        )
    return tuple(lines)


def _format_amount(amount: Decimal, currency: str) -> str:
    return f"{amount} {currency}"


@click.group(cls=clickx.ExtraGroup)
def order() -> None:
    """Place and manage orders."""


@order.command()
@click.argument("user_id")
@click.option("--currency", required=True, help="Three-letter currency code, e.g. JPY.")
@click.option(
    "--item",
    "lines",
    multiple=True,
    required=True,
    callback=parse_items,
    metavar=ITEM_FORMAT,
    help="A line item; repeat for several. Repeated products are merged.",
)
def place(user_id: str, currency: str, lines: tuple[commands.OrderLine, ...]) -> None:
    """Place an order for USER_ID and print the new order id."""
    order_id = dispatch(
        commands.PlaceOrder(user_id=user_id, currency=currency, lines=lines)
    )
    success(f"Placed order {order_id}")
    click.echo(order_id)


@order.command("add-item")
@click.argument("order_id")
@click.argument("product_id")
@click.argument("product_name")
@click.argument("unit_price")
@click.option("--currency", required=True, help="Currency of UNIT_PRICE.")
@click.option("--quantity", "-n", type=int, default=1, show_default=True)
def add_item(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    order_id: str,
    product_id: str,
    product_name: str,
    unit_price: str,
    currency: str,
    quantity: int,
) -> None:
    """Add an item to a pending order."""
    dispatch(
        commands.AddOrderItem(
            order_id=order_id,
            product_id=product_id,
            product_name=product_name,
            unit_price=unit_price,
            currency=currency,
            quantity=quantity,
        )
    )
    success(f"Added {product_id} to order {order_id}")


@order.command("remove-item")
@click.argument("order_id")
@click.argument("product_id")
def remove_item(order_id: str, product_id: str) -> None:
    """Remove a product from a pending order (no-op if absent)."""
    dispatch(commands.RemoveOrderItem(order_id=order_id, product_id=product_id))
    success(f"Removed {product_id} from order {order_id}")


@order.command("change-quantity")
@click.argument("order_id")
@click.argument("product_id")
@click.argument("quantity", type=int)
def change_quantity(order_id: str, product_id: str, quantity: int) -> None:
    """Set the quantity of a line item of a pending order."""
    dispatch(
        commands.ChangeOrderItemQuantity(
            order_id=order_id, product_id=product_id, quantity=quantity
        )
    )
    success(f"Changed quantity of {product_id} in order {order_id}")


@order.command()
@click.argument("order_id")
def confirm(order_id: str) -> None:
    """Confirm a pending order."""
    dispatch(commands.ConfirmOrder(order_id=order_id))
    success(f"Confirmed order {order_id}")


@order.command()
@click.argument("order_id")
def cancel(order_id: str) -> None:
    """Cancel a pending order."""
    dispatch(commands.CancelOrder(order_id=order_id))
    success(f"Cancelled order {order_id}")


@order.command()
@click.argument("order_id")
def show(order_id: str) -> None:
    """Show an order and its line items."""
    with cli_errors():
        view = views.get_order(order_id, get_app().uow)

    click.echo(f"Order   : {view.order_id}")
    click.echo(f"User    : {view.user_id}")
    click.echo(f"Status  : {view.status}")
    click.echo(f"Total   : {_format_amount(view.total_amount, view.currency)}")
    click.echo(f"Created : {view.created_at.isoformat()}")
    click.echo(f"Updated : {view.updated_at.isoformat()}")
    click.echo("Items   :")
    for line in view.items:
        click.echo(
            f"  {line.product_id}  {line.product_name}  "
            f"{line.quantity} x {_format_amount(line.unit_price, view.currency)} "
            f"= {_format_amount(line.line_total, view.currency)}"
        )


@order.command("list")
@click.argument("user_id")
def list_orders(user_id: str) -> None:
    """List the orders of USER_ID, oldest first."""
    with cli_errors():
        order_views = views.list_orders_for_user(user_id, get_app().uow)

    for view in order_views:
        click.echo(
            f"{view.order_id}  {view.status:<9}  "
            f"{_format_amount(view.total_amount, view.currency)}  "
            f"{len(view.items)} item(s)"
        )
