"""Commands accepted by the message bus.

Commands carry raw primitives as typed or read from the command line; the
handlers parse them into domain value objects.
"""

from dataclasses import dataclass
from decimal import Decimal

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


# ============================================================================
#                                   Users
# ============================================================================


@dataclass(frozen=True)
class RegisterUser(Command):
    """Register a new user. Handled with the new user's id as result."""

    name: str
    email: str


@dataclass(frozen=True)
class RenameUser(Command):
    """Change a user's display name."""

    user_id: str
    name: str


@dataclass(frozen=True)
class ChangeUserEmail(Command):
    """Change a user's email address."""

    user_id: str
    email: str


@dataclass(frozen=True)
class DeactivateUser(Command):
    """Deactivate a user."""

    user_id: str


# ============================================================================
#                                   Orders
# ============================================================================


@dataclass(frozen=True)
class OrderLine:
    """One requested line of a new order (not a command by itself)."""

    product_id: str
    product_name: str
    unit_price: Decimal | str
    quantity: int


@dataclass(frozen=True)
class PlaceOrder(Command):
    """Place a new order for a user. Handled with the new order's id as result."""

    user_id: str
    currency: str
    lines: tuple[OrderLine, ...]


@dataclass(frozen=True)
class AddOrderItem(Command):
    """Add an item to a pending order (merging with an existing line)."""

    order_id: str
    product_id: str
    product_name: str
    unit_price: Decimal | str
    currency: str
    quantity: int


@dataclass(frozen=True)
class RemoveOrderItem(Command):
    """Remove a product's line item from a pending order."""

    order_id: str
    product_id: str


@dataclass(frozen=True)
class ChangeOrderItemQuantity(Command):
    """Set the quantity of a line item of a pending order."""

    order_id: str
    product_id: str
    quantity: int


@dataclass(frozen=True)
class ConfirmOrder(Command):
    """Confirm a pending order."""

    order_id: str


@dataclass(frozen=True)
class CancelOrder(Command):
    """Cancel a pending order."""

    order_id: str
