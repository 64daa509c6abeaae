"""Entities owned by aggregates."""

from __future__ import annotations

from orderdesk.domain import errors
from orderdesk.domain.utils import require_instance
from orderdesk.domain.value_objects import Money, ProductId


def _check_quantity(quantity: object) -> int:
    # bool is an int subclass; True is not a quantity
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise errors.InvalidQuantityError(quantity)
    return quantity


class OrderLineItem:
    """A quantity of one product at a unit price, owned by an Order.

    Identity is the product id: two line items are equal if and only if they
    reference the same product, whatever their quantity or price. The line
    total is always derived from the unit price and quantity, never stored.
    """

    def __init__(
        self,
        product_id: ProductId,
        product_name: str,
        unit_price: Money,
        quantity: int,
    ) -> None:
        self._product_id = require_instance("product_id", product_id, ProductId)
        if not isinstance(product_name, str) or not product_name.strip():
            raise errors.MissingFieldError("product_name")
        self._product_name = product_name.strip()
        self._unit_price = require_instance("unit_price", unit_price, Money)
        self._quantity = _check_quantity(quantity)

    # --- Construction Paths ---

    @classmethod
    def create(
        cls,
        product_id: ProductId,
        product_name: str,
        unit_price: Money,
        quantity: int,
    ) -> OrderLineItem:
        """Create a validated line item.

        Raises:
            MissingFieldError: If the product id, name or unit price is missing.
            InvalidQuantityError: If `quantity` is not a positive integer.
        """
        return cls(product_id, product_name, unit_price, quantity)

    # --- Accessors ---

    @property
    def product_id(self) -> ProductId:
        """Identity of the line item."""
        return self._product_id

    @property
    def product_name(self) -> str:
        """Display name of the product."""
        return self._product_name

    @property
    def unit_price(self) -> Money:
        """Price of a single unit."""
        return self._unit_price

    @property
    def quantity(self) -> int:
        """Number of units (always >= 1)."""
        return self._quantity

    @property
    def line_total(self) -> Money:
        """``unit_price × quantity``."""
        return self._unit_price.multiply(self._quantity)

    # --- Mutations ---

    def change_quantity(self, new_quantity: int) -> None:
        """Set a new quantity.

        Raises:
            InvalidQuantityError: If `new_quantity` is not a positive integer.
        """
        self._quantity = _check_quantity(new_quantity)

    def change_unit_price(self, new_price: Money) -> None:
        """Set a new unit price in the same currency.

        Raises:
            MissingFieldError: If `new_price` is None.
            CurrencyMismatchError: If `new_price` uses a different currency.
        """
        price = require_instance("unit_price", new_price, Money)
        if price.currency != self._unit_price.currency:
            raise errors.CurrencyMismatchError(
                self._unit_price.currency.code, price.currency.code
            )
        self._unit_price = price

    # --- Identity ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderLineItem):
            return NotImplemented
        return self._product_id == other._product_id

    def __hash__(self) -> int:
        return hash(self._product_id)

    def __repr__(self) -> str:
        return (
            f"OrderLineItem(product_id={self._product_id.value!r}, "
            f"product_name={self._product_name!r}, unit_price={self._unit_price}, "
            f"quantity={self._quantity})"
        )
