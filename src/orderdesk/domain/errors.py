"""Domain-layer error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from decimal import Decimal

# pylint: disable=too-many-arguments

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


class AggregateIdMismatchError(DomainError):
    """Raised when an event targets a different aggregate_id than the receiver."""

    def __init__(self, aggregate_id: str, event_aggregate_id: str) -> None:
        super().__init__(
            f"Event aggregate ID '{event_aggregate_id}' does not match "
            f"aggregate ID '{aggregate_id}'."
        )
        self.aggregate_id = aggregate_id
        self.event_aggregate_id = event_aggregate_id


class InvalidFormatError(DomainError):
    """Raised when a value object is constructed from malformed input."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        super().__init__(f"Invalid {field} {value!r}: {reason}.")
        self.field = field
        self.value = value
        self.reason = reason


class MissingFieldError(DomainError):
    """Raised when a required field is empty or absent."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field '{field}'.")
        self.field = field


class InvalidStateTransitionError(DomainError):
    """Raised when an aggregate is in an invalid state for the attempted action."""

    def __init__(self, aggregate_id: str, action: str, status: str) -> None:
        super().__init__(f"Cannot {action} {aggregate_id}: status is {status}.")
        self.aggregate_id = aggregate_id
        self.action = action
        self.status = status


# ============================================================================
#                              Money errors
# ============================================================================


class MoneyError(DomainError):
    """Base class for violations of money arithmetic rules."""


class NegativeAmountError(MoneyError):
    """Raised when money is constructed with a negative amount."""

    def __init__(self, amount: Decimal) -> None:
        super().__init__(f"Money amount cannot be negative, got {amount}.")
        self.amount = amount


class NegativeResultError(MoneyError):
    """Raised when a subtraction would produce a negative amount."""

    def __init__(self, minuend: Decimal, subtrahend: Decimal) -> None:
        super().__init__(
            f"Subtracting {subtrahend} from {minuend} would be negative."
        )
        self.minuend = minuend
        self.subtrahend = subtrahend


class NegativeFactorError(MoneyError):
    """Raised when money is multiplied by a negative factor."""

    def __init__(self, factor: Decimal) -> None:
        super().__init__(f"Cannot multiply money by negative factor {factor}.")
        self.factor = factor


class CurrencyMismatchError(MoneyError):
    """Raised when two amounts in different currencies are combined."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Currency mismatch: expected {expected}, got {actual}.")
        self.expected = expected
        self.actual = actual


# ============================================================================
#                         Order related errors
# ============================================================================


class InvalidQuantityError(DomainError):
    """Raised when a line item quantity is not a positive integer."""

    def __init__(self, quantity: object) -> None:
        super().__init__(f"Quantity must be a positive integer, got {quantity!r}.")
        self.quantity = quantity


class EmptyOrderError(DomainError):
    """Raised when an order would be created or confirmed without line items."""

    def __init__(self, order_id: str | None = None) -> None:
        subject = f"Order {order_id}" if order_id is not None else "An order"
        super().__init__(f"{subject} must contain at least one line item.")
        self.order_id = order_id


class ItemNotFoundError(DomainError):
    """Raised when a line item change targets a product not in the order."""

    def __init__(self, order_id: str, product_id: str) -> None:
        super().__init__(f"Order {order_id} has no line item for product {product_id}.")
        self.order_id = order_id
        self.product_id = product_id
