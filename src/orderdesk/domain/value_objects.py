"""Module including value objects used across the domain layer.

Value objects are immutable, validate themselves on construction and compare by
value. Every operation returns a new instance.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext
from typing import ClassVar, TypeVar

from orderdesk.domain import errors

I = TypeVar("I", bound="Identifier")

CENTS = Decimal("0.01")
# Money arithmetic is exact up to this many significant digits
MONEY_CONTEXT = Context(prec=34, rounding=ROUND_HALF_UP)
_UUID_RE = re.compile(r"[0-9a-fA-F]{8}(?:-[0-9a-fA-F]{4}){3}-[0-9a-fA-F]{12}")
_CURRENCY_RE = re.compile(r"[A-Z]{3}")
_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


# ============================================================================
#                               Identifiers
# ============================================================================


@dataclass(frozen=True)
class Identifier:
    """Base class for UUID-backed identifiers.

    The raw string is trimmed and must be a hyphenated 36-character UUID;
    it is lower-cased, so upper- and lower-case spellings compare equal.
    Braced, ``urn:uuid:`` and bare 32-digit hex forms are rejected.
    Identifiers of different kinds never compare equal.
    """

    value: str

    KIND: ClassVar[str] = "identifier"

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise errors.InvalidFormatError(self.KIND, self.value, "must be a string")
        raw = self.value.strip()
        if not raw:
            raise errors.InvalidFormatError(self.KIND, self.value, "must not be empty")
        if not _UUID_RE.fullmatch(raw):
            raise errors.InvalidFormatError(
                self.KIND, self.value, "must be a hyphenated UUID"
            )
        object.__setattr__(self, "value", str(uuid.UUID(raw)))

    @classmethod
    def of(cls: type[I], raw: str) -> I:
        """Parse an identifier from its string form.

        Raises:
            InvalidFormatError: If `raw` is empty or not a UUID.
        """
        return cls(raw)

    @classmethod
    def generate(cls: type[I]) -> I:
        """Generate a fresh random (version 4) identifier."""
        return cls(str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.value


class OrderId(Identifier):
    """Identity of an Order aggregate."""

    KIND = "order id"


class UserId(Identifier):
    """Identity of a User aggregate."""

    KIND = "user id"


class ProductId(Identifier):
    """Identity of a product referenced by order line items."""

    KIND = "product id"


# ============================================================================
#                                  Money
# ============================================================================


def _to_decimal(value: object, field: str) -> Decimal:
    if isinstance(value, bool):
        raise errors.InvalidFormatError(field, value, "must be a number")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, str, float)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise errors.InvalidFormatError(field, value, "must be a number") from e
    else:
        raise errors.InvalidFormatError(field, value, "must be a number")
    if not result.is_finite():
        raise errors.InvalidFormatError(field, value, "must be finite")
    return result


def _to_cents(amount: Decimal, raw: object) -> Decimal:
    with localcontext(MONEY_CONTEXT):
        try:
            return amount.quantize(CENTS)
        except InvalidOperation as e:
            raise errors.InvalidFormatError(
                "amount", raw, f"must have at most {MONEY_CONTEXT.prec} digits"
            ) from e


@dataclass(frozen=True)
class Currency:
    """Three-letter currency code, normalized to upper case (e.g. ``JPY``)."""

    code: str

    def __post_init__(self) -> None:
        if not isinstance(self.code, str):
            raise errors.InvalidFormatError("currency", self.code, "must be a string")
        code = self.code.strip().upper()
        if not _CURRENCY_RE.fullmatch(code):
            raise errors.InvalidFormatError(
                "currency", self.code, "must be a three-letter code"
            )
        object.__setattr__(self, "code", code)

    @classmethod
    def of(cls, code: str | Currency) -> Currency:
        """Return `code` as a Currency, parsing it when given a string."""
        return code if isinstance(code, Currency) else cls(code)

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class Money:
    """A non-negative amount in a single currency.

    Amounts are stored rounded half-up to two decimal places and hold at most
    34 significant digits, cents included. Arithmetic and ordering
    comparisons require both operands to share a currency.
    """

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        amount = _to_decimal(self.amount, "amount")
        if amount < 0:
            raise errors.NegativeAmountError(amount)
        object.__setattr__(self, "amount", _to_cents(amount, self.amount))
        object.__setattr__(self, "currency", Currency.of(self.currency))

    # --- Construction Paths ---

    @classmethod
    def of(cls, amount: Decimal | int | str, currency: Currency | str) -> Money:
        """Build money from an amount and a currency.

        Raises:
            NegativeAmountError: If `amount` is below zero.
            InvalidFormatError: If `amount` is not a number or too large, or
                `currency` is not a three-letter code.
        """
        return cls(amount, currency)  # type: ignore[arg-type]

    @classmethod
    def zero(cls, currency: Currency | str) -> Money:
        """Zero in the given currency."""
        return cls(Decimal(0), currency)  # type: ignore[arg-type]

    # --- Arithmetic ---

    def add(self, other: Money) -> Money:
        """Return the sum of two amounts in the same currency.

        Raises:
            CurrencyMismatchError: If the currencies differ.
            InvalidFormatError: If the sum does not fit the amount digits.
        """
        self._require_same_currency(other)
        with localcontext(MONEY_CONTEXT):
            return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        """Return the difference of two amounts in the same currency.

        Raises:
            CurrencyMismatchError: If the currencies differ.
            NegativeResultError: If `other` is larger than this amount.
        """
        self._require_same_currency(other)
        with localcontext(MONEY_CONTEXT):
            result = self.amount - other.amount
        if result < 0:
            raise errors.NegativeResultError(self.amount, other.amount)
        return Money(result, self.currency)

    def multiply(self, factor: Decimal | int) -> Money:
        """Return this amount scaled by a non-negative factor."""
        value = _to_decimal(factor, "factor")
        if value < 0:
            raise errors.NegativeFactorError(value)
        with localcontext(MONEY_CONTEXT):
            return Money(self.amount * value, self.currency)

    @property
    def is_zero(self) -> bool:
        """Whether the amount is exactly zero."""
        return self.amount == 0

    # --- Comparisons ---

    def __lt__(self, other: Money) -> bool:
        self._require_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._require_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._require_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._require_same_currency(other)
        return self.amount >= other.amount

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    # --- Internal Helpers ---

    def _require_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise errors.CurrencyMismatchError(
                self.currency.code, other.currency.code
            )


# ============================================================================
#                              User attributes
# ============================================================================


@dataclass(frozen=True)
class Name:
    """A display name: trimmed, non-empty, at most 100 characters."""

    value: str

    MAX_LENGTH: ClassVar[int] = 100

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise errors.InvalidFormatError("name", self.value, "must be a string")
        name = self.value.strip()
        if not name:
            raise errors.InvalidFormatError("name", self.value, "must not be empty")
        if len(name) > self.MAX_LENGTH:
            raise errors.InvalidFormatError(
                "name", self.value, f"must be at most {self.MAX_LENGTH} characters"
            )
        object.__setattr__(self, "value", name)

    @classmethod
    def of(cls, raw: str) -> Name:
        """Parse a name from user input."""
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Email:
    """An email address, trimmed and lower-cased."""

    value: str

    MAX_LENGTH: ClassVar[int] = 254

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise errors.InvalidFormatError("email", self.value, "must be a string")
        email = self.value.strip().lower()
        if len(email) > self.MAX_LENGTH:
            raise errors.InvalidFormatError(
                "email", self.value, f"must be at most {self.MAX_LENGTH} characters"
            )
        if not _EMAIL_RE.fullmatch(email):
            raise errors.InvalidFormatError(
                "email", self.value, "must look like local@domain.tld"
            )
        object.__setattr__(self, "value", email)

    @classmethod
    def of(cls, raw: str) -> Email:
        """Parse an email address from user input."""
        return cls(raw)

    def __str__(self) -> str:
        return self.value
