"""Custom SQLAlchemy column types for ORDERDESK.

Backend-aware types shared by the table definitions and the migrations.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, BigInteger, Integer, Numeric
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import DateTime, TypeDecorator

from orderdesk.adapters.db.dialects import DialectName

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect

__all__ = ["BIGINT_PK", "MONEY_AMOUNT", "PORTABLE_JSON", "MoneyAmount", "UTCDateTime"]


BIGINT_PK = BigInteger().with_variant(Integer(), "sqlite")

PORTABLE_JSON = JSON(none_as_null=True).with_variant(
    JSONB(none_as_null=True), "postgresql"
)


class UTCDateTime(TypeDecorator[datetime]):  # pylint: disable=too-many-ancestors
    """Timezone-aware UTC datetime.

    Values are stored and returned as aware ``datetime`` objects in UTC.
    Naive datetimes are treated as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        # SQLite has no tz support: store naive UTC
        if dialect.name == DialectName.SQLITE.value:
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)
        return value

    def process_literal_param(self, value: datetime | None, dialect: Dialect) -> Any:
        return self.process_bind_param(value, dialect)

    @property
    def python_type(self) -> type[datetime]:
        return datetime


def as_decimal(value: Any) -> Decimal:
    """Coerce a numeric column value to `Decimal`.

    Drivers may hand back ints or floats; going through `str` keeps a
    two-decimal value exact.
    """
    return value if isinstance(value, Decimal) else Decimal(str(value))


class MoneyAmount(TypeDecorator[Decimal]):  # pylint: disable=too-many-ancestors
    """Exact two-decimal amount.

    ``NUMERIC(18, 2)`` on most backends. SQLite would round-trip NUMERIC
    through a float, so there the amount is stored as an INTEGER count of
    cents. Amounts beyond 18 digits are rejected on bind.
    """

    impl = Numeric(18, 2, asdecimal=True)
    cache_ok = True

    PRECISION = 18
    SCALE = 2

    def load_dialect_impl(self, dialect: Dialect) -> Any:
        if dialect.name == DialectName.SQLITE.value:
            return dialect.type_descriptor(BigInteger())
        return dialect.type_descriptor(self.impl)

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        if value is None:
            return None
        amount = as_decimal(value)
        if amount.adjusted() >= self.PRECISION - self.SCALE:
            raise ValueError(
                f"amount {amount} does not fit NUMERIC({self.PRECISION}, {self.SCALE})"
            )
        amount = amount.quantize(Decimal(1).scaleb(-self.SCALE))
        if dialect.name == DialectName.SQLITE.value:
            return int(amount.scaleb(self.SCALE))
        return amount

    def process_result_value(self, value: Any, dialect: Dialect) -> Decimal | None:
        if value is None:
            return None
        if dialect.name == DialectName.SQLITE.value:
            return Decimal(int(value)).scaleb(-self.SCALE)
        return as_decimal(value)

    @property
    def python_type(self) -> type[Decimal]:
        return Decimal


# Two decimal places, matching the rounding of `Money`.
MONEY_AMOUNT = MoneyAmount()
