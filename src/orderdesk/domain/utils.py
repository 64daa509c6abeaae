"""Domain layer utilities."""

from datetime import datetime, timezone
from typing import TypeVar

from orderdesk.domain import errors

T = TypeVar("T")


def require_instance(field: str, value: T | None, expected: type[T]) -> T:
    """Return `value` if it is an instance of `expected`.

    Raises:
        MissingFieldError: If `value` is None.
        InvalidFormatError: If `value` has the wrong type.
    """
    if value is None:
        raise errors.MissingFieldError(field)
    if not isinstance(value, expected):
        raise errors.InvalidFormatError(
            field, value, f"must be a {expected.__name__}"
        )
    return value


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime.

    Aggregates read the clock exclusively through this function, so tests can
    monkeypatch it to obtain deterministic timestamps.
    """
    return datetime.now(timezone.utc)


def require_utc(field: str, value: datetime) -> datetime:
    """Return `value` normalized to UTC, rejecting naive datetimes.

    Raises:
        MissingFieldError: If `value` is None.
        InvalidFormatError: If `value` is not a timezone-aware datetime.
    """
    if value is None:
        raise errors.MissingFieldError(field)
    if not isinstance(value, datetime):
        raise errors.InvalidFormatError(field, value, "must be a datetime")
    if value.tzinfo is None or value.utcoffset() is None:
        raise errors.InvalidFormatError(field, value, "must be timezone-aware")
    return value.astimezone(timezone.utc)
