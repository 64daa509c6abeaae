"""Events

Domain events are immutable facts recorded by aggregates. Each event knows the
stream (aggregate type) and aggregate it belongs to, and when it occurred.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from orderdesk.domain.value_objects import Email, Money, Name, OrderId, UserId


@dataclass(frozen=True, slots=True)
class DomainEvent(abc.ABC):
    """Base class for all domain events.
    Requires a way to determine the owning aggregate ID.
    """

    STREAM_TYPE: ClassVar[str]
    """The aggregate type whose event stream this event belongs to."""

    @property
    @abc.abstractmethod
    def aggregate_id(self) -> str:
        """Return the ID of the aggregate this event belongs to."""


# ============================================================================
#                               Order events
# ============================================================================


@dataclass(frozen=True, slots=True)
class OrderEvent(DomainEvent):
    """Common shape of order lifecycle events."""

    STREAM_TYPE: ClassVar[str] = "Order"

    order_id: OrderId
    user_id: UserId
    total_amount: Money
    occurred_at: datetime

    @property
    def aggregate_id(self) -> str:
        return str(self.order_id)


@dataclass(frozen=True, slots=True)
class OrderCreated(OrderEvent):
    """Event indicating that an order has been placed."""


@dataclass(frozen=True, slots=True)
class OrderConfirmed(OrderEvent):
    """Event indicating that a pending order has been confirmed."""


@dataclass(frozen=True, slots=True)
class OrderCancelled(OrderEvent):
    """Event indicating that a pending order has been cancelled."""


# ============================================================================
#                                User events
# ============================================================================


@dataclass(frozen=True, slots=True)
class UserRegistered(DomainEvent):
    """Event indicating that a user has been registered."""

    STREAM_TYPE: ClassVar[str] = "User"

    user_id: UserId
    name: Name
    email: Email
    occurred_at: datetime

    @property
    def aggregate_id(self) -> str:
        return str(self.user_id)


@dataclass(frozen=True, slots=True)
class UserRenamed(DomainEvent):
    """Event indicating that a user changed their display name."""

    STREAM_TYPE: ClassVar[str] = "User"

    user_id: UserId
    name: Name
    occurred_at: datetime

    @property
    def aggregate_id(self) -> str:
        return str(self.user_id)


@dataclass(frozen=True, slots=True)
class UserEmailChanged(DomainEvent):
    """Event indicating that a user changed their email address."""

    STREAM_TYPE: ClassVar[str] = "User"

    user_id: UserId
    email: Email
    occurred_at: datetime

    @property
    def aggregate_id(self) -> str:
        return str(self.user_id)


@dataclass(frozen=True, slots=True)
class UserDeactivated(DomainEvent):
    """Event indicating that a user has been deactivated."""

    STREAM_TYPE: ClassVar[str] = "User"

    user_id: UserId
    occurred_at: datetime

    @property
    def aggregate_id(self) -> str:
        return str(self.user_id)


# Registry of domain event types for deserialization
DOMAIN_EVENT_REGISTRY: dict[str, type[DomainEvent]] = {
    "OrderCreated": OrderCreated,
    "OrderConfirmed": OrderConfirmed,
    "OrderCancelled": OrderCancelled,
    "UserRegistered": UserRegistered,
    "UserRenamed": UserRenamed,
    "UserEmailChanged": UserEmailChanged,
    "UserDeactivated": UserDeactivated,
}
