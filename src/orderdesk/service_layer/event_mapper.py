"""Conversions between DomainEvents and EventEnvelopes.

Payloads are JSON-safe: identifiers, names and emails become strings, money
becomes ``{"amount": "<decimal>", "currency": "<code>"}`` and timestamps
ISO-8601 strings. Field types are read from the event classes' annotations,
so decoding rebuilds the exact value objects.
"""

from __future__ import annotations

import dataclasses
import typing
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from orderdesk.domain.events import DOMAIN_EVENT_REGISTRY
from orderdesk.domain.value_objects import Email, Identifier, Money, Name
from orderdesk.interfaces.eventstore import EventEnvelope

if TYPE_CHECKING:
    from orderdesk.domain.events import DomainEvent


class UnknownEventTypeError(LookupError):
    """Raised when an envelope names an event type missing from the registry."""

    def __init__(self, event_type: str) -> None:
        super().__init__(f"Unknown event type: {event_type}")
        self.event_type = event_type


def encode_value(value: Any) -> Any:
    """Return the JSON-safe form of an event field value."""
    if isinstance(value, Money):
        return {"amount": str(value.amount), "currency": value.currency.code}
    if isinstance(value, (Identifier, Name, Email)):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def decode_value(raw: Any, field_type: Any) -> Any:
    """Rebuild an event field value of `field_type` from its JSON-safe form."""
    if field_type is Money:
        return Money.of(Decimal(raw["amount"]), raw["currency"])
    if isinstance(field_type, type) and issubclass(field_type, (Identifier, Name, Email)):
        return field_type.of(raw)
    if field_type is datetime:
        return datetime.fromisoformat(raw)
    return raw


class EventMapper:
    """Maps between DomainEvents and EventEnvelopes."""

    def __init__(
        self, event_registry: dict[str, type[DomainEvent]] | None = None
    ) -> None:
        self.event_registry = (
            event_registry if event_registry is not None else DOMAIN_EVENT_REGISTRY
        )

    @staticmethod
    def to_payload(event: DomainEvent) -> dict[str, Any]:
        """Return the JSON-safe payload of `event`."""
        return {
            field.name: encode_value(getattr(event, field.name))
            for field in dataclasses.fields(event)
        }

    @classmethod
    def to_envelope(
        cls,
        event: DomainEvent,
        *,
        version: int,
        event_id: str,
    ) -> EventEnvelope:
        """Wrap `event` in an envelope for its aggregate's stream."""
        return EventEnvelope(
            stream_id=event.aggregate_id,
            stream_type=event.STREAM_TYPE,
            version=version,
            event_id=event_id,
            event_type=type(event).__name__,
            payload=cls.to_payload(event),
        )

    def to_domain_event(self, envelope: EventEnvelope) -> DomainEvent:
        """Convert an EventEnvelope back to a DomainEvent.

        Raises:
            UnknownEventTypeError: If the envelope's event type is not registered.
        """
        if not (event_cls := self.event_registry.get(envelope.event_type)):
            raise UnknownEventTypeError(envelope.event_type)
        hints = typing.get_type_hints(event_cls)
        kwargs = {
            field.name: decode_value(envelope.payload[field.name], hints[field.name])
            for field in dataclasses.fields(event_cls)
        }
        return event_cls(**kwargs)
