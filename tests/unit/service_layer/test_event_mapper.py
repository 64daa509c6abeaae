"""Unit tests for the EventMapper."""

import json
from datetime import datetime, timezone

import pytest

from orderdesk.domain import events
from orderdesk.domain.value_objects import Email, Money, Name, OrderId, UserId
from orderdesk.interfaces.eventstore import EventEnvelope
from orderdesk.service_layer.event_mapper import (
    EventMapper,
    UnknownEventTypeError,
    decode_value,
    encode_value,
)

# pylint: disable=magic-value-comparison

NOW = datetime(2025, 5, 4, 3, 2, 1, 123456, tzinfo=timezone.utc)
EVENT_ID = "01HZX0000000000000000000AA"


@pytest.fixture
def order_created():
    """An OrderCreated event with fixed values."""
    return events.OrderCreated(
        order_id=OrderId.generate(),
        user_id=UserId.generate(),
        total_amount=Money.of("1234.5", "EUR"),
        occurred_at=NOW,
    )


def test_payload_is_json_safe(order_created):
    """Payload values are plain JSON types."""
    payload = EventMapper.to_payload(order_created)
    assert json.loads(json.dumps(payload)) == payload
    assert payload == {
        "order_id": str(order_created.order_id),
        "user_id": str(order_created.user_id),
        "total_amount": {"amount": "1234.50", "currency": "EUR"},
        "occurred_at": "2025-05-04T03:02:01.123456+00:00",
    }


def test_to_envelope_targets_the_aggregate_stream(order_created):
    """Envelopes carry stream id/type and the event class name."""
    envelope = EventMapper.to_envelope(order_created, version=4, event_id=EVENT_ID)
    assert envelope.stream_id == str(order_created.order_id)
    assert envelope.stream_type == "Order"
    assert envelope.event_type == "OrderCreated"
    assert envelope.version == 4
    assert envelope.event_id == EVENT_ID
    assert envelope.global_seq is None


@pytest.mark.parametrize(
    "event",
    [
        events.OrderConfirmed(
            order_id=OrderId.generate(),
            user_id=UserId.generate(),
            total_amount=Money.of(1, "JPY"),
            occurred_at=NOW,
        ),
        events.UserRegistered(
            user_id=UserId.generate(),
            name=Name.of("Ada"),
            email=Email.of("ada@example.com"),
            occurred_at=NOW,
        ),
        events.UserDeactivated(user_id=UserId.generate(), occurred_at=NOW),
    ],
    ids=lambda e: type(e).__name__,
)
def test_envelope_decodes_to_equal_event(event):
    """Decoding an envelope rebuilds an equal event with value objects."""
    mapper = EventMapper()
    envelope = mapper.to_envelope(event, version=1, event_id=EVENT_ID)
    assert mapper.to_domain_event(envelope) == event


def test_unknown_event_type():
    """Unregistered event types raise UnknownEventTypeError."""
    envelope = EventEnvelope(
        stream_id="s",
        stream_type="Order",
        version=1,
        event_id=EVENT_ID,
        event_type="OrderShipped",
        payload={},
    )
    with pytest.raises(UnknownEventTypeError, match="OrderShipped"):
        EventMapper().to_domain_event(envelope)


def test_custom_registry_restricts_types(order_created):
    """A mapper only decodes the types in its registry."""
    mapper = EventMapper(event_registry={"UserDeactivated": events.UserDeactivated})
    envelope = mapper.to_envelope(order_created, version=1, event_id=EVENT_ID)
    with pytest.raises(UnknownEventTypeError):
        mapper.to_domain_event(envelope)


def test_encode_decode_passthrough():
    """Plain JSON values pass through unchanged."""
    assert encode_value(3) == 3
    assert decode_value("x", str) == "x"
