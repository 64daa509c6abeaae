"""Contract tests for the EventStore port.

Every adapter must:
- append single-stream batches atomically and return them in input order,
- assign increasing `global_seq` values and a UTC `recorded_at`,
- reject duplicate event ids, version gaps and mixed-stream batches,
- read streams by version range and the whole log by global cursor,
- report the tip of a stream through `stream_version`.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from orderdesk.interfaces.eventstore import (
    DuplicateEventIdError,
    EventEnvelopeBatch,
    EventStore,
    InvalidEnvelopeError,
    VersionConflictError,
)

# pylint: disable=magic-value-comparison

ORDER = "01J9Z8Q4X6ORDER0000000000A"
USER = "01J9Z8Q4X6USER00000000000B"


@pytest.fixture
def order_events(make_envelope):
    """Build events for the order stream: ``order_events(1, 2, 3)``."""

    def _make(*versions: int, **overrides):
        return [
            make_envelope(
                stream_id=ORDER, stream_type="Order", version=v, **overrides
            )
            for v in versions
        ]

    return _make


# ===========================================================================
#                                 Append
# ===========================================================================


def test_append_assigns_global_seq_and_utc_recorded_at(eventstore: EventStore, order_events):
    (stored,) = eventstore.append(order_events(1))

    assert isinstance(stored.global_seq, int) and stored.global_seq >= 1
    assert stored.recorded_at is not None
    assert stored.recorded_at.utcoffset() == timedelta(0)


def test_append_preserves_input_order_and_payload(eventstore: EventStore, order_events):
    events = order_events(1, 2, 3, payload={"total": {"amount": "10.00", "currency": "EUR"}})

    stored = eventstore.append(events)

    assert [e.event_id for e in stored] == [e.event_id for e in events]
    assert [e.version for e in stored] == [1, 2, 3]
    assert stored[0].payload == {"total": {"amount": "10.00", "currency": "EUR"}}
    seqs = [e.global_seq for e in stored]
    assert seqs == sorted(seqs) and len(set(seqs)) == 3


def test_append_accepts_a_prebuilt_batch(eventstore: EventStore, order_events):
    stored = eventstore.append(EventEnvelopeBatch.from_events(order_events(1, 2)))
    assert [e.version for e in stored] == [1, 2]


def test_global_seq_increases_across_streams(eventstore: EventStore, make_envelope):
    (first,) = eventstore.append([make_envelope(stream_id=ORDER, stream_type="Order")])
    (second,) = eventstore.append([make_envelope(stream_id=USER, stream_type="User")])

    assert first.global_seq is not None and second.global_seq is not None
    assert first.global_seq < second.global_seq


def test_store_overrides_caller_recorded_at(eventstore: EventStore, make_envelope):
    long_ago = datetime(2000, 1, 1, tzinfo=timezone.utc)
    (stored,) = eventstore.append([make_envelope(recorded_at=long_ago)])
    assert stored.recorded_at is not None and stored.recorded_at > long_ago


def test_duplicate_event_id_is_rejected(eventstore: EventStore, make_envelope):
    event_id = "9" * 26
    eventstore.append([make_envelope(stream_id=ORDER, event_id=event_id)])

    with pytest.raises(DuplicateEventIdError) as exc:
        eventstore.append([make_envelope(stream_id=USER, event_id=event_id)])
    assert str(exc.value).strip()


def test_version_conflict_is_atomic(eventstore: EventStore, order_events):
    eventstore.append(order_events(1))

    with pytest.raises(VersionConflictError, match="expected first version 2, got 1"):
        eventstore.append(order_events(1, 2))

    assert [e.version for e in eventstore.read_stream(ORDER)] == [1]


def test_first_event_of_a_stream_must_be_version_one(eventstore: EventStore, order_events):
    with pytest.raises(VersionConflictError, match="expected first version 1, got 2"):
        eventstore.append(order_events(2))

    assert not list(eventstore.read_stream(ORDER))


def test_mixed_stream_batch_is_rejected(eventstore: EventStore, make_envelope):
    with pytest.raises(InvalidEnvelopeError):
        eventstore.append([make_envelope(stream_id=ORDER), make_envelope(stream_id=USER)])


def test_version_gap_in_batch_is_rejected(eventstore: EventStore, order_events):
    with pytest.raises(InvalidEnvelopeError):
        eventstore.append(order_events(1, 3))


# ===========================================================================
#                                  Reads
# ===========================================================================


def test_read_stream_bounds_are_inclusive(eventstore: EventStore, order_events):
    for version in range(1, 5):
        eventstore.append(order_events(version))

    assert [e.version for e in eventstore.read_stream(ORDER, 2, 3)] == [2, 3]
    assert [e.version for e in eventstore.read_stream(ORDER, 2, 2)] == [2]
    assert [e.version for e in eventstore.read_stream(ORDER, 3)] == [3, 4]


def test_read_stream_only_returns_its_own_stream(eventstore: EventStore, make_envelope):
    eventstore.append([make_envelope(stream_id=ORDER, stream_type="Order")])
    eventstore.append([make_envelope(stream_id=USER, stream_type="User")])

    (only,) = eventstore.read_stream(USER)
    assert only.stream_type == "User"


def test_read_stream_of_unknown_stream_is_empty(eventstore: EventStore):
    assert not list(eventstore.read_stream("nope"))


def test_read_stream_rejects_invalid_ranges(eventstore: EventStore):
    with pytest.raises(ValueError, match=r"^from_version must be >= 1$"):
        list(eventstore.read_stream(ORDER, from_version=0))
    with pytest.raises(ValueError, match=r"^to_version must be >= from_version$"):
        list(eventstore.read_stream(ORDER, from_version=3, to_version=2))


def test_read_since_follows_global_order(eventstore: EventStore, make_envelope):
    (a1,) = eventstore.append([make_envelope(stream_id=ORDER, version=1)])
    (b1,) = eventstore.append([make_envelope(stream_id=USER, version=1)])
    (a2,) = eventstore.append([make_envelope(stream_id=ORDER, version=2)])

    assert list(eventstore.read_since()) == [a1, b1, a2]
    assert a1.global_seq is not None
    assert list(eventstore.read_since(a1.global_seq)) == [b1, a2]
    assert list(eventstore.read_since(a1.global_seq, limit=1)) == [b1]
    assert list(eventstore.read_since(a1.global_seq, limit=10)) == [b1, a2]


def test_read_since_past_the_end_is_empty(eventstore: EventStore, order_events):
    eventstore.append(order_events(1))
    assert not list(eventstore.read_since(10_000_000))


@pytest.mark.parametrize(
    "global_seq, limit, msg",
    [(-1, None, r"^global_seq must be >= 0$"), (0, 0, r"^limit cannot be <= 0$")],
    ids=["negative cursor", "zero limit"],
)
def test_read_since_rejects_invalid_arguments(eventstore: EventStore, global_seq, limit, msg):
    with pytest.raises(ValueError, match=msg):
        list(eventstore.read_since(global_seq=global_seq, limit=limit))


# ===========================================================================
#                              Stream version
# ===========================================================================


def test_stream_version_of_unknown_stream_is_zero(eventstore: EventStore):
    assert eventstore.stream_version(ORDER) == 0


def test_stream_version_tracks_the_tip(eventstore: EventStore, order_events, make_envelope):
    eventstore.append(order_events(1, 2))
    eventstore.append(order_events(3))
    eventstore.append([make_envelope(stream_id=USER, version=1)])

    assert eventstore.stream_version(ORDER) == 3
    assert eventstore.stream_version(USER) == 1
