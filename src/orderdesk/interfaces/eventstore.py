"""The event log port.

Orders and users are stored as current state, but every event they record is
also appended to an append-only log keyed by aggregate stream. This module
holds what the service layer and the adapters agree on:

- `EventEnvelope`, one persisted event, and `EventEnvelopeBatch`, the unit of
  an atomic append (one stream, contiguous versions).
- `EventStore`, the abstract log.
- The error types adapters raise, so callers never see driver exceptions.

Appending
    A batch must start exactly one version after the stream's tip, otherwise
    `VersionConflictError`. The store assigns ``global_seq`` and
    ``recorded_at`` (aware UTC) and returns the envelopes in input order.
    A reused ``event_id`` raises `DuplicateEventIdError`; connection trouble
    raises `StoreUnavailableError`.

Reading
    ``read_stream`` yields one stream by ascending version, ``read_since`` the
    whole log by ascending ``global_seq``. Both yield nothing for unknown
    streams or an exhausted log and raise `ValueError` for bad bounds.
"""

import abc
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Any

ULID_LENGTH = 26  # pragma: no mutate
STORE_ASSIGNED_FIELDS = ("global_seq", "recorded_at")  # pragma: no mutate


class EventStoreError(Exception):
    """Base class for event log errors."""


class VersionConflictError(EventStoreError):
    """The batch does not continue the stream from its current tip."""


class DuplicateEventIdError(EventStoreError):
    """An event with the same event_id is already in the log."""


class InvalidEnvelopeError(EventStoreError):
    """An envelope or batch breaks a structural rule."""


class StoreUnavailableError(EventStoreError):
    """The backing store could not be reached; the append may be retried."""


def _is_utc(moment: datetime) -> bool:
    offset = moment.utcoffset()
    return offset is not None and offset == timedelta(0)


@dataclass(frozen=True, slots=True)
class EventEnvelope:
    """One event of one aggregate stream, as stored in the log.

    ``global_seq`` and ``recorded_at`` stay ``None`` until the store assigns
    them on append.
    """

    # pylint: disable=too-many-instance-attributes

    stream_id: str  # aggregate id
    stream_type: str  # aggregate class name, "Order" or "User"
    version: int
    event_id: str
    event_type: str  # domain event class name
    payload: dict[str, Any]
    metadata: dict[str, Any] | None = None
    recorded_at: datetime | None = None
    global_seq: int | None = None

    def __post_init__(self) -> None:
        for label, value in (
            ("stream_id", self.stream_id),
            ("stream_type", self.stream_type),
            ("event_type", self.event_type),
        ):
            if not value.strip():
                raise InvalidEnvelopeError(f"{label} must be non-empty.")
        if len(self.event_id) != ULID_LENGTH:
            raise InvalidEnvelopeError(
                f"event_id must be a {ULID_LENGTH}-character ULID, got {self.event_id!r}."
            )
        if self.version < 1:
            raise InvalidEnvelopeError(f"version must be >= 1, got {self.version}.")
        if self.global_seq is not None and self.global_seq < 1:
            raise InvalidEnvelopeError(
                f"global_seq must be >= 1 when set, got {self.global_seq}."
            )
        if self.recorded_at is not None and not _is_utc(self.recorded_at):
            raise InvalidEnvelopeError(
                f"recorded_at must be tz-aware UTC, got {self.recorded_at!r}."
            )

    @property
    def is_persisted(self) -> bool:
        """True once the store has assigned a global sequence number."""
        return self.global_seq is not None

    def as_insertable_row(self) -> dict[str, Any]:
        """Column values for an INSERT, leaving out what the store assigns."""
        row = asdict(self)
        for name in STORE_ASSIGNED_FIELDS:
            del row[name]
        return row


@dataclass(frozen=True, slots=True)
class EventEnvelopeBatch:
    """Events appended together to a single stream.

    Rejected with `InvalidEnvelopeError` when the batch is empty, spans more
    than one stream, contains persisted envelopes, repeats an event_id or has
    gaps or disorder in its versions.
    """

    stream_id: str
    stream_type: str
    events: Sequence[EventEnvelope]

    def __post_init__(self) -> None:
        if not self.events:
            raise InvalidEnvelopeError("Empty batch is not allowed.")

        stream = (self.stream_id, self.stream_type)
        if any((e.stream_id, e.stream_type) != stream for e in self.events):
            raise InvalidEnvelopeError("Mixed streams in a single batch.")
        if any(e.is_persisted for e in self.events):
            raise InvalidEnvelopeError("global_seq must be None before persistence.")
        if len({e.event_id for e in self.events}) != len(self.events):
            raise InvalidEnvelopeError("Duplicate event_id within batch.")

        first = self.events[0].version
        for offset, event in enumerate(self.events):
            if event.version != first + offset:
                raise InvalidEnvelopeError(
                    "Versions in batch must be contiguous and ordered."
                )

    @property
    def starting_version(self) -> int:
        """Version of the first event in the batch."""
        return self.events[0].version

    @classmethod
    def from_events(cls, events: Sequence[EventEnvelope]) -> "EventEnvelopeBatch":
        """Build a batch whose stream is taken from the first event.

        Raises:
            InvalidEnvelopeError: If `events` is empty or breaks a batch rule.
        """
        if not events:
            raise InvalidEnvelopeError("Empty batch is not allowed.")
        head = events[0]
        return cls(stream_id=head.stream_id, stream_type=head.stream_type, events=events)


def as_batch(events: EventEnvelopeBatch | Sequence[EventEnvelope]) -> EventEnvelopeBatch:
    """Return `events` as a batch, building one from a plain sequence."""
    if isinstance(events, EventEnvelopeBatch):
        return events
    return EventEnvelopeBatch.from_events(events)


def ensure_continues_stream(batch: EventEnvelopeBatch, tip: int) -> None:
    """Raise `VersionConflictError` unless `batch` starts right after `tip`."""
    if batch.starting_version != tip + 1:
        raise VersionConflictError(
            f"expected first version {tip + 1}, got {batch.starting_version}"
        )


def check_stream_range(from_version: int, to_version: int | None) -> None:
    """Validate the bounds of `EventStore.read_stream`."""
    if from_version < 1:
        raise ValueError("from_version must be >= 1")
    if to_version is not None and to_version < from_version:
        raise ValueError("to_version must be >= from_version")


def check_log_position(global_seq: int, limit: int | None) -> None:
    """Validate the arguments of `EventStore.read_since`."""
    if global_seq < 0:
        raise ValueError("global_seq must be >= 0")
    if limit is not None and limit < 1:
        raise ValueError("limit cannot be <= 0")


class EventStore(abc.ABC):
    """Append-only log of event envelopes."""

    @abc.abstractmethod
    def append(
        self, events: EventEnvelopeBatch | Sequence[EventEnvelope]
    ) -> Sequence[EventEnvelope]:
        """Append one stream's events atomically.

        A plain sequence is turned into a batch first.

        Returns:
            The stored envelopes, in input order, with ``global_seq`` and
            ``recorded_at`` filled in.

        Raises:
            InvalidEnvelopeError: If the events do not form a valid batch.
            VersionConflictError: If the batch does not start at tip + 1.
            DuplicateEventIdError: If an event_id is already stored.
            StoreUnavailableError: If the backing store cannot be reached.
        """

    @abc.abstractmethod
    def read_stream(
        self, stream_id: str, from_version: int = 1, to_version: int | None = None
    ) -> Iterable[EventEnvelope]:
        """Yield a stream's events with versions in ``[from_version, to_version]``.

        Raises:
            ValueError: If ``from_version < 1`` or ``to_version < from_version``.
        """

    @abc.abstractmethod
    def read_since(
        self, global_seq: int = 0, limit: int | None = None
    ) -> Iterable[EventEnvelope]:
        """Yield up to `limit` events stored after `global_seq`, oldest first.

        Raises:
            ValueError: If ``global_seq < 0`` or ``limit < 1``.
        """

    @abc.abstractmethod
    def stream_version(self, stream_id: str) -> int:
        """Return the latest version of `stream_id`, or 0 for an unknown stream."""
