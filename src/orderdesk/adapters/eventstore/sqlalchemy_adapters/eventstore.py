"""Event log in the ``event_store`` table.

The adapter writes through the Connection of the unit of work that owns it,
so the events of a command commit or roll back together with the orders and
users tables. Driver errors are translated into the event store exceptions.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence

from sqlalchemy import Select, func, insert, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError

from orderdesk.adapters.eventstore.schema import event_store
from orderdesk.interfaces.eventstore import (
    DuplicateEventIdError,
    EventEnvelope,
    EventEnvelopeBatch,
    EventStore,
    EventStoreError,
    InvalidEnvelopeError,
    StoreUnavailableError,
    VersionConflictError,
    as_batch,
    check_log_position,
    check_stream_range,
    ensure_continues_stream,
)

logger = logging.getLogger(__name__)

# Keywords that must all appear in the driver message for each unique constraint
CONSTRAINT_ERRORS: tuple[tuple[tuple[str, ...], type[EventStoreError]], ...] = (
    (("event_id", "unique"), DuplicateEventIdError),  # pragma: no mutate
    (("version", "unique"), VersionConflictError),  # pragma: no mutate
)


def integrity_error_to_eventstore_error(error: IntegrityError) -> EventStoreError:
    """Pick the event store error matching a violated constraint.

    A clash on ``event_id`` means the event was already stored; a clash on
    ``(stream_id, version)`` means another writer appended to the stream
    between our version check and our insert. Anything else is reported as an
    invalid envelope.
    """
    message = str(error.orig or error)
    lowered = message.lower()
    for keywords, error_type in CONSTRAINT_ERRORS:
        if all(keyword in lowered for keyword in keywords):
            return error_type(message)
    return InvalidEnvelopeError(message)


class SqlAlchemyEventStore(EventStore):
    """EventStore over the ``event_store`` table of a live Connection."""

    def __init__(self, connection: Connection):
        self.connection = connection

    def append(
        self, events: Sequence[EventEnvelope] | EventEnvelopeBatch
    ) -> Sequence[EventEnvelope]:
        batch = as_batch(events)
        ensure_continues_stream(batch, self.stream_version(batch.stream_id))

        stmt = (
            insert(event_store)
            .values([event.as_insertable_row() for event in batch.events])
            .returning(event_store)
        )
        try:
            rows = self.connection.execute(stmt).mappings().all()
        except IntegrityError as e:
            raise integrity_error_to_eventstore_error(e) from e
        except DataError as e:
            raise InvalidEnvelopeError(str(e)) from e
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

        logger.debug(
            "Appended %d event(s) to %s stream %s from version %d",
            len(rows),
            batch.stream_type,
            batch.stream_id,
            batch.starting_version,
        )
        return [EventEnvelope(**row) for row in rows]

    def read_stream(
        self, stream_id: str, from_version: int = 1, to_version: int | None = None
    ) -> Iterable[EventEnvelope]:
        check_stream_range(from_version, to_version)
        version = event_store.c.version
        stmt = (
            select(event_store)
            .where(event_store.c.stream_id == stream_id, version >= from_version)
            .order_by(version)
        )
        if to_version is not None:
            stmt = stmt.where(version <= to_version)
        yield from self._envelopes(stmt)

    def read_since(
        self, global_seq: int = 0, limit: int | None = None
    ) -> Iterable[EventEnvelope]:
        check_log_position(global_seq, limit)
        seq = event_store.c.global_seq
        stmt = select(event_store).where(seq > global_seq).order_by(seq).limit(limit)
        yield from self._envelopes(stmt)

    def stream_version(self, stream_id: str) -> int:
        stmt = select(func.coalesce(func.max(event_store.c.version), 0)).where(
            event_store.c.stream_id == stream_id
        )
        return int(self.connection.execute(stmt).scalar_one())

    def _envelopes(self, stmt: Select) -> Iterator[EventEnvelope]:
        for row in self.connection.execute(stmt).mappings().all():
            yield EventEnvelope(**row)
