"""Event log kept in process memory.

Used by the in-memory unit of work and by tests. It follows the same contract
as the SQLAlchemy adapter (the contract suite runs against both); nothing
survives the instance.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from orderdesk.interfaces.eventstore import (
    DuplicateEventIdError,
    EventEnvelope,
    EventEnvelopeBatch,
    EventStore,
    as_batch,
    check_log_position,
    check_stream_range,
    ensure_continues_stream,
)

logger = logging.getLogger(__name__)


class InMemoryEventStore(EventStore):
    """EventStore over a Python list (the log) and a per-stream index."""

    def __init__(self) -> None:
        self._log: list[EventEnvelope] = []
        self._streams: defaultdict[str, list[EventEnvelope]] = defaultdict(list)
        self._event_ids: set[str] = set()

    def append(
        self, events: Sequence[EventEnvelope] | EventEnvelopeBatch
    ) -> Sequence[EventEnvelope]:
        batch = as_batch(events)
        ensure_continues_stream(batch, self.stream_version(batch.stream_id))
        if clash := next(
            (e.event_id for e in batch.events if e.event_id in self._event_ids), None
        ):
            raise DuplicateEventIdError(f"duplicate event_id {clash}")

        now = datetime.now(timezone.utc)
        stored = [
            EventEnvelope(
                **event.as_insertable_row(), recorded_at=now, global_seq=seq
            )
            for seq, event in enumerate(batch.events, start=len(self._log) + 1)
        ]

        self._log.extend(stored)
        self._streams[batch.stream_id].extend(stored)
        self._event_ids.update(e.event_id for e in stored)
        logger.debug(
            "Appended %d event(s) to %s stream %s",
            len(stored),
            batch.stream_type,
            batch.stream_id,
        )
        return stored

    def read_stream(
        self, stream_id: str, from_version: int = 1, to_version: int | None = None
    ) -> Iterable[EventEnvelope]:
        check_stream_range(from_version, to_version)
        # stream lists hold versions 1..n in order
        stream = self._streams.get(stream_id, [])
        yield from stream[from_version - 1 : to_version]

    def read_since(
        self, global_seq: int = 0, limit: int | None = None
    ) -> Iterable[EventEnvelope]:
        check_log_position(global_seq, limit)
        # global_seq n lives at index n - 1
        stop = None if limit is None else global_seq + limit
        yield from self._log[global_seq:stop]

    def stream_version(self, stream_id: str) -> int:
        return len(self._streams.get(stream_id, ()))
