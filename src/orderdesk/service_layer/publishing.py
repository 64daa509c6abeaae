"""Publishing drained domain events to the event log."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from orderdesk.interfaces.event_publisher import EventPublisher

from .event_mapper import EventMapper

if TYPE_CHECKING:
    from orderdesk.domain.aggregates import Aggregate
    from orderdesk.domain.events import DomainEvent
    from orderdesk.interfaces.eventstore import EventEnvelope, EventStore
    from orderdesk.interfaces.id_generator import IdGenerator
    from orderdesk.interfaces.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


class EventLogPublisher(EventPublisher):
    """Publishes events by appending them to an event store.

    Bound to the unit of work's event store, the events commit (or roll back)
    together with the aggregate state: a transactional outbox.

    Events are grouped per aggregate stream, in order of first appearance, and
    each group is appended as one batch numbered after the stream's current
    version.
    """

    def __init__(
        self,
        eventstore: EventStore,
        event_id_generator: IdGenerator,
        event_mapper: EventMapper | None = None,
    ) -> None:
        self.eventstore = eventstore
        self.event_id_generator = event_id_generator
        self.event_mapper = event_mapper if event_mapper is not None else EventMapper()

    def publish(self, events: Sequence[DomainEvent]) -> None:
        streams: dict[tuple[str, str], list[DomainEvent]] = {}
        for event in events:
            streams.setdefault((event.STREAM_TYPE, event.aggregate_id), []).append(
                event
            )

        for (stream_type, stream_id), stream_events in streams.items():
            start = self.eventstore.stream_version(stream_id)
            envelopes: list[EventEnvelope] = [
                self.event_mapper.to_envelope(
                    event, version=start + i, event_id=self.event_id_generator.new_id()
                )
                for i, event in enumerate(stream_events, start=1)
            ]
            self.eventstore.append(envelopes)
            logger.debug(
                "Published %s to %s stream %s",
                [e.event_type for e in envelopes],
                stream_type,
                stream_id,
            )


def publish_pending_events(
    uow: AbstractUnitOfWork, event_id_generator: IdGenerator, *aggregates: Aggregate
) -> None:
    """Drain the aggregates' events into the unit of work's event store.

    Call after the aggregates were saved and before committing.
    """
    events = [event for aggregate in aggregates for event in aggregate.drain_events()]
    if events:
        EventLogPublisher(uow.eventstore, event_id_generator).publish(events)
