"""Base class for all aggregates."""

import abc
from typing import ClassVar

from orderdesk.domain.errors import AggregateIdMismatchError
from orderdesk.domain.events import DomainEvent


class Aggregate(abc.ABC):
    """Generic base class for all aggregates.

    An aggregate owns a buffer of domain events recorded by its state
    transitions. The buffer is only reachable through `drain_events`, which
    hands the events over exactly once.
    """

    STREAM_TYPE: ClassVar[str]
    """A string identifier for the type of event stream this aggregate records.

    Concrete aggregate implementations must set this to distinguish their event streams.
    """

    def __init__(self, aggregate_id: str, version: int = 0) -> None:
        self.aggregate_id: str = aggregate_id
        self._version: int = version
        self._pending_events: list[DomainEvent] = []

    # --- Plumbing ---

    def _record(self, event: DomainEvent) -> None:
        """Internal gate. Do not override.

        Performs aggregate ID check before buffering the event.
        """
        if event.aggregate_id != self.aggregate_id:
            raise AggregateIdMismatchError(self.aggregate_id, event.aggregate_id)
        self._pending_events.append(event)

    def drain_events(self) -> list[DomainEvent]:
        """Drain all recorded events.

        Returns:
            A new list holding every event recorded since the last call to this
            method. The internal buffer is left empty.

        Note: This is NOT thread-safe. It is the caller's responsibility to ensure
        that no other operations are performed on the aggregate between calls to this
        method.
        """

        drained = self._pending_events
        self._pending_events = []
        return drained

    @property
    def version(self) -> int:
        """The persisted version of the aggregate (0 if never saved)."""
        return self._version

    def advance_version(self) -> int:
        """Bump the persisted version. Called by repositories after a successful save.

        Returns:
            The new version.
        """
        self._version += 1
        return self._version
