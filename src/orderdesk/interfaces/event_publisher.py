"""Interface for publishing domain events."""

import abc
from collections.abc import Sequence

from orderdesk.domain.events import DomainEvent

# pylint: disable=too-few-public-methods


class EventPublisher(abc.ABC):
    """Contract for handing drained domain events to the outside world.

    Publishers are called inside the unit of work, after the aggregates have
    been saved and before commit, so a failed publish rolls back the change.
    """

    @abc.abstractmethod
    def publish(self, events: Sequence[DomainEvent]) -> None:
        """Publish events in the order given."""
