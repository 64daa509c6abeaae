"""In-memory EventStore adapter package.

Fast, ephemeral event log for unit tests and the in-memory unit of work.
Events are lost when the instance is discarded.
"""

from .eventstore import InMemoryEventStore

__all__ = ["InMemoryEventStore"]
