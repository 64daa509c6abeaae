"""SQLAlchemy EventStore adapter package.

Durable event log on a relational database (SQLite or Postgres), sharing the
unit of work's connection so events commit together with aggregate state.
"""

from .eventstore import SqlAlchemyEventStore

__all__ = ["SqlAlchemyEventStore"]
