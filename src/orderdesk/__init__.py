"""ORDERDESK

An order-management system built around a small set of consistency-enforcing
aggregates. Orders and users record domain events on every lifecycle change;
the application layer persists them and publishes the events to an append-only
event log.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
