"""Event store adapters (SQLAlchemy and in-memory) and the event_store table."""
