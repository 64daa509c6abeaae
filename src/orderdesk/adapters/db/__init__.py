"""Database plumbing shared by the SQLAlchemy adapters: engine factory,
metadata, column types, dialect names and the Alembic migrations."""
