"""Alembic migration scripts for the ORDERDESK schema."""
