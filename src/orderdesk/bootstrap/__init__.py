"""Bootstrap (composition root) for ORDERDESK.

Wires the concrete adapters (SQLAlchemy unit of work, ULID event ids) into the
service-layer handlers and hands the resulting message bus to the entrypoints.

Import rules:
- Entry points import *this* package (not adapters directly).
- This package may import every other layer and `orderdesk.config`.
- Inner layers must not import `orderdesk.bootstrap`.
"""
