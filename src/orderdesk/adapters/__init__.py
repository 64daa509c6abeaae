"""Adapters (infrastructure) for ORDERDESK.

Provide concrete implementations of the ports in `orderdesk.interfaces`
(repositories, event store, id generators, unit of work), plus persistence
mapping and related wiring (engines, metadata, migrations).

Dependency rule: may import `orderdesk.domain` and `orderdesk.interfaces`; the
domain must not import this package.
"""
