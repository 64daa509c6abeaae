"""Domain layer for ORDERDESK.

Contains business rules: aggregates, entities, value objects, domain events and
domain errors. This package is technology-agnostic and performs no
I/O.

Dependency rule: do not import from `orderdesk.adapters`,
`orderdesk.service_layer` or `orderdesk.entrypoints`.
"""
