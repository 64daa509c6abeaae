"""Interfaces (application boundary) for ORDERDESK.

Defines framework-free application contracts: ABCs and small DTOs shared by
the service layer and adapters (repositories, event store, event publisher,
id generators, unit of work). Business rules stay out of this package.

Dependency rule: may import `orderdesk.domain`; must not import
`orderdesk.adapters`, `orderdesk.service_layer` or `orderdesk.entrypoints`.
"""
