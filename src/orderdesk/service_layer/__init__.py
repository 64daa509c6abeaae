"""Service layer for ORDERDESK.

Implements application use-cases: command handlers, read views, orchestration
and transaction boundaries. Calls domain objects and the outbound ports defined
in `orderdesk.interfaces`.

Dependency rule: may import `orderdesk.domain` and `orderdesk.interfaces`, but
not `orderdesk.adapters` or `orderdesk.entrypoints`.
"""
