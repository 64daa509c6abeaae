"""Entrypoints (inbound adapters) for ORDERDESK.

Currently the command line only. Entrypoints parse input, dispatch commands
through the message bus built by `orderdesk.bootstrap`, and present results.

Dependency rule: may import `orderdesk.bootstrap` and `orderdesk.service_layer`;
avoid importing `orderdesk.adapters` directly.
"""
