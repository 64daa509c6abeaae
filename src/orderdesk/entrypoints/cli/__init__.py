"""Command-line interface for ORDERDESK (click / click-extra)."""
