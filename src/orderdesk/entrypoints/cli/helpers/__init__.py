"""CLI helpers for ORDERDESK.

URL sanitization for safe display, NAME=LEVEL logger option parsing, command
dispatch with error translation, and message emitters that write to stderr
with emoji to ASCII fallbacks.
"""

from .db_url import sanitize_url
from .messages import error, success, warn

__all__ = ["error", "sanitize_url", "success", "warn"]
