"""Database dialect names supported by ORDERDESK.

Both the engine factory and the migrations branch on the backend (SQLite
PRAGMAs, Postgres trigger functions). They compare against `DialectName`
rather than raw strings such as ``"sqlite"``.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class UnsupportedDialect(Exception):
    """Raised when a database backend other than SQLite or Postgres is used."""


class DialectName(str, Enum):
    """Supported SQLAlchemy backends.

    Attributes:
        POSTGRES: PostgreSQL (``"postgresql"``).
        SQLITE:   SQLite (``"sqlite"``).
    """

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Normalize a backend name, ignoring any ``+driver`` suffix.

        Accepts aliases such as 'postgres', 'pg', 'postgresql+psycopg' and
        'sqlite+pysqlite'.

        Raises:
            UnsupportedDialect: if the backend is not SQLite or Postgres.
        """

        base = (dialect_str or "").strip().lower().split("+", 1)[0]
        if base in {"postgres", "postgresql", "pg"}:
            return cls.POSTGRES
        if base == "sqlite":
            return cls.SQLITE
        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Return the backend of a SQLAlchemy Engine or Connection.

        Raises:
            UnsupportedDialect: if `obj` has no dialect or an unsupported one.
        """
        try:
            name = obj.dialect.name
        except AttributeError as e:
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            ) from e
        return cls.from_string(name)
