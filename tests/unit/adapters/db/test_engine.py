"""Unit tests for the database engine helpers.

These tests cover:
- Detection of SQLite (file and in-memory) vs. other URLs.
- Application of SQLite PRAGMAs on connect.
- Sharing of one in-memory database across connections.
"""

from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from orderdesk.adapters.db.engine import is_sqlite, is_sqlite_memory, make_engine

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def test_is_sqlite():
    """is_sqlite() recognizes SQLite URLs given as str or URL."""
    assert is_sqlite("sqlite:///:memory:")
    assert is_sqlite(make_url("sqlite+pysqlite:///file.db"))
    assert not is_sqlite("postgresql+psycopg://u:p@localhost/db")


def test_is_sqlite_memory():
    """Only database-less or :memory: SQLite URLs are in-memory."""
    assert is_sqlite_memory("sqlite://")
    assert is_sqlite_memory("sqlite+pysqlite:///:memory:")
    assert not is_sqlite_memory("sqlite+pysqlite:///orders.db")
    assert not is_sqlite_memory("postgresql://u:p@localhost/db")


def test_sqlite_pragmas_applied(sqlite_engine_file: "Engine"):
    """SQLite engines created by make_engine() apply the expected PRAGMAs."""
    with sqlite_engine_file.connect() as cxn:
        fk = cxn.exec_driver_sql("PRAGMA foreign_keys;").scalar()
        jm = cxn.exec_driver_sql("PRAGMA journal_mode;").scalar()
        sync = cxn.exec_driver_sql("PRAGMA synchronous;").scalar()
        tmp = cxn.exec_driver_sql("PRAGMA temp_store;").scalar()
    assert fk == 1
    assert jm.lower() == "wal"
    assert sync == 1  # NORMAL
    assert tmp == 2  # MEMORY


def test_memory_engine_shares_one_database():
    """Every connection of an in-memory engine sees the same tables."""
    engine = make_engine("sqlite+pysqlite:///:memory:")
    try:
        assert isinstance(engine.pool, StaticPool)
        with engine.begin() as conn:
            conn.execute(text("CREATE TABLE t (x INTEGER)"))
            conn.execute(text("INSERT INTO t VALUES (1)"))
        with engine.connect() as conn:
            assert conn.execute(text("SELECT x FROM t")).scalar_one() == 1
    finally:
        engine.dispose()
