"""
core/db.py -- Engine construction shared by auth/store.py and catalog/store.py.

Both stores may point at the same DATABASE_URL; each builds its own engine
here so SQLite gets the same connection settings everywhere:

  check_same_thread=False  route handlers run on the threadpool, so a pooled
                           connection can be handed to a different thread
  PRAGMA journal_mode=WAL  readers do not block the single writer
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine


def _enable_wal(dbapi_conn, connection_record) -> None:
    # PRAGMAs are per connection, not per pool.
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def make_engine(db_url: str) -> Engine:
    """Return an Engine for db_url, tuned for SQLite when the URL is SQLite."""
    if not db_url.startswith("sqlite"):
        return create_engine(db_url)
    engine = create_engine(db_url, connect_args={"check_same_thread": False})
    event.listen(engine, "connect", _enable_wal)
    return engine
