"""
core/database.py -- Process-wide database engine.

One SQLAlchemy Engine per process, created lazily on first use and reused by
every store. SQLAlchemy provides a database-agnostic abstraction: swapping
SQLite for PostgreSQL is a DATABASE_URL change, not a rewrite.

Lifecycle:
  get_engine()     -- initialise once (double-checked under a lock so two
                      threads racing on first use still build one engine),
                      then return the cached instance.
  dispose_engine() -- explicit teardown, called from the app lifespan on
                      shutdown. Nothing disposes the engine implicitly.

Layer rule: no imports from api/, auth/, catalog/, or sales/.
"""

from __future__ import annotations

import logging
import threading

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from core.config import get_settings

logger = logging.getLogger("pos.db")

_engine: Engine | None = None
_lock = threading.Lock()


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode so readers do not block during writes.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def create_db_engine(db_url: str) -> Engine:
    """Build an Engine with the SQLite-specific connection options applied."""
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        # TestClient and uvicorn run sync routes in a thread pool.
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite") and "mode=memory" not in db_url and ":memory:" not in db_url:
        event.listen(engine, "connect", _set_wal_mode)
    return engine


def get_engine() -> Engine:
    """Return the shared Engine, creating it on first call."""
    global _engine
    if _engine is None:
        with _lock:
            if _engine is None:
                url = get_settings().database_url
                _engine = create_db_engine(url)
                logger.info("Database engine initialized (%s)", _engine.url.render_as_string(hide_password=True))
    return _engine


def dispose_engine() -> None:
    """Close pooled connections and forget the shared Engine."""
    global _engine
    with _lock:
        if _engine is not None:
            _engine.dispose()
            _engine = None
            logger.info("Database engine disposed")
