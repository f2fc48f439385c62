import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

import psycopg2
import psycopg2.extras
from fastapi import Request
from psycopg2.pool import ThreadedConnectionPool

from src.api import config

logger = logging.getLogger(__name__)


class Database:
    """
    Process-scoped wrapper around a bounded PostgreSQL connection pool.

    Each helper checks out exactly one connection, runs exactly one
    parameterized statement and returns the connection to the pool on every
    exit path.
    """

    def __init__(self, pool: Optional[ThreadedConnectionPool] = None) -> None:
        self._pool = pool

    # PUBLIC_INTERFACE
    def open(self) -> None:
        """Create the pool from the environment if it does not exist yet."""
        if self._pool is not None:
            return
        minconn, maxconn = config.pool_bounds()
        self._pool = ThreadedConnectionPool(minconn=minconn, maxconn=maxconn, dsn=config.database_dsn())
        logger.info("Database pool opened (minconn=%s, maxconn=%s)", minconn, maxconn)

    # PUBLIC_INTERFACE
    def close(self) -> None:
        """Close every pooled connection."""
        if self._pool is None:
            return
        self._pool.closeall()
        self._pool = None
        logger.info("Database pool closed")

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    @contextmanager
    def _connection(self):
        if self._pool is None:
            raise RuntimeError("Database pool is not open")
        conn = self._pool.getconn()
        try:
            yield conn
        except Exception:
            if not conn.closed:
                conn.rollback()
            raise
        finally:
            self._pool.putconn(conn)

    @staticmethod
    def _dict_cursor(conn):
        return conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor)

    # PUBLIC_INTERFACE
    def fetch_one(self, query: str, params: Optional[Sequence[Any]] = None) -> Optional[Dict[str, Any]]:
        """Fetch a single row as a dict, or None."""
        with self._connection() as conn:
            with self._dict_cursor(conn) as cur:
                cur.execute(query, params or [])
                row = cur.fetchone()
                return dict(row) if row else None

    # PUBLIC_INTERFACE
    def fetch_all(self, query: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """Fetch all rows as dicts."""
        with self._connection() as conn:
            with self._dict_cursor(conn) as cur:
                cur.execute(query, params or [])
                return [dict(r) for r in cur.fetchall()]

    # PUBLIC_INTERFACE
    def execute(self, query: str, params: Optional[Sequence[Any]] = None) -> int:
        """Execute a statement (INSERT/UPDATE/DELETE). Returns affected rowcount."""
        with self._connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params or [])
                affected = cur.rowcount
            conn.commit()
            return affected

    # PUBLIC_INTERFACE
    def execute_returning_one(self, query: str, params: Optional[Sequence[Any]] = None) -> Dict[str, Any]:
        """Execute a statement with RETURNING and return the first row as dict."""
        with self._connection() as conn:
            with self._dict_cursor(conn) as cur:
                cur.execute(query, params or [])
                row = cur.fetchone()
            if not row:
                raise RuntimeError("Expected one row returned, got none.")
            conn.commit()
            return dict(row)


# PUBLIC_INTERFACE
def get_db(request: Request) -> Database:
    """Dependency returning the app-scoped Database created at startup."""
    return request.app.state.db
