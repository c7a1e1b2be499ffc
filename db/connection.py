"""
db/connection.py
----------------
Manages the PostgreSQL connection pool and the transaction scopes
built on top of it.

Repositories never commit on their own when a `transaction()` block is
open on the current thread: `connection()` hands them the bound
connection instead, so every write inside the block commits or rolls
back together.
"""

import threading
from contextlib import contextmanager

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None
_local = threading.local()


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, DATABASE_URL)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection():
    """
    Get a connection from the pool.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """Return a connection back to the pool."""
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")


def in_transaction() -> bool:
    """True while a `transaction()` block is open on this thread."""
    return getattr(_local, "conn", None) is not None


@contextmanager
def transaction():
    """
    Bind one pooled connection to the current thread for the block.

    Commits when the block exits normally and rolls back when it raises;
    the exception is re-raised and the connection is always released.
    A nested `transaction()` joins the outer one.
    """
    if in_transaction():
        yield _local.conn
        return

    conn = get_connection()
    _local.conn = conn
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        logger.warning("Transaction rolled back.")
        raise
    finally:
        _local.conn = None
        release_connection(conn)


@contextmanager
def connection():
    """
    Yield a connection for a single repository call.

    Inside a `transaction()` block this is the bound connection and
    nothing is committed here. Otherwise a pooled connection is used
    for the call alone: committed on success, rolled back on error.
    """
    if in_transaction():
        yield _local.conn
        return

    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        release_connection(conn)
