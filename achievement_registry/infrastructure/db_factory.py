"""
Database connection factory utilities for the achievement registry.

Provides centralized management of PostgreSQL connections and the shared
connection pool used by the PostgreSQL store. The PoolManager singleton ensures
the pool is closed on application exit.

Includes retry logic for transient connection failures using tenacity.
"""

from __future__ import annotations

import atexit
import threading
from typing import Optional

import psycopg
from psycopg import Cursor
from psycopg_pool import ConnectionPool, PoolTimeout
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from achievement_registry.config import get_settings
from achievement_registry.utils.logging import get_logger

log = get_logger(__name__)


def build_dsn() -> str:
    """Compose a DSN string from settings."""
    settings = get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


class PoolManager:
    """
    Thread-safe singleton owning the process-wide connection pool.

    Handles lifecycle management with automatic cleanup via atexit hook.
    """

    _instance: Optional["PoolManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "PoolManager":
        """Create or return the singleton instance."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._pool = None
                atexit.register(cls._instance.close_all)
            return cls._instance

    def get_pool(self, min_size: int = 1, max_size: int = 10) -> ConnectionPool:
        """
        Get or create the connection pool.

        Parameters
        ----------
        min_size : int
            Minimum number of idle connections to keep.
        max_size : int
            Maximum total connections in the pool.
        """
        with self._lock:
            if self._pool is None:
                self._pool = ConnectionPool(
                    conninfo=build_dsn(), min_size=min_size, max_size=max_size, open=True
                )
                log.debug("Connection pool opened", extra={"min_size": min_size, "max_size": max_size})
            return self._pool

    def close_all(self) -> None:
        """
        Close the managed pool.

        This is called automatically on exit via atexit hook.
        """
        with self._lock:
            if self._pool is not None:
                try:
                    self._pool.close()
                except psycopg.Error:
                    log.warning("Failed to close connection pool", exc_info=True)
                finally:
                    self._pool = None


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError, PoolTimeout)),
    reraise=True,
)
def open_pool(dsn: str, min_size: int = 1, max_size: int = 10) -> ConnectionPool:
    """Open a pool bound to an explicit DSN, waiting until it can serve connections."""
    pool = ConnectionPool(conninfo=dsn, min_size=min_size, max_size=max_size, open=True)
    try:
        pool.wait(timeout=10.0)
    except PoolTimeout:
        pool.close()
        raise
    return pool


def get_sync_pool(min_size: int = 1, max_size: int = 10) -> ConnectionPool:
    """Get or create the settings-derived pool via PoolManager."""
    return PoolManager().get_pool(min_size=min_size, max_size=max_size)


def apply_statement_timeout(cur: Cursor, timeout_ms: int) -> None:
    """Bound statements in the current transaction to `timeout_ms` milliseconds."""
    if timeout_ms > 0:
        cur.execute("SELECT set_config('statement_timeout', %s, true)", (str(timeout_ms),))


__all__ = [
    "PoolManager",
    "apply_statement_timeout",
    "build_dsn",
    "get_sync_pool",
    "open_pool",
]
