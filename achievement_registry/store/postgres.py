"""
PostgreSQL store: every entity is a JSONB document in one keyed table.

Each registry transaction runs inside a single database transaction that first
takes a transaction-scoped advisory lock, so concurrent registry processes
sharing the database still apply operations one at a time.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Generator, Optional

from psycopg import Connection
from psycopg.types.json import Jsonb
from psycopg_pool import ConnectionPool
from pydantic import BaseModel

from achievement_registry.config import get_settings
from achievement_registry.infrastructure.db_factory import (
    apply_statement_timeout,
    get_sync_pool,
    open_pool,
)
from achievement_registry.store.abstract import (
    AbstractRegistryStore,
    Collection,
    Key,
    MODEL_FOR,
    encode_key,
)
from achievement_registry.utils.logging import get_logger

log = get_logger(__name__)

# Key for pg_advisory_xact_lock shared by every registry writer.
ADVISORY_LOCK_ID = 7_312_004_211

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS registry_documents (
    collection TEXT NOT NULL,
    key TEXT NOT NULL,
    doc JSONB NOT NULL,
    PRIMARY KEY (collection, key)
);
"""

SELECT_SQL = "SELECT doc FROM registry_documents WHERE collection = %s AND key = %s;"

UPSERT_SQL = """
INSERT INTO registry_documents (collection, key, doc)
VALUES (%s, %s, %s)
ON CONFLICT (collection, key) DO UPDATE SET doc = EXCLUDED.doc;
"""


class PostgresStore(AbstractRegistryStore):
    """
    Store backed by the `registry_documents` table.

    Parameters
    ----------
    pool : ConnectionPool, optional
        Pool to draw connections from. Defaults to the settings-derived pool.
    dsn_override : str, optional
        Open a private pool against this DSN instead (used by tests).
    statement_timeout_ms : int, optional
        Per-transaction statement timeout. Defaults to settings.
    """

    def __init__(
        self,
        pool: Optional[ConnectionPool] = None,
        dsn_override: Optional[str] = None,
        statement_timeout_ms: Optional[int] = None,
    ) -> None:
        self._pool_instance = pool
        self._dsn_override = dsn_override
        self._owns_pool = False
        if statement_timeout_ms is None:
            statement_timeout_ms = get_settings().db_statement_timeout_ms
        self.statement_timeout_ms = statement_timeout_ms
        self._local = threading.local()

    def _get_pool(self) -> ConnectionPool:
        if self._pool_instance is None:
            if self._dsn_override:
                self._pool_instance = open_pool(self._dsn_override)
                self._owns_pool = True
            else:
                self._pool_instance = get_sync_pool()
        return self._pool_instance

    def ensure_schema(self) -> None:
        """Create the documents table if it does not exist yet."""
        with self._get_pool().connection() as conn:
            conn.execute(SCHEMA_SQL)
        log.info("Registry schema ensured")

    @contextmanager
    def _connection(self) -> Generator[Connection, None, None]:
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            yield conn
            return
        with self._get_pool().connection() as conn:
            yield conn

    def get(self, collection: Collection, key: Key) -> Optional[BaseModel]:
        with self._connection() as conn:
            row = conn.execute(SELECT_SQL, (collection.value, encode_key(key))).fetchone()
        if row is None:
            return None
        return MODEL_FOR[collection].model_validate(row[0])

    def put(self, collection: Collection, key: Key, value: BaseModel) -> None:
        doc = Jsonb(value.model_dump(mode="json"))
        with self._connection() as conn:
            conn.execute(UPSERT_SQL, (collection.value, encode_key(key), doc))

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        if getattr(self._local, "conn", None) is not None:
            yield
            return

        with self._get_pool().connection() as conn:
            with conn.transaction():
                with conn.cursor() as cur:
                    apply_statement_timeout(cur, self.statement_timeout_ms)
                    cur.execute("SELECT pg_advisory_xact_lock(%s);", (ADVISORY_LOCK_ID,))
                self._local.conn = conn
                try:
                    yield
                finally:
                    self._local.conn = None

    def truncate(self) -> None:
        """Remove every document. Intended for tests and demo resets."""
        with self._connection() as conn:
            conn.execute("TRUNCATE TABLE registry_documents;")

    def close(self) -> None:
        if self._owns_pool and self._pool_instance is not None:
            self._pool_instance.close()
            self._pool_instance = None
            self._owns_pool = False


__all__ = ["ADVISORY_LOCK_ID", "PostgresStore"]
