"""
In-memory store: dict-backed collections with snapshot rollback.

A single re-entrant lock serializes transactions and reads, so no reader ever
observes the writes of a transaction that has not finished.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager, nullcontext
from typing import Any, ContextManager, Dict, Generator, Optional

from pydantic import BaseModel

from achievement_registry.store.abstract import (
    AbstractRegistryStore,
    Collection,
    Key,
    MODEL_FOR,
    decode_key,
)
from achievement_registry.utils.logging import get_logger

log = get_logger(__name__)


class InMemoryStore(AbstractRegistryStore):
    """Store backed by one dict per collection."""

    def __init__(self) -> None:
        self._data: Dict[Collection, Dict[Key, BaseModel]] = {c: {} for c in Collection}
        self._lock = threading.RLock()
        self._depth = 0
        self._dirty = False

    def get(self, collection: Collection, key: Key) -> Optional[BaseModel]:
        with self._lock:
            return self._data[collection].get(key)

    def put(self, collection: Collection, key: Key, value: BaseModel) -> None:
        expected = MODEL_FOR[collection]
        if not isinstance(value, expected):
            raise TypeError(
                f"{collection.value} holds {expected.__name__}, got {type(value).__name__}"
            )
        with self._lock:
            self._data[collection][key] = value
            self._dirty = True

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        """
        Run the enclosed block atomically.

        Nested transactions join the outermost one; only the outermost one
        snapshots, commits or rolls back.
        """
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                return

            with self._exclusive():
                self._on_begin()
                # Entities are immutable, so a shallow copy per collection is a full snapshot.
                snapshot = {c: dict(items) for c, items in self._data.items()}
                self._depth = 1
                self._dirty = False
                try:
                    yield
                    self._on_commit()
                except BaseException:
                    self._data = snapshot
                    log.debug("Transaction rolled back")
                    raise
                finally:
                    self._depth = 0

    def _exclusive(self) -> ContextManager[Any]:
        """Guard held for the whole outermost transaction, on top of the thread lock."""
        return nullcontext()

    def _on_begin(self) -> None:
        """Hook run before the outermost transaction takes its snapshot."""

    def _on_commit(self) -> None:
        """Hook run after the outermost transaction body succeeded."""

    def dump_state(self) -> Dict[str, Any]:
        """Serialize every collection into JSON-compatible data."""
        with self._lock:
            data = {c: dict(items) for c, items in self._data.items()}
        return {
            collection.value: [
                {"key": list(key) if isinstance(key, tuple) else key, "doc": value.model_dump(mode="json")}
                for key, value in items.items()
            ]
            for collection, items in data.items()
        }

    def load_state(self, state: Dict[str, Any]) -> None:
        """Replace all collections with data produced by `dump_state`."""
        data: Dict[Collection, Dict[Key, BaseModel]] = {c: {} for c in Collection}
        for collection in Collection:
            model = MODEL_FOR[collection]
            for entry in state.get(collection.value, []):
                data[collection][decode_key(entry["key"])] = model.model_validate(entry["doc"])
        with self._lock:
            self._data = data


__all__ = ["InMemoryStore"]
