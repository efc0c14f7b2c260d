"""
JSON file store: an in-memory store persisted to disk after every commit.

Every outermost transaction holds an exclusive lock on a sibling `.lock` file
and reloads the state file before running, so several processes sharing one
state file apply their operations one at a time on top of each other's commits.

The state file is rewritten through a temporary sibling and `os.replace`, so a
crash mid-write leaves the previous committed state intact.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, ContextManager

from filelock import FileLock

from achievement_registry.store.memory import InMemoryStore
from achievement_registry.utils.logging import get_logger

log = get_logger(__name__)

STATE_VERSION = 1


class JsonFileStore(InMemoryStore):
    """
    Store persisted as a single JSON document.

    Parameters
    ----------
    path : Path | str
        State file location. Parent directories are created on first commit.
    lock_timeout : float
        Seconds to wait for another process to release the state file
        before raising `filelock.Timeout`.
    """

    def __init__(self, path: Path | str, lock_timeout: float = 30.0) -> None:
        super().__init__()
        self.path = Path(path)
        self._file_lock = FileLock(
            str(self.path.with_name(self.path.name + ".lock")), timeout=lock_timeout
        )
        self._reload()

    def _reload(self) -> None:
        if not self.path.exists():
            self.load_state({})
            return
        with self.path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
        if payload.get("version") != STATE_VERSION:
            raise ValueError(
                f"Unsupported state file version {payload.get('version')!r} in {self.path}"
            )
        self.load_state(payload["collections"])
        log.debug("State loaded", extra={"path": str(self.path)})

    def _exclusive(self) -> ContextManager[Any]:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        return self._file_lock

    def _on_begin(self) -> None:
        self._reload()

    def _on_commit(self) -> None:
        if not self._dirty:
            return
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        payload = {"version": STATE_VERSION, "collections": self.dump_state()}
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)
        log.debug("State persisted", extra={"path": str(self.path)})


__all__ = ["JsonFileStore"]
