"""
Ledger time sources.

Ledger time is a non-decreasing integer (block height, or seconds since the
epoch) stamped on every record the registry creates or refreshes.
"""

from __future__ import annotations

import threading
import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class LedgerClock(Protocol):
    def now(self) -> int:
        ...


class SystemLedgerClock:
    """Unix seconds, clamped so it never goes backwards within a process."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            self._last = max(self._last, int(time.time()))
            return self._last


class ManualLedgerClock:
    """A block-height style counter advanced explicitly by the caller."""

    def __init__(self, start: int = 1) -> None:
        if start < 0:
            raise ValueError("ledger time cannot be negative")
        self._height = start

    def now(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        if blocks < 0:
            raise ValueError("ledger time cannot move backwards")
        self._height += blocks
        return self._height


__all__ = ["LedgerClock", "ManualLedgerClock", "SystemLedgerClock"]
