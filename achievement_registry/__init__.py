"""
Achievement Registry - issuer-gated ledger of educational achievements.

This package tracks achievements and certifications that vetted issuers award
to accounts, aggregates per-account progress, and pays out rewards from an
owner-funded balance when an account claims an earned achievement:

- Issuer registry managed by a single owner
- Achievement and certification catalogs
- One-time awards with per-account caps and certification thresholds
- Per-account profile counters
- A reward ledger that never goes negative

Every mutating operation is atomic: it either applies completely or returns an
error kind and leaves the store untouched.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from achievement_registry.clock import LedgerClock, ManualLedgerClock, SystemLedgerClock
from achievement_registry.config import Settings, get_settings
from achievement_registry.domain import ErrorKind, RegistryError, RegistryLimits, Result
from achievement_registry.registry import AchievementRegistry
from achievement_registry.store import (
    InMemoryStore,
    JsonFileStore,
    PostgresStore,
    RegistryStore,
    build_store,
)
from achievement_registry.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Registry
    "AchievementRegistry",
    "ErrorKind",
    "RegistryError",
    "RegistryLimits",
    "Result",
    # Ledger time
    "LedgerClock",
    "ManualLedgerClock",
    "SystemLedgerClock",
    # Stores
    "InMemoryStore",
    "JsonFileStore",
    "PostgresStore",
    "RegistryStore",
    "build_store",
    # Logging
    "configure_logging",
    "get_logger",
]
