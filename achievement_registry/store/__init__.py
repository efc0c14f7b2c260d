"""
Store package for the achievement registry.

Re-exports the store interfaces and concrete backends, plus `build_store`,
which picks a backend from settings.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from achievement_registry.config import Settings, get_settings
from achievement_registry.store.abstract import (
    AbstractRegistryStore,
    COUNTERS_KEY,
    Collection,
    Key,
    RegistryStore,
)
from achievement_registry.store.json_file import JsonFileStore
from achievement_registry.store.memory import InMemoryStore
from achievement_registry.store.postgres import PostgresStore


def _postgres_store(settings: Settings) -> PostgresStore:
    store = PostgresStore(statement_timeout_ms=settings.db_statement_timeout_ms)
    store.ensure_schema()
    return store


def _store_factories() -> Dict[str, Callable[[Settings], RegistryStore]]:
    """Registry of available store backends."""
    return {
        "memory": lambda settings: InMemoryStore(),
        "json": lambda settings: JsonFileStore(settings.state_file),
        "postgres": _postgres_store,
    }


def available_backends() -> List[str]:
    return sorted(_store_factories().keys())


def build_store(settings: Optional[Settings] = None) -> RegistryStore:
    """Instantiate the backend named by `settings.store_backend`."""
    settings = settings or get_settings()
    factories = _store_factories()
    if settings.store_backend not in factories:
        raise ValueError(
            f"Unknown store backend '{settings.store_backend}'. Available: {', '.join(factories)}"
        )
    return factories[settings.store_backend](settings)


__all__ = [
    "AbstractRegistryStore",
    "COUNTERS_KEY",
    "Collection",
    "InMemoryStore",
    "JsonFileStore",
    "Key",
    "PostgresStore",
    "RegistryStore",
    "available_backends",
    "build_store",
]
