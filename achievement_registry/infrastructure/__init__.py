"""
Infrastructure package for the achievement registry.

Centralizes database connectivity concerns (connection factory, pooling).
Keep this layer focused on I/O and resource management, decoupled from the
registry components.
"""

from achievement_registry.infrastructure.db_factory import (
    apply_statement_timeout,
    build_dsn,
    get_sync_pool,
    open_pool,
)

__all__ = [
    "apply_statement_timeout",
    "build_dsn",
    "get_sync_pool",
    "open_pool",
]
