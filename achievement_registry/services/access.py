"""
Access control predicates consulted before every mutating operation.

All three checks are pure reads against the store.
"""

from __future__ import annotations

from typing import Optional, cast

from achievement_registry.domain.models import GlobalCounters, IssuerRecord
from achievement_registry.store.abstract import COUNTERS_KEY, Collection, RegistryStore


class AccessControl:
    """Owner, issuer and pause checks for one registry deployment."""

    def __init__(self, store: RegistryStore, owner: str) -> None:
        if not owner:
            raise ValueError("registry owner identity must be non-empty")
        self._store = store
        self.owner = owner

    def is_owner(self, caller: str) -> bool:
        return caller == self.owner

    def is_active_issuer(self, account: str) -> bool:
        record = cast(Optional[IssuerRecord], self._store.get(Collection.ISSUERS, account))
        return record is not None and record.active

    def is_paused(self) -> bool:
        counters = cast(Optional[GlobalCounters], self._store.get(Collection.COUNTERS, COUNTERS_KEY))
        return counters is not None and counters.paused


__all__ = ["AccessControl"]
