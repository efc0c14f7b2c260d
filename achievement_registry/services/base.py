"""
Shared plumbing for registry components: guards, input validation and access
to the global counters.

Guards raise RegistryError; the registry facade turns that into a returned
failure and discards every write the operation made.
"""

from __future__ import annotations

from typing import Any, Optional, cast

from achievement_registry.clock import LedgerClock
from achievement_registry.domain.errors import ErrorKind, RegistryError
from achievement_registry.domain.limits import RegistryLimits
from achievement_registry.domain.models import GlobalCounters
from achievement_registry.services.access import AccessControl
from achievement_registry.store.abstract import COUNTERS_KEY, Collection, RegistryStore


class RegistryComponent:
    """Base class for components operating on a shared store."""

    def __init__(
        self,
        store: RegistryStore,
        access: AccessControl,
        clock: LedgerClock,
        limits: RegistryLimits,
    ) -> None:
        self._store = store
        self._access = access
        self._clock = clock
        self._limits = limits

    # -- counters -------------------------------------------------------

    def counters(self) -> GlobalCounters:
        current = cast(Optional[GlobalCounters], self._store.get(Collection.COUNTERS, COUNTERS_KEY))
        return current if current is not None else GlobalCounters()

    def _update_counters(self, **changes: Any) -> GlobalCounters:
        return cast(
            GlobalCounters,
            self._store.merge(Collection.COUNTERS, COUNTERS_KEY, changes, default=GlobalCounters()),
        )

    # -- guards ---------------------------------------------------------

    def _require_running(self) -> None:
        if self._access.is_paused():
            raise RegistryError(ErrorKind.INVALID_INPUT, "registry is paused")

    def _require_owner(self, caller: str) -> None:
        if not self._access.is_owner(caller):
            raise RegistryError(ErrorKind.UNAUTHORIZED, f"{caller!r} is not the registry owner")

    def _require_active_issuer(self, caller: str) -> None:
        if not self._access.is_active_issuer(caller):
            raise RegistryError(ErrorKind.UNAUTHORIZED, f"{caller!r} is not an active issuer")


def validate_text(value: Any, field: str, max_length: int, required: bool = False) -> str:
    """Check a free-text field against its length bound."""
    if not isinstance(value, str):
        raise RegistryError(ErrorKind.INVALID_INPUT, f"{field} must be a string")
    if required and not value:
        raise RegistryError(ErrorKind.INVALID_INPUT, f"{field} must not be empty")
    if len(value) > max_length:
        raise RegistryError(
            ErrorKind.INVALID_INPUT, f"{field} exceeds {max_length} characters"
        )
    return value


def validate_account(value: Any, field: str = "account") -> str:
    if not isinstance(value, str) or not value:
        raise RegistryError(ErrorKind.INVALID_INPUT, f"{field} must be a non-empty identity")
    return value


def validate_uint(value: Any, field: str, positive: bool = False) -> int:
    """Accept only non-negative ints (strictly positive when `positive`)."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise RegistryError(ErrorKind.INVALID_INPUT, f"{field} must be an unsigned integer")
    if positive and value == 0:
        raise RegistryError(ErrorKind.INVALID_INPUT, f"{field} must be greater than zero")
    return value


__all__ = ["RegistryComponent", "validate_account", "validate_text", "validate_uint"]
