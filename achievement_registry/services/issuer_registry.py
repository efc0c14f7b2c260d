"""Owner-managed registry of accounts allowed to issue achievements."""

from __future__ import annotations

from typing import Optional, cast

from achievement_registry.domain.errors import ErrorKind, RegistryError
from achievement_registry.domain.models import IssuerRecord
from achievement_registry.services.base import RegistryComponent, validate_account, validate_text
from achievement_registry.store.abstract import Collection


class IssuerRegistry(RegistryComponent):
    def get_issuer(self, issuer: str) -> Optional[IssuerRecord]:
        return cast(Optional[IssuerRecord], self._store.get(Collection.ISSUERS, issuer))

    def register_issuer(self, caller: str, issuer: str, name: str, description: str) -> bool:
        """
        Create or overwrite an issuer record and mark it active.

        Re-registering a known issuer resets its profile text and its
        `registered_at` to the current ledger time.
        """
        self._require_owner(caller)
        self._require_running()
        validate_account(issuer, "issuer")
        validate_text(name, "name", self._limits.max_name_length, required=True)
        validate_text(description, "description", self._limits.max_description_length)

        record = IssuerRecord(
            name=name,
            description=description,
            active=True,
            registered_at=self._clock.now(),
        )
        self._store.put(Collection.ISSUERS, issuer, record)
        return True

    def deactivate_issuer(self, caller: str, issuer: str) -> bool:
        self._require_owner(caller)
        self._require_running()
        if self.get_issuer(issuer) is None:
            raise RegistryError(ErrorKind.USER_NOT_FOUND, f"issuer {issuer!r} is not registered")
        self._store.merge(Collection.ISSUERS, issuer, {"active": False})
        return True


__all__ = ["IssuerRegistry"]
