"""Certification definitions: thresholds over an account's achievement count."""

from __future__ import annotations

from typing import Optional, cast

from achievement_registry.domain.errors import ErrorKind, RegistryError
from achievement_registry.domain.models import CertificationDefinition
from achievement_registry.services.base import RegistryComponent, validate_text, validate_uint
from achievement_registry.store.abstract import Collection


class CertificationCatalog(RegistryComponent):
    def get_certification(self, certification_id: int) -> Optional[CertificationDefinition]:
        if isinstance(certification_id, bool) or not isinstance(certification_id, int):
            return None
        return cast(
            Optional[CertificationDefinition],
            self._store.get(Collection.CERTIFICATIONS, certification_id),
        )

    def create_certification(
        self,
        caller: str,
        name: str,
        description: str,
        required_achievements_count: int,
    ) -> int:
        self._require_running()
        self._require_active_issuer(caller)
        validate_text(name, "name", self._limits.max_name_length, required=True)
        validate_text(description, "description", self._limits.max_description_length)
        validate_uint(required_achievements_count, "required_achievements_count", positive=True)

        certification_id = self.counters().total_certifications + 1
        definition = CertificationDefinition(
            id=certification_id,
            name=name,
            description=description,
            required_achievements_count=required_achievements_count,
            issuer=caller,
            active=True,
            created_at=self._clock.now(),
        )
        self._store.put(Collection.CERTIFICATIONS, certification_id, definition)
        self._update_counters(total_certifications=certification_id)
        return certification_id

    def deactivate_certification(self, caller: str, certification_id: int) -> bool:
        self._require_running()
        definition = self.get_certification(certification_id)
        if definition is None:
            raise RegistryError(
                ErrorKind.CERTIFICATION_NOT_FOUND,
                f"certification {certification_id!r} does not exist",
            )
        if not (self._access.is_owner(caller) or caller == definition.issuer):
            raise RegistryError(
                ErrorKind.UNAUTHORIZED, "only the owner or the original issuer may deactivate"
            )
        self._store.merge(Collection.CERTIFICATIONS, certification_id, {"active": False})
        return True


__all__ = ["CertificationCatalog"]
