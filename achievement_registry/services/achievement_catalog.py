"""
Achievement definitions created by active issuers.

Ids are allocated from the global `total_achievements` counter, so the catalog
always holds exactly the ids 1..total_achievements.
"""

from __future__ import annotations

from typing import Optional, cast

from achievement_registry.domain.errors import ErrorKind, RegistryError
from achievement_registry.domain.models import AchievementDefinition
from achievement_registry.services.base import RegistryComponent, validate_text, validate_uint
from achievement_registry.store.abstract import Collection


class AchievementCatalog(RegistryComponent):
    def get_achievement(self, achievement_id: int) -> Optional[AchievementDefinition]:
        if isinstance(achievement_id, bool) or not isinstance(achievement_id, int):
            return None
        return cast(
            Optional[AchievementDefinition],
            self._store.get(Collection.ACHIEVEMENTS, achievement_id),
        )

    def create_achievement(
        self,
        caller: str,
        name: str,
        description: str,
        category: str,
        reward_amount: int,
    ) -> int:
        """Store a new active definition issued by `caller` and return its id."""
        self._require_running()
        self._require_active_issuer(caller)
        limits = self._limits
        validate_text(name, "name", limits.max_name_length, required=True)
        validate_text(description, "description", limits.max_description_length)
        validate_text(category, "category", limits.max_category_length, required=True)
        validate_uint(reward_amount, "reward_amount")
        if not limits.min_reward <= reward_amount <= limits.max_reward:
            raise RegistryError(
                ErrorKind.INVALID_INPUT,
                f"reward_amount must lie in [{limits.min_reward}, {limits.max_reward}]",
            )

        achievement_id = self.counters().total_achievements + 1
        definition = AchievementDefinition(
            id=achievement_id,
            name=name,
            description=description,
            category=category,
            reward_amount=reward_amount,
            issuer=caller,
            active=True,
            created_at=self._clock.now(),
        )
        self._store.put(Collection.ACHIEVEMENTS, achievement_id, definition)
        self._update_counters(total_achievements=achievement_id)
        return achievement_id

    def deactivate_achievement(self, caller: str, achievement_id: int) -> bool:
        """
        Retire a definition. Existing awards stay, but unclaimed rewards for it
        can no longer be paid out.
        """
        self._require_running()
        definition = self.get_achievement(achievement_id)
        if definition is None:
            raise RegistryError(
                ErrorKind.ACHIEVEMENT_NOT_FOUND, f"achievement {achievement_id!r} does not exist"
            )
        if not (self._access.is_owner(caller) or caller == definition.issuer):
            raise RegistryError(
                ErrorKind.UNAUTHORIZED, "only the owner or the original issuer may deactivate"
            )
        self._store.merge(Collection.ACHIEVEMENTS, achievement_id, {"active": False})
        return True


__all__ = ["AchievementCatalog"]
