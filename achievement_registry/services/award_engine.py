"""
Award engine: grants achievements and certifications to accounts.

Each (account, id) pair can be awarded at most once. Achievement points accrue
on the profile immediately; the matching reward is paid out later by the
reward ledger when the account claims it.
"""

from __future__ import annotations

from typing import Optional, cast

from achievement_registry.clock import LedgerClock
from achievement_registry.domain.errors import ErrorKind, RegistryError
from achievement_registry.domain.limits import RegistryLimits
from achievement_registry.domain.models import AchievementAward, CertificationAward
from achievement_registry.services.access import AccessControl
from achievement_registry.services.achievement_catalog import AchievementCatalog
from achievement_registry.services.base import RegistryComponent, validate_account
from achievement_registry.services.certification_catalog import CertificationCatalog
from achievement_registry.services.profile_aggregator import ProfileAggregator
from achievement_registry.store.abstract import Collection, RegistryStore


class AwardEngine(RegistryComponent):
    def __init__(
        self,
        store: RegistryStore,
        access: AccessControl,
        clock: LedgerClock,
        limits: RegistryLimits,
        achievements: AchievementCatalog,
        certifications: CertificationCatalog,
        profiles: ProfileAggregator,
    ) -> None:
        super().__init__(store, access, clock, limits)
        self._achievements = achievements
        self._certifications = certifications
        self._profiles = profiles

    # -- lookups --------------------------------------------------------

    def get_achievement_award(self, account: str, achievement_id: int) -> Optional[AchievementAward]:
        return cast(
            Optional[AchievementAward],
            self._store.get(Collection.ACHIEVEMENT_AWARDS, (account, achievement_id)),
        )

    def get_certification_award(
        self, account: str, certification_id: int
    ) -> Optional[CertificationAward]:
        return cast(
            Optional[CertificationAward],
            self._store.get(Collection.CERTIFICATION_AWARDS, (account, certification_id)),
        )

    def has_achievement(self, account: str, achievement_id: int) -> bool:
        return self.get_achievement_award(account, achievement_id) is not None

    def has_certification(self, account: str, certification_id: int) -> bool:
        return self.get_certification_award(account, certification_id) is not None

    # -- awards ---------------------------------------------------------

    def award_achievement(self, caller: str, account: str, achievement_id: int) -> bool:
        self._require_running()
        self._require_active_issuer(caller)
        validate_account(account)
        if self.has_achievement(account, achievement_id):
            raise RegistryError(
                ErrorKind.INVALID_INPUT,
                f"{account!r} already holds achievement {achievement_id!r}",
            )
        if self._profiles.achievement_count(account) >= self._limits.max_achievements_per_user:
            raise RegistryError(
                ErrorKind.LIMIT_EXCEEDED,
                f"{account!r} reached {self._limits.max_achievements_per_user} achievements",
            )
        definition = self._achievements.get_achievement(achievement_id)
        if definition is None or not definition.active:
            raise RegistryError(
                ErrorKind.ACHIEVEMENT_NOT_FOUND,
                f"achievement {achievement_id!r} does not exist or is inactive",
            )

        award = AchievementAward(
            account=account,
            achievement_id=achievement_id,
            earned_at=self._clock.now(),
            claimed=False,
            issuer=caller,
        )
        self._store.put(Collection.ACHIEVEMENT_AWARDS, (account, achievement_id), award)
        self._profiles.record_achievement(account, definition.reward_amount)
        return True

    def award_certification(self, caller: str, account: str, certification_id: int) -> bool:
        """
        Grant a certification when the account's achievement count meets the
        threshold. Eligibility is evaluated only now; later changes to the
        counted achievements never revoke the award.
        """
        self._require_running()
        self._require_active_issuer(caller)
        validate_account(account)
        if self.has_certification(account, certification_id):
            raise RegistryError(
                ErrorKind.INVALID_INPUT,
                f"{account!r} already holds certification {certification_id!r}",
            )
        if (
            self._limits.enforce_certification_cap
            and self._profiles.certification_count(account)
            >= self._limits.max_certifications_per_user
        ):
            raise RegistryError(
                ErrorKind.LIMIT_EXCEEDED,
                f"{account!r} reached {self._limits.max_certifications_per_user} certifications",
            )
        definition = self._certifications.get_certification(certification_id)
        if definition is None or not definition.active:
            raise RegistryError(
                ErrorKind.CERTIFICATION_NOT_FOUND,
                f"certification {certification_id!r} does not exist or is inactive",
            )
        held = self._profiles.achievement_count(account)
        if held < definition.required_achievements_count:
            raise RegistryError(
                ErrorKind.INVALID_INPUT,
                f"{account!r} holds {held} achievements, "
                f"{definition.required_achievements_count} required",
            )

        award = CertificationAward(
            account=account,
            certification_id=certification_id,
            earned_at=self._clock.now(),
            issuer=caller,
        )
        self._store.put(Collection.CERTIFICATION_AWARDS, (account, certification_id), award)
        self._profiles.record_certification(account)
        return True


__all__ = ["AwardEngine"]
