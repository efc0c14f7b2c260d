"""
Per-account rolling counters.

A profile is created by the first award an account receives and is never
deleted. Counters only grow; they are maintained incrementally by the award
engine and the reward ledger rather than recomputed from award records.
"""

from __future__ import annotations

from typing import Optional, cast

from achievement_registry.domain.models import AccountProfile
from achievement_registry.services.base import RegistryComponent
from achievement_registry.store.abstract import Collection


class ProfileAggregator(RegistryComponent):
    def get_profile(self, account: str) -> Optional[AccountProfile]:
        return cast(Optional[AccountProfile], self._store.get(Collection.PROFILES, account))

    def achievement_count(self, account: str) -> int:
        profile = self.get_profile(account)
        return profile.total_achievements if profile is not None else 0

    def certification_count(self, account: str) -> int:
        profile = self.get_profile(account)
        return profile.total_certifications if profile is not None else 0

    def touch(self, account: str) -> AccountProfile:
        """
        Refresh `last_activity`, creating the profile on first contact.

        Creation stamps `joined_at` and counts the account in `total_users`.
        """
        now = self._clock.now()
        profile = self.get_profile(account)
        if profile is None:
            profile = AccountProfile(joined_at=now, last_activity=now)
            self._update_counters(total_users=self.counters().total_users + 1)
        else:
            profile = profile.model_copy(update={"last_activity": now})
        self._store.put(Collection.PROFILES, account, profile)
        return profile

    def record_achievement(self, account: str, points: int) -> AccountProfile:
        profile = self.touch(account)
        return self._merge(
            account,
            total_achievements=profile.total_achievements + 1,
            total_points=profile.total_points + points,
        )

    def record_certification(self, account: str) -> AccountProfile:
        profile = self.touch(account)
        return self._merge(account, total_certifications=profile.total_certifications + 1)

    def record_claim(self, account: str, amount: int) -> AccountProfile:
        profile = self.get_profile(account)
        if profile is None:
            # Claims require an award record, which always comes with a profile.
            raise LookupError(f"no profile for {account!r}")
        return self._merge(account, total_rewards_claimed=profile.total_rewards_claimed + amount)

    def _merge(self, account: str, **changes: int) -> AccountProfile:
        return cast(AccountProfile, self._store.merge(Collection.PROFILES, account, changes))


__all__ = ["ProfileAggregator"]
