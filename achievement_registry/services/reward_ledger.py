"""
Reward ledger: the internal balance that funds reward payouts.

Only the owner moves funds in or out; the only other outflow is an account
claiming the reward of an achievement it earned. The balance never goes
negative.
"""

from __future__ import annotations

from achievement_registry.clock import LedgerClock
from achievement_registry.domain.errors import ErrorKind, RegistryError
from achievement_registry.domain.limits import RegistryLimits
from achievement_registry.services.access import AccessControl
from achievement_registry.services.achievement_catalog import AchievementCatalog
from achievement_registry.services.award_engine import AwardEngine
from achievement_registry.services.base import RegistryComponent, validate_uint
from achievement_registry.services.profile_aggregator import ProfileAggregator
from achievement_registry.store.abstract import Collection, RegistryStore


class RewardLedger(RegistryComponent):
    def __init__(
        self,
        store: RegistryStore,
        access: AccessControl,
        clock: LedgerClock,
        limits: RegistryLimits,
        achievements: AchievementCatalog,
        awards: AwardEngine,
        profiles: ProfileAggregator,
    ) -> None:
        super().__init__(store, access, clock, limits)
        self._achievements = achievements
        self._awards = awards
        self._profiles = profiles

    def balance(self) -> int:
        return self.counters().contract_balance

    def claim_achievement_reward(self, caller: str, achievement_id: int) -> int:
        """Pay out the reward of an earned, unclaimed achievement; return the amount."""
        self._require_running()
        award = self._awards.get_achievement_award(caller, achievement_id)
        if award is None:
            raise RegistryError(
                ErrorKind.ACHIEVEMENT_NOT_FOUND,
                f"{caller!r} has not earned achievement {achievement_id!r}",
            )
        if award.claimed:
            raise RegistryError(ErrorKind.REWARD_ALREADY_CLAIMED)
        definition = self._achievements.get_achievement(achievement_id)
        if definition is None or not definition.active:
            raise RegistryError(
                ErrorKind.ACHIEVEMENT_NOT_FOUND, f"achievement {achievement_id!r} is inactive"
            )
        amount = definition.reward_amount
        balance = self.balance()
        if balance < amount:
            raise RegistryError(
                ErrorKind.INSUFFICIENT_BALANCE, f"balance {balance} cannot cover reward {amount}"
            )

        self._store.merge(Collection.ACHIEVEMENT_AWARDS, (caller, achievement_id), {"claimed": True})
        self._profiles.record_claim(caller, amount)
        self._update_counters(contract_balance=balance - amount)
        return amount

    def fund_contract(self, caller: str, amount: int) -> int:
        self._require_owner(caller)
        self._require_running()
        validate_uint(amount, "amount", positive=True)
        return self._update_counters(contract_balance=self.balance() + amount).contract_balance

    def withdraw_contract_funds(self, caller: str, amount: int) -> int:
        self._require_owner(caller)
        self._require_running()
        validate_uint(amount, "amount", positive=True)
        balance = self.balance()
        if balance < amount:
            raise RegistryError(
                ErrorKind.INSUFFICIENT_BALANCE, f"balance {balance} cannot cover withdrawal {amount}"
            )
        return self._update_counters(contract_balance=balance - amount).contract_balance

    def emergency_pause(self, caller: str) -> bool:
        self._require_owner(caller)
        self._require_running()
        self._update_counters(paused=True)
        return True

    def resume_operations(self, caller: str) -> bool:
        self._require_owner(caller)
        self._update_counters(paused=False)
        return True


__all__ = ["RewardLedger"]
