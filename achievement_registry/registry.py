"""
Registry facade: every public operation of the achievement registry.

Usage:
    from achievement_registry.registry import AchievementRegistry

    registry = AchievementRegistry(owner="owner")
    registry.register_issuer("owner", "acme", "Acme Academy", "Online courses")
    result = registry.create_achievement("acme", "Course 1", "Finish course 1", "CS", 2000)
    if result.ok:
        print(result.value)

Mutating operations take the calling identity first, run inside one store
transaction and return a `Result`. A refused operation leaves no trace in the
store. Read-only queries skip authorization and pause checks.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from achievement_registry.clock import LedgerClock, SystemLedgerClock
from achievement_registry.config import Settings, get_settings
from achievement_registry.domain.errors import RegistryError, Result
from achievement_registry.domain.limits import DEFAULT_LIMITS, RegistryLimits
from achievement_registry.domain.models import (
    AccountProfile,
    AchievementDefinition,
    CertificationDefinition,
    ContractHealth,
    ContractStats,
    IssuerRecord,
    UserReport,
)
from achievement_registry.services import (
    AccessControl,
    AchievementCatalog,
    AwardEngine,
    CertificationCatalog,
    IssuerRegistry,
    ProfileAggregator,
    RewardLedger,
)
from achievement_registry.store import InMemoryStore, RegistryStore, build_store
from achievement_registry.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")


class AchievementRegistry:
    """
    Issuers, achievement and certification catalogs, award records, profiles
    and the reward balance behind one transactional entry point.

    Parameters
    ----------
    store : RegistryStore, optional
        Backend holding the registry state. Defaults to a fresh in-memory store.
    owner : str, optional
        Identity allowed to manage issuers, funds and the pause flag.
        Defaults to settings.registry_owner.
    clock : LedgerClock, optional
        Source of ledger time. Defaults to SystemLedgerClock.
    limits : RegistryLimits, optional
        Deployment bounds. Defaults to the standard limits.
    """

    def __init__(
        self,
        store: Optional[RegistryStore] = None,
        owner: Optional[str] = None,
        clock: Optional[LedgerClock] = None,
        limits: Optional[RegistryLimits] = None,
    ) -> None:
        self._store = store if store is not None else InMemoryStore()
        self._clock = clock or SystemLedgerClock()
        self.limits = limits or DEFAULT_LIMITS
        self.access = AccessControl(self._store, owner or get_settings().registry_owner)

        parts = (self._store, self.access, self._clock, self.limits)
        self.issuers = IssuerRegistry(*parts)
        self.achievements = AchievementCatalog(*parts)
        self.certifications = CertificationCatalog(*parts)
        self.profiles = ProfileAggregator(*parts)
        self.awards = AwardEngine(
            *parts,
            achievements=self.achievements,
            certifications=self.certifications,
            profiles=self.profiles,
        )
        self.ledger = RewardLedger(
            *parts,
            achievements=self.achievements,
            awards=self.awards,
            profiles=self.profiles,
        )

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, clock: Optional[LedgerClock] = None
    ) -> "AchievementRegistry":
        """Build a registry on the store backend and limits named by settings."""
        settings = settings or get_settings()
        return cls(
            store=build_store(settings),
            owner=settings.registry_owner,
            clock=clock,
            limits=settings.limits(),
        )

    @property
    def owner(self) -> str:
        return self.access.owner

    @property
    def store(self) -> RegistryStore:
        return self._store

    def close(self) -> None:
        self._store.close()

    def _execute(self, operation: str, caller: str, fn: Callable[[], T], **context: Any) -> Result[T]:
        """Run `fn` as one atomic unit and fold a refusal into a failed Result."""
        try:
            with self._store.transaction():
                value = fn()
        except RegistryError as exc:
            log.warning(
                f"[OP REJECTED] {operation}",
                extra={
                    "operation": operation,
                    "caller": caller,
                    "error": exc.kind.value,
                    "reason": exc.message,
                    **context,
                },
            )
            return Result.failure(exc.kind, exc.message)

        log.info(
            f"[OP OK] {operation}",
            extra={"operation": operation, "caller": caller, "result": value, **context},
        )
        return Result.success(value)

    def _read(self, fn: Callable[[], T]) -> T:
        """Evaluate a query against one committed view of the store."""
        with self._store.transaction():
            return fn()

    # ------------------------------------------------------------------
    # Issuer registry
    # ------------------------------------------------------------------

    def register_issuer(self, caller: str, issuer: str, name: str, description: str) -> Result[bool]:
        return self._execute(
            "register_issuer",
            caller,
            lambda: self.issuers.register_issuer(caller, issuer, name, description),
            issuer=issuer,
        )

    def deactivate_issuer(self, caller: str, issuer: str) -> Result[bool]:
        return self._execute(
            "deactivate_issuer",
            caller,
            lambda: self.issuers.deactivate_issuer(caller, issuer),
            issuer=issuer,
        )

    # ------------------------------------------------------------------
    # Catalogs
    # ------------------------------------------------------------------

    def create_achievement(
        self, caller: str, name: str, description: str, category: str, reward_amount: int
    ) -> Result[int]:
        return self._execute(
            "create_achievement",
            caller,
            lambda: self.achievements.create_achievement(
                caller, name, description, category, reward_amount
            ),
            category=category,
            reward_amount=reward_amount,
        )

    def deactivate_achievement(self, caller: str, achievement_id: int) -> Result[bool]:
        return self._execute(
            "deactivate_achievement",
            caller,
            lambda: self.achievements.deactivate_achievement(caller, achievement_id),
            achievement_id=achievement_id,
        )

    def create_certification(
        self, caller: str, name: str, description: str, required_achievements_count: int
    ) -> Result[int]:
        return self._execute(
            "create_certification",
            caller,
            lambda: self.certifications.create_certification(
                caller, name, description, required_achievements_count
            ),
            required_achievements_count=required_achievements_count,
        )

    def deactivate_certification(self, caller: str, certification_id: int) -> Result[bool]:
        return self._execute(
            "deactivate_certification",
            caller,
            lambda: self.certifications.deactivate_certification(caller, certification_id),
            certification_id=certification_id,
        )

    # ------------------------------------------------------------------
    # Awards
    # ------------------------------------------------------------------

    def award_achievement(self, caller: str, account: str, achievement_id: int) -> Result[bool]:
        return self._execute(
            "award_achievement",
            caller,
            lambda: self.awards.award_achievement(caller, account, achievement_id),
            account=account,
            achievement_id=achievement_id,
        )

    def award_certification(self, caller: str, account: str, certification_id: int) -> Result[bool]:
        return self._execute(
            "award_certification",
            caller,
            lambda: self.awards.award_certification(caller, account, certification_id),
            account=account,
            certification_id=certification_id,
        )

    # ------------------------------------------------------------------
    # Reward ledger
    # ------------------------------------------------------------------

    def claim_achievement_reward(self, caller: str, achievement_id: int) -> Result[int]:
        return self._execute(
            "claim_achievement_reward",
            caller,
            lambda: self.ledger.claim_achievement_reward(caller, achievement_id),
            achievement_id=achievement_id,
        )

    def fund_contract(self, caller: str, amount: int) -> Result[int]:
        return self._execute(
            "fund_contract", caller, lambda: self.ledger.fund_contract(caller, amount), amount=amount
        )

    def withdraw_contract_funds(self, caller: str, amount: int) -> Result[int]:
        return self._execute(
            "withdraw_contract_funds",
            caller,
            lambda: self.ledger.withdraw_contract_funds(caller, amount),
            amount=amount,
        )

    def emergency_pause(self, caller: str) -> Result[bool]:
        return self._execute("emergency_pause", caller, lambda: self.ledger.emergency_pause(caller))

    def resume_operations(self, caller: str) -> Result[bool]:
        return self._execute(
            "resume_operations", caller, lambda: self.ledger.resume_operations(caller)
        )

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    def get_user_profile(self, account: str) -> Optional[AccountProfile]:
        return self._read(lambda: self.profiles.get_profile(account))

    def get_achievement(self, achievement_id: int) -> Optional[AchievementDefinition]:
        return self._read(lambda: self.achievements.get_achievement(achievement_id))

    def get_certification(self, certification_id: int) -> Optional[CertificationDefinition]:
        return self._read(lambda: self.certifications.get_certification(certification_id))

    def has_achievement(self, account: str, achievement_id: int) -> bool:
        return self._read(lambda: self.awards.has_achievement(account, achievement_id))

    def has_certification(self, account: str, certification_id: int) -> bool:
        return self._read(lambda: self.awards.has_certification(account, certification_id))

    def get_issuer_info(self, issuer: str) -> Optional[IssuerRecord]:
        return self._read(lambda: self.issuers.get_issuer(issuer))

    def get_contract_stats(self) -> ContractStats:
        counters = self._read(self.ledger.counters)
        return ContractStats(
            total_achievements=counters.total_achievements,
            total_certifications=counters.total_certifications,
            total_users=counters.total_users,
            contract_balance=counters.contract_balance,
            paused=counters.paused,
        )

    def get_user_report(self, account: str) -> UserReport:
        """Profile of `account` (zeros when it has none) plus global stats, read together."""
        with self._store.transaction():
            stats = self.get_contract_stats()
            profile = self.get_user_profile(account)
        if profile is None:
            return UserReport(account=account, has_profile=False, contract_stats=stats)
        return UserReport(
            account=account,
            has_profile=True,
            total_achievements=profile.total_achievements,
            total_certifications=profile.total_certifications,
            total_rewards_claimed=profile.total_rewards_claimed,
            total_points=profile.total_points,
            joined_at=profile.joined_at,
            last_activity=profile.last_activity,
            contract_stats=stats,
        )

    def get_contract_health(self) -> ContractHealth:
        counters = self._read(self.ledger.counters)
        return ContractHealth(
            paused=counters.paused,
            contract_balance=counters.contract_balance,
            total_achievements=counters.total_achievements,
            total_certifications=counters.total_certifications,
            total_users=counters.total_users,
            owner=self.owner,
        )


__all__ = ["AchievementRegistry"]
