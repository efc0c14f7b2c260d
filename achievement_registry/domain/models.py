"""
Domain models for the achievement registry.

Every stored entity is an immutable pydantic model; updates produce a new copy
(`model_copy(update=...)`) which the store writes back in place of the old one.
Timestamps are ledger time (integers), not wall-clock datetimes.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

_FROZEN = {
    "frozen": True,
    "populate_by_name": True,
    "arbitrary_types_allowed": False,
}


class IssuerRecord(BaseModel):
    """An account vetted by the owner to define and award achievements."""

    name: str = Field(..., description="Display name of the issuing organization.")
    description: str = Field("", description="Free-form issuer profile text.")
    active: bool = Field(True, description="Whether the issuer may currently act.")
    registered_at: int = Field(..., description="Ledger time of the latest registration.")

    model_config = _FROZEN


class AchievementDefinition(BaseModel):
    """
    A reward-bearing accomplishment. Only `active` may change after creation,
    and only from True to False.
    """

    id: int = Field(..., ge=1)
    name: str
    description: str
    category: str
    reward_amount: int = Field(..., ge=0)
    issuer: str
    active: bool = True
    created_at: int

    model_config = _FROZEN


class CertificationDefinition(BaseModel):
    """A credential granted once an account holds enough achievements."""

    id: int = Field(..., ge=1)
    name: str
    description: str
    required_achievements_count: int = Field(..., ge=1)
    issuer: str
    active: bool = True
    created_at: int

    model_config = _FROZEN


class AchievementAward(BaseModel):
    """The fact that an account earned an achievement, plus its claim status."""

    account: str
    achievement_id: int
    earned_at: int
    claimed: bool = False
    issuer: str

    model_config = _FROZEN


class CertificationAward(BaseModel):
    account: str
    certification_id: int
    earned_at: int
    issuer: str

    model_config = _FROZEN


class AccountProfile(BaseModel):
    """Rolling per-account counters, created on the first award."""

    total_achievements: int = 0
    total_certifications: int = 0
    total_rewards_claimed: int = 0
    total_points: int = 0
    joined_at: int = 0
    last_activity: int = 0

    model_config = _FROZEN


class GlobalCounters(BaseModel):
    """Singleton counters shared by the whole registry."""

    total_achievements: int = 0
    total_certifications: int = 0
    total_users: int = 0
    contract_balance: int = Field(0, ge=0)
    paused: bool = False

    model_config = _FROZEN


class ContractStats(BaseModel):
    total_achievements: int
    total_certifications: int
    total_users: int
    contract_balance: int
    paused: bool

    model_config = _FROZEN


class UserReport(BaseModel):
    """
    Profile of one account together with a snapshot of the global stats.

    `has_profile` is False when the account never received an award; every
    counter is then reported as zero.
    """

    account: str
    has_profile: bool
    total_achievements: int = 0
    total_certifications: int = 0
    total_rewards_claimed: int = 0
    total_points: int = 0
    joined_at: Optional[int] = None
    last_activity: Optional[int] = None
    contract_stats: ContractStats

    model_config = _FROZEN


class ContractHealth(BaseModel):
    paused: bool
    contract_balance: int
    total_achievements: int
    total_certifications: int
    total_users: int
    owner: str

    model_config = _FROZEN


__all__ = [
    "AccountProfile",
    "AchievementAward",
    "AchievementDefinition",
    "CertificationAward",
    "CertificationDefinition",
    "ContractHealth",
    "ContractStats",
    "GlobalCounters",
    "IssuerRecord",
    "UserReport",
]
