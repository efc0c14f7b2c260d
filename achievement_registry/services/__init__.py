"""
Registry components.

Each component owns one slice of the registry state and raises RegistryError
on the first failing precondition. The AchievementRegistry facade wires them
to one store and runs every mutating call as a single transaction.
"""

from achievement_registry.services.access import AccessControl
from achievement_registry.services.achievement_catalog import AchievementCatalog
from achievement_registry.services.award_engine import AwardEngine
from achievement_registry.services.base import RegistryComponent
from achievement_registry.services.certification_catalog import CertificationCatalog
from achievement_registry.services.issuer_registry import IssuerRegistry
from achievement_registry.services.profile_aggregator import ProfileAggregator
from achievement_registry.services.reward_ledger import RewardLedger

__all__ = [
    "AccessControl",
    "AchievementCatalog",
    "AwardEngine",
    "CertificationCatalog",
    "IssuerRegistry",
    "ProfileAggregator",
    "RegistryComponent",
    "RewardLedger",
]
