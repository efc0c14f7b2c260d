"""
Domain package for the achievement registry.

Exports the entity models, error contract and deployment limits used across the
store backends, the components and the registry facade.
"""

from achievement_registry.domain.errors import ErrorKind, RegistryError, Result
from achievement_registry.domain.limits import DEFAULT_LIMITS, RegistryLimits
from achievement_registry.domain.models import (
    AccountProfile,
    AchievementAward,
    AchievementDefinition,
    CertificationAward,
    CertificationDefinition,
    ContractHealth,
    ContractStats,
    GlobalCounters,
    IssuerRecord,
    UserReport,
)

__all__ = [
    "AccountProfile",
    "AchievementAward",
    "AchievementDefinition",
    "CertificationAward",
    "CertificationDefinition",
    "ContractHealth",
    "ContractStats",
    "DEFAULT_LIMITS",
    "ErrorKind",
    "GlobalCounters",
    "IssuerRecord",
    "RegistryError",
    "RegistryLimits",
    "Result",
    "UserReport",
]
