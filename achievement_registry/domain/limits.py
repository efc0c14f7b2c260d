"""
Deployment-time bounds enforced by the catalogs and the award engine.
"""

from __future__ import annotations

from dataclasses import dataclass

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_CATEGORY_LENGTH = 50
MIN_REWARD = 1_000
MAX_REWARD = 1_000_000
MAX_ACHIEVEMENTS_PER_USER = 100
MAX_CERTIFICATIONS_PER_USER = 50


@dataclass(frozen=True)
class RegistryLimits:
    """Bounds fixed when a registry is constructed."""

    max_name_length: int = MAX_NAME_LENGTH
    max_description_length: int = MAX_DESCRIPTION_LENGTH
    max_category_length: int = MAX_CATEGORY_LENGTH
    min_reward: int = MIN_REWARD
    max_reward: int = MAX_REWARD
    max_achievements_per_user: int = MAX_ACHIEVEMENTS_PER_USER
    max_certifications_per_user: int = MAX_CERTIFICATIONS_PER_USER
    # Parity with the deployed behavior: the certification cap is declared only.
    enforce_certification_cap: bool = False


DEFAULT_LIMITS = RegistryLimits()

__all__ = [
    "DEFAULT_LIMITS",
    "MAX_ACHIEVEMENTS_PER_USER",
    "MAX_CATEGORY_LENGTH",
    "MAX_CERTIFICATIONS_PER_USER",
    "MAX_DESCRIPTION_LENGTH",
    "MAX_NAME_LENGTH",
    "MAX_REWARD",
    "MIN_REWARD",
    "RegistryLimits",
]
