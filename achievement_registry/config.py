"""
Configuration settings for the achievement registry.

Uses Pydantic Settings to load environment variables for the owner identity,
the store backend, database connections and logging.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from achievement_registry.domain.limits import RegistryLimits


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Registry
    registry_owner: str = Field("owner", alias="REGISTRY_OWNER")
    store_backend: str = Field("json", alias="STORE_BACKEND")
    state_file: Path = Field(Path("state/registry.json"), alias="STATE_FILE")
    enforce_certification_cap: bool = Field(False, alias="ENFORCE_CERTIFICATION_CAP")

    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("achievement_registry", alias="DB_NAME")
    db_statement_timeout_ms: int = Field(5_000, alias="DB_STATEMENT_TIMEOUT_MS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def limits(self) -> RegistryLimits:
        """Registry bounds for this deployment."""
        return RegistryLimits(enforce_certification_cap=self.enforce_certification_cap)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
