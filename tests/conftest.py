"""
Pytest configuration for the achievement registry.

Provides fixtures for:
- A registry on a fresh in-memory store with a manual ledger clock
- A registered issuer, a funded balance and a first achievement
- Settings isolation for CLI and factory tests
- PostgreSQL connectivity for integration tests
"""

from __future__ import annotations

import os

import psycopg
import pytest

from achievement_registry.clock import ManualLedgerClock
from achievement_registry.config import Settings, get_settings
from achievement_registry.registry import AchievementRegistry
from achievement_registry.store import InMemoryStore


@pytest.fixture
def clock() -> ManualLedgerClock:
    return ManualLedgerClock(start=100)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def registry(store: InMemoryStore, clock: ManualLedgerClock) -> AchievementRegistry:
    return AchievementRegistry(store=store, owner="owner", clock=clock)


@pytest.fixture
def issuer(registry: AchievementRegistry) -> str:
    """An active issuer named 'acme'."""
    registry.register_issuer("owner", "acme", "Acme", "desc").unwrap()
    return "acme"


@pytest.fixture
def achievement_id(registry: AchievementRegistry, issuer: str) -> int:
    """Achievement 'Course1' worth 2000, issued by 'acme'."""
    return registry.create_achievement(issuer, "Course1", "desc", "CS", 2000).unwrap()


@pytest.fixture
def funded(registry: AchievementRegistry) -> int:
    return registry.fund_contract("owner", 5000).unwrap()


@pytest.fixture
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """
    Point settings at a throwaway JSON state file and reset the settings cache
    around the test.
    """
    state_file = tmp_path / "registry.json"
    monkeypatch.setenv("STORE_BACKEND", "json")
    monkeypatch.setenv("STATE_FILE", str(state_file))
    monkeypatch.setenv("REGISTRY_OWNER", "owner")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    get_settings.cache_clear()
    yield state_file
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "achievement_registry"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False
