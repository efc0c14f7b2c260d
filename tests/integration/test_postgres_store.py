"""
Integration tests for the PostgreSQL store.

These tests run against a real PostgreSQL instance and verify that:
1. Registry operations persist through the documents table
2. Refused and failing operations leave no rows behind
3. A second store instance sees committed state

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import os

import pytest

from achievement_registry.clock import ManualLedgerClock
from achievement_registry.domain.errors import ErrorKind
from achievement_registry.domain.models import IssuerRecord
from achievement_registry.registry import AchievementRegistry
from achievement_registry.store import Collection, PostgresStore, RegistryStore

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and reachable Postgres",
)


@pytest.fixture
def pg_store(test_dsn: str, db_connection_available: bool):
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")
    store = PostgresStore(dsn_override=test_dsn, statement_timeout_ms=5_000)
    store.ensure_schema()
    store.truncate()
    try:
        yield store
    finally:
        store.truncate()
        store.close()


def test_postgres_store_satisfies_protocol(pg_store):
    assert isinstance(pg_store, RegistryStore)


def test_put_get_merge(pg_store):
    record = IssuerRecord(name="Acme", description="", active=True, registered_at=3)

    with pg_store.transaction():
        pg_store.put(Collection.ISSUERS, "acme", record)
        pg_store.merge(Collection.ISSUERS, "acme", {"active": False})

    stored = pg_store.get(Collection.ISSUERS, "acme")
    assert stored.name == "Acme"
    assert stored.active is False


def test_failed_transaction_rolls_back(pg_store):
    record = IssuerRecord(name="Acme", description="", active=True, registered_at=3)

    with pytest.raises(RuntimeError):
        with pg_store.transaction():
            pg_store.put(Collection.ISSUERS, "acme", record)
            raise RuntimeError("boom")

    assert pg_store.get(Collection.ISSUERS, "acme") is None


def test_registry_walkthrough(pg_store, test_dsn):
    registry = AchievementRegistry(store=pg_store, owner="owner", clock=ManualLedgerClock())
    registry.register_issuer("owner", "acme", "Acme", "desc").unwrap()
    assert registry.create_achievement("acme", "Course1", "desc", "CS", 2000).value == 1
    registry.fund_contract("owner", 5000).unwrap()
    registry.award_achievement("acme", "learner", 1).unwrap()

    assert registry.claim_achievement_reward("learner", 1).value == 2000
    assert (
        registry.claim_achievement_reward("learner", 1).error
        is ErrorKind.REWARD_ALREADY_CLAIMED
    )

    reader = PostgresStore(dsn_override=test_dsn)
    try:
        view = AchievementRegistry(store=reader, owner="owner", clock=ManualLedgerClock())
        assert view.get_contract_stats().contract_balance == 3000
        assert view.get_user_profile("learner").total_rewards_claimed == 2000
        assert view.awards.get_achievement_award("learner", 1).claimed is True
    finally:
        reader.close()


def test_rejected_operation_leaves_no_rows(pg_store):
    registry = AchievementRegistry(store=pg_store, owner="owner", clock=ManualLedgerClock())

    result = registry.register_issuer("owner", "acme", "", "desc")

    assert result.error is ErrorKind.INVALID_INPUT
    assert pg_store.get(Collection.ISSUERS, "acme") is None
