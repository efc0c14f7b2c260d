from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from achievement_registry.main import app

runner = CliRunner()


def _invoke(*args: str):
    return runner.invoke(app, list(args))


@pytest.fixture
def seeded(clean_settings):
    for args in (
        ("register-issuer", "acme", "Acme", "--caller", "owner"),
        ("create-achievement", "Course1", "CS", "2000", "--caller", "acme"),
        ("fund", "5000", "--caller", "owner"),
        ("award-achievement", "learner", "1", "--caller", "acme"),
    ):
        result = _invoke(*args)
        assert result.exit_code == 0, result.output
    return clean_settings


def test_info_shows_backend(clean_settings):
    result = _invoke("info")

    assert result.exit_code == 0
    assert "backend=json" in result.stdout
    assert "owner=owner" in result.stdout


def test_create_prints_new_id(clean_settings):
    _invoke("register-issuer", "acme", "Acme", "--caller", "owner")

    result = _invoke("create-achievement", "Course1", "CS", "2000", "--caller", "acme")

    assert result.exit_code == 0
    assert json.loads(result.stdout) == 1


def test_claim_flow_persists_between_invocations(seeded):
    first = _invoke("claim", "1", "--caller", "learner")
    assert first.exit_code == 0
    assert json.loads(first.stdout) == 2000

    second = _invoke("claim", "1", "--caller", "learner")
    assert second.exit_code == 1
    assert "ERR-REWARD-ALREADY-CLAIMED" in second.output

    stats = json.loads(_invoke("stats").stdout)
    assert stats["contract_balance"] == 3000
    assert stats["total_users"] == 1


def test_refused_operation_exits_non_zero(clean_settings):
    result = _invoke("fund", "100", "--caller", "mallory")

    assert result.exit_code == 1
    assert "ERR-UNAUTHORIZED" in result.output


def test_report_and_profile(seeded):
    report = json.loads(_invoke("report", "learner").stdout)
    assert report["has_profile"] is True
    assert report["total_points"] == 2000

    profile = json.loads(_invoke("profile", "learner").stdout)
    assert profile["total_achievements"] == 1

    missing = _invoke("profile", "nobody")
    assert missing.exit_code == 1


def test_holds(seeded):
    assert json.loads(_invoke("holds", "learner", "--achievement", "1").stdout) is True
    assert json.loads(_invoke("holds", "learner", "--certification", "1").stdout) is False
    assert _invoke("holds", "learner").exit_code == 2


def test_catalog_lookups(seeded):
    achievement = json.loads(_invoke("achievement", "1").stdout)
    assert achievement["reward_amount"] == 2000
    issuer = json.loads(_invoke("issuer", "acme").stdout)
    assert issuer["active"] is True
    assert _invoke("certification", "1").exit_code == 1


def test_pause_blocks_and_health_table(seeded):
    assert _invoke("pause", "--caller", "owner").exit_code == 0

    blocked = _invoke("award-achievement", "other", "1", "--caller", "acme")
    assert blocked.exit_code == 1
    assert "ERR-INVALID-INPUT" in blocked.output

    health = _invoke("health", "--table")
    assert health.exit_code == 0
    assert "PAUSED" in health.stdout

    assert _invoke("resume", "--caller", "owner").exit_code == 0
    assert json.loads(_invoke("health").stdout)["paused"] is False
