from __future__ import annotations

import pytest

from achievement_registry.domain.errors import ErrorKind

MUTATIONS = {
    "register_issuer": lambda r: r.register_issuer("owner", "other", "Other", ""),
    "deactivate_issuer": lambda r: r.deactivate_issuer("owner", "acme"),
    "create_achievement": lambda r: r.create_achievement("acme", "Course2", "desc", "CS", 2000),
    "deactivate_achievement": lambda r: r.deactivate_achievement("acme", 1),
    "award_achievement": lambda r: r.award_achievement("acme", "newcomer", 1),
    "create_certification": lambda r: r.create_certification("acme", "Graduate", "desc", 1),
    "deactivate_certification": lambda r: r.deactivate_certification("acme", 1),
    "award_certification": lambda r: r.award_certification("acme", "learner", 1),
    "claim_achievement_reward": lambda r: r.claim_achievement_reward("learner", 1),
    "fund_contract": lambda r: r.fund_contract("owner", 100),
    "withdraw_contract_funds": lambda r: r.withdraw_contract_funds("owner", 100),
    "emergency_pause": lambda r: r.emergency_pause("owner"),
}


@pytest.fixture
def paused_registry(registry, issuer, achievement_id, funded):
    registry.create_certification(issuer, "Graduate", "desc", 1).unwrap()
    registry.award_achievement(issuer, "learner", achievement_id).unwrap()
    assert registry.emergency_pause("owner").ok
    return registry


@pytest.mark.parametrize("operation", sorted(MUTATIONS))
def test_mutations_refused_while_paused(paused_registry, operation):
    before = paused_registry.store.dump_state()

    result = MUTATIONS[operation](paused_registry)

    assert result.error is ErrorKind.INVALID_INPUT
    assert paused_registry.store.dump_state() == before


def test_reads_still_served_while_paused(paused_registry):
    assert paused_registry.get_contract_stats().paused is True
    assert paused_registry.get_contract_health().paused is True
    assert paused_registry.get_achievement(1).name == "Course1"
    assert paused_registry.get_certification(1).name == "Graduate"
    assert paused_registry.get_issuer_info("acme").active is True
    assert paused_registry.has_achievement("learner", 1)
    assert not paused_registry.has_certification("learner", 1)
    assert paused_registry.get_user_profile("learner").total_points == 2000
    assert paused_registry.get_user_report("learner").contract_stats.paused is True


def test_resume_restores_operations(paused_registry):
    assert paused_registry.resume_operations("owner").ok

    assert paused_registry.get_contract_stats().paused is False
    assert paused_registry.claim_achievement_reward("learner", 1).value == 2000


def test_pause_and_resume_are_owner_only(registry):
    assert registry.emergency_pause("acme").error is ErrorKind.UNAUTHORIZED
    registry.emergency_pause("owner").unwrap()
    assert registry.resume_operations("acme").error is ErrorKind.UNAUTHORIZED
    assert registry.get_contract_stats().paused is True


def test_resume_when_running_is_a_noop(registry):
    assert registry.resume_operations("owner").ok
    assert registry.get_contract_stats().paused is False
