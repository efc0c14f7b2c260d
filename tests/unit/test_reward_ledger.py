from __future__ import annotations

import random

import pytest

from achievement_registry.domain.errors import ErrorKind


def test_award_and_claim_walkthrough(registry):
    assert registry.register_issuer("owner", "I", "Acme", "desc").ok
    assert registry.create_achievement("I", "Course1", "desc", "CS", 2000).value == 1
    assert registry.fund_contract("owner", 5000).value == 5000
    assert registry.award_achievement("I", "U", 1).value is True

    profile = registry.get_user_profile("U")
    assert profile.total_achievements == 1
    assert profile.total_points == 2000

    assert registry.claim_achievement_reward("U", 1).value == 2000
    assert registry.get_contract_stats().contract_balance == 3000
    assert registry.get_user_profile("U").total_rewards_claimed == 2000

    second = registry.claim_achievement_reward("U", 1)
    assert second.error is ErrorKind.REWARD_ALREADY_CLAIMED
    assert registry.get_contract_stats().contract_balance == 3000
    assert registry.get_user_profile("U").total_rewards_claimed == 2000


def test_claim_marks_award_claimed(registry, issuer, achievement_id, funded):
    registry.award_achievement(issuer, "learner", achievement_id).unwrap()

    registry.claim_achievement_reward("learner", achievement_id).unwrap()

    assert registry.awards.get_achievement_award("learner", achievement_id).claimed is True


def test_claim_requires_earned_award(registry, issuer, achievement_id, funded):
    result = registry.claim_achievement_reward("learner", achievement_id)

    assert result.error is ErrorKind.ACHIEVEMENT_NOT_FOUND
    assert registry.get_contract_stats().contract_balance == funded


def test_claim_with_insufficient_balance_keeps_award_unclaimed(registry, issuer, achievement_id):
    registry.award_achievement(issuer, "learner", achievement_id).unwrap()
    registry.fund_contract("owner", 1999).unwrap()

    result = registry.claim_achievement_reward("learner", achievement_id)

    assert result.error is ErrorKind.INSUFFICIENT_BALANCE
    assert registry.awards.get_achievement_award("learner", achievement_id).claimed is False
    assert registry.get_user_profile("learner").total_rewards_claimed == 0

    registry.fund_contract("owner", 1).unwrap()
    assert registry.claim_achievement_reward("learner", achievement_id).value == 2000
    assert registry.get_contract_stats().contract_balance == 0


def test_deactivated_achievement_blocks_payout(registry, issuer, achievement_id, funded):
    registry.award_achievement(issuer, "learner", achievement_id).unwrap()
    registry.deactivate_achievement(issuer, achievement_id).unwrap()

    result = registry.claim_achievement_reward("learner", achievement_id)

    assert result.error is ErrorKind.ACHIEVEMENT_NOT_FOUND
    assert registry.has_achievement("learner", achievement_id)
    assert registry.get_contract_stats().contract_balance == funded


def test_only_the_earner_can_claim(registry, issuer, achievement_id, funded):
    registry.award_achievement(issuer, "learner", achievement_id).unwrap()

    result = registry.claim_achievement_reward(issuer, achievement_id)

    assert result.error is ErrorKind.ACHIEVEMENT_NOT_FOUND


class TestFunding:
    def test_fund_and_withdraw_return_new_balance(self, registry):
        assert registry.fund_contract("owner", 10_000).value == 10_000
        assert registry.fund_contract("owner", 500).value == 10_500
        assert registry.withdraw_contract_funds("owner", 4_000).value == 6_500
        assert registry.get_contract_health().contract_balance == 6_500

    @pytest.mark.parametrize("operation", ["fund_contract", "withdraw_contract_funds"])
    def test_owner_only(self, registry, operation):
        result = getattr(registry, operation)("mallory", 100)

        assert result.error is ErrorKind.UNAUTHORIZED

    @pytest.mark.parametrize("amount", [0, -5, True, 1.5])
    @pytest.mark.parametrize("operation", ["fund_contract", "withdraw_contract_funds"])
    def test_amount_must_be_positive_int(self, registry, operation, amount):
        result = getattr(registry, operation)("owner", amount)

        assert result.error is ErrorKind.INVALID_INPUT

    def test_withdraw_cannot_overdraw(self, registry):
        registry.fund_contract("owner", 100).unwrap()

        result = registry.withdraw_contract_funds("owner", 101)

        assert result.error is ErrorKind.INSUFFICIENT_BALANCE
        assert registry.get_contract_stats().contract_balance == 100


def test_balance_conservation(registry, issuer):
    rng = random.Random(7)
    ids = [
        registry.create_achievement(issuer, f"Course{n}", "desc", "CS", rng.randrange(1000, 5000)).unwrap()
        for n in range(1, 11)
    ]
    funded = withdrawn = paid = 0

    for step in range(300):
        action = rng.choice(["fund", "withdraw", "award", "claim"])
        account = f"learner-{rng.randint(1, 5)}"
        achievement_id = rng.choice(ids)
        if action == "fund":
            amount = rng.randint(1, 6000)
            if registry.fund_contract("owner", amount).ok:
                funded += amount
        elif action == "withdraw":
            amount = rng.randint(1, 6000)
            if registry.withdraw_contract_funds("owner", amount).ok:
                withdrawn += amount
        elif action == "award":
            registry.award_achievement(issuer, account, achievement_id)
        else:
            result = registry.claim_achievement_reward(account, achievement_id)
            if result.ok:
                paid += result.value

        balance = registry.get_contract_stats().contract_balance
        assert balance >= 0
        assert balance == funded - withdrawn - paid, f"diverged at step {step}"
