from __future__ import annotations

import pytest

from policy_analytics.aggregate.overview import calculate_overview, loss_ratio_health
from policy_analytics.ingest.load_records import parse_claims, parse_policies
from policy_analytics.models import ContractStats


def test_overview_empty_input_is_all_zero() -> None:
    o = calculate_overview([], [])
    assert o.total_policies == 0
    assert o.active_policies == 0
    assert o.total_claims == 0
    assert o.approved_claims == 0
    assert o.total_premiums_paid == 0.0
    assert o.claim_approval_rate == 0.0
    assert o.loss_ratio == 0.0
    assert o.loss_ratio_health == "Healthy"
    assert o.contract_stats == ContractStats()


def test_overview_approval_rate_counts_approved_and_paid(make_claim) -> None:
    claims = parse_claims([
        make_claim(status=0, claimAmount="1.0"),
        make_claim(status=1, claimAmount="2.0", approvedAmount="1.5"),
        make_claim(status=3, claimAmount="3.0", approvedAmount="2.5"),
    ])
    o = calculate_overview([], claims)
    assert o.total_claims == 3
    assert o.approved_claims == 2
    assert round(o.claim_approval_rate, 1) == 66.7
    assert o.total_claims_amount == pytest.approx(6.0)
    assert o.total_approved_amount == pytest.approx(4.0)


def test_overview_ignores_approved_amount_of_rejected_claims(make_claim) -> None:
    claims = parse_claims([
        make_claim(status=2, approvedAmount="9.0"),
        make_claim(status=0, approvedAmount="9.0"),
    ])
    o = calculate_overview([], claims)
    assert o.total_approved_amount == 0.0
    assert o.claim_approval_rate == 0.0


def test_loss_ratio_zero_when_no_premiums(make_claim) -> None:
    claims = parse_claims([make_claim(status=3, approvedAmount="5.0")])
    o = calculate_overview([], claims)
    assert o.total_approved_amount == pytest.approx(5.0)
    assert o.loss_ratio == 0.0


def test_loss_ratio_and_active_policies(make_policy, make_claim) -> None:
    policies = parse_policies([
        make_policy(totalPaid="1.0", status=0),
        make_policy(totalPaid="1.0", status=1),
        make_policy(totalPaid="2.0", status="bogus"),
    ])
    claims = parse_claims([make_claim(status=1, approvedAmount="3.6")])
    o = calculate_overview(policies, claims, ContractStats(total_policies=10))
    assert o.total_policies == 3
    assert o.active_policies == 1
    assert o.total_premiums_paid == pytest.approx(4.0)
    assert o.loss_ratio == pytest.approx(90.0)
    assert o.loss_ratio_health == "High risk"
    assert o.contract_stats.total_policies == 10


@pytest.mark.parametrize(
    ("ratio", "label"),
    [(0.0, "Healthy"), (60.0, "Healthy"), (60.5, "Moderate"), (80.0, "Moderate"), (80.1, "High risk")],
)
def test_loss_ratio_health_thresholds(ratio: float, label: str) -> None:
    assert loss_ratio_health(ratio) == label
