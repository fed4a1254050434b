"""Portfolio-wide KPIs.

Unlike the other aggregators the overview is computed over the complete,
unfiltered policy and claim history; the selected window does not apply.
"""
from __future__ import annotations

from typing import Sequence

from policy_analytics.aggregate.ratios import safe_percent, total
from policy_analytics.labels import is_active_policy, is_approved_claim
from policy_analytics.models import Claim, ContractStats, OverviewStats, Policy

# Loss ratio thresholds (percent) for the health label.
LOSS_RATIO_HIGH_RISK = 80.0
LOSS_RATIO_MODERATE = 60.0


def loss_ratio_health(loss_ratio: float) -> str:
    """Classify a loss ratio percentage as Healthy, Moderate or High risk."""
    if loss_ratio > LOSS_RATIO_HIGH_RISK:
        return "High risk"
    if loss_ratio > LOSS_RATIO_MODERATE:
        return "Moderate"
    return "Healthy"


def calculate_overview(
    policies: Sequence[Policy],
    claims: Sequence[Claim],
    contract_stats: ContractStats | None = None,
) -> OverviewStats:
    """Compute overview KPIs.

    Args:
        policies: Every policy of the wallet.
        claims: Every claim against those policies.
        contract_stats: Optional platform counters, echoed unchanged.

    Returns:
        OverviewStats with counts, totals, approval rate and loss ratio.
        Rates are percentages and are ``0.0`` when their denominator is zero.
    """
    approved = [c for c in claims if is_approved_claim(c.status)]

    total_premiums_paid = total(p.total_paid for p in policies)
    total_approved_amount = total(c.approved_amount for c in approved)
    loss_ratio = safe_percent(total_approved_amount, total_premiums_paid)

    return OverviewStats(
        total_policies=len(policies),
        active_policies=sum(1 for p in policies if is_active_policy(p.status)),
        total_claims=len(claims),
        approved_claims=len(approved),
        total_premiums_paid=total_premiums_paid,
        total_claims_amount=total(c.claim_amount for c in claims),
        total_approved_amount=total_approved_amount,
        claim_approval_rate=safe_percent(len(approved), len(claims)),
        loss_ratio=loss_ratio,
        loss_ratio_health=loss_ratio_health(loss_ratio),
        contract_stats=contract_stats if contract_stats is not None else ContractStats(),
    )
