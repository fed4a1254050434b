"""Policy distributions and coverage utilisation for the selected window."""
from __future__ import annotations

from typing import Callable, Iterable, Sequence, TypeVar

import pandas as pd

from policy_analytics.aggregate.ratios import finite_or_zero, safe_percent, total
from policy_analytics.labels import payment_type_label, plan_label
from policy_analytics.models import CoverageEntry, Policy, PolicyStats

T = TypeVar("T")


def count_by(items: Iterable[T], key: Callable[[T], str]) -> dict[str, int]:
    """Count items per label; keys appear in first-seen order."""
    df = pd.DataFrame({"label": [key(item) for item in items]}, dtype="object")
    if df.empty:
        return {}
    counts = df.groupby("label", sort=False).size()
    return {str(label): int(n) for label, n in counts.items()}


def calculate_policy_stats(policies: Sequence[Policy]) -> PolicyStats:
    """Compute plan/payment distributions and coverage figures.

    Args:
        policies: Window-filtered policies.

    Returns:
        PolicyStats. `coverage_utilization_rate` is the share of total
        coverage already used, in percent (``0.0`` without coverage).
    """
    coverage = [
        CoverageEntry(
            policy_id=p.policy_id,
            coverage=p.coverage_amount,
            used=p.claims_used,
            remaining=finite_or_zero(p.coverage_amount - p.claims_used),
        )
        for p in policies
    ]
    total_coverage = total(p.coverage_amount for p in policies)
    total_used = total(p.claims_used for p in policies)

    return PolicyStats(
        plan_distribution=count_by(policies, lambda p: plan_label(p.plan_type)),
        payment_type_distribution=count_by(
            policies, lambda p: payment_type_label(p.payment_type)
        ),
        coverage_distribution=coverage,
        total_coverage=total_coverage,
        total_used_coverage=total_used,
        coverage_utilization_rate=safe_percent(total_used, total_coverage),
    )
