"""Premium revenue series and per-plan breakdown for the selected window."""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from policy_analytics.aggregate.buckets import monthly_buckets
from policy_analytics.aggregate.ratios import finite_or_zero, safe_percent, safe_ratio, total
from policy_analytics.labels import plan_label
from policy_analytics.models import PlanRevenue, Policy, RevenueStats

NO_PLAN = "None"


def revenue_by_plan(policies: Sequence[Policy]) -> dict[str, float]:
    """Sum `total_paid` per plan label, in first-seen plan order."""
    df = pd.DataFrame(
        {
            "plan": [plan_label(p.plan_type) for p in policies],
            "total_paid": [p.total_paid for p in policies],
        }
    )
    if df.empty:
        return {}
    revenue = df.groupby("plan", sort=False)["total_paid"].sum()
    return {str(plan): finite_or_zero(amount) for plan, amount in revenue.items()}


def top_performing_plan(by_plan: dict[str, float], total_revenue: float) -> PlanRevenue:
    """Return the plan with the highest revenue.

    Ties go to the plan that comes first in `by_plan`. With no plans the
    result is ``PlanRevenue(plan="None", revenue=0.0, share=0.0)``.
    """
    if not by_plan:
        return PlanRevenue(plan=NO_PLAN, revenue=0.0, share=0.0)
    plan, revenue = max(by_plan.items(), key=lambda item: item[1])
    return PlanRevenue(plan=plan, revenue=revenue, share=safe_percent(revenue, total_revenue))


def calculate_revenue_stats(
    policies: Sequence[Policy],
    range_token: str,
    tz: str = "UTC",
) -> RevenueStats:
    """Compute revenue statistics.

    Args:
        policies: Window-filtered policies.
        range_token: Token of the selected window, carried for display.
        tz: Timezone defining the calendar months of `monthly_revenue_data`.

    Returns:
        RevenueStats; per-policy and per-period averages are ``0.0`` when
        there is nothing to divide by.
    """
    monthly = monthly_buckets(policies, "start_date", "total_paid", tz=tz)
    by_plan = revenue_by_plan(policies)
    total_revenue = total(p.total_paid for p in policies)

    return RevenueStats(
        range_token=range_token,
        monthly_revenue_data=monthly,
        revenue_by_plan=by_plan,
        revenue_share_by_plan={
            plan: safe_percent(amount, total_revenue) for plan, amount in by_plan.items()
        },
        top_performing_plan=top_performing_plan(by_plan, total_revenue),
        total_revenue=total_revenue,
        average_revenue_per_policy=safe_ratio(total_revenue, len(policies)),
        average_revenue_per_period=safe_ratio(total_revenue, len(monthly)),
    )
