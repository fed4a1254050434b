"""Assemble the full analytics snapshot.

Flow:
- resolve the range token to a `TimeWindow`
- filter policies by `start_date` and claims by `submission_date`
- run the overview over the full history and the other aggregators over the
  filtered records
- freeze the results into one `AnalyticsSnapshot`

The reference time is an explicit argument; only `build_snapshot` falls back
to the wall clock, and only when the caller passes nothing.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any, Sequence

from policy_analytics.aggregate.claims import calculate_claim_stats
from policy_analytics.aggregate.filtering import filter_by_window
from policy_analytics.aggregate.overview import calculate_overview
from policy_analytics.aggregate.policies import calculate_policy_stats
from policy_analytics.aggregate.revenue import calculate_revenue_stats
from policy_analytics.aggregate.trends import calculate_trend_stats
from policy_analytics.aggregate.window import resolve_window
from policy_analytics.ingest.load_records import (
    parse_claims,
    parse_contract_stats,
    parse_policies,
)
from policy_analytics.models import AnalyticsSnapshot, ContractStats

log = logging.getLogger(__name__)


def build_snapshot(
    policies: Sequence[Any],
    claims: Sequence[Any],
    range_token: str | None = "7d",
    reference_time: float | None = None,
    contract_stats: Mapping[str, Any] | ContractStats | None = None,
    tz: str = "UTC",
) -> AnalyticsSnapshot:
    """Run the full aggregation pipeline for one wallet.

    Args:
        policies: Policy models or raw policy rows.
        claims: Claim models or raw claim rows.
        range_token: ``7d``, ``30d``, ``90d`` or ``1y``; anything else
            resolves to ``7d``.
        reference_time: "Now" in epoch seconds. Defaults to the current time.
        contract_stats: Optional platform counters for the overview.
        tz: Timezone defining calendar days and months.

    Returns:
        The frozen AnalyticsSnapshot.

    Raises:
        TypeError: if `policies` or `claims` is not a list/tuple.
    """
    policy_models = parse_policies(policies)
    claim_models = parse_claims(claims)
    stats = parse_contract_stats(contract_stats)

    if reference_time is None:
        reference_time = time.time()
    reference_time = float(reference_time)

    window = resolve_window(range_token)
    window_policies = filter_by_window(policy_models, window, reference_time, "start_date")
    window_claims = filter_by_window(claim_models, window, reference_time, "submission_date")

    log.info(
        "Building %s snapshot: %d/%d policies, %d/%d claims in window",
        window.range_token,
        len(window_policies),
        len(policy_models),
        len(window_claims),
        len(claim_models),
    )

    return AnalyticsSnapshot(
        window=window,
        reference_time=reference_time,
        overview=calculate_overview(policy_models, claim_models, stats),
        policy_stats=calculate_policy_stats(window_policies),
        claim_stats=calculate_claim_stats(window_claims, tz=tz),
        revenue_stats=calculate_revenue_stats(window_policies, window.range_token, tz=tz),
        trend_stats=calculate_trend_stats(
            window_policies, window_claims, window, reference_time, tz=tz
        ),
    )
