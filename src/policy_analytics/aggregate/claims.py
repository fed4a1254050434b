"""Claim status mix, monthly series and averages for the selected window."""
from __future__ import annotations

from typing import Sequence

from policy_analytics.aggregate.buckets import monthly_buckets
from policy_analytics.aggregate.policies import count_by
from policy_analytics.aggregate.ratios import safe_mean, safe_ratio, total
from policy_analytics.aggregate.window import SECONDS_PER_DAY
from policy_analytics.labels import claim_status_label
from policy_analytics.models import Claim, ClaimStats


def average_processing_days(claims: Sequence[Claim]) -> float:
    """Mean time from submission to processing, in days.

    Only claims that have been processed (non-zero `processed_date`) and have
    a submission date contribute; unprocessed claims are excluded from both
    the sum and the count.
    """
    durations = [
        c.processed_date - c.submission_date
        for c in claims
        if c.processed_date and c.submission_date is not None
    ]
    return safe_ratio(safe_mean(durations), SECONDS_PER_DAY)


def calculate_claim_stats(claims: Sequence[Claim], tz: str = "UTC") -> ClaimStats:
    """Compute claim statistics.

    Args:
        claims: Window-filtered claims.
        tz: Timezone defining the calendar months of `monthly_claims_data`.

    Returns:
        ClaimStats with status counts, a sparse monthly series (count and
        summed claim amount) and zero-guarded averages.
    """
    return ClaimStats(
        status_distribution=count_by(claims, lambda c: claim_status_label(c.status)),
        monthly_claims_data=monthly_buckets(claims, "submission_date", "claim_amount", tz=tz),
        average_claim_amount=safe_mean(c.claim_amount for c in claims),
        average_processing_time=average_processing_days(claims),
        total_claims_value=total(c.claim_amount for c in claims),
    )
