"""Daily trend series, trend classification and correlation metrics.

The daily series cover every calendar day of the window (zero-filled), so
the first-half/second-half comparison in `classify_trend` always compares
equal spans of calendar time.
"""
from __future__ import annotations

from typing import Sequence

from policy_analytics.aggregate.buckets import daily_counts
from policy_analytics.aggregate.ratios import safe_mean, safe_ratio
from policy_analytics.models import (
    Claim,
    CorrelationMetrics,
    PeakDay,
    Policy,
    TimeWindow,
    TrendClassification,
    TrendInsights,
    TrendPoint,
    TrendStats,
)

# Percent change between half-window averages needed to call a direction.
TREND_THRESHOLD = 5.0
# Percent change below which a series counts as stable for `trend_stability`.
STABILITY_THRESHOLD = 10.0
# Average daily events (policies + claims) for the activity levels.
ACTIVITY_HIGH = 10.0
ACTIVITY_MEDIUM = 5.0


def classify_trend(series: Sequence[float]) -> TrendClassification:
    """Classify a series as increasing, decreasing or stable.

    The series is split into a first half of ``len(series) // 2`` entries and
    a second half holding the rest. The change is the percent difference of
    the second half's average from the first half's (``0`` when the first
    half averages zero). Changes strictly above +5% are ``increasing``,
    strictly below -5% ``decreasing``; anything else is ``stable``.

    Returns:
        TrendClassification whose `percentage` is the absolute change.
    """
    n = len(series)
    if n < 2:
        return TrendClassification(trend="stable", percentage=0.0)

    half = n // 2
    first_avg = safe_mean(series[:half])
    second_avg = safe_mean(series[half:])
    change = safe_ratio(second_avg - first_avg, first_avg) * 100 if first_avg > 0 else 0.0

    if change > TREND_THRESHOLD:
        trend = "increasing"
    elif change < -TREND_THRESHOLD:
        trend = "decreasing"
    else:
        trend = "stable"
    return TrendClassification(trend=trend, percentage=abs(change))


def peak_day(points: Sequence[TrendPoint]) -> PeakDay:
    """Return the earliest day with the strictly highest count.

    A series with no activity yields ``PeakDay(date="N/A", count=0)``.
    """
    best = PeakDay(date="N/A", count=0)
    for point in points:
        if point.count > best.count:
            best = PeakDay(date=point.date, count=point.count)
    return best


def activity_level(avg_daily_total: float) -> str:
    if avg_daily_total > ACTIVITY_HIGH:
        return "High"
    if avg_daily_total > ACTIVITY_MEDIUM:
        return "Medium"
    if avg_daily_total > 0:
        return "Low"
    return "None"


def trend_stability(policy_stats: TrendClassification, claims_stats: TrendClassification) -> str:
    stable = [
        s.percentage < STABILITY_THRESHOLD for s in (policy_stats, claims_stats)
    ]
    if all(stable):
        return "Stable"
    if any(stable):
        return "Moderate"
    return "Volatile"


def correlation_metrics(
    policy_counts: Sequence[int],
    claim_counts: Sequence[int],
    bucket_count: int,
    policy_stats: TrendClassification,
    claims_stats: TrendClassification,
) -> CorrelationMetrics:
    """Relate the policy and claim series over the whole window.

    `policy_claims_ratio` is claims per policy rounded to two decimals.
    """
    total_policies = sum(policy_counts)
    total_claims = sum(claim_counts)
    avg_daily_total = safe_ratio(total_policies + total_claims, bucket_count)

    return CorrelationMetrics(
        policy_claims_ratio=round(safe_ratio(total_claims, total_policies), 2),
        activity_level=activity_level(avg_daily_total),
        trend_stability=trend_stability(policy_stats, claims_stats),
    )


def calculate_trend_stats(
    policies: Sequence[Policy],
    claims: Sequence[Claim],
    window: TimeWindow,
    reference_time: float,
    tz: str = "UTC",
) -> TrendStats:
    """Build daily series for policies and claims and summarise them.

    Args:
        policies: Window-filtered policies (bucketed by `start_date`).
        claims: Window-filtered claims (bucketed by `submission_date`).
        window: Resolved window; `bucket_count` days are produced.
        reference_time: The "now" instant; the last bucket is its calendar day.
        tz: Timezone defining calendar days.

    Returns:
        TrendStats with both series, their classifications, peak/average
        insights and correlation metrics.
    """
    policy_trend = daily_counts(
        policies, "start_date", reference_time, window.bucket_count, tz=tz
    )
    claims_trend = daily_counts(
        claims, "submission_date", reference_time, window.bucket_count, tz=tz
    )
    policy_counts = [p.count for p in policy_trend]
    claim_counts = [p.count for p in claims_trend]

    policy_stats = classify_trend(policy_counts)
    claims_stats = classify_trend(claim_counts)

    insights = TrendInsights(
        peak_policy_day=peak_day(policy_trend),
        peak_claims_day=peak_day(claims_trend),
        average_daily_policies=safe_mean(policy_counts),
        average_daily_claims=safe_mean(claim_counts),
    )

    return TrendStats(
        policy_trend=policy_trend,
        claims_trend=claims_trend,
        policy_trend_stats=policy_stats,
        claims_trend_stats=claims_stats,
        insights=insights,
        correlation=correlation_metrics(
            policy_counts, claim_counts, window.bucket_count, policy_stats, claims_stats
        ),
    )
