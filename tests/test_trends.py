from __future__ import annotations

import pytest
from conftest import DAY, REF

from policy_analytics.aggregate.buckets import daily_counts
from policy_analytics.aggregate.trends import (
    calculate_trend_stats,
    classify_trend,
    correlation_metrics,
    peak_day,
    trend_stability,
)
from policy_analytics.aggregate.window import resolve_window
from policy_analytics.ingest.load_records import parse_claims, parse_policies
from policy_analytics.models import TrendClassification, TrendPoint


def test_classify_increasing_by_fifty_percent() -> None:
    series = [2, 2, 2, 2, 2, 3, 3, 3, 3, 3]
    result = classify_trend(series)
    assert result.trend == "increasing"
    assert result.percentage == pytest.approx(50.0)


def test_classify_decreasing() -> None:
    result = classify_trend([4, 4, 1, 1])
    assert result.trend == "decreasing"
    assert result.percentage == pytest.approx(75.0)


@pytest.mark.parametrize("series", [[20, 20, 21, 21], [20, 20, 19, 19]])
def test_exactly_five_percent_is_stable(series: list[int]) -> None:
    result = classify_trend(series)
    assert result.trend == "stable"
    assert result.percentage == pytest.approx(5.0)


def test_short_or_flat_first_half_series_is_stable() -> None:
    assert classify_trend([]) == TrendClassification(trend="stable", percentage=0.0)
    assert classify_trend([9]) == TrendClassification(trend="stable", percentage=0.0)
    assert classify_trend([0, 0, 5]) == TrendClassification(trend="stable", percentage=0.0)


def test_odd_length_puts_extra_entry_in_second_half() -> None:
    # first half [1], second half [1, 4] -> avg 2.5 -> +150%
    result = classify_trend([1, 1, 4])
    assert result.trend == "increasing"
    assert result.percentage == pytest.approx(150.0)


def test_daily_series_is_zero_filled_oldest_first(make_policy) -> None:
    policies = parse_policies([
        make_policy(startDate=REF - 6 * DAY),
        make_policy(startDate=REF - 6 * DAY + 60),
        make_policy(startDate=REF - DAY),
        make_policy(startDate=REF),
    ])
    points = daily_counts(policies, "start_date", REF, 7)
    assert [p.date for p in points] == [
        "2024-03-09",
        "2024-03-10",
        "2024-03-11",
        "2024-03-12",
        "2024-03-13",
        "2024-03-14",
        "2024-03-15",
    ]
    assert [p.count for p in points] == [2, 0, 0, 0, 0, 1, 1]


def test_daily_series_without_records_has_every_day() -> None:
    points = daily_counts([], "submission_date", REF, 30)
    assert len(points) == 30
    assert all(p.count == 0 for p in points)
    assert points[-1].date == "2024-03-15"


def test_daily_series_uses_configured_timezone(make_claim) -> None:
    # 2024-03-15 02:00 UTC is still 2024-03-14 in New York
    claims = parse_claims([make_claim(submissionDate=REF - 10 * 3600)])
    utc = daily_counts(claims, "submission_date", REF, 2)
    ny = daily_counts(claims, "submission_date", REF, 2, tz="America/New_York")
    assert [p.count for p in utc] == [0, 1]
    assert [p.count for p in ny] == [1, 0]


def test_activity_level_high_when_twelve_events_per_day() -> None:
    flat = TrendClassification(trend="stable", percentage=0.0)
    metrics = correlation_metrics([6] * 7, [6] * 7, 7, flat, flat)
    assert metrics.activity_level == "High"
    assert metrics.policy_claims_ratio == 1.0
    assert metrics.trend_stability == "Stable"


@pytest.mark.parametrize(
    ("per_day", "level"),
    [(10, "Medium"), (6, "Medium"), (5, "Low"), (1, "Low"), (0, "None")],
)
def test_activity_levels(per_day: int, level: str) -> None:
    flat = TrendClassification(trend="stable", percentage=0.0)
    metrics = correlation_metrics([per_day] * 4, [0] * 4, 4, flat, flat)
    assert metrics.activity_level == level


def test_policy_claims_ratio_rounded_and_guarded() -> None:
    flat = TrendClassification(trend="stable", percentage=0.0)
    assert correlation_metrics([7], [3], 1, flat, flat).policy_claims_ratio == 0.43
    assert correlation_metrics([0], [3], 1, flat, flat).policy_claims_ratio == 0.0


def test_trend_stability_combinations() -> None:
    calm = TrendClassification(trend="stable", percentage=9.9)
    wild = TrendClassification(trend="increasing", percentage=10.0)
    assert trend_stability(calm, calm) == "Stable"
    assert trend_stability(calm, wild) == "Moderate"
    assert trend_stability(wild, calm) == "Moderate"
    assert trend_stability(wild, wild) == "Volatile"


def test_peak_day_first_maximum_and_empty() -> None:
    points = [
        TrendPoint(date="2024-03-01", count=1),
        TrendPoint(date="2024-03-02", count=3),
        TrendPoint(date="2024-03-03", count=3),
    ]
    peak = peak_day(points)
    assert (peak.date, peak.count) == ("2024-03-02", 3)
    empty = peak_day([TrendPoint(date="2024-03-01", count=0)])
    assert (empty.date, empty.count) == ("N/A", 0)


def test_calculate_trend_stats_end_to_end(make_policy, make_claim) -> None:
    window = resolve_window("7d")
    policies = parse_policies([make_policy(startDate=REF - DAY), make_policy(startDate=REF)])
    claims = parse_claims([make_claim(submissionDate=REF)])
    stats = calculate_trend_stats(policies, claims, window, REF)

    assert len(stats.policy_trend) == 7
    assert len(stats.claims_trend) == 7
    assert stats.policy_trend_stats.trend == "stable"  # first half averages zero
    assert stats.insights.peak_policy_day.date == "2024-03-14"
    assert stats.insights.peak_claims_day.date == "2024-03-15"
    assert stats.insights.average_daily_policies == pytest.approx(2 / 7)
    assert stats.correlation.policy_claims_ratio == 0.5
    assert stats.correlation.activity_level == "Low"
