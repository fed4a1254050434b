from __future__ import annotations

import pytest
from conftest import DAY, REF

from policy_analytics.aggregate.claims import average_processing_days, calculate_claim_stats
from policy_analytics.ingest.load_records import parse_claims

# 2024-01-15 12:00:00 UTC
JAN_15 = 1_705_320_000


def test_status_distribution_counts_each_status(make_claim) -> None:
    claims = parse_claims([make_claim(status=0), make_claim(status=1), make_claim(status=3)])
    stats = calculate_claim_stats(claims)
    assert stats.status_distribution == {"Pending": 1, "Approved": 1, "Paid": 1}
    assert sum(stats.status_distribution.values()) == len(claims)


def test_unknown_status_is_labelled_unknown(make_claim) -> None:
    stats = calculate_claim_stats(parse_claims([make_claim(status=9), make_claim(status="x")]))
    assert stats.status_distribution == {"Unknown": 2}


def test_monthly_claims_sorted_and_sparse(make_claim) -> None:
    claims = parse_claims([
        make_claim(submissionDate=REF, claimAmount="1.5"),
        make_claim(submissionDate=JAN_15, claimAmount="2.0"),
        make_claim(submissionDate=REF - DAY, claimAmount="0.5"),
    ])
    monthly = calculate_claim_stats(claims).monthly_claims_data
    assert [b.month for b in monthly] == ["2024-01", "2024-03"]
    assert [b.count for b in monthly] == [1, 2]
    assert monthly[0].value == pytest.approx(2.0)
    assert monthly[1].value == pytest.approx(2.0)


def test_average_processing_time_ignores_unprocessed(make_claim) -> None:
    claims = parse_claims([
        make_claim(submissionDate=REF, processedDate=REF + 2 * DAY),
        make_claim(submissionDate=REF, processedDate=REF + 4 * DAY),
        make_claim(submissionDate=REF, processedDate="0"),
        make_claim(submissionDate=REF, processedDate=None),
    ])
    assert average_processing_days(claims) == pytest.approx(3.0)


def test_averages_and_totals(make_claim) -> None:
    claims = parse_claims([
        make_claim(claimAmount="1.0"),
        make_claim(claimAmount="2.0"),
        make_claim(claimAmount="6.0"),
    ])
    stats = calculate_claim_stats(claims)
    assert stats.average_claim_amount == pytest.approx(3.0)
    assert stats.total_claims_value == pytest.approx(9.0)
    assert stats.average_processing_time == 0.0


def test_empty_claim_stats() -> None:
    stats = calculate_claim_stats([])
    assert stats.status_distribution == {}
    assert stats.monthly_claims_data == []
    assert stats.average_claim_amount == 0.0
    assert stats.average_processing_time == 0.0
    assert stats.total_claims_value == 0.0
