from __future__ import annotations

from typing import Any, Callable

import pytest

DAY = 24 * 60 * 60
# 2024-03-15 12:00:00 UTC
REF = 1_710_504_000


@pytest.fixture
def make_policy() -> Callable[..., dict[str, Any]]:
    """Raw policy row as delivered by the ledger reader (strings for amounts)."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> dict[str, Any]:
        counter["n"] += 1
        row: dict[str, Any] = {
            "policyId": str(counter["n"]),
            "planType": 0,
            "paymentType": 0,
            "startDate": str(REF),
            "totalPaid": "0.0",
            "coverageAmount": "0.0",
            "claimsUsed": "0.0",
            "status": 0,
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture
def make_claim() -> Callable[..., dict[str, Any]]:
    """Raw claim row as delivered by the ledger reader."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> dict[str, Any]:
        counter["n"] += 1
        row: dict[str, Any] = {
            "claimId": str(counter["n"]),
            "policyId": "1",
            "submissionDate": str(REF),
            "processedDate": "0",
            "status": 0,
            "claimAmount": "0.0",
            "approvedAmount": "0.0",
        }
        row.update(overrides)
        return row

    return _make
