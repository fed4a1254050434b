"""Pydantic models for raw policy/claim records and the analytics snapshot.

Input models coerce the loosely-typed values delivered by the ledger reader
(decimal strings, stringified integers, missing fields) into plain Python
numbers without raising: bad amounts become ``0.0`` and bad dates or enum
codes become ``None``. Output models are frozen and serialize with the
camelCase keys consumed by the dashboard and the JSON export.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

INPUT_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")
OUTPUT_CONFIG = ConfigDict(
    alias_generator=to_camel, populate_by_name=True, extra="forbid", frozen=True
)

# Dates must fit pandas' nanosecond range after shifting into any local zone.
MIN_EPOCH_SECONDS = int((pd.Timestamp.min + pd.Timedelta(days=1)).timestamp())
MAX_EPOCH_SECONDS = int((pd.Timestamp.max - pd.Timedelta(days=1)).timestamp())


# =========================================================
# COERCION HELPERS
# =========================================================

def coerce_amount(value: Any) -> float:
    """Return `value` as a finite float, or ``0.0`` when it is not one."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0.0
    return amount if np.isfinite(amount) else 0.0


def coerce_timestamp(value: Any) -> int | None:
    """Return epoch seconds as an int, or ``None`` for missing/malformed dates.

    Naive datetimes are read as UTC. Dates outside the range pandas can
    represent are treated as malformed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.timestamp()
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    if not np.isfinite(seconds):
        return None
    if not MIN_EPOCH_SECONDS <= seconds <= MAX_EPOCH_SECONDS:
        return None
    return int(seconds)


def coerce_code(value: Any) -> int | None:
    """Return an enum code as an int, or ``None`` when it is not integral."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


# =========================================================
# INPUT RECORDS
# =========================================================

class Policy(BaseModel):
    """A policy record as delivered by the ledger reader.

    Attributes:
        policy_id: Policy identifier.
        plan_type: Raw plan code (see `labels.PlanType`).
        payment_type: Raw payment code (see `labels.PaymentType`).
        start_date: Policy start in epoch seconds, ``None`` if unusable.
        total_paid: Premiums paid so far.
        coverage_amount: Total coverage of the policy.
        claims_used: Coverage already consumed by claims.
        status: Raw policy status code (0 = Active).
    """
    model_config = INPUT_CONFIG
    policy_id: str = ""
    plan_type: int | None = None
    payment_type: int | None = None
    start_date: int | None = None
    total_paid: float = 0.0
    coverage_amount: float = 0.0
    claims_used: float = 0.0
    status: int | None = None

    @field_validator("policy_id", mode="before")
    @classmethod
    def _identifier(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("plan_type", "payment_type", "status", mode="before")
    @classmethod
    def _code(cls, v: Any) -> int | None:
        return coerce_code(v)

    @field_validator("start_date", mode="before")
    @classmethod
    def _timestamp(cls, v: Any) -> int | None:
        return coerce_timestamp(v)

    @field_validator("total_paid", "coverage_amount", "claims_used", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> float:
        return coerce_amount(v)


class Claim(BaseModel):
    """A claim record as delivered by the ledger reader.

    `processed_date` is ``None`` for claims that have not been processed yet;
    the ledger reports those as ``0``.
    """
    model_config = INPUT_CONFIG
    claim_id: str = ""
    policy_id: str = ""
    submission_date: int | None = None
    processed_date: int | None = None
    status: int | None = None
    claim_amount: float = 0.0
    approved_amount: float = 0.0

    @field_validator("claim_id", "policy_id", mode="before")
    @classmethod
    def _identifier(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("status", mode="before")
    @classmethod
    def _code(cls, v: Any) -> int | None:
        return coerce_code(v)

    @field_validator("submission_date", mode="before")
    @classmethod
    def _timestamp(cls, v: Any) -> int | None:
        return coerce_timestamp(v)

    @field_validator("processed_date", mode="before")
    @classmethod
    def _processed(cls, v: Any) -> int | None:
        seconds = coerce_timestamp(v)
        return seconds if seconds else None

    @field_validator("claim_amount", "approved_amount", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> float:
        return coerce_amount(v)


class ContractStats(BaseModel):
    """Platform-wide counters reported by the contract, echoed in the overview."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True
    )
    total_policies: int = Field(0, ge=0)
    total_claims: int = Field(0, ge=0)
    contract_balance: float = 0.0

    @field_validator("total_policies", "total_claims", mode="before")
    @classmethod
    def _count(cls, v: Any) -> int:
        code = coerce_code(v)
        return code if code is not None and code >= 0 else 0

    @field_validator("contract_balance", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> float:
        return coerce_amount(v)


# =========================================================
# WINDOW
# =========================================================

class TimeWindow(BaseModel):
    """Trailing window resolved from a range token."""
    model_config = OUTPUT_CONFIG
    range_token: str
    duration_seconds: int = Field(..., gt=0)
    bucket_count: int = Field(..., gt=0)

    def start(self, reference_time: float) -> float:
        """Return the earliest epoch second inside the window."""
        return reference_time - self.duration_seconds


# =========================================================
# SNAPSHOT SECTIONS
# =========================================================

class OverviewStats(BaseModel):
    """Portfolio-wide KPIs computed over the full, unfiltered history."""
    model_config = OUTPUT_CONFIG
    total_policies: int = Field(..., ge=0)
    active_policies: int = Field(..., ge=0)
    total_claims: int = Field(..., ge=0)
    approved_claims: int = Field(..., ge=0)
    total_premiums_paid: float
    total_claims_amount: float
    total_approved_amount: float
    claim_approval_rate: float
    loss_ratio: float
    loss_ratio_health: Literal["Healthy", "Moderate", "High risk"]
    contract_stats: ContractStats


class CoverageEntry(BaseModel):
    model_config = OUTPUT_CONFIG
    policy_id: str
    coverage: float
    used: float
    remaining: float


class PolicyStats(BaseModel):
    """Plan/payment distributions and coverage utilisation for the window."""
    model_config = OUTPUT_CONFIG
    plan_distribution: dict[str, int]
    payment_type_distribution: dict[str, int]
    coverage_distribution: list[CoverageEntry]
    total_coverage: float
    total_used_coverage: float
    coverage_utilization_rate: float


class MonthlyBucket(BaseModel):
    """One calendar month (``YYYY-MM``) of a monthly series."""
    model_config = OUTPUT_CONFIG
    month: str
    count: int = Field(..., ge=0)
    value: float


class ClaimStats(BaseModel):
    model_config = OUTPUT_CONFIG
    status_distribution: dict[str, int]
    monthly_claims_data: list[MonthlyBucket]
    average_claim_amount: float
    average_processing_time: float
    total_claims_value: float


class PlanRevenue(BaseModel):
    model_config = OUTPUT_CONFIG
    plan: str
    revenue: float
    share: float


class RevenueStats(BaseModel):
    """Revenue series and per-plan breakdown for the window.

    `range_token` is carried for display only and plays no part in the math.
    """
    model_config = OUTPUT_CONFIG
    range_token: str
    monthly_revenue_data: list[MonthlyBucket]
    revenue_by_plan: dict[str, float]
    revenue_share_by_plan: dict[str, float]
    top_performing_plan: PlanRevenue
    total_revenue: float
    average_revenue_per_policy: float
    average_revenue_per_period: float


class TrendPoint(BaseModel):
    """One calendar day (``YYYY-MM-DD``) of a zero-filled daily series."""
    model_config = OUTPUT_CONFIG
    date: str
    count: int = Field(..., ge=0)


class TrendClassification(BaseModel):
    model_config = OUTPUT_CONFIG
    trend: Literal["increasing", "decreasing", "stable"]
    percentage: float = Field(..., ge=0)


class PeakDay(BaseModel):
    model_config = OUTPUT_CONFIG
    date: str
    count: int = Field(..., ge=0)


class TrendInsights(BaseModel):
    model_config = OUTPUT_CONFIG
    peak_policy_day: PeakDay
    peak_claims_day: PeakDay
    average_daily_policies: float
    average_daily_claims: float


class CorrelationMetrics(BaseModel):
    model_config = OUTPUT_CONFIG
    policy_claims_ratio: float
    activity_level: Literal["High", "Medium", "Low", "None"]
    trend_stability: Literal["Stable", "Moderate", "Volatile"]


class TrendStats(BaseModel):
    model_config = OUTPUT_CONFIG
    policy_trend: list[TrendPoint]
    claims_trend: list[TrendPoint]
    policy_trend_stats: TrendClassification
    claims_trend_stats: TrendClassification
    insights: TrendInsights
    correlation: CorrelationMetrics


class AnalyticsSnapshot(BaseModel):
    """The complete, immutable result of one analytics run.

    Attributes:
        window: The resolved trailing window.
        reference_time: The "now" instant (epoch seconds) the run used.
        overview: KPIs over the full history.
        policy_stats: Window-filtered policy statistics.
        claim_stats: Window-filtered claim statistics.
        revenue_stats: Window-filtered revenue statistics.
        trend_stats: Daily trend series, classification and correlation.
    """
    model_config = OUTPUT_CONFIG
    window: TimeWindow
    reference_time: float
    overview: OverviewStats
    policy_stats: PolicyStats
    claim_stats: ClaimStats
    revenue_stats: RevenueStats
    trend_stats: TrendStats
