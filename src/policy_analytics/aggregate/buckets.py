"""Calendar bucketing of records into monthly and daily series.

Timestamps are epoch seconds; they are converted to wall-clock time in the
configured timezone before being assigned to a calendar month or day, so the
same inputs always land in the same buckets regardless of the host's locale.

- `monthly_buckets` emits only months that contain records (sparse).
- `daily_counts` emits every day of the window, zero-filled (dense).
"""
from __future__ import annotations

from typing import Any, Sequence

import pandas as pd

from policy_analytics.aggregate.ratios import finite_or_zero
from policy_analytics.models import MonthlyBucket, TrendPoint


def _local_datetimes(seconds: pd.Series, tz: str) -> pd.Series:
    """Convert epoch seconds to naive wall-clock datetimes in `tz`.

    Unusable values (missing, out of range) become ``NaT``.
    """
    stamps = pd.to_datetime(seconds, unit="s", utc=True, errors="coerce")
    return stamps.dt.tz_convert(tz).dt.tz_localize(None)


def monthly_buckets(
    records: Sequence[Any],
    date_field: str,
    value_field: str | None = None,
    tz: str = "UTC",
) -> list[MonthlyBucket]:
    """Group records by calendar month of `date_field`.

    Args:
        records: Policies or claims.
        date_field: Attribute holding epoch seconds.
        value_field: Optional numeric attribute summed into each bucket's
            `value`; when omitted `value` is ``0.0``.
        tz: Timezone defining calendar months.

    Returns:
        One `MonthlyBucket` per month with data, ascending by ``YYYY-MM``.
    """
    if not records:
        return []

    frame = pd.DataFrame(
        {
            "ts": pd.Series([getattr(r, date_field) for r in records], dtype="float64"),
            "value": [float(getattr(r, value_field)) if value_field else 0.0 for r in records],
        }
    )
    frame["when"] = _local_datetimes(frame["ts"], tz)
    frame = frame.dropna(subset=["when"])
    if frame.empty:
        return []

    frame["month"] = frame["when"].dt.to_period("M").astype(str)
    grouped = (
        frame.groupby("month", sort=True)
        .agg(count=("value", "size"), value=("value", "sum"))
        .reset_index()
    )

    return [
        MonthlyBucket(
            month=row["month"],
            count=int(row["count"]),
            value=finite_or_zero(row["value"]),
        )
        for row in grouped.to_dict("records")
    ]


def daily_counts(
    records: Sequence[Any],
    date_field: str,
    reference_time: float,
    bucket_count: int,
    tz: str = "UTC",
) -> list[TrendPoint]:
    """Count records per calendar day over the `bucket_count` days ending today.

    "Today" is the calendar day containing `reference_time`. Every day in the
    range gets an entry, oldest first, with ``count == 0`` when nothing fell
    on it. Records dated outside the range are ignored.

    Args:
        records: Policies or claims.
        date_field: Attribute holding epoch seconds.
        reference_time: The "now" instant in epoch seconds.
        bucket_count: Number of days in the series.
        tz: Timezone defining calendar days.

    Returns:
        List of `TrendPoint` of length `bucket_count`.
    """
    today = _local_datetimes(pd.Series([reference_time], dtype="float64"), tz).iloc[0]
    days = pd.date_range(end=today.normalize(), periods=bucket_count, freq="D")

    stamps = pd.Series([getattr(r, date_field) for r in records], dtype="float64")
    local_days = _local_datetimes(stamps, tz).dropna().dt.normalize()
    counts = local_days.value_counts().reindex(days, fill_value=0)

    return [
        TrendPoint(date=day.strftime("%Y-%m-%d"), count=int(n))
        for day, n in counts.items()
    ]
