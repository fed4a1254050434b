"""Restrict record lists to a trailing time window."""
from __future__ import annotations

from typing import Literal, Sequence, TypeVar

from policy_analytics.models import Claim, Policy, TimeWindow

R = TypeVar("R", Policy, Claim)

DateField = Literal["start_date", "submission_date"]


def filter_by_window(
    records: Sequence[R],
    window: TimeWindow,
    reference_time: float,
    date_field: DateField,
) -> list[R]:
    """Return the records whose `date_field` falls inside the window.

    A record is kept when its date is at or after ``reference_time -
    window.duration_seconds``. Records without a usable date are dropped.
    Relative order is preserved.

    Args:
        records: Policies or claims.
        window: Resolved trailing window.
        reference_time: The "now" instant in epoch seconds.
        date_field: ``"start_date"`` for policies, ``"submission_date"`` for claims.

    Returns:
        New list with the matching records in their original order.
    """
    cutoff = window.start(reference_time)
    kept: list[R] = []
    for rec in records:
        ts = getattr(rec, date_field, None)
        if ts is None:
            continue
        if ts >= cutoff:
            kept.append(rec)
    return kept
