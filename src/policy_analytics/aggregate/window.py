"""Range token → trailing window resolution."""
from __future__ import annotations

import logging

from policy_analytics.models import TimeWindow

log = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60
DEFAULT_RANGE = "7d"

# token -> number of days (also the number of daily trend buckets)
RANGE_DAYS: dict[str, int] = {
    "7d": 7,
    "30d": 30,
    "90d": 90,
    "1y": 365,
}


def resolve_window(range_token: str | None) -> TimeWindow:
    """Return the `TimeWindow` for a range token.

    Unrecognised tokens (including ``None``) resolve to the default ``7d``
    window; the substitution is logged rather than raised.

    Args:
        range_token: One of ``7d``, ``30d``, ``90d``, ``1y``.

    Returns:
        TimeWindow carrying the effective token, duration and bucket count.
    """
    token = range_token.strip() if isinstance(range_token, str) else range_token
    days = RANGE_DAYS.get(token) if isinstance(token, str) else None
    if days is None:
        log.warning("Unknown range token %r; falling back to %s", range_token, DEFAULT_RANGE)
        token = DEFAULT_RANGE
        days = RANGE_DAYS[DEFAULT_RANGE]

    return TimeWindow(
        range_token=token,
        duration_seconds=days * SECONDS_PER_DAY,
        bucket_count=days,
    )
