"""policy_analytics package.

Turns one wallet's already-fetched insurance policy and claim records into an
immutable analytics snapshot for a dashboard: overview KPIs, policy, claim
and revenue statistics for a trailing window, and daily trend series.

Architecture:
- Raw rows → pydantic models (lenient coercion, never raises on bad data)
- Window filter → independent pure aggregators → frozen `AnalyticsSnapshot`
- pandas handles calendar bucketing; Dask parallelises batch runs
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
