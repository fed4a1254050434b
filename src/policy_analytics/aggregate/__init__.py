"""Aggregation steps of the analytics pipeline.

Each module here is a pure function of its inputs plus an explicit reference
time: window resolution and filtering, the overview/policy/claims/revenue
aggregators, and the daily trend analysis.
"""
