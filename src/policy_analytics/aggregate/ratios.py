"""Zero-guarded arithmetic shared by the aggregators.

Every ratio in the snapshot goes through `safe_ratio` so that an empty or
zero denominator yields ``0.0`` instead of NaN or infinity.
"""
from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

log = logging.getLogger(__name__)


def finite_or_zero(value: float) -> float:
    """Return `value` as a Python float, or ``0.0`` if it is NaN/±inf."""
    value = float(value)
    return value if np.isfinite(value) else 0.0


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator``; ``0.0`` when the denominator is zero."""
    if not np.isfinite(denominator) or denominator == 0:
        return 0.0
    return finite_or_zero(numerator / denominator)


def safe_percent(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator * 100`` with the same zero guard."""
    return finite_or_zero(safe_ratio(numerator, denominator) * 100)


def safe_mean(values: Iterable[float]) -> float:
    """Arithmetic mean of `values`, ``0.0`` for an empty input."""
    arr = np.fromiter(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return finite_or_zero(arr.mean())


def total(values: Iterable[float]) -> float:
    """Left-to-right sum of `values` as a finite Python float.

    A sum that overflows is reported as ``0.0`` and logged at WARNING.
    """
    acc = 0.0
    for v in values:
        acc += v
    if not np.isfinite(acc):
        log.warning("Sum overflowed to %s; reporting 0.0", acc)
        return 0.0
    return float(acc)
