"""Conversion of heterogeneous raw values onto the canonical [0, 1] scale.

Every function here is total: no input raises, every output is finite and in range.
"""

import math
from collections.abc import Iterable, Mapping
from typing import Any

NEUTRAL = 0.5


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, (list, tuple, dict, set)):
        return None
    try:
        n = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return n if math.isfinite(n) else None


def clamp01(n: Any) -> float:
    """Clamp to [0, 1]; non-finite or non-numeric input becomes 0."""
    v = _as_float(n)
    if v is None:
        return 0.0
    return min(1.0, max(0.0, v))


def clamp_0_100(n: Any) -> float:
    """Clamp to [0, 100]; non-finite or non-numeric input becomes 0."""
    v = _as_float(n)
    if v is None:
        return 0.0
    return min(100.0, max(0.0, v))


def likert_to_unit(value: Any) -> float:
    """Map a 1-5 ordinal answer to [0, 1] via (v - 1) / 4. Junk maps to neutral."""
    v = _as_float(value)
    if v is None:
        return NEUTRAL
    return clamp01((v - 1) / 4)


def to_unit(value: Any, fallback: float = NEUTRAL) -> float:
    """
    Normalize a metric value that may be on a 0-1 or a 0-100 scale.

    Values in (1, 100] are treated as percentages, values above 100 are capped
    at 1, and missing or non-finite values return ``fallback``.
    """
    v = _as_float(value)
    if v is None:
        return clamp01(fallback)
    if 1 < v <= 100:
        return clamp01(v / 100)
    if v > 100:
        return 1.0
    return clamp01(v)


def metric_to_unit(metrics: Any, key: str, fallback: float = NEUTRAL) -> float:
    """Look up ``key`` in an operational-metrics mapping and normalize it."""
    if not isinstance(metrics, Mapping):
        return clamp01(fallback)
    return to_unit(metrics.get(key), fallback)


def average(values: Iterable[Any], fallback: float = NEUTRAL) -> float:
    """Mean of the finite values, clamped to [0, 1]; ``fallback`` when none."""
    finite = [v for v in (_as_float(x) for x in values) if v is not None]
    if not finite:
        return clamp01(fallback)
    return clamp01(sum(finite) / len(finite))


def weighted_sum(values: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Sum of value * weight over the weight keys. Missing values count as 0."""
    total = 0.0
    for key, weight in weights.items():
        total += clamp01(values.get(key, 0.0)) * weight
    return total
