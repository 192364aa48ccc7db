"""Low-level statistical functions for survey scoring.

These are pure arithmetic with no I/O and no Pydantic models.
Higher-level code (aggregator, statistics, reliability) calls these.

Variances and standard deviations use the population form (divide by N).
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

# Total-score variance at or below this is treated as zero
_VARIANCE_EPSILON = 1e-12


def round_half_up(value: float, places: int) -> float:
    """Round to *places* decimals, resolving exact ties away from zero.

    The float is converted to its exact binary value first, so 2.675 (stored
    as 2.67499…) rounds down while 3.125 (exact) rounds up to 3.13.
    Non-finite values pass through unchanged.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def finite(values: Sequence[float | None]) -> list[float]:
    """Drop ``None`` and non-finite entries."""
    return [v for v in values if v is not None and math.isfinite(v)]


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean.  Returns NaN for an empty sequence."""
    if not values:
        return math.nan
    return math.fsum(values) / len(values)


def median(values: Sequence[float]) -> float:
    """Middle value of the sorted sequence (mean of the two middle values
    when the count is even).  Returns NaN for an empty sequence.
    """
    ordered = sorted(values)
    n = len(ordered)
    if n == 0:
        return math.nan
    mid = n // 2
    if n % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def population_variance(values: Sequence[float]) -> float:
    """Mean of squared deviations from the mean (N divisor)."""
    avg = mean(values)
    if math.isnan(avg):
        return math.nan
    return math.fsum((v - avg) ** 2 for v in values) / len(values)


def population_std(values: Sequence[float]) -> float:
    """Population standard deviation: sqrt of :func:`population_variance`."""
    var = population_variance(values)
    return math.nan if math.isnan(var) else math.sqrt(var)


def cronbach_alpha(items: Sequence[Sequence[float]]) -> float:
    """Cronbach's alpha for a respondents x items matrix.

        alpha = k/(k-1) * (1 - Σ var(item_i) / var(total))

    where k is the number of item columns, var(item_i) is the population
    variance of column i, and var(total) is the population variance of the
    per-respondent row sums.

    Raises ``ValueError`` when there are fewer than two items (k/(k-1) is
    undefined).  Returns NaN when the total-score variance is zero or within
    floating-point noise of zero, e.g. a single respondent or identical
    respondents.
    """
    if not items:
        return math.nan
    k = len(items[0])
    if k < 2:
        raise ValueError(f"Cronbach's alpha needs at least 2 items, got {k}")
    if any(len(row) != k for row in items):
        raise ValueError("All respondents must have the same number of items")

    item_variances = [
        population_variance([row[i] for row in items]) for i in range(k)
    ]
    total_variance = population_variance([math.fsum(row) for row in items])
    if math.isnan(total_variance) or total_variance <= _VARIANCE_EPSILON:
        return math.nan
    return (k / (k - 1)) * (1 - math.fsum(item_variances) / total_variance)


def pearson_r(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson correlation coefficient of two equal-length sequences.

    Returns NaN when either sequence has zero variance or fewer than two
    paired values.
    """
    if len(xs) != len(ys):
        raise ValueError("Sequences must have the same length")
    n = len(xs)
    if n < 2:
        return math.nan
    mx, my = mean(xs), mean(ys)
    cov = math.fsum((x - mx) * (y - my) for x, y in zip(xs, ys))
    sx = math.fsum((x - mx) ** 2 for x in xs)
    sy = math.fsum((y - my) ** 2 for y in ys)
    denom = math.sqrt(sx * sy)
    return math.nan if denom == 0 else cov / denom
