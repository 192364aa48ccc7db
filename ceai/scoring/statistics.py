"""Descriptive statistics across respondents, per dimension."""

from __future__ import annotations

import math
from collections.abc import Sequence
from itertools import combinations

from ceai.instrument import STRONG_THRESHOLD, WEAK_THRESHOLD, Dimension
from ceai.scoring.metrics import finite, mean, median, pearson_r, population_std, round_half_up
from ceai.scoring.models import (
    DimensionCorrelation,
    DimensionStatistics,
    DimensionSummary,
    RespondentScores,
)


def _rounded(value: float, places: int = 2) -> float | None:
    return None if math.isnan(value) else round_half_up(value, places)


def describe(scores: Sequence[RespondentScores]) -> DimensionStatistics:
    """Mean, median and population standard deviation per dimension.

    Weak dimensions have a (rounded) mean strictly below 2.5, strong ones
    strictly above 4.0.  Means in between are left unclassified.
    """
    summaries: dict[Dimension, DimensionSummary] = {}
    weak: list[Dimension] = []
    strong: list[Dimension] = []

    for dim in Dimension:
        values = finite([s.get(dim) for s in scores])
        summary = DimensionSummary(
            dimension=dim,
            mean=_rounded(mean(values)),
            median=_rounded(median(values)),
            std_dev=_rounded(population_std(values)),
            count=len(values),
        )
        summaries[dim] = summary

        if summary.mean is None:
            continue
        if summary.mean < WEAK_THRESHOLD:
            weak.append(dim)
        if summary.mean > STRONG_THRESHOLD:
            strong.append(dim)

    return DimensionStatistics(
        summaries=summaries, weak_dimensions=weak, strong_dimensions=strong
    )


def dimension_correlations(scores: Sequence[RespondentScores]) -> list[DimensionCorrelation]:
    """Pearson r for every pair of dimensions, over respondents scored on both."""
    result: list[DimensionCorrelation] = []
    for first, second in combinations(Dimension, 2):
        pairs = [
            (s[first], s[second])
            for s in scores
            if s.get(first) is not None and s.get(second) is not None
        ]
        xs = [p[0] for p in pairs]
        ys = [p[1] for p in pairs]
        r = pearson_r(xs, ys)
        result.append(
            DimensionCorrelation(first=first, second=second, r=_rounded(r, 3))
        )
    return result
