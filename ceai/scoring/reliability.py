"""Internal-consistency reliability (Cronbach's alpha) per dimension."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence

from ceai.instrument import DIMENSION_ITEMS, Dimension
from ceai.scoring.metrics import cronbach_alpha, round_half_up
from ceai.scoring.models import CleanedMatrix, ReliabilityScore

logger = logging.getLogger(__name__)

# (lower bound, label), checked top-down
_ALPHA_BANDS: tuple[tuple[float, str], ...] = (
    (0.9, "Excellent"),
    (0.8, "Good"),
    (0.7, "Acceptable"),
    (0.6, "Questionable"),
    (0.5, "Poor"),
)


def interpret_alpha(alpha: float | None) -> str:
    """Conventional rule-of-thumb label for an alpha value."""
    if alpha is None:
        return "Insufficient data"
    for bound, label in _ALPHA_BANDS:
        if alpha >= bound:
            return label
    return "Unacceptable"


def dimension_reliability(
    cleaned: CleanedMatrix,
    dimension_map: Mapping[Dimension, Sequence[int]] = DIMENSION_ITEMS,
) -> dict[Dimension, ReliabilityScore]:
    """Cronbach's alpha over each dimension's item columns.

    Columns whose mean is undefined are excluded.  When alpha cannot be
    computed (fewer than two items, or no variance in total scores) the score
    carries ``alpha=None`` and a reason instead of a number.
    """
    undefined = set(cleaned.undefined_columns)
    result: dict[Dimension, ReliabilityScore] = {}

    for dim, indices in dimension_map.items():
        columns = [i for i in indices if i not in undefined]
        items = [[row[i] for i in columns] for row in cleaned.rows]
        reason: str | None = None
        alpha: float | None = None

        try:
            value = cronbach_alpha(items)  # type: ignore[arg-type]
        except ValueError as exc:
            reason = str(exc)
        else:
            if math.isnan(value):
                reason = "No variance in total scores (too few or identical respondents)"
            else:
                alpha = round_half_up(value, 3)

        if reason is not None:
            logger.warning("Reliability undefined for %s: %s", dim.label, reason)

        result[dim] = ReliabilityScore(
            dimension=dim, alpha=alpha, item_count=len(columns), reason=reason
        )
    return result
