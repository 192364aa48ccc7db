"""Per-respondent dimension scores."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from ceai.instrument import DIMENSION_ITEMS, Dimension
from ceai.scoring.metrics import mean, round_half_up
from ceai.scoring.models import CleanedMatrix, RespondentScores


def aggregate(
    row: Sequence[float | None],
    dimension_map: Mapping[Dimension, Sequence[int]] = DIMENSION_ITEMS,
) -> RespondentScores:
    """Mean of the row's values at each dimension's item indices (2 dp).

    Cells from columns with an undefined mean (``None``) are left out; a
    dimension with no defined cells scores ``None``.
    """
    scores: RespondentScores = {}
    for dim, indices in dimension_map.items():
        values = [row[i] for i in indices if row[i] is not None]
        scores[dim] = round_half_up(mean(values), 2) if values else None
    return scores


def score_respondents(
    cleaned: CleanedMatrix,
    dimension_map: Mapping[Dimension, Sequence[int]] = DIMENSION_ITEMS,
) -> list[RespondentScores]:
    return [aggregate(row, dimension_map) for row in cleaned.rows]
