"""Replace missing Likert codes with their column mean.

Two passes: every column mean is computed over the whole matrix first, then
cells are filled.  The fill value therefore never depends on row order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ceai.scoring.metrics import mean
from ceai.scoring.models import CleanedMatrix, EncodedRow

logger = logging.getLogger(__name__)


def column_means(matrix: Sequence[EncodedRow]) -> list[float | None]:
    """Mean of the non-missing codes in each column (``None`` if there are none)."""
    if not matrix:
        return []
    width = len(matrix[0])
    means: list[float | None] = []
    for c in range(width):
        valid = [row[c] for row in matrix if row[c] is not None]
        means.append(mean(valid) if valid else None)
    return means


def impute(matrix: Sequence[EncodedRow]) -> CleanedMatrix:
    """Return a numeric matrix with missing cells set to their column mean.

    Present cells pass through as floats.  Columns with no valid answer keep
    ``None`` cells; they are listed in ``CleanedMatrix.undefined_columns``.
    """
    means = column_means(matrix)
    imputed = [0] * len(means)
    rows: list[list[float | None]] = []
    for row in matrix:
        cleaned: list[float | None] = []
        for c, value in enumerate(row):
            if value is None:
                imputed[c] += 1
                cleaned.append(means[c])
            else:
                cleaned.append(float(value))
        rows.append(cleaned)

    result = CleanedMatrix(rows=rows, column_means=means, imputed_cells=imputed)
    logger.debug(
        "Imputed %d missing cell(s) across %d row(s)", sum(imputed), len(rows)
    )
    for c in result.undefined_columns:
        logger.warning("Question %d has no valid answers; column mean undefined", c + 1)
    return result
