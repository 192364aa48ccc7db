"""Run the full scoring pipeline on a table of survey answers.

raw answers → encode → impute → dimension scores → statistics + reliability
→ (optional) department breakdown.

Every call builds its results from scratch; nothing is shared between calls,
so concurrent analyses need no coordination.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ceai.errors import StructuralError
from ceai.instrument import DIMENSION_ITEMS, QUESTION_COUNT, dimension_for_item
from ceai.scoring.aggregation import score_respondents
from ceai.scoring.departments import breakdown
from ceai.scoring.encoding import encode_matrix
from ceai.scoring.imputation import impute
from ceai.scoring.models import AnalysisResult, Diagnostic
from ceai.scoring.reliability import dimension_reliability
from ceai.scoring.statistics import describe, dimension_correlations

logger = logging.getLogger(__name__)


def _check_shape(rows: Sequence[Sequence[object]]) -> None:
    if not rows:
        raise StructuralError(
            "Survey must contain a header row and at least one data row."
        )
    for n, row in enumerate(rows, start=1):
        if len(row) != QUESTION_COUNT:
            raise StructuralError(
                f"Data row {n} has {len(row)} answer cells; expected {QUESTION_COUNT}."
            )


def analyze_responses(
    rows: Sequence[Sequence[object]],
    departments: Sequence[str | None] | None = None,
    *,
    strict: bool = False,
) -> AnalysisResult:
    """Score a matrix of Likert answers (one row per respondent, 48 cells).

    Args:
        rows: Answer text per respondent, in questionnaire order.  Header
            rows must already be removed.
        departments: Optional department per respondent (parallel to
            *rows*).  ``None`` skips the department breakdown.
        strict: Raise :class:`~ceai.errors.DataQualityError` when a question
            column has no valid answers, instead of recording a diagnostic.

    Raises:
        StructuralError: No data rows, or a row with the wrong width.
        DataQualityError: Only when *strict* is set.
    """
    _check_shape(rows)
    if departments is not None and len(departments) != len(rows):
        raise StructuralError(
            f"Department column has {len(departments)} values for {len(rows)} rows."
        )

    logger.debug("Scoring %d respondent(s)", len(rows))
    encoded = encode_matrix(rows)
    cleaned = impute(encoded)
    if strict:
        cleaned.raise_for_undefined()

    diagnostics: list[Diagnostic] = [
        Diagnostic(
            kind="data_quality",
            message=f"Question {c + 1} has no valid answers; its mean is undefined "
            "and it is left out of dimension scores and reliability.",
            dimension=dimension_for_item(c),
            column=c,
        )
        for c in cleaned.undefined_columns
    ]

    scores = score_respondents(cleaned, DIMENSION_ITEMS)
    statistics = describe(scores)
    reliability = dimension_reliability(cleaned, DIMENSION_ITEMS)
    for rel in reliability.values():
        if not rel.is_defined:
            diagnostics.append(
                Diagnostic(
                    kind="reliability",
                    message=f"Cronbach's alpha is undefined (insufficient data): {rel.reason}",
                    dimension=rel.dimension,
                )
            )

    groups = breakdown(scores, departments) if departments is not None else {}

    return AnalysisResult(
        cleaned=cleaned,
        dimension_scores=scores,
        statistics=statistics,
        reliability=reliability,
        department_breakdown=groups,
        correlations=dimension_correlations(scores),
        diagnostics=diagnostics,
    )
