"""Data structures for survey scoring.

These are plain dataclasses (not Pydantic); they're ephemeral, rebuilt on
every analysis, and never persisted.  The JSON boundary lives in
:mod:`ceai.models`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ceai.errors import DataQualityError
from ceai.instrument import Dimension

EncodedRow = list[int | None]
RespondentScores = dict[Dimension, float | None]  # dimension -> mean (2 dp)


@dataclass
class CleanedMatrix:
    """Numeric response matrix after column-mean imputation.

    A cell is ``None`` only when its whole column had no valid answer.
    """

    rows: list[list[float | None]]
    column_means: list[float | None]  # over valid values, before imputation
    imputed_cells: list[int] = field(default_factory=list)  # per column

    @property
    def undefined_columns(self) -> list[int]:
        return [i for i, m in enumerate(self.column_means) if m is None]

    def raise_for_undefined(self) -> None:
        """Raise :class:`DataQualityError` if any column mean is undefined."""
        undefined = self.undefined_columns
        if undefined:
            raise DataQualityError(undefined)

    def column(self, index: int) -> list[float | None]:
        return [row[index] for row in self.rows]


@dataclass
class DimensionSummary:
    """Descriptive statistics for one dimension across respondents."""

    dimension: Dimension
    mean: float | None
    median: float | None
    std_dev: float | None
    count: int  # respondents with a defined score


@dataclass
class DimensionStatistics:
    """Per-dimension summaries plus weak/strong classification."""

    summaries: dict[Dimension, DimensionSummary]
    weak_dimensions: list[Dimension] = field(default_factory=list)
    strong_dimensions: list[Dimension] = field(default_factory=list)

    @property
    def means(self) -> dict[Dimension, float | None]:
        return {d: s.mean for d, s in self.summaries.items()}

    @property
    def medians(self) -> dict[Dimension, float | None]:
        return {d: s.median for d, s in self.summaries.items()}

    @property
    def std_devs(self) -> dict[Dimension, float | None]:
        return {d: s.std_dev for d, s in self.summaries.items()}


@dataclass
class ReliabilityScore:
    """Cronbach's alpha for one dimension, or the reason it is undefined."""

    dimension: Dimension
    alpha: float | None  # 3 dp; None = insufficient data, never 0
    item_count: int
    reason: str | None = None

    @property
    def is_defined(self) -> bool:
        return self.alpha is not None


@dataclass
class DepartmentGroup:
    """Mean dimension scores for respondents sharing a department."""

    department: str
    respondents: int
    means: dict[Dimension, float | None] = field(default_factory=dict)


@dataclass
class DimensionCorrelation:
    """Pearson r between two dimensions' respondent scores."""

    first: Dimension
    second: Dimension
    r: float | None  # 3 dp; None when either side has zero variance


@dataclass
class Diagnostic:
    """A non-fatal issue attached to an analysis result."""

    kind: Literal["data_quality", "reliability"]
    message: str
    dimension: Dimension | None = None
    column: int | None = None  # zero-based question index


@dataclass
class AnalysisResult:
    """Complete scoring results for one survey table."""

    cleaned: CleanedMatrix
    dimension_scores: list[RespondentScores]
    statistics: DimensionStatistics
    reliability: dict[Dimension, ReliabilityScore]
    department_breakdown: dict[str, DepartmentGroup] = field(default_factory=dict)
    correlations: list[DimensionCorrelation] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def respondent_count(self) -> int:
        return len(self.dimension_scores)
