"""Pydantic models for the JSON shape of an analysis.

The scoring engine works with dataclasses keyed by :class:`Dimension`; these
models flatten that into display-name keys for the CLI ``--json`` output and
the HTTP API.  Undefined values (an all-missing column, an undefined alpha)
serialise as ``null``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ceai.instrument import Dimension
from ceai.scoring.metrics import round_half_up
from ceai.scoring.models import AnalysisResult
from ceai.scoring.reliability import interpret_alpha


class StatisticsPayload(BaseModel):
    means: dict[str, float | None]
    medians: dict[str, float | None]
    std_devs: dict[str, float | None]
    weak_dimensions: list[str] = Field(default_factory=list)
    strong_dimensions: list[str] = Field(default_factory=list)


class ReliabilityPayload(BaseModel):
    alpha: float | None
    items: int
    interpretation: str
    reason: str | None = None


class CorrelationPayload(BaseModel):
    first: str
    second: str
    r: float | None


class DiagnosticPayload(BaseModel):
    kind: str
    message: str
    dimension: str | None = None
    question: int | None = None  # 1-based


class AnalysisReport(BaseModel):
    """Serialisable view of :class:`~ceai.scoring.models.AnalysisResult`."""

    respondents: int
    cleaned_data: list[list[float | None]]
    dimension_scores: list[dict[str, float | None]]
    statistics: StatisticsPayload
    reliability: dict[str, ReliabilityPayload]
    department_breakdown: dict[str, dict[str, float | None]] = Field(default_factory=dict)
    department_sizes: dict[str, int] = Field(default_factory=dict)
    correlations: list[CorrelationPayload] = Field(default_factory=list)
    diagnostics: list[DiagnosticPayload] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: AnalysisResult) -> AnalysisReport:
        stats = result.statistics
        return cls(
            respondents=result.respondent_count,
            cleaned_data=[
                [None if v is None else round_half_up(v, 2) for v in row]
                for row in result.cleaned.rows
            ],
            dimension_scores=[_by_label(s) for s in result.dimension_scores],
            statistics=StatisticsPayload(
                means=_by_label(stats.means),
                medians=_by_label(stats.medians),
                std_devs=_by_label(stats.std_devs),
                weak_dimensions=[d.label for d in stats.weak_dimensions],
                strong_dimensions=[d.label for d in stats.strong_dimensions],
            ),
            reliability={
                dim.label: ReliabilityPayload(
                    alpha=rel.alpha,
                    items=rel.item_count,
                    interpretation=interpret_alpha(rel.alpha),
                    reason=rel.reason,
                )
                for dim, rel in result.reliability.items()
            },
            department_breakdown={
                name: _by_label(group.means)
                for name, group in result.department_breakdown.items()
            },
            department_sizes={
                name: group.respondents
                for name, group in result.department_breakdown.items()
            },
            correlations=[
                CorrelationPayload(first=c.first.label, second=c.second.label, r=c.r)
                for c in result.correlations
            ],
            diagnostics=[
                DiagnosticPayload(
                    kind=d.kind,
                    message=d.message,
                    dimension=d.dimension.label if d.dimension else None,
                    question=None if d.column is None else d.column + 1,
                )
                for d in result.diagnostics
            ],
        )


def _by_label(values: dict[Dimension, float | None]) -> dict[str, float | None]:
    return {dim.label: value for dim, value in values.items()}
