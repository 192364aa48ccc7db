"""Analysis API endpoints.

- ``POST /api/analyze``: score pasted survey text and return the full
  analysis.  Structural problems are a 400; with ``strict`` set, a column
  with no valid answers is a 422.
- ``POST /api/report``: the same analysis plus a narrative report.  The
  report falls back to the template summary when the LLM is unavailable,
  so this endpoint never fails because of the provider.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from ceai.errors import DataQualityError, StructuralError
from ceai.ingest import SurveyTable, parse_survey_text
from ceai.models import AnalysisReport
from ceai.scoring import AnalysisResult, analyze_responses

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class AnalyzeRequest(BaseModel):
    csv_data: str
    strict: bool = False


class NarrativeResponse(BaseModel):
    analysis: str
    source: str  # "llm" or "template"
    note: str | None = None
    report: AnalysisReport


def _run(body: AnalyzeRequest) -> tuple[SurveyTable, AnalysisResult]:
    try:
        table = parse_survey_text(body.csv_data)
        result = analyze_responses(table.rows, table.departments, strict=body.strict)
    except StructuralError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except DataQualityError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": str(exc), "questions": [c + 1 for c in exc.columns]},
        ) from exc
    logger.info("Analysed %d respondent(s)", result.respondent_count)
    return table, result


@router.post("/analyze")
def analyze(body: AnalyzeRequest) -> AnalysisReport:
    """Score a survey and return statistics, reliability and diagnostics."""
    _, result = _run(body)
    return AnalysisReport.from_result(result)


@router.post("/report")
async def report(body: AnalyzeRequest, request: Request) -> NarrativeResponse:
    """Score a survey and write a narrative report about it."""
    from ceai.report import generate_report

    table, result = _run(body)
    narrative = await generate_report(table, result, request.app.state.settings)
    return NarrativeResponse(
        analysis=narrative.text,
        source=narrative.source,
        note=narrative.note,
        report=AnalysisReport.from_result(result),
    )
