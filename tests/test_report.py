"""Tests for the narrative report and its template fallback."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from conftest import answers

from ceai.config import CeaiSettings
from ceai.errors import ExternalServiceError
from ceai.ingest import SurveyTable
from ceai.report import format_analysis_context, generate_report, render_summary
from ceai.scoring import analyze_responses


def _table(rows: list[list[str]]) -> SurveyTable:
    return SurveyTable(
        question_columns=[f"Answer{n}" for n in range(1, 49)],
        rows=rows,  # type: ignore[arg-type]
    )


def _settings(**overrides: object) -> CeaiSettings:
    defaults: dict[str, object] = {
        "llm_provider": "google",
        "google_api_key": "",
        "llm_timeout_seconds": 5.0,
        "output_dir": Path("/tmp/ceai-test-output"),
    }
    defaults.update(overrides)
    return CeaiSettings(**defaults)  # type: ignore[arg-type]


@pytest.fixture
def mixed_rows() -> list[list[str]]:
    """Strong management support, weak rewards."""
    rows = []
    for phrase in ("Agree", "Strongly Agree"):
        row = answers(phrase)
        for i in (4, 10, 11, 29, 30, 31, 32, 33, 34):
            row[i] = "Disagree" if phrase == "Agree" else "Strongly Disagree"
        rows.append(row)
    return rows


# ---------------------------------------------------------------------------
# Context for the model
# ---------------------------------------------------------------------------


class TestFormatAnalysisContext:
    def test_tab_separated_answers_then_json(self, mixed_rows: list[list[str]]) -> None:
        result = analyze_responses(mixed_rows)
        text = format_analysis_context(_table(mixed_rows), result)

        head, _, tail = text.partition("\n\nPROCESSED_DATA_CONTEXT:\n")
        lines = head.splitlines()
        assert lines[0].split("\t")[0] == "Answer1"
        assert len(lines) == 3
        context = json.loads(tail)
        assert set(context) >= {"dimension_scores", "statistics", "reliability"}
        assert context["statistics"]["weak_dimensions"] == ["Rewards/Reinforcement"]

    def test_missing_cells_written_blank(self) -> None:
        rows: list[list[str | None]] = [answers("Agree")]  # type: ignore[assignment]
        rows[0][0] = None
        result = analyze_responses(rows)
        text = format_analysis_context(_table(rows), result)  # type: ignore[arg-type]
        assert text.splitlines()[1].startswith("\tAgree")


# ---------------------------------------------------------------------------
# Template summary
# ---------------------------------------------------------------------------


class TestRenderSummary:
    def test_sections(self, mixed_rows: list[list[str]]) -> None:
        summary = render_summary(analyze_responses(mixed_rows))
        for heading in (
            "# CEAI Survey Analysis Report",
            "## Executive Summary",
            "## Overall Dimension Averages",
            "## Reliability Analysis",
            "### Strengths",
            "### Areas for Improvement",
            "## Recommendations",
        ):
            assert heading in summary

    def test_strengths_and_weaknesses_named(self, mixed_rows: list[list[str]]) -> None:
        summary = render_summary(analyze_responses(mixed_rows))
        assert "**Management Support** stands out as a strength" in summary
        assert "**Rewards/Reinforcement** is a critical area for improvement" in summary
        assert "Improve Reward Systems" in summary
        assert "Maintain Strength in Management Support" in summary

    def test_uses_computed_alpha(self, mixed_rows: list[list[str]]) -> None:
        summary = render_summary(analyze_responses(mixed_rows))
        assert "1.000 (Excellent)" in summary

    def test_insufficient_data_alpha(self) -> None:
        summary = render_summary(analyze_responses([answers("Agree")]))
        assert "insufficient data" in summary
        assert "highest scoring dimension" in summary

    def test_department_section_only_with_departments(
        self, mixed_rows: list[list[str]]
    ) -> None:
        assert "## Department Comparison" not in render_summary(analyze_responses(mixed_rows))
        with_depts = render_summary(analyze_responses(mixed_rows, ["Sales", "Ops"]))
        assert "**Sales** (1 respondent(s))" in with_depts


# ---------------------------------------------------------------------------
# generate_report
# ---------------------------------------------------------------------------


class TestGenerateReport:
    @pytest.mark.asyncio
    async def test_llm_text_returned(self, mixed_rows: list[list[str]]) -> None:
        result = analyze_responses(mixed_rows)
        client = MagicMock()
        client.generate = AsyncMock(return_value="# LLM report")

        report = await generate_report(_table(mixed_rows), result, _settings(), client=client)

        assert report.source == "llm"
        assert report.text == "# LLM report"
        assert report.note is None
        system, user = client.generate.call_args.args
        assert "corporate entrepreneurship" in system
        assert "PROCESSED_DATA_CONTEXT" in user

    @pytest.mark.asyncio
    async def test_provider_error_falls_back(self, mixed_rows: list[list[str]]) -> None:
        result = analyze_responses(mixed_rows)
        client = MagicMock()
        client.generate = AsyncMock(side_effect=ExternalServiceError("quota exceeded"))

        report = await generate_report(_table(mixed_rows), result, _settings(), client=client)

        assert report.source == "template"
        assert report.text == render_summary(result)
        assert "API error" in (report.note or "")

    @pytest.mark.asyncio
    async def test_missing_key_falls_back(self, mixed_rows: list[list[str]]) -> None:
        """Without a client, LLMClient construction fails on the missing key."""
        result = analyze_responses(mixed_rows)
        report = await generate_report(_table(mixed_rows), result, _settings())
        assert report.source == "template"
        assert "Gemini API key not set" in (report.note or "")

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self, mixed_rows: list[list[str]]) -> None:
        result = analyze_responses(mixed_rows)

        async def slow(*args: object) -> str:
            await asyncio.sleep(5)
            return "never"

        client = MagicMock()
        client.generate = slow

        report = await generate_report(
            _table(mixed_rows), result, _settings(llm_timeout_seconds=0.01), client=client
        )
        assert report.source == "template"
        assert "timed out" in (report.note or "")
