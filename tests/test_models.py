"""Tests for the JSON view of an analysis."""

from __future__ import annotations

import json

from conftest import answers

from ceai.models import AnalysisReport
from ceai.scoring import analyze_responses


class TestAnalysisReport:
    def test_keys_are_display_labels(self) -> None:
        report = AnalysisReport.from_result(
            analyze_responses([answers("Agree"), answers("Disagree")])
        )
        assert report.respondents == 2
        assert report.statistics.means["Work Discretion (Autonomy)"] == 3.0
        assert report.reliability["Rewards/Reinforcement"].interpretation == "Excellent"
        assert report.dimension_scores[0]["Management Support"] == 4.0

    def test_undefined_values_serialise_as_null(self) -> None:
        report = AnalysisReport.from_result(
            analyze_responses([answers("Strongly Agree", q1="maybe")])
        )
        data = json.loads(report.model_dump_json())
        assert data["cleaned_data"][0][0] is None
        assert data["reliability"]["Management Support"]["alpha"] is None
        assert data["reliability"]["Management Support"]["interpretation"] == "Insufficient data"
        assert data["correlations"][0]["r"] is None

    def test_diagnostic_questions_are_one_based(self) -> None:
        report = AnalysisReport.from_result(
            analyze_responses([answers("Agree", q5="?"), answers("Disagree", q5="")])
        )
        quality = [d for d in report.diagnostics if d.kind == "data_quality"]
        assert [d.question for d in quality] == [5]
        assert quality[0].dimension == "Rewards/Reinforcement"

    def test_department_sizes(self) -> None:
        report = AnalysisReport.from_result(
            analyze_responses([answers("Agree"), answers("Disagree")], ["Ops", "Ops"])
        )
        assert report.department_sizes == {"Ops": 2}
        assert report.department_breakdown["Ops"]["Time Availability"] == 3.0

    def test_cleaned_data_rounded(self) -> None:
        rows = [answers("Agree"), answers("Agree"), answers("Disagree"), answers("Agree", q1="")]
        report = AnalysisReport.from_result(analyze_responses(rows))
        # mean of 4, 4, 2 = 3.333…
        assert report.cleaned_data[3][0] == 3.33
