"""Tests for the HTTP API (health, analyze, report)."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import answers, survey_text
from fastapi.testclient import TestClient

from ceai import __version__
from ceai.server.app import create_app


@pytest.fixture()
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setenv("CEAI_OUTPUT_DIR", str(tmp_path))
    monkeypatch.setenv("CEAI_LLM_PROVIDER", "google")
    monkeypatch.setenv("CEAI_GOOGLE_API_KEY", "")
    return TestClient(create_app())


class TestHealthEndpoint:
    def test_returns_ok(self, client: TestClient) -> None:
        data = client.get("/api/health").json()
        assert data == {"status": "ok", "version": __version__}


class TestAnalyzeEndpoint:
    def test_full_analysis(self, client: TestClient) -> None:
        text = survey_text([answers("Agree"), answers("Disagree")], departments=["A", "B"])
        resp = client.post("/api/analyze", json={"csv_data": text})
        assert resp.status_code == 200
        data = resp.json()
        assert data["respondents"] == 2
        assert data["statistics"]["means"]["Management Support"] == 3.0
        assert data["reliability"]["Time Availability"]["alpha"] == 1.0
        assert data["department_sizes"] == {"A": 1, "B": 1}
        assert len(data["correlations"]) == 10

    def test_all_strongly_agree(self, client: TestClient) -> None:
        resp = client.post(
            "/api/analyze", json={"csv_data": survey_text([answers("Strongly Agree")])}
        )
        data = resp.json()
        assert data["statistics"]["strong_dimensions"] == [
            "Management Support",
            "Work Discretion (Autonomy)",
            "Rewards/Reinforcement",
            "Time Availability",
            "Organizational Boundaries",
        ]
        assert all(r["alpha"] is None for r in data["reliability"].values())

    def test_header_only_is_400(self, client: TestClient) -> None:
        header_only = survey_text([])
        resp = client.post("/api/analyze", json={"csv_data": header_only})
        assert resp.status_code == 400
        assert "data row" in resp.json()["detail"]

    def test_wrong_column_count_is_400(self, client: TestClient) -> None:
        resp = client.post("/api/analyze", json={"csv_data": "Q1,Q2\nAgree,Agree\n"})
        assert resp.status_code == 400

    def test_ragged_row_is_400(self, client: TestClient) -> None:
        text = survey_text([answers("Agree"), [*answers("Agree"), "extra", "extra"]])
        resp = client.post("/api/analyze", json={"csv_data": text})
        assert resp.status_code == 400
        assert "well-formed" in resp.json()["detail"]

    def test_undefined_column_reported_not_fatal(self, client: TestClient) -> None:
        text = survey_text([answers("Agree", q7="maybe")])
        data = client.post("/api/analyze", json={"csv_data": text}).json()
        quality = [d for d in data["diagnostics"] if d["kind"] == "data_quality"]
        assert quality == [
            {
                "kind": "data_quality",
                "message": quality[0]["message"],
                "dimension": "Work Discretion (Autonomy)",
                "question": 7,
            }
        ]

    def test_strict_undefined_column_is_422(self, client: TestClient) -> None:
        text = survey_text([answers("Agree", q7="maybe")])
        resp = client.post("/api/analyze", json={"csv_data": text, "strict": True})
        assert resp.status_code == 422
        assert resp.json()["detail"]["questions"] == [7]

    def test_missing_body_field_is_422(self, client: TestClient) -> None:
        assert client.post("/api/analyze", json={}).status_code == 422


class TestReportEndpoint:
    def test_falls_back_to_template_without_key(self, client: TestClient) -> None:
        text = survey_text([answers("Agree"), answers("Disagree")])
        resp = client.post("/api/report", json={"csv_data": text})
        assert resp.status_code == 200
        data = resp.json()
        assert data["source"] == "template"
        assert data["analysis"].startswith("# CEAI Survey Analysis Report")
        assert "API error" in data["note"]
        assert data["report"]["respondents"] == 2

    def test_structural_error_is_400(self, client: TestClient) -> None:
        resp = client.post("/api/report", json={"csv_data": ""})
        assert resp.status_code == 400
