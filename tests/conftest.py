"""Shared test fixtures for CEAI tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from ceai.instrument import QUESTION_COUNT

HEADER = [f"Answer{n}" for n in range(1, QUESTION_COUNT + 1)]


def answers(phrase: str = "Strongly Agree", **overrides: str) -> list[str]:
    """A full row of one Likert phrase; ``q1="maybe"`` overrides question 1."""
    row = [phrase] * QUESTION_COUNT
    for key, value in overrides.items():
        row[int(key[1:]) - 1] = value
    return row


def survey_text(
    rows: list[list[str]],
    departments: list[str] | None = None,
    sep: str = ",",
) -> str:
    """Delimited survey text with an ``Answer1..Answer48`` header."""
    header = list(HEADER)
    if departments is not None:
        header.append("Department")
    lines = [sep.join(header)]
    for i, row in enumerate(rows):
        cells = list(row)
        if departments is not None:
            cells.append(departments[i])
        lines.append(sep.join(cells))
    return "\n".join(lines) + "\n"


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test outputs."""
    return tmp_path


@pytest.fixture
def all_strongly_agree() -> list[list[str]]:
    """One respondent who answered Strongly Agree to everything."""
    return [answers("Strongly Agree")]


@pytest.fixture
def agree_disagree() -> list[list[str]]:
    """Two respondents: all Agree (4) and all Disagree (2)."""
    return [answers("Agree"), answers("Disagree")]


@pytest.fixture
def survey_csv(tmp_path: Path) -> Path:
    """A three-respondent CSV with a Department column."""
    path = tmp_path / "survey.csv"
    path.write_text(
        survey_text(
            [answers("Agree"), answers("Disagree"), answers("Strongly Agree", q1="")],
            departments=["Sales", "Engineering", "Sales"],
        ),
        encoding="utf-8",
    )
    return path
