"""Load survey exports into a :class:`SurveyTable`.

Accepted inputs:

- ``.csv`` (comma-delimited) and ``.tsv`` / ``.txt`` (tab-delimited)
- ``.xlsx`` (first worksheet)
- pasted delimited text (tab if the header line contains one, else comma)

The header row is required.  Question columns are found either by name
(``Answer1`` … ``Answer48``) or, when the export uses the full question text
as headers, as the first 48 columns that are not ``department`` or
``timestamp``.  Every cell is kept as text; encoding happens in the scoring
engine.
"""

from __future__ import annotations

import io
import logging
import re
import zipfile
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ceai.errors import StructuralError
from ceai.instrument import QUESTION_COUNT

logger = logging.getLogger(__name__)

DEPARTMENT_COLUMN = "department"
TIMESTAMP_COLUMN = "timestamp"

_ANSWER_RE = re.compile(r"^answer\s*(\d+)$", re.IGNORECASE)

_DELIMITED_SUFFIXES = {".csv": ",", ".tsv": "\t", ".txt": "\t"}
_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


@dataclass
class SurveyTable:
    """Survey answers as text, one row per respondent."""

    question_columns: list[str]
    rows: list[list[str | None]]
    departments: list[str | None] | None = None  # None = no department column

    @property
    def respondent_count(self) -> int:
        return len(self.rows)


def read_survey(path: Path) -> SurveyTable:
    """Read a survey export from disk."""
    suffix = path.suffix.lower()
    try:
        if suffix in _EXCEL_SUFFIXES:
            frame = _read_workbook(path)
        elif suffix in _DELIMITED_SUFFIXES:
            frame = _read_delimited(path, _DELIMITED_SUFFIXES[suffix])
        else:
            raise StructuralError(
                f"Unsupported file type {path.suffix!r}; "
                "use .csv, .tsv, .txt or .xlsx"
            )
    except pd.errors.EmptyDataError as exc:
        raise StructuralError(f"{path.name} is empty") from exc
    except pd.errors.ParserError as exc:
        raise StructuralError(f"{path.name} is not a well-formed table: {exc}") from exc

    logger.debug("Read %s: %d row(s), %d column(s)", path.name, *frame.shape)
    return table_from_frame(frame)


def parse_survey_text(text: str) -> SurveyTable:
    """Parse pasted delimited text (header line first)."""
    stripped = text.strip()
    if not stripped:
        raise StructuralError(
            "Survey must contain a header row and at least one data row."
        )
    header = stripped.splitlines()[0]
    sep = "\t" if "\t" in header else ","
    try:
        frame = _read_delimited(io.StringIO(stripped), sep)
    except pd.errors.ParserError as exc:
        raise StructuralError(f"Survey text is not a well-formed table: {exc}") from exc
    return table_from_frame(frame)


def _read_workbook(path: Path) -> pd.DataFrame:
    try:
        return pd.read_excel(path, sheet_name=0, dtype=str)
    except (zipfile.BadZipFile, ValueError) as exc:
        # pandas raises ValueError when it cannot tell the file is a workbook at all
        raise StructuralError(f"{path.name} is not a readable Excel workbook: {exc}") from exc


def _read_delimited(source: Path | io.StringIO, sep: str) -> pd.DataFrame:
    # A row with more fields than the header raises ParserError
    return pd.read_csv(
        source,
        sep=sep,
        dtype=str,
        keep_default_na=False,
        skipinitialspace=True,
    )


def table_from_frame(frame: pd.DataFrame) -> SurveyTable:
    """Pick question and department columns out of a raw DataFrame."""
    if frame.empty:
        raise StructuralError(
            "Survey must contain a header row and at least one data row."
        )

    frame = frame.astype(object).where(frame.notna(), None)
    columns = [str(c).strip() for c in frame.columns]
    frame.columns = columns

    questions = resolve_question_columns(columns)
    dept_col = next((c for c in columns if c.lower() == DEPARTMENT_COLUMN), None)

    rows = [
        [_cell(v) for v in record]
        for record in frame[questions].itertuples(index=False, name=None)
    ]
    departments = (
        [_cell(v) for v in frame[dept_col].tolist()] if dept_col is not None else None
    )
    return SurveyTable(question_columns=questions, rows=rows, departments=departments)


def resolve_question_columns(columns: list[str]) -> list[str]:
    """Return the 48 question column names in questionnaire order.

    Raises:
        StructuralError: Fewer than 48 candidate columns.
    """
    numbered: dict[int, str] = {}
    for name in columns:
        match = _ANSWER_RE.match(name)
        if match:
            numbered[int(match.group(1))] = name
    if all(n in numbered for n in range(1, QUESTION_COUNT + 1)):
        return [numbered[n] for n in range(1, QUESTION_COUNT + 1)]

    meta = {DEPARTMENT_COLUMN, TIMESTAMP_COLUMN}
    candidates = [c for c in columns if c.lower() not in meta]
    if len(candidates) < QUESTION_COUNT:
        raise StructuralError(
            f"Found {len(candidates)} question column(s); "
            f"the CEAI needs {QUESTION_COUNT}."
        )
    if len(candidates) > QUESTION_COUNT:
        logger.info(
            "Ignoring %d trailing column(s) after the %d questions",
            len(candidates) - QUESTION_COUNT,
            QUESTION_COUNT,
        )
    return candidates[:QUESTION_COUNT]


def _cell(value: object) -> str | None:
    if value is None:
        return None
    return str(value)
