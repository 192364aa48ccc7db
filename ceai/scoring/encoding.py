"""Likert text → integer code."""

from __future__ import annotations

from collections.abc import Sequence

from ceai.instrument import LIKERT_SCALE
from ceai.scoring.models import EncodedRow


def encode(cell: object) -> int | None:
    """Map one answer to 1–5, or ``None`` when it is not a canonical phrase.

    Matching is exact after trimming and lower-casing.  Non-string cells
    (blank spreadsheet cells arrive as ``None`` or NaN) are missing too.
    """
    if not isinstance(cell, str):
        return None
    return LIKERT_SCALE.get(cell.strip().lower())


def encode_matrix(rows: Sequence[Sequence[object]]) -> list[EncodedRow]:
    return [[encode(cell) for cell in row] for row in rows]
