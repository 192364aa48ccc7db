"""Dimension means grouped by department."""

from __future__ import annotations

from collections.abc import Sequence

from ceai.instrument import Dimension
from ceai.scoring.metrics import finite, mean, round_half_up
from ceai.scoring.models import DepartmentGroup, RespondentScores

UNKNOWN_DEPARTMENT = "Unknown"


def _department_key(value: object) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return UNKNOWN_DEPARTMENT


def breakdown(
    scores: Sequence[RespondentScores],
    departments: Sequence[str | None],
) -> dict[str, DepartmentGroup]:
    """Mean score per dimension for each department (2 dp).

    Blank or missing department values fall into ``"Unknown"``.  Groups in
    which no dimension has a defined score are omitted.  Departments appear
    in order of first occurrence.
    """
    if len(scores) != len(departments):
        raise ValueError(
            f"Got {len(scores)} score rows but {len(departments)} department values"
        )

    members: dict[str, list[RespondentScores]] = {}
    for row, dept in zip(scores, departments):
        members.setdefault(_department_key(dept), []).append(row)

    groups: dict[str, DepartmentGroup] = {}
    for dept, rows in members.items():
        means: dict[Dimension, float | None] = {}
        for dim in Dimension:
            values = finite([r.get(dim) for r in rows])
            means[dim] = round_half_up(mean(values), 2) if values else None
        if all(m is None for m in means.values()):
            continue
        groups[dept] = DepartmentGroup(department=dept, respondents=len(rows), means=means)
    return groups
