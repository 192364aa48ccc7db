"""Fixed instrument data for the Corporate Entrepreneurship Assessment Instrument.

The 48 survey items are grouped into five dimensions.  Each dimension is bound
once to its column indices (zero-based, in questionnaire order) in
:data:`DIMENSION_ITEMS`; everything downstream iterates that table rather than
looking dimensions up by string.
"""

from __future__ import annotations

from enum import Enum


class Dimension(str, Enum):
    """The five CEAI sub-scales, valued by their display name."""

    MANAGEMENT_SUPPORT = "Management Support"
    WORK_DISCRETION = "Work Discretion (Autonomy)"
    REWARDS = "Rewards/Reinforcement"
    TIME_AVAILABILITY = "Time Availability"
    ORGANIZATIONAL_BOUNDARIES = "Organizational Boundaries"

    @property
    def label(self) -> str:
        return self.value


QUESTION_COUNT = 48

# Canonical Likert phrases, lower-cased for matching.
LIKERT_SCALE: dict[str, int] = {
    "strongly disagree": 1,
    "disagree": 2,
    "not sure": 3,
    "agree": 4,
    "strongly agree": 5,
}

WEAK_THRESHOLD = 2.5  # mean strictly below → weak
STRONG_THRESHOLD = 4.0  # mean strictly above → strong


def _build_dimension_items(
    items: dict[Dimension, tuple[int, ...]],
) -> dict[Dimension, tuple[int, ...]]:
    """Check that the dimension table partitions the item range exactly."""
    seen: set[int] = set()
    for dim, indices in items.items():
        if not indices:
            raise ValueError(f"Dimension {dim.label!r} has no items")
        overlap = seen.intersection(indices)
        if overlap:
            raise ValueError(f"Items {sorted(overlap)} assigned to more than one dimension")
        seen.update(indices)
    if seen != set(range(QUESTION_COUNT)):
        missing = sorted(set(range(QUESTION_COUNT)) - seen)
        raise ValueError(f"Items {missing} are not assigned to any dimension")
    return dict(items)


DIMENSION_ITEMS: dict[Dimension, tuple[int, ...]] = _build_dimension_items({
    Dimension.MANAGEMENT_SUPPORT: (0, 1, 2, 3, 5, 7, 8, 9),
    Dimension.WORK_DISCRETION: (6, 18, 20, 21, 22, 23, 24, 25, 26, 27, 28),
    Dimension.REWARDS: (4, 10, 11, 29, 30, 31, 32, 33, 34),
    Dimension.TIME_AVAILABILITY: (12, 13, 14, 15, 16, 35, 36, 37, 38, 39, 40),
    Dimension.ORGANIZATIONAL_BOUNDARIES: (17, 19, 41, 42, 43, 44, 45, 46, 47),
})

DIMENSION_DESCRIPTIONS: dict[Dimension, str] = {
    Dimension.MANAGEMENT_SUPPORT: (
        "Willingness of top-level managers to facilitate and promote "
        "entrepreneurial behaviour, including championing innovative ideas "
        "and providing the resources people need."
    ),
    Dimension.WORK_DISCRETION: (
        "Tolerance of failure, freedom from excessive oversight, and "
        "delegation of authority and responsibility to employees."
    ),
    Dimension.REWARDS: (
        "Reward systems that encourage risk-taking and innovation, "
        "recognising significant achievements."
    ),
    Dimension.TIME_AVAILABILITY: (
        "Workloads that leave time for people to pursue innovations and "
        "long-term problem solving."
    ),
    Dimension.ORGANIZATIONAL_BOUNDARIES: (
        "Clarity of expected outcomes and the mechanisms used to evaluate "
        "and reward innovative work."
    ),
}


def dimension_for_item(index: int) -> Dimension | None:
    """Return the dimension a zero-based item index belongs to."""
    for dim, indices in DIMENSION_ITEMS.items():
        if index in indices:
            return dim
    return None
