"""Exception hierarchy for survey scoring.

Structural problems abort an analysis.  Data-quality problems are reported per
column and only raised when the caller asks for strict behaviour.  External
service failures belong to the narrative report and never reach the engine.
"""

from __future__ import annotations


class CeaiError(Exception):
    """Base class for all errors raised by this package."""


class StructuralError(CeaiError):
    """The input table does not have the shape the instrument requires."""


class DataQualityError(CeaiError):
    """One or more question columns contain no valid Likert answers.

    ``columns`` holds the zero-based question indices whose mean is undefined.
    """

    def __init__(self, columns: list[int]) -> None:
        self.columns = list(columns)
        numbered = ", ".join(f"Q{c + 1}" for c in self.columns)
        super().__init__(
            f"No valid answers in {len(self.columns)} question column(s): {numbered}. "
            "Column mean is undefined, so missing cells cannot be imputed."
        )


class ExternalServiceError(CeaiError):
    """The generative-text provider could not produce a report."""
