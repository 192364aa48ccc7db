"""Survey scoring: encoding, imputation, dimension scores, statistics and reliability."""

from ceai.scoring.engine import analyze_responses
from ceai.scoring.models import AnalysisResult, CleanedMatrix, ReliabilityScore

__all__ = [
    "AnalysisResult",
    "CleanedMatrix",
    "ReliabilityScore",
    "analyze_responses",
]
