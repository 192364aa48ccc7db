"""CEAI survey scoring engine: Likert encoding, dimension scores, reliability."""

__version__ = "0.1.0"
