"""HTTP API for survey analysis."""
