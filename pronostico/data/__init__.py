"""
Data package - input/output schemas and validation.

The engine consumes already-fetched statistics; fetching and storage
live with the callers.
"""

from .schemas import (
    Outcome, SplitStats, TeamSeasonStats, HeadToHeadRecord,
    Reliability, ProbabilityEstimate, Suggestion, MatchAnalysis,
)

from .processors import ValidationResult, StatsValidator


__all__ = [
    # Schemas
    "Outcome", "SplitStats", "TeamSeasonStats", "HeadToHeadRecord",
    "Reliability", "ProbabilityEstimate", "Suggestion", "MatchAnalysis",
    # Processors
    "ValidationResult", "StatsValidator",
]
