"""
Data schemas package.

Re-exports all schema classes for convenient importing:
    from pronostico.data.schemas import TeamSeasonStats, ProbabilityEstimate
"""

from .stats import (
    H2H_THRESHOLDS,
    MAX_COUNT,
    Outcome,
    SplitStats,
    TeamSeasonStats,
    HeadToHeadRecord,
    records_from_rows,
    sort_recent_first,
    last_n,
)

from .estimate import (
    Reliability,
    SuggestionMarket,
    SuggestionTier,
    OutcomeDistribution,
    GoalsDistribution,
    ExpectedGoals,
    BttsDistribution,
    CleanSheetDistribution,
    HeadToHeadSummary,
    BlendWeights,
    ProbabilityEstimate,
    Suggestion,
    MatchAnalysis,
)


__all__ = [
    # Input schemas
    "H2H_THRESHOLDS",
    "MAX_COUNT",
    "Outcome",
    "SplitStats",
    "TeamSeasonStats",
    "HeadToHeadRecord",
    "records_from_rows",
    "sort_recent_first",
    "last_n",
    # Output schemas
    "Reliability",
    "SuggestionMarket",
    "SuggestionTier",
    "OutcomeDistribution",
    "GoalsDistribution",
    "ExpectedGoals",
    "BttsDistribution",
    "CleanSheetDistribution",
    "HeadToHeadSummary",
    "BlendWeights",
    "ProbabilityEstimate",
    "Suggestion",
    "MatchAnalysis",
]
