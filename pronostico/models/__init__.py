"""
Statistical models.

- strength: weighted team strength and raw 1X2
- expected_goals: expected total, scoring and clean-sheet probabilities
- poisson: Over/Under lines from an expected total
- ensemble: H2H blending and final normalization
"""

from .base import Market, RawEstimate
from .strength import StrengthModel, RawOutcome
from .expected_goals import ExpectedGoalsModel, GoalExpectation
from .poisson import PoissonThresholdEngine, poisson_over, poisson_under
from .ensemble import BlendingPolicy, OutcomeNormalizer

__all__ = [
    "Market",
    "RawEstimate",
    "StrengthModel",
    "RawOutcome",
    "ExpectedGoalsModel",
    "GoalExpectation",
    "PoissonThresholdEngine",
    "poisson_over",
    "poisson_under",
    "BlendingPolicy",
    "OutcomeNormalizer",
]
