"""
Estimate and suggestion schemas.

These represent the outputs of the probability engine. Percentages are
fixed-point ``Decimal``s with one decimal place, produced only by the
outcome normalizer.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

HUNDRED = Decimal("100.0")


class Reliability(str, Enum):
    """H2H sample-size tier."""
    NONE = "none"      # 0 meetings
    LOW = "low"        # 1-4
    MEDIUM = "medium"  # 5-7
    HIGH = "high"      # 8+

    @classmethod
    def from_count(cls, count: int) -> "Reliability":
        if count <= 0:
            return cls.NONE
        if count < 5:
            return cls.LOW
        if count < 8:
            return cls.MEDIUM
        return cls.HIGH

    @property
    def allows_blending(self) -> bool:
        return self is not Reliability.NONE


class SuggestionMarket(str, Enum):
    OUTCOME = "1X2"
    GOALS = "Goals"
    BTTS = "BTTS"
    GENERAL = "General"  # Balanced-match fallback only


class SuggestionTier(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    VALUE = "value"
    INFO = "info"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class OutcomeDistribution(_Frozen):
    """1X2 percentages; always sum to exactly 100.0."""

    home: Decimal
    draw: Decimal
    away: Decimal

    @model_validator(mode="after")
    def _sums_to_hundred(self) -> "OutcomeDistribution":
        if self.home + self.draw + self.away != HUNDRED:
            raise ValueError(
                f"1X2 must sum to 100.0, got {self.home}/{self.draw}/{self.away}"
            )
        return self

    @computed_field
    @property
    def favourite(self) -> str:
        values = {"home": self.home, "draw": self.draw, "away": self.away}
        return max(values, key=values.get)


class GoalsDistribution(_Frozen):
    """Over/Under pair for one goal line; ``under`` is the exact complement."""

    threshold: float
    over: Decimal
    under: Decimal

    @model_validator(mode="after")
    def _complementary(self) -> "GoalsDistribution":
        if self.over + self.under != HUNDRED:
            raise ValueError(f"Over/Under {self.threshold} must sum to 100.0")
        return self

    @property
    def key(self) -> str:
        """Display key, e.g. ``25`` for the 2.5 line."""
        return str(self.threshold).replace(".", "")


class ExpectedGoals(_Frozen):
    """Expected goals; markets use ``total`` only, home/away are informational."""

    total: Decimal
    home: Decimal
    away: Decimal


class BttsDistribution(_Frozen):
    yes: Decimal
    no: Decimal
    home_scores: Decimal
    away_scores: Decimal

    @model_validator(mode="after")
    def _complementary(self) -> "BttsDistribution":
        if self.yes + self.no != HUNDRED:
            raise ValueError("BTTS yes/no must sum to 100.0")
        return self


class CleanSheetDistribution(_Frozen):
    home: Decimal
    away: Decimal


class HeadToHeadSummary(_Frozen):
    """Aggregated meetings as published with an estimate."""

    total_matches: int = 0
    home_wins: int = 0
    draws: int = 0
    away_wins: int = 0
    avg_total_goals: Decimal = Decimal("0.00")
    btts_rate: Decimal = Decimal("0.0")
    over_rates: Dict[str, Decimal] = Field(default_factory=dict)
    reliability: Reliability = Reliability.NONE


class BlendWeights(_Frozen):
    """H2H weight actually applied to each market (0 = pure form)."""

    outcome: float = 0.0
    goals: float = 0.0
    btts: float = 0.0

    @computed_field
    @property
    def is_blended(self) -> bool:
        return self.outcome > 0 or self.goals > 0 or self.btts > 0


class ProbabilityEstimate(_Frozen):
    """
    Complete, internally consistent estimate for one fixture.

    Created by ``OutcomeNormalizer``; all percentages have one decimal.
    """

    outcome: OutcomeDistribution
    goals: Tuple[GoalsDistribution, ...]
    expected_goals: ExpectedGoals
    btts: BttsDistribution
    clean_sheets: CleanSheetDistribution
    confidence: int = Field(..., ge=0, le=100)
    data_completeness: int = Field(40, ge=0, le=100)
    h2h: HeadToHeadSummary = Field(default_factory=HeadToHeadSummary)
    blend: BlendWeights = Field(default_factory=BlendWeights)
    is_default: bool = False

    def goals_for(self, threshold: float) -> GoalsDistribution:
        for line in self.goals:
            if line.threshold == threshold:
                return line
        raise KeyError(f"No goal line {threshold} in estimate")

    def over(self, threshold: float) -> Decimal:
        return self.goals_for(threshold).over

    def under(self, threshold: float) -> Decimal:
        return self.goals_for(threshold).under

    def to_display(self) -> Dict[str, Dict[str, str]]:
        """String-formatted markets for the presentation layer."""
        goals = {"expected_total": f"{self.expected_goals.total:.2f}"}
        for line in self.goals:
            goals[f"over_{line.key}"] = f"{line.over:.1f}"
            goals[f"under_{line.key}"] = f"{line.under:.1f}"
        return {
            "1X2": {
                "home": f"{self.outcome.home:.1f}",
                "draw": f"{self.outcome.draw:.1f}",
                "away": f"{self.outcome.away:.1f}",
                "confidence": str(self.confidence),
            },
            "goals": goals,
            "btts": {
                "btts_yes": f"{self.btts.yes:.1f}",
                "btts_no": f"{self.btts.no:.1f}",
                "home_score_prob": f"{self.btts.home_scores:.1f}",
                "away_score_prob": f"{self.btts.away_scores:.1f}",
            },
            "clean_sheets": {
                "home_clean_sheet": f"{self.clean_sheets.home:.1f}",
                "away_clean_sheet": f"{self.clean_sheets.away:.1f}",
            },
        }


class Suggestion(_Frozen):
    """
    Betting-style suggestion derived from an estimate.

    Holds no state of its own; recomputed from the estimate on demand.
    """

    market: SuggestionMarket
    claim: str
    reasoning: str = ""
    confidence: float = Field(..., ge=0, le=100)
    probability: Decimal
    tier: SuggestionTier = SuggestionTier.SECONDARY


class MatchAnalysis(_Frozen):
    """Estimate plus the suggestions derived from it."""

    estimate: ProbabilityEstimate
    suggestions: List[Suggestion]

    @computed_field
    @property
    def top_suggestion(self) -> Optional[Suggestion]:
        return self.suggestions[0] if self.suggestions else None
