"""
Shared model types
==================
Unrounded market values passed between the models, the blender and
the normalizer. All percentages are floats in [0, 100].
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict


class Market(Enum):
    """Markets the engine publishes."""
    MATCH_WINNER = "1x2"        # Home/Draw/Away
    OVER_UNDER = "over_under"   # Over/Under X.5 goals
    BTTS = "btts"               # Both Teams To Score


@dataclass(frozen=True)
class RawEstimate:
    """One fixture's markets before blending and rounding."""

    home: float
    draw: float
    away: float
    overs: Dict[float, float] = field(default_factory=dict)
    expected_total: float = 2.5
    expected_home: float = 0.0
    expected_away: float = 0.0
    btts_yes: float = 0.0
    home_scores: float = 0.0
    away_scores: float = 0.0
    home_clean_sheet: float = 0.0
    away_clean_sheet: float = 0.0

    def with_values(self, **changes) -> "RawEstimate":
        return replace(self, **changes)
