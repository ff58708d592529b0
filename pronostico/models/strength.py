"""
Season-form strength model.

Turns a team's venue split into a dimensionless strength scalar and
compares two of them to get a raw 1X2 split.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from pronostico.config import StrengthWeights
from pronostico.data.schemas import TeamSeasonStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawOutcome:
    """Unrounded 1X2 percentages (sum to 100 up to float error)."""
    home: float
    draw: float
    away: float

    def as_tuple(self):
        return (self.home, self.draw, self.away)


class StrengthModel:
    """
    Relative strength from season form.

    strength = base + w1 * win_rate + w2 * (goal_ratio - 1) + w3 * ppg / 3

    where ``goal_ratio = (GF + 1) / (GA + 1)``. The weights need not sum
    to 1: the scalar is only ever compared against another team's.
    """

    def __init__(self, weights: Optional[StrengthWeights] = None):
        self.weights = weights or StrengthWeights()

    def strength(self, stats: Optional[TeamSeasonStats], is_home: bool) -> float:
        """Strength of ``stats`` on the given side (home split or away split)."""
        w = self.weights
        if stats is None:
            return w.neutral

        split = stats.split(is_home)
        if split.matches == 0:
            return w.neutral

        goal_ratio = (split.goals_for + 1) / (split.goals_against + 1)
        value = (
            w.base
            + split.win_rate * w.win_rate
            + (goal_ratio - 1) * w.goal_ratio
            + (split.points_per_game / 3) * w.points_per_game
        )
        return max(w.floor, value)

    def outcome(
        self,
        home_stats: Optional[TeamSeasonStats],
        away_stats: Optional[TeamSeasonStats],
    ) -> RawOutcome:
        """
        Raw 1X2 from the two strengths.

        Home strength gets the home-advantage multiplier, the draw gets
        a fixed mass, then everything is scaled to 100.
        """
        home_strength = self.strength(home_stats, is_home=True)
        away_strength = self.strength(away_stats, is_home=False)

        raw_home = home_strength * self.weights.home_advantage
        raw_away = away_strength
        raw_draw = self.weights.draw_base
        total = raw_home + raw_draw + raw_away

        logger.debug(
            f"Strengths home={home_strength:.3f} away={away_strength:.3f} "
            f"(raw total {total:.3f})"
        )

        return RawOutcome(
            home=raw_home / total * 100,
            draw=raw_draw / total * 100,
            away=raw_away / total * 100,
        )
