"""
Expected-goals model.

Combines attack and defence rates of the two sides into a match-total
goal expectation, plus per-team scoring and clean-sheet probabilities
used by the BTTS market.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from scipy.stats import poisson

from pronostico.config import GoalModelSettings
from pronostico.data.schemas import TeamSeasonStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalExpectation:
    """Expected goals; ``total`` drives every goal-line market."""
    total: float
    home: float
    away: float
    is_default: bool = False


class ExpectedGoalsModel:
    """
    Expected goals from venue splits.

        home_xg = (home attack at home + away defence away) / 2
        away_xg = (away attack away + home defence at home) / 2

    The total is clamped to [min_total, max_total] so the Poisson tails
    never degenerate.
    """

    def __init__(self, settings: Optional[GoalModelSettings] = None):
        self.settings = settings or GoalModelSettings()

    def default(self) -> GoalExpectation:
        s = self.settings
        return GoalExpectation(
            total=s.default_total,
            home=s.default_total * s.default_home_share,
            away=s.default_total * (1 - s.default_home_share),
            is_default=True,
        )

    def expected(
        self,
        home_stats: Optional[TeamSeasonStats],
        away_stats: Optional[TeamSeasonStats],
    ) -> GoalExpectation:
        if home_stats is None or away_stats is None:
            return self.default()

        home = home_stats.home
        away = away_stats.away
        if home.matches == 0 or away.matches == 0:
            logger.debug("Empty venue split, using default expected goals")
            return self.default()

        home_xg = (home.goals_for_per_match + away.goals_against_per_match) / 2
        away_xg = (away.goals_for_per_match + home.goals_against_per_match) / 2
        raw_total = home_xg + away_xg
        total = min(self.settings.max_total, max(self.settings.min_total, raw_total))
        if total != raw_total:
            logger.debug(f"Expected goals {raw_total:.2f} clamped to {total:.2f}")

        return GoalExpectation(total=total, home=home_xg, away=away_xg)

    def scoring_probability(self, stats: Optional[TeamSeasonStats], is_home: bool) -> float:
        """P(team scores at least once) with rate max(min_rate, GF per match)."""
        if stats is None or stats.split(is_home).matches == 0:
            return self.settings.default_scoring_prob
        rate = max(self.settings.min_scoring_rate, stats.split(is_home).goals_for_per_match)
        return float(poisson.sf(0, rate))

    def clean_sheet_probability(self, stats: Optional[TeamSeasonStats], is_home: bool) -> float:
        """P(team concedes nothing) with rate max(min_rate, GA per match)."""
        if stats is None or stats.split(is_home).matches == 0:
            if is_home:
                return self.settings.default_home_clean_sheet
            return self.settings.default_away_clean_sheet
        rate = max(self.settings.min_scoring_rate, stats.split(is_home).goals_against_per_match)
        return float(poisson.pmf(0, rate))

    def btts_yes(
        self,
        home_stats: Optional[TeamSeasonStats],
        away_stats: Optional[TeamSeasonStats],
    ) -> float:
        """Form-based BTTS yes percentage."""
        home_scores = self.scoring_probability(home_stats, is_home=True)
        away_scores = self.scoring_probability(away_stats, is_home=False)
        return home_scores * away_scores * 100
