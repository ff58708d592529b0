"""
Head-to-head (H2H) analyzer.

Computes rate statistics from historical meetings between two teams.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from pronostico.data.schemas import (
    H2H_THRESHOLDS,
    HeadToHeadRecord,
    Outcome,
    Reliability,
    last_n,
)

logger = logging.getLogger(__name__)

# Average goals reported when there are no meetings
NEUTRAL_AVG_GOALS = 2.5


@dataclass(frozen=True)
class H2HStats:
    """Aggregated meetings. Rates are fractions in [0, 1]."""
    total_matches: int = 0
    home_wins: int = 0
    draws: int = 0
    away_wins: int = 0
    avg_total_goals: float = NEUTRAL_AVG_GOALS
    btts_rate: float = 0.0
    over_rates: Dict[float, float] = field(default_factory=dict)
    reliability: Reliability = Reliability.NONE

    @property
    def home_win_rate(self) -> float:
        return self.home_wins / self.total_matches if self.total_matches else 0.0

    @property
    def draw_rate(self) -> float:
        return self.draws / self.total_matches if self.total_matches else 0.0

    @property
    def away_win_rate(self) -> float:
        return self.away_wins / self.total_matches if self.total_matches else 0.0

    @property
    def over_25_rate(self) -> float:
        return self.over_rates.get(2.5, 0.0)

    @property
    def is_empty(self) -> bool:
        return self.total_matches == 0


class H2HAnalyzer:
    """
    Head-to-head aggregator.

    Features:
    - Historical record (home wins, draws, away wins)
    - Average total goals in meetings
    - BTTS and Over rates for the fixed goal lines
    - Reliability tier from the sample size

    Wins are counted from the perspective of ``home_team`` when it is given
    and the meeting names it; otherwise by venue.
    """

    def __init__(
        self,
        max_meetings: Optional[int] = None,
        thresholds: Sequence[float] = H2H_THRESHOLDS,
    ):
        self.max_meetings = max_meetings
        self.thresholds = tuple(thresholds)

    def _select(self, records: Optional[Sequence[HeadToHeadRecord]]) -> List[HeadToHeadRecord]:
        meetings = list(records or [])
        if self.max_meetings and len(meetings) > self.max_meetings:
            meetings = last_n(meetings, self.max_meetings)
        return meetings

    def analyze(
        self,
        records: Optional[Sequence[HeadToHeadRecord]],
        home_team: Optional[str] = None,
    ) -> H2HStats:
        """Calculate H2H statistics."""
        meetings = self._select(records)
        total = len(meetings)
        if total == 0:
            return H2HStats(over_rates={t: 0.0 for t in self.thresholds})

        results = [m.result_for(home_team) for m in meetings]
        goals = np.fromiter((m.total_goals for m in meetings), dtype=float, count=total)
        btts = np.fromiter((m.is_btts for m in meetings), dtype=bool, count=total)

        stats = H2HStats(
            total_matches=total,
            home_wins=results.count(Outcome.HOME),
            draws=results.count(Outcome.DRAW),
            away_wins=results.count(Outcome.AWAY),
            avg_total_goals=float(goals.mean()),
            btts_rate=float(btts.mean()),
            over_rates={t: float((goals > t).mean()) for t in self.thresholds},
            reliability=Reliability.from_count(total),
        )
        logger.debug(
            f"H2H {total} meetings: {stats.home_wins}-{stats.draws}-{stats.away_wins}, "
            f"avg goals {stats.avg_total_goals:.2f}, reliability {stats.reliability.value}"
        )
        return stats

    def get_features(
        self,
        records: Optional[Sequence[HeadToHeadRecord]],
        home_team: Optional[str] = None,
    ) -> Dict[str, float]:
        """Flat H2H features for a fixture."""
        h2h = self.analyze(records, home_team)

        return {
            "h2h_matches": h2h.total_matches,
            "h2h_home_wins": h2h.home_wins,
            "h2h_draws": h2h.draws,
            "h2h_away_wins": h2h.away_wins,
            "h2h_home_win_rate": h2h.home_win_rate,
            "h2h_draw_rate": h2h.draw_rate,
            "h2h_away_win_rate": h2h.away_win_rate,
            "h2h_avg_goals": h2h.avg_total_goals,
            "h2h_btts_rate": h2h.btts_rate,
            "h2h_over_25_rate": h2h.over_25_rate,
            "h2h_home_advantage": (h2h.home_wins - h2h.away_wins) / max(h2h.total_matches, 1),
        }
