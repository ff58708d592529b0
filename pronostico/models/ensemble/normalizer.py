"""
Outcome Normalizer
==================

The only place where percentages are rounded. Everything published goes
through ``OutcomeNormalizer.normalize``:

1. 1X2 is rescaled proportionally to 100 and rounded to one decimal with
   the largest-remainder method, so the three values sum to exactly 100.0.
2. Each Over is rounded once; its Under is ``100.0 - over`` in Decimal.
   Over values are forced non-increasing across lines.
3. BTTS yes is rounded once; no is ``100.0 - yes``.
"""

import math
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, List, Optional, Sequence, Tuple

from pronostico.config import DefaultEstimate, GoalModelSettings
from pronostico.data.schemas import (
    BlendWeights,
    BttsDistribution,
    CleanSheetDistribution,
    ExpectedGoals,
    GoalsDistribution,
    HeadToHeadSummary,
    OutcomeDistribution,
    ProbabilityEstimate,
)
from pronostico.features.builders.h2h import H2HStats

from ..base import RawEstimate

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100.0")
ONE_DP = Decimal("0.1")
TWO_DP = Decimal("0.01")


def to_decimal(value: float, places: Decimal = ONE_DP) -> Decimal:
    """Round half-up to fixed point. Non-finite values become 0."""
    if value is None or not math.isfinite(value):
        return Decimal(0).quantize(places)
    try:
        return Decimal(repr(float(value))).quantize(places, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.warning(f"Cannot round {value!r} to {places}, using 0")
        return Decimal(0).quantize(places)


def to_percent(value: float) -> Decimal:
    """Percentage clamped to [0, 100], one decimal."""
    if value is None or not math.isfinite(value):
        value = 0.0
    return to_decimal(min(100.0, max(0.0, value)))


def largest_remainder(values: Sequence[float], total_tenths: int = 1000) -> List[Decimal]:
    """
    Round non-negative shares to tenths so they add up to exactly
    ``total_tenths / 10``.

    Units lost to flooring go to the entries with the largest remainders
    (ties to the earlier entry).
    """
    total = sum(values)
    units = [v / total * total_tenths for v in values]
    floors = [int(math.floor(u)) for u in units]
    missing = total_tenths - sum(floors)
    order = sorted(range(len(units)), key=lambda i: (-(units[i] - floors[i]), i))
    for i in order[:missing]:
        floors[i] += 1
    return [(Decimal(f) / 10).quantize(ONE_DP) for f in floors]


class OutcomeNormalizer:
    """Turns a blended ``RawEstimate`` into a published ``ProbabilityEstimate``."""

    def __init__(
        self,
        defaults: Optional[DefaultEstimate] = None,
        goal_settings: Optional[GoalModelSettings] = None,
    ):
        self.defaults = defaults or DefaultEstimate()
        self.goal_settings = goal_settings or GoalModelSettings()

    def outcome(self, home: float, draw: float, away: float) -> OutcomeDistribution:
        values = [home, draw, away]
        if not all(v is not None and math.isfinite(v) for v in values):
            logger.warning(f"Non-finite 1X2 {values}, using default split")
            values = [self.defaults.home, self.defaults.draw, self.defaults.away]
        values = [max(0.0, v) for v in values]
        peak = max(values)
        if peak > 0:
            values = [v / peak for v in values]
        if sum(values) <= 0:
            logger.warning("Empty 1X2 mass, using default split")
            values = [self.defaults.home, self.defaults.draw, self.defaults.away]

        h, d, a = largest_remainder(values)
        return OutcomeDistribution(home=h, draw=d, away=a)

    def goals(self, overs: Dict[float, float]) -> Tuple[GoalsDistribution, ...]:
        lines = []
        previous: Optional[Decimal] = None
        for threshold in sorted(overs):
            over = to_percent(overs[threshold])
            if previous is not None and over > previous:
                over = previous
            previous = over
            lines.append(GoalsDistribution(threshold=threshold, over=over, under=HUNDRED - over))
        return tuple(lines)

    def expected_goals(self, raw: RawEstimate) -> ExpectedGoals:
        s = self.goal_settings
        total = raw.expected_total
        if total is None or not math.isfinite(total) or total <= 0:
            total = s.default_total
        total = min(s.max_total, max(s.min_total, total))
        return ExpectedGoals(
            total=to_decimal(total, TWO_DP),
            home=to_decimal(self._side_goals(raw.expected_home), TWO_DP),
            away=to_decimal(self._side_goals(raw.expected_away), TWO_DP),
        )

    def _side_goals(self, value: float) -> float:
        """One side's expected goals, clamped to [0, max_total]."""
        if value is None or not math.isfinite(value):
            return 0.0
        return min(self.goal_settings.max_total, max(0.0, value))

    def btts(self, raw: RawEstimate) -> BttsDistribution:
        yes = to_percent(raw.btts_yes)
        return BttsDistribution(
            yes=yes,
            no=HUNDRED - yes,
            home_scores=to_percent(raw.home_scores),
            away_scores=to_percent(raw.away_scores),
        )

    @staticmethod
    def h2h_summary(h2h: Optional[H2HStats]) -> HeadToHeadSummary:
        if h2h is None or h2h.is_empty:
            return HeadToHeadSummary()
        return HeadToHeadSummary(
            total_matches=h2h.total_matches,
            home_wins=h2h.home_wins,
            draws=h2h.draws,
            away_wins=h2h.away_wins,
            avg_total_goals=to_decimal(h2h.avg_total_goals, TWO_DP),
            btts_rate=to_percent(h2h.btts_rate * 100),
            over_rates={str(t): to_percent(rate * 100) for t, rate in h2h.over_rates.items()},
            reliability=h2h.reliability,
        )

    def normalize(
        self,
        raw: RawEstimate,
        confidence: int,
        data_completeness: int = 40,
        h2h: Optional[H2HStats] = None,
        blend: Optional[BlendWeights] = None,
        is_default: bool = False,
    ) -> ProbabilityEstimate:
        """Round and validate every market of ``raw``."""
        return ProbabilityEstimate(
            outcome=self.outcome(raw.home, raw.draw, raw.away),
            goals=self.goals(raw.overs),
            expected_goals=self.expected_goals(raw),
            btts=self.btts(raw),
            clean_sheets=CleanSheetDistribution(
                home=to_percent(raw.home_clean_sheet),
                away=to_percent(raw.away_clean_sheet),
            ),
            confidence=int(min(100, max(0, confidence))),
            data_completeness=int(min(100, max(0, data_completeness))),
            h2h=self.h2h_summary(h2h),
            blend=blend or BlendWeights(),
            is_default=is_default,
        )


def complements_hold(estimate: ProbabilityEstimate) -> bool:
    """True when every published pair sums to exactly 100.0."""
    outcome = estimate.outcome
    return (
        all(line.over + line.under == HUNDRED for line in estimate.goals)
        and estimate.btts.yes + estimate.btts.no == HUNDRED
        and outcome.home + outcome.draw + outcome.away == HUNDRED
    )
