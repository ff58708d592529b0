"""
H2H Blending Policy
===================

Merges the form-based estimate with the head-to-head estimate, market by
market, weighted by how many meetings back the H2H numbers:

    w = min(cap, meetings / divisor)
    blended = form * (1 - w) + h2h * w

Goals and BTTS trust H2H more per meeting than 1X2 because they summarise
a single scalar rather than a 3-way split. Below ``min_records`` meetings
H2H is ignored entirely.
"""

import logging
from typing import Optional

from pronostico.config import BlendSettings
from pronostico.data.schemas import BlendWeights
from pronostico.features.builders.h2h import H2HStats

from ..base import Market, RawEstimate

logger = logging.getLogger(__name__)


def _mix(form: float, h2h: float, weight: float) -> float:
    if weight <= 0:
        return form
    return form * (1 - weight) + h2h * weight


class BlendingPolicy:
    """Reliability-gated, per-market blend of form and H2H."""

    def __init__(self, settings: Optional[BlendSettings] = None):
        self.settings = settings or BlendSettings()

    def is_active(self, h2h: Optional[H2HStats]) -> bool:
        """H2H counts only with a non-``none`` tier and enough meetings."""
        if h2h is None or not h2h.reliability.allows_blending:
            return False
        return h2h.total_matches >= self.settings.min_records

    def weight(self, market: Market, h2h: Optional[H2HStats]) -> float:
        if not self.is_active(h2h):
            return 0.0
        rule = {
            Market.MATCH_WINNER: self.settings.outcome,
            Market.OVER_UNDER: self.settings.goals,
            Market.BTTS: self.settings.btts,
        }[market]
        return rule.weight(h2h.total_matches)

    def weights(self, h2h: Optional[H2HStats]) -> BlendWeights:
        return BlendWeights(
            outcome=self.weight(Market.MATCH_WINNER, h2h),
            goals=self.weight(Market.OVER_UNDER, h2h),
            btts=self.weight(Market.BTTS, h2h),
        )

    def blend(self, form: RawEstimate, h2h: Optional[H2HStats]) -> RawEstimate:
        """
        Blend ``form`` with ``h2h``.

        Returns ``form`` itself when H2H is not allowed to contribute, so a
        fixture without usable history gets the pure form estimate.
        """
        weights = self.weights(h2h)
        if not weights.is_blended:
            return form

        logger.debug(
            f"Blending {h2h.total_matches} meetings: 1X2 w={weights.outcome:.3f} "
            f"goals w={weights.goals:.3f} btts w={weights.btts:.3f}"
        )

        overs = {
            line: _mix(value, h2h.over_rates[line] * 100, weights.goals)
            if line in h2h.over_rates else value
            for line, value in form.overs.items()
        }
        return form.with_values(
            home=_mix(form.home, h2h.home_win_rate * 100, weights.outcome),
            draw=_mix(form.draw, h2h.draw_rate * 100, weights.outcome),
            away=_mix(form.away, h2h.away_win_rate * 100, weights.outcome),
            overs=overs,
            expected_total=_mix(form.expected_total, h2h.avg_total_goals, weights.goals),
            btts_yes=_mix(form.btts_yes, h2h.btts_rate * 100, weights.btts),
        )
