"""
Suggestion Generator
====================

Turns a normalized estimate into ranked, threshold-gated suggestions:
1. 1X2: home, else away, else draw
2. Goals: Over, else Under, on the configured line
3. BTTS: yes, else no

At most one suggestion per market. Confidence is
``min(cap, base + probability)``. When nothing clears its gate a single
"balanced match" suggestion is returned, so the list is never empty.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from pronostico.config import SuggestionRule, SuggestionSettings
from pronostico.data.schemas import (
    ProbabilityEstimate,
    Suggestion,
    SuggestionMarket,
    SuggestionTier,
)

logger = logging.getLogger(__name__)


def _tier(rule: SuggestionRule, probability: float, strong: SuggestionTier) -> SuggestionTier:
    if rule.strong_above is not None and probability > rule.strong_above:
        return strong
    return SuggestionTier.SECONDARY


class SuggestionGenerator:
    """Pure function of a ``ProbabilityEstimate``; holds only its rules."""

    def __init__(self, settings: Optional[SuggestionSettings] = None):
        self.settings = settings or SuggestionSettings()

    def _make(
        self,
        market: SuggestionMarket,
        rule: SuggestionRule,
        probability: Decimal,
        claim: str,
        reasoning: str,
        strong: SuggestionTier = SuggestionTier.PRIMARY,
    ) -> Suggestion:
        value = float(probability)
        return Suggestion(
            market=market,
            claim=claim,
            reasoning=reasoning,
            confidence=rule.confidence(value),
            probability=probability,
            tier=_tier(rule, value, strong),
        )

    def outcome_suggestion(self, estimate: ProbabilityEstimate) -> Optional[Suggestion]:
        s = self.settings
        home, draw, away = estimate.outcome.home, estimate.outcome.draw, estimate.outcome.away

        if s.home.passes(float(home)):
            return self._make(
                SuggestionMarket.OUTCOME, s.home, home,
                f"Home win likely ({home}%)",
                f"The home side wins {home}% of the time on current form",
            )
        if s.away.passes(float(away)):
            return self._make(
                SuggestionMarket.OUTCOME, s.away, away,
                f"Away win worth a look ({away}%)",
                f"The visitors show a {away}% chance of winning",
            )
        if s.draw.passes(float(draw)):
            return self._make(
                SuggestionMarket.OUTCOME, s.draw, draw,
                f"Draw possible ({draw}%)",
                "The two sides are closely matched",
            )
        return None

    def goals_suggestion(self, estimate: ProbabilityEstimate) -> Optional[Suggestion]:
        s = self.settings
        try:
            line = estimate.goals_for(s.goals_line)
        except KeyError:
            logger.warning(f"Estimate has no {s.goals_line} line, skipping goals suggestion")
            return None
        expected = estimate.expected_goals.total

        if s.over.passes(float(line.over)):
            return self._make(
                SuggestionMarket.GOALS, s.over, line.over,
                f"Over {line.threshold} goals likely ({line.over}%)",
                f"Expected goals {expected}: both attacks are productive",
                strong=SuggestionTier.VALUE,
            )
        if s.under.passes(float(line.under)):
            return self._make(
                SuggestionMarket.GOALS, s.under, line.under,
                f"Under {line.threshold} goals favoured ({line.under}%)",
                f"Solid defences and low expected goals ({expected})",
                strong=SuggestionTier.VALUE,
            )
        return None

    def btts_suggestion(self, estimate: ProbabilityEstimate) -> Optional[Suggestion]:
        s = self.settings
        yes, no = estimate.btts.yes, estimate.btts.no

        if s.btts_yes.passes(float(yes)):
            return self._make(
                SuggestionMarket.BTTS, s.btts_yes, yes,
                f"Both teams to score very likely ({yes}%)",
                "Both sides score regularly",
                strong=SuggestionTier.VALUE,
            )
        if s.btts_no.passes(float(no)):
            return self._make(
                SuggestionMarket.BTTS, s.btts_no, no,
                f"Both teams to score unlikely ({no}%)",
                "At least one side struggles to score",
                strong=SuggestionTier.VALUE,
            )
        return None

    def balanced(self, estimate: ProbabilityEstimate) -> Suggestion:
        outcome = estimate.outcome
        return Suggestion(
            market=SuggestionMarket.GENERAL,
            claim="Balanced match",
            reasoning="The numbers point to an evenly matched game",
            confidence=self.settings.balanced_confidence,
            probability=max(outcome.home, outcome.draw, outcome.away),
            tier=SuggestionTier.INFO,
        )

    def generate(self, estimate: ProbabilityEstimate) -> List[Suggestion]:
        """Ranked suggestions, highest confidence first; never empty."""
        suggestions = [
            s for s in (
                self.outcome_suggestion(estimate),
                self.goals_suggestion(estimate),
                self.btts_suggestion(estimate),
            )
            if s is not None
        ]
        if not suggestions:
            suggestions.append(self.balanced(estimate))

        suggestions.sort(key=lambda s: s.confidence, reverse=True)
        return suggestions[: self.settings.max_suggestions]
