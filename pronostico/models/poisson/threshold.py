"""
Poisson Threshold Engine
========================
Over/Under probabilities for a goal line from an expected-goals scalar.

Under is never computed on its own: it is always ``100 - Over``.
"""

import math
import logging
from typing import Dict, Iterable, Tuple

from pronostico.config import GOAL_THRESHOLDS

logger = logging.getLogger(__name__)

DEFAULT_LAMBDA = 2.5


def validate_threshold(threshold: float) -> float:
    """
    Goal lines must be non-negative half-integers (0.5, 1.5, ...).

    Raises:
        ValueError: for any other value. This is a caller bug, not bad data.
    """
    try:
        value = float(threshold)
    except (TypeError, ValueError):
        raise ValueError(f"Goal threshold must be a number, got {threshold!r}") from None
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"Goal threshold must be non-negative, got {threshold!r}")
    if (value - 0.5) != math.floor(value):
        raise ValueError(f"Goal threshold must be a half-integer line, got {threshold!r}")
    return value


def poisson_cdf(lam: float, k_max: int) -> float:
    """P(X <= k_max) for X ~ Poisson(lam), summed term by term."""
    term = math.exp(-lam)  # k = 0
    total = term
    for k in range(1, k_max + 1):
        term *= lam / k
        total += term
    return total


def poisson_over(lam: float, threshold: float) -> float:
    """
    P(total goals > threshold) as a percentage in [0, 100].

    Args:
        lam: Expected total goals. Values <= 0 (or NaN) use 2.5.
        threshold: Goal line, e.g. 2.5
    """
    line = validate_threshold(threshold)
    if lam is None or not math.isfinite(lam) or lam <= 0:
        logger.debug(f"Invalid lambda {lam!r}, using default {DEFAULT_LAMBDA}")
        lam = DEFAULT_LAMBDA

    cumulative = poisson_cdf(lam, int(math.floor(line)))
    over = (1.0 - cumulative) * 100.0
    return min(100.0, max(0.0, over))


def poisson_under(lam: float, threshold: float) -> float:
    """Complement of ``poisson_over``."""
    return 100.0 - poisson_over(lam, threshold)


class PoissonThresholdEngine:
    """
    Over/Under lines for a match total.

    Only ``over`` values are computed; consumers derive ``under``
    as the complement (see ``OutcomeNormalizer``).
    """

    def __init__(self, thresholds: Iterable[float] = GOAL_THRESHOLDS):
        self.thresholds: Tuple[float, ...] = tuple(
            sorted(validate_threshold(t) for t in thresholds)
        )

    def overs(self, lam: float) -> Dict[float, float]:
        """Over percentage per configured line."""
        return {t: poisson_over(lam, t) for t in self.thresholds}

    def over_under(self, lam: float) -> Dict[float, Tuple[float, float]]:
        """
        (over, under) per configured line.

        Returns:
            Dict mapping line to (over_pct, under_pct)
        """
        return {t: (over, 100.0 - over) for t, over in self.overs(lam).items()}
