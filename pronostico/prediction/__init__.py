"""Prediction facade: one call from statistics to a published estimate."""

from .engine import ProbabilityEngine, estimate, coerce_stats, coerce_h2h

__all__ = [
    "ProbabilityEngine",
    "estimate",
    "coerce_stats",
    "coerce_h2h",
]
