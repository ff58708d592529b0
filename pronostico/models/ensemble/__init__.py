"""Blending and normalization of the form and H2H estimates."""

from .blender import BlendingPolicy
from .normalizer import OutcomeNormalizer, largest_remainder, to_decimal, to_percent, complements_hold

__all__ = [
    "BlendingPolicy",
    "OutcomeNormalizer",
    "largest_remainder",
    "to_decimal",
    "to_percent",
    "complements_hold",
]
