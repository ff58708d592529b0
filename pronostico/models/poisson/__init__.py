"""Poisson subpackage for pronostico models."""

from .threshold import (
    PoissonThresholdEngine,
    poisson_over,
    poisson_under,
    poisson_cdf,
    validate_threshold,
    DEFAULT_LAMBDA,
)

__all__ = [
    "PoissonThresholdEngine",
    "poisson_over",
    "poisson_under",
    "poisson_cdf",
    "validate_threshold",
    "DEFAULT_LAMBDA",
]
