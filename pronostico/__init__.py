"""
Pronostico - Football Probability Estimation Engine

Deterministic 1X2, Over/Under and BTTS percentages from season
statistics and head-to-head history, plus threshold-based suggestions.
"""

__version__ = "1.0.0"

from .config import EngineConfig, get_config
from .prediction import ProbabilityEngine, estimate

__all__ = [
    "__version__",
    "EngineConfig",
    "get_config",
    "ProbabilityEngine",
    "estimate",
]
