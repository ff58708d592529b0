"""Feature builders."""

from .h2h import H2HAnalyzer, H2HStats, NEUTRAL_AVG_GOALS

__all__ = ["H2HAnalyzer", "H2HStats", "NEUTRAL_AVG_GOALS"]
