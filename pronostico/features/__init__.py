"""pronostico features - statistics derived from raw inputs."""

from .builders import H2HAnalyzer, H2HStats

__all__ = ["H2HAnalyzer", "H2HStats"]
