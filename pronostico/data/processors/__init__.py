"""
Data processors package.

Exports input validation.
"""

from .validate import (
    ValidationResult,
    StatsValidator,
)


__all__ = [
    "ValidationResult",
    "StatsValidator",
]
