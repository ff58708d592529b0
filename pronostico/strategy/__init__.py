"""pronostico strategy module - suggestions derived from estimates."""

from .suggestions import SuggestionGenerator

__all__ = ["SuggestionGenerator"]
