"""
Configuration management for pronostico.

Every coefficient the engine uses lives here as a named constant and is
injected into ``ProbabilityEngine`` once, at startup. Environment variables
(optionally from a ``.env`` file) override the defaults.
Logging is configured with rotation to prevent unbounded log growth.
"""

import os
import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Dict
from dataclasses import dataclass, field, asdict
from dotenv import load_dotenv

# Load .env file
load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent.parent
LOG_DIR = PROJECT_ROOT / "logs"

ENV_PREFIX = "PRONOSTICO_"

# Fixed goal lines published for every estimate
GOAL_THRESHOLDS = (0.5, 1.5, 2.5, 3.5)


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    max_bytes: int = 5 * 1024 * 1024,  # 5 MB per file
    backup_count: int = 3,
) -> None:
    """Configure logging with console output AND rotating file handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for log files (defaults to PROJECT_ROOT/logs)
        max_bytes: Max size per log file before rotation (default 5MB)
        backup_count: Number of rotated backup files to keep
    """
    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers to avoid duplicates on reload
    root.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / "pronostico.log",
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class StrengthWeights:
    """Coefficients of the season-form strength scalar."""
    win_rate: float = 0.40
    goal_ratio: float = 0.25
    points_per_game: float = 0.20
    base: float = 0.15
    neutral: float = 0.4  # Strength of a team with an empty split
    floor: float = 0.05
    home_advantage: float = 1.15
    draw_base: float = 0.28  # Raw draw mass before normalization


@dataclass(frozen=True)
class GoalModelSettings:
    """Expected-goals clamps and fallbacks."""
    default_total: float = 2.5
    min_total: float = 1.0
    max_total: float = 5.0
    default_home_share: float = 0.57
    min_scoring_rate: float = 0.5
    default_scoring_prob: float = 0.76
    default_home_clean_sheet: float = 0.28
    default_away_clean_sheet: float = 0.32


@dataclass(frozen=True)
class MarketBlend:
    """H2H blend weight for one market: w = min(cap, records / divisor)."""
    cap: float
    divisor: float

    def weight(self, records: int) -> float:
        if records <= 0 or self.divisor <= 0:
            return 0.0
        return min(self.cap, records / self.divisor)


@dataclass(frozen=True)
class BlendSettings:
    min_records: int = 5
    outcome: MarketBlend = MarketBlend(cap=0.40, divisor=25)
    goals: MarketBlend = MarketBlend(cap=0.60, divisor=15)
    btts: MarketBlend = MarketBlend(cap=0.50, divisor=20)


@dataclass(frozen=True)
class SuggestionRule:
    """Gate and confidence for one suggestion: min(cap, base + probability)."""
    threshold: float
    base: float
    cap: float
    strong_above: Optional[float] = None

    def passes(self, probability: float) -> bool:
        return probability > self.threshold

    def confidence(self, probability: float) -> float:
        return min(self.cap, self.base + probability)


@dataclass(frozen=True)
class SuggestionSettings:
    home: SuggestionRule = SuggestionRule(threshold=50, base=40, cap=90, strong_above=60)
    away: SuggestionRule = SuggestionRule(threshold=45, base=35, cap=90, strong_above=55)
    draw: SuggestionRule = SuggestionRule(threshold=30, base=30, cap=80)
    over: SuggestionRule = SuggestionRule(threshold=60, base=30, cap=85, strong_above=70)
    under: SuggestionRule = SuggestionRule(threshold=60, base=30, cap=85, strong_above=70)
    btts_yes: SuggestionRule = SuggestionRule(threshold=65, base=20, cap=80, strong_above=75)
    btts_no: SuggestionRule = SuggestionRule(threshold=65, base=20, cap=80, strong_above=75)
    goals_line: float = 2.5
    balanced_confidence: float = 60
    max_suggestions: int = 5


@dataclass(frozen=True)
class DefaultEstimate:
    """Published when neither team has usable form data."""
    home: float = 42.0
    draw: float = 28.0
    away: float = 30.0
    btts_yes: float = 58.0
    home_scores: float = 75.0
    away_scores: float = 68.0
    expected_total: float = 2.5
    confidence: int = 30


@dataclass(frozen=True)
class ConfidenceSettings:
    base: int = 50
    per_team_bonus: int = 15
    min_matches: int = 5
    h2h_medium_bonus: int = 5
    h2h_high_bonus: int = 10
    cap: int = 95


@dataclass(frozen=True)
class CompletenessSettings:
    """How much of the possible input was supplied, as a 0-100 score."""
    base: int = 40
    per_source_bonus: int = 20  # Team stats tagged with a data source
    h2h_some_above: int = 3
    h2h_some_bonus: int = 15
    h2h_many_above: int = 6
    h2h_many_bonus: int = 5
    cap: int = 100


@dataclass(frozen=True)
class EngineConfig:
    """Engine configuration, built once and passed to ``ProbabilityEngine``."""

    strength: StrengthWeights = field(default_factory=StrengthWeights)
    goals: GoalModelSettings = field(default_factory=GoalModelSettings)
    blend: BlendSettings = field(default_factory=BlendSettings)
    suggestions: SuggestionSettings = field(default_factory=SuggestionSettings)
    defaults: DefaultEstimate = field(default_factory=DefaultEstimate)
    confidence: ConfidenceSettings = field(default_factory=ConfidenceSettings)
    completeness: CompletenessSettings = field(default_factory=CompletenessSettings)
    thresholds: tuple = GOAL_THRESHOLDS
    h2h_max_meetings: Optional[int] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """
        Build a config, letting PRONOSTICO_* variables override defaults.

        Only the blend weights, the four strength weights, home advantage,
        H2H truncation and log level are read from the environment. The
        remaining constants (neutral strength, strength floor, draw mass,
        goal clamps, suggestion rules, confidence and completeness scores)
        keep their defaults here; pass an explicit ``EngineConfig`` to
        change them.
        """
        blend = BlendSettings(
            min_records=_env_int("BLEND_MIN_RECORDS", 5),
            outcome=MarketBlend(
                cap=_env_float("BLEND_1X2_CAP", 0.40),
                divisor=_env_float("BLEND_1X2_DIVISOR", 25),
            ),
            goals=MarketBlend(
                cap=_env_float("BLEND_GOALS_CAP", 0.60),
                divisor=_env_float("BLEND_GOALS_DIVISOR", 15),
            ),
            btts=MarketBlend(
                cap=_env_float("BLEND_BTTS_CAP", 0.50),
                divisor=_env_float("BLEND_BTTS_DIVISOR", 20),
            ),
        )
        strength = StrengthWeights(
            win_rate=_env_float("STRENGTH_WIN_RATE", 0.40),
            goal_ratio=_env_float("STRENGTH_GOAL_RATIO", 0.25),
            points_per_game=_env_float("STRENGTH_PPG", 0.20),
            base=_env_float("STRENGTH_BASE", 0.15),
            home_advantage=_env_float("HOME_ADVANTAGE", 1.15),
        )
        max_meetings = _env_int("H2H_MAX_MEETINGS", 0)
        return cls(
            strength=strength,
            blend=blend,
            h2h_max_meetings=max_meetings or None,
            log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", "INFO"),
        )

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


# Global config instance
_config: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Get or create global config instance."""
    global _config
    if _config is None:
        _config = EngineConfig.from_env()
    return _config


def reload_config() -> EngineConfig:
    """Force reload configuration."""
    global _config
    load_dotenv(override=True)
    _config = EngineConfig.from_env()
    return _config
