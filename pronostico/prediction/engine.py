"""
Probability Engine.

Pure, synchronous estimation for one fixture:

    season stats -> strength / expected goals / Poisson lines -> form estimate
    H2H meetings -> H2H analyzer                              -> H2H estimate
    both -> blending policy -> outcome normalizer -> ProbabilityEstimate
    ProbabilityEstimate -> suggestion generator -> suggestions

Missing or malformed statistics never raise; they degrade to named
defaults and a warning. The only rejected input is an invalid goal line
in the configuration.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from pronostico.config import EngineConfig, get_config
from pronostico.data.processors import StatsValidator
from pronostico.data.schemas import (
    HeadToHeadRecord,
    MatchAnalysis,
    ProbabilityEstimate,
    Reliability,
    Suggestion,
    TeamSeasonStats,
    records_from_rows,
)
from pronostico.features.builders.h2h import H2HAnalyzer, H2HStats
from pronostico.models.base import RawEstimate
from pronostico.models.ensemble import BlendingPolicy, OutcomeNormalizer
from pronostico.models.expected_goals import ExpectedGoalsModel
from pronostico.models.poisson import PoissonThresholdEngine
from pronostico.models.strength import StrengthModel
from pronostico.strategy import SuggestionGenerator

logger = logging.getLogger(__name__)

StatsInput = Union[TeamSeasonStats, Mapping[str, Any], None]
H2HInput = Optional[Iterable[Union[HeadToHeadRecord, Mapping[str, Any]]]]


def coerce_stats(stats: StatsInput, side: str) -> Optional[TeamSeasonStats]:
    """Accept a schema, a flat supplier dict, or nothing."""
    if stats is None:
        logger.warning(f"No {side} stats supplied, using defaults")
        return None
    if isinstance(stats, TeamSeasonStats):
        return stats
    if isinstance(stats, Mapping):
        return TeamSeasonStats.from_flat(stats)
    logger.warning(f"Unusable {side} stats of type {type(stats).__name__}, using defaults")
    return None


def coerce_h2h(h2h: H2HInput) -> List[HeadToHeadRecord]:
    if not h2h:
        return []
    if isinstance(h2h, (str, bytes, Mapping)) or not isinstance(h2h, Iterable):
        logger.warning(f"Unusable H2H input of type {type(h2h).__name__}, ignoring history")
        return []
    records: List[HeadToHeadRecord] = []
    rows = []
    for item in h2h:
        if isinstance(item, HeadToHeadRecord):
            records.append(item)
        elif isinstance(item, Mapping):
            rows.append(item)
        else:
            logger.warning(f"Dropping H2H entry of type {type(item).__name__}")
    return records + records_from_rows(rows)


class ProbabilityEngine:
    """
    Deterministic statistical engine for 1X2, goal lines and BTTS.

    Usage:
        engine = ProbabilityEngine(EngineConfig.from_env())
        estimate = engine.estimate(home_stats, away_stats, h2h_records)
        suggestions = engine.suggest(estimate)

    Holds only immutable configuration; safe to share between threads.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        cfg = self.config
        self.strength_model = StrengthModel(cfg.strength)
        self.goals_model = ExpectedGoalsModel(cfg.goals)
        self.poisson = PoissonThresholdEngine(cfg.thresholds)
        self.h2h_analyzer = H2HAnalyzer(cfg.h2h_max_meetings, thresholds=self.poisson.thresholds)
        self.blender = BlendingPolicy(cfg.blend)
        self.normalizer = OutcomeNormalizer(cfg.defaults, cfg.goals)
        self.suggestions = SuggestionGenerator(cfg.suggestions)

    # ------------------------------------------------------------------
    # Form estimate
    # ------------------------------------------------------------------

    def default_estimate(self) -> RawEstimate:
        d = self.config.defaults
        goals = self.goals_model.default()
        return RawEstimate(
            home=d.home,
            draw=d.draw,
            away=d.away,
            overs=self.poisson.overs(goals.total),
            expected_total=goals.total,
            expected_home=goals.home,
            expected_away=goals.away,
            btts_yes=d.btts_yes,
            home_scores=d.home_scores,
            away_scores=d.away_scores,
            home_clean_sheet=self.config.goals.default_home_clean_sheet * 100,
            away_clean_sheet=self.config.goals.default_away_clean_sheet * 100,
        )

    def form_estimate(
        self,
        home_stats: Optional[TeamSeasonStats],
        away_stats: Optional[TeamSeasonStats],
    ) -> RawEstimate:
        """Unrounded estimate from season form alone."""
        outcome = self.strength_model.outcome(home_stats, away_stats)
        goals = self.goals_model.expected(home_stats, away_stats)
        home_scores = self.goals_model.scoring_probability(home_stats, is_home=True)
        away_scores = self.goals_model.scoring_probability(away_stats, is_home=False)

        return RawEstimate(
            home=outcome.home,
            draw=outcome.draw,
            away=outcome.away,
            overs=self.poisson.overs(goals.total),
            expected_total=goals.total,
            expected_home=goals.home,
            expected_away=goals.away,
            btts_yes=home_scores * away_scores * 100,
            home_scores=home_scores * 100,
            away_scores=away_scores * 100,
            home_clean_sheet=self.goals_model.clean_sheet_probability(home_stats, is_home=True) * 100,
            away_clean_sheet=self.goals_model.clean_sheet_probability(away_stats, is_home=False) * 100,
        )

    # ------------------------------------------------------------------
    # Scores
    # ------------------------------------------------------------------

    def confidence(
        self,
        home_stats: Optional[TeamSeasonStats],
        away_stats: Optional[TeamSeasonStats],
        h2h: H2HStats,
    ) -> int:
        c = self.config.confidence
        score = c.base
        for stats in (home_stats, away_stats):
            if stats is not None and stats.matches_played >= c.min_matches:
                score += c.per_team_bonus
        if h2h.reliability is Reliability.MEDIUM:
            score += c.h2h_medium_bonus
        elif h2h.reliability is Reliability.HIGH:
            score += c.h2h_high_bonus
        return min(c.cap, score)

    def data_completeness(
        self,
        home_stats: Optional[TeamSeasonStats],
        away_stats: Optional[TeamSeasonStats],
        h2h: H2HStats,
    ) -> int:
        c = self.config.completeness
        score = c.base
        for stats in (home_stats, away_stats):
            if stats is not None and stats.data_source:
                score += c.per_source_bonus
        if h2h.total_matches > c.h2h_some_above:
            score += c.h2h_some_bonus
        if h2h.total_matches > c.h2h_many_above:
            score += c.h2h_many_bonus
        return min(c.cap, score)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def estimate(
        self,
        home_stats: StatsInput,
        away_stats: StatsInput,
        h2h: H2HInput = None,
    ) -> ProbabilityEstimate:
        """Complete, normalized estimate for one fixture."""
        home = coerce_stats(home_stats, "home")
        away = coerce_stats(away_stats, "away")
        records = coerce_h2h(h2h)

        StatsValidator.validate_team(home, is_home=True).log("home stats")
        StatsValidator.validate_team(away, is_home=False).log("away stats")
        if records:
            StatsValidator.validate_h2h(
                records,
                home.team if home else None,
                away.team if away else None,
            ).log("h2h")

        h2h_stats = self.h2h_analyzer.analyze(records, home_team=home.team if home else None)

        home_empty = home is None or home.home.is_empty
        away_empty = away is None or away.away.is_empty
        is_default = home_empty and away_empty
        if is_default:
            logger.warning("No usable form for either team, publishing default estimate")
            raw = self.default_estimate()
        else:
            raw = self.form_estimate(home, away)

        blended = self.blender.blend(raw, h2h_stats)
        confidence = self.confidence(home, away, h2h_stats)
        if is_default:
            confidence = min(confidence, self.config.defaults.confidence)

        return self.normalizer.normalize(
            blended,
            confidence=confidence,
            data_completeness=self.data_completeness(home, away, h2h_stats),
            h2h=h2h_stats,
            blend=self.blender.weights(h2h_stats),
            is_default=is_default,
        )

    def suggest(self, estimate: ProbabilityEstimate) -> List[Suggestion]:
        return self.suggestions.generate(estimate)

    def analyze(
        self,
        home_stats: StatsInput,
        away_stats: StatsInput,
        h2h: H2HInput = None,
    ) -> MatchAnalysis:
        """Estimate plus suggestions."""
        result = self.estimate(home_stats, away_stats, h2h)
        return MatchAnalysis(estimate=result, suggestions=self.suggest(result))


def estimate(
    home_stats: StatsInput,
    away_stats: StatsInput,
    h2h: H2HInput = None,
    config: Optional[EngineConfig] = None,
) -> ProbabilityEstimate:
    """One-shot estimate with the process-wide (or given) configuration."""
    return ProbabilityEngine(config or get_config()).estimate(home_stats, away_stats, h2h)
