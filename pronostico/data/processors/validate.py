"""
Input validation processors.

Validates supplier statistics before they reach the models. Nothing here
raises: problems are collected on a ``ValidationResult`` and the engine
decides how to degrade.
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence
from dataclasses import dataclass, field
import logging

from ..schemas import TeamSeasonStats, HeadToHeadRecord, SplitStats

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of data validation."""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)
        self.is_valid = False

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def log(self, context: str) -> None:
        for msg in self.errors:
            logger.warning(f"{context}: {msg}")
        for msg in self.warnings:
            logger.debug(f"{context}: {msg}")


class StatsValidator:
    """
    Validates team season stats and H2H history.

    Detects:
    - W/D/L that don't add up to matches played
    - Home + away splits exceeding the overall record
    - Empty venue splits (the models fall back to neutral values)
    - Meetings dated in the future or not involving the fixture's teams
    """

    # Goals per match above this are almost certainly a data error
    MAX_GOALS_PER_MATCH = 10.0

    @classmethod
    def _check_split(cls, name: str, split: SplitStats, result: ValidationResult) -> None:
        if split.matches and not split.is_consistent:
            result.add_error(
                f"{name} W/D/L {split.wins}/{split.draws}/{split.losses} "
                f"does not add up to {split.matches} matches"
            )
        if split.goals_for_per_match > cls.MAX_GOALS_PER_MATCH:
            result.add_warning(f"{name} scores {split.goals_for_per_match:.1f} goals per match")
        if split.goals_against_per_match > cls.MAX_GOALS_PER_MATCH:
            result.add_warning(f"{name} concedes {split.goals_against_per_match:.1f} goals per match")

    @classmethod
    def validate_team(cls, stats: Optional[TeamSeasonStats], is_home: bool = True) -> ValidationResult:
        """Validate one team's season stats for the side it plays on."""
        result = ValidationResult()
        if stats is None:
            result.add_error("No season stats supplied")
            return result

        for name, split in (("overall", stats.overall), ("home", stats.home), ("away", stats.away)):
            cls._check_split(name, split, result)

        venue_total = stats.home.matches + stats.away.matches
        if stats.overall.matches and venue_total > stats.overall.matches:
            result.add_error(
                f"home+away matches ({venue_total}) exceed overall ({stats.overall.matches})"
            )

        side = "home" if is_home else "away"
        if stats.split(is_home).is_empty:
            result.add_warning(f"Empty {side} split, neutral defaults will be used")

        return result

    @classmethod
    def validate_h2h(
        cls,
        records: Sequence[HeadToHeadRecord],
        home_team: Optional[str] = None,
        away_team: Optional[str] = None,
    ) -> ValidationResult:
        """Validate a list of meetings."""
        result = ValidationResult()
        now = datetime.now(timezone.utc)
        teams = {t for t in (home_team, away_team) if t}

        for i, record in enumerate(records):
            if record.match_date is not None:
                played = record.match_date
                if played.tzinfo is None:
                    played = played.replace(tzinfo=timezone.utc)
                if played > now:
                    result.add_warning(f"Meeting #{i} is dated in the future ({played.date()})")
            if len(teams) == 2 and record.home_team and record.away_team:
                if {record.home_team, record.away_team} != teams:
                    result.add_error(
                        f"Meeting #{i} ({record.home_team} v {record.away_team}) "
                        f"is not between {home_team} and {away_team}"
                    )

        return result
