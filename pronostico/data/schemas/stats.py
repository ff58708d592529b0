"""
Input schemas: team season form and head-to-head meetings.

Pydantic models with:
- Non-negative count validation
- Computed, zero-guarded rates
- A sanitizing constructor for loosely-typed supplier payloads
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

logger = logging.getLogger(__name__)

H2H_THRESHOLDS = (0.5, 1.5, 2.5, 3.5)

# Upper bound for any season count; larger values are supplier errors
MAX_COUNT = 10_000


class Outcome(str, Enum):
    """Match outcome types."""
    HOME = "home"
    DRAW = "draw"
    AWAY = "away"


def _number(value: Any) -> Optional[float]:
    """Parse a supplier value; None unless it is a finite number in [0, MAX_COUNT]."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number) or number < 0 or number > MAX_COUNT:
        return None
    return number


def _count(value: Any) -> int:
    """Coerce a supplier value to a non-negative int (0 when unusable)."""
    number = _number(value)
    return int(number) if number is not None else 0


def _score(value: Any) -> Optional[int]:
    """Goals in one meeting; None unless a whole, non-negative number."""
    number = _number(value)
    if number is None or number != int(number):
        return None
    return int(number)


class SplitStats(BaseModel):
    """
    Record for one split of a season (overall, home or away).

    Every rate is zero-guarded: an empty split reports 0.0.
    """

    model_config = ConfigDict(frozen=True)

    matches: int = Field(0, ge=0, le=MAX_COUNT)
    wins: int = Field(0, ge=0, le=MAX_COUNT)
    draws: int = Field(0, ge=0, le=MAX_COUNT)
    losses: int = Field(0, ge=0, le=MAX_COUNT)
    goals_for: int = Field(0, ge=0, le=MAX_COUNT)
    goals_against: int = Field(0, ge=0, le=MAX_COUNT)

    @computed_field
    @property
    def is_empty(self) -> bool:
        return self.matches == 0

    @computed_field
    @property
    def is_consistent(self) -> bool:
        """W + D + L adds up to matches played."""
        return self.wins + self.draws + self.losses == self.matches

    @computed_field
    @property
    def points(self) -> int:
        return self.wins * 3 + self.draws

    @computed_field
    @property
    def win_rate(self) -> float:
        if self.matches == 0:
            return 0.0
        return self.wins / self.matches

    @computed_field
    @property
    def points_per_game(self) -> float:
        if self.matches == 0:
            return 0.0
        return self.points / self.matches

    @computed_field
    @property
    def goals_for_per_match(self) -> float:
        if self.matches == 0:
            return 0.0
        return self.goals_for / self.matches

    @computed_field
    @property
    def goals_against_per_match(self) -> float:
        if self.matches == 0:
            return 0.0
        return self.goals_against / self.matches

    @classmethod
    def from_counts(cls, **counts: Any) -> "SplitStats":
        """Build a split from raw values, sanitizing each one.

        When ``matches`` is missing but W/D/L are known, it is taken as W+D+L.
        """
        values = {name: _count(counts.get(name)) for name in cls.model_fields}
        played = values["wins"] + values["draws"] + values["losses"]
        if values["matches"] == 0 and played > 0:
            values["matches"] = min(played, MAX_COUNT)
        return cls(**values)


class TeamSeasonStats(BaseModel):
    """
    Season form for one team in one competition.

    Immutable snapshot supplied by the caller; the engine never mutates it.
    """

    model_config = ConfigDict(frozen=True)

    team: Optional[str] = None
    season: Optional[str] = None
    competition: Optional[str] = None
    data_source: Optional[str] = None

    overall: SplitStats = Field(default_factory=SplitStats)
    home: SplitStats = Field(default_factory=SplitStats)
    away: SplitStats = Field(default_factory=SplitStats)

    @computed_field
    @property
    def matches_played(self) -> int:
        if self.overall.matches:
            return self.overall.matches
        return self.home.matches + self.away.matches

    @computed_field
    @property
    def is_empty(self) -> bool:
        return self.matches_played == 0

    def split(self, is_home: bool) -> SplitStats:
        """Venue split matching the side the team plays this fixture on."""
        return self.home if is_home else self.away

    @classmethod
    def empty(cls, team: Optional[str] = None) -> "TeamSeasonStats":
        return cls(team=team)

    @classmethod
    def from_flat(cls, data: Optional[Mapping[str, Any]]) -> "TeamSeasonStats":
        """
        Build from the flat supplier shape.

        Accepts keys like ``matches_played``, ``wins``, ``goals_for``,
        ``home_matches``, ``home_wins``, ``away_goals_against``.
        Missing, null, negative or non-numeric values become 0.
        """
        if not data:
            return cls()

        def split(prefix: str) -> SplitStats:
            return SplitStats.from_counts(
                matches=data.get(f"{prefix}matches") if prefix else data.get("matches_played"),
                wins=data.get(f"{prefix}wins"),
                draws=data.get(f"{prefix}draws"),
                losses=data.get(f"{prefix}losses"),
                goals_for=data.get(f"{prefix}goals_for"),
                goals_against=data.get(f"{prefix}goals_against"),
            )

        def text(key: str) -> Optional[str]:
            value = data.get(key)
            return str(value) if value not in (None, "") else None

        return cls(
            team=text("team") or text("team_name"),
            season=text("season"),
            competition=text("competition"),
            data_source=text("data_source") or text("dataSource"),
            overall=split(""),
            home=split("home_"),
            away=split("away_"),
        )


class HeadToHeadRecord(BaseModel):
    """
    One historical meeting between the two teams.

    ``home_team``/``away_team`` say which side hosted this meeting.
    """

    model_config = ConfigDict(frozen=True)

    match_date: Optional[datetime] = None
    home_team: Optional[str] = None
    away_team: Optional[str] = None
    home_goals: int = Field(..., ge=0, le=MAX_COUNT)
    away_goals: int = Field(..., ge=0, le=MAX_COUNT)
    competition: Optional[str] = None

    @computed_field
    @property
    def total_goals(self) -> int:
        return self.home_goals + self.away_goals

    @computed_field
    @property
    def result(self) -> Outcome:
        if self.home_goals > self.away_goals:
            return Outcome.HOME
        if self.home_goals < self.away_goals:
            return Outcome.AWAY
        return Outcome.DRAW

    @computed_field
    @property
    def is_btts(self) -> bool:
        return self.home_goals > 0 and self.away_goals > 0

    @computed_field
    @property
    def overs(self) -> Dict[str, bool]:
        """Over flags for the fixed threshold set, keyed like ``"2.5"``."""
        return {str(t): self.over(t) for t in H2H_THRESHOLDS}

    def over(self, threshold: float) -> bool:
        return self.total_goals > threshold

    def involves(self, team: str) -> bool:
        return team in (self.home_team, self.away_team)

    def result_for(self, team: Optional[str]) -> Outcome:
        """
        Result from ``team``'s point of view: HOME means ``team`` won.

        Falls back to the venue result when ``team`` did not play or is unknown.
        """
        if not team or not self.involves(team) or team == self.home_team:
            return self.result
        if self.result is Outcome.HOME:
            return Outcome.AWAY
        if self.result is Outcome.AWAY:
            return Outcome.HOME
        return Outcome.DRAW

    @classmethod
    def from_flat(cls, data: Mapping[str, Any]) -> Optional["HeadToHeadRecord"]:
        """Build from a supplier row; returns None when the score is unusable."""
        home_goals = _score(data.get("home_goals"))
        away_goals = _score(data.get("away_goals"))
        if home_goals is None or away_goals is None:
            return None
        match_date = data.get("match_date")
        if isinstance(match_date, str):
            try:
                match_date = datetime.fromisoformat(match_date.replace("Z", "+00:00"))
            except ValueError:
                match_date = None
        elif not isinstance(match_date, datetime):
            match_date = None
        home_team = data.get("home_team", data.get("home_team_id"))
        away_team = data.get("away_team", data.get("away_team_id"))
        return cls(
            match_date=match_date,
            home_team=str(home_team) if home_team is not None else None,
            away_team=str(away_team) if away_team is not None else None,
            home_goals=home_goals,
            away_goals=away_goals,
            competition=str(data["competition"]) if data.get("competition") else None,
        )


def records_from_rows(rows: Optional[Iterable[Mapping[str, Any]]]) -> List[HeadToHeadRecord]:
    """Parse supplier rows, dropping the ones without a usable score."""
    records = []
    for row in rows or []:
        record = HeadToHeadRecord.from_flat(row)
        if record is None:
            logger.warning(f"Dropping H2H row without a final score: {dict(row)}")
            continue
        records.append(record)
    return records


def sort_recent_first(records: Iterable[HeadToHeadRecord]) -> List[HeadToHeadRecord]:
    """Most recent meeting first; undated meetings go last, in input order."""
    return sorted(
        records,
        key=lambda r: (r.match_date is not None, r.match_date.timestamp() if r.match_date else 0.0),
        reverse=True,
    )


def last_n(records: Iterable[HeadToHeadRecord], n: int) -> List[HeadToHeadRecord]:
    """The ``n`` most recent meetings."""
    if n <= 0:
        return []
    return sort_recent_first(records)[:n]
