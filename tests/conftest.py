"""
Shared fixtures for the probability engine tests.
"""

from datetime import datetime

import pytest

from pronostico.config import EngineConfig
from pronostico.data.schemas import HeadToHeadRecord, SplitStats, TeamSeasonStats
from pronostico.prediction import ProbabilityEngine


HOME_TEAM = "Lions"
AWAY_TEAM = "Tigers"


def make_team(team, home=None, away=None, data_source="api-football"):
    """TeamSeasonStats from (W, D, L, GF, GA) tuples for the venue splits."""

    def split(values):
        if values is None:
            return SplitStats()
        wins, draws, losses, goals_for, goals_against = values
        return SplitStats(
            matches=wins + draws + losses,
            wins=wins,
            draws=draws,
            losses=losses,
            goals_for=goals_for,
            goals_against=goals_against,
        )

    home_split = split(home)
    away_split = split(away)
    overall = SplitStats(
        matches=home_split.matches + away_split.matches,
        wins=home_split.wins + away_split.wins,
        draws=home_split.draws + away_split.draws,
        losses=home_split.losses + away_split.losses,
        goals_for=home_split.goals_for + away_split.goals_for,
        goals_against=home_split.goals_against + away_split.goals_against,
    )
    return TeamSeasonStats(
        team=team,
        season="2024",
        competition="Premier League",
        data_source=data_source,
        overall=overall,
        home=home_split,
        away=away_split,
    )


def make_meetings(scores, home_team=HOME_TEAM, away_team=AWAY_TEAM, start_year=2016):
    """One meeting per (home_goals, away_goals) pair, oldest first."""
    return [
        HeadToHeadRecord(
            match_date=datetime(start_year + i, 3, 1),
            home_team=home_team,
            away_team=away_team,
            home_goals=hg,
            away_goals=ag,
        )
        for i, (hg, ag) in enumerate(scores)
    ]


# Totals never above 2, never both sides scoring: 4 home wins, 2 draws, 2 away wins
LOW_SCORING = [(1, 0), (0, 0), (2, 0), (0, 1), (1, 0), (0, 2), (0, 0), (1, 0)]


@pytest.fixture
def engine():
    return ProbabilityEngine(EngineConfig())


@pytest.fixture
def strong_home():
    """7/2/1 at home, 20 scored and 8 conceded."""
    return make_team(HOME_TEAM, home=(7, 2, 1, 20, 8), away=(4, 3, 3, 14, 12))


@pytest.fixture
def weak_away():
    """2/3/5 away, 8 scored and 18 conceded."""
    return make_team(AWAY_TEAM, home=(4, 3, 3, 12, 12), away=(2, 3, 5, 8, 18))


@pytest.fixture
def low_scoring_h2h():
    return make_meetings(LOW_SCORING)


@pytest.fixture
def team_factory():
    return make_team


@pytest.fixture
def meetings_factory():
    return make_meetings
