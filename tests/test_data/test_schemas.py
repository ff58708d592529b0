"""
Tests for data.schemas: input and output models
"""

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pronostico.data.schemas import (
    BttsDistribution,
    GoalsDistribution,
    HeadToHeadRecord,
    MAX_COUNT,
    OutcomeDistribution,
    Outcome,
    Reliability,
    SplitStats,
    TeamSeasonStats,
    last_n,
    records_from_rows,
    sort_recent_first,
)


class TestSplitStats:

    def test_rates(self):
        split = SplitStats(matches=10, wins=7, draws=2, losses=1, goals_for=20, goals_against=8)
        assert split.points == 23
        assert split.win_rate == pytest.approx(0.7)
        assert split.points_per_game == pytest.approx(2.3)
        assert split.goals_against_per_match == pytest.approx(0.8)
        assert split.is_consistent

    def test_empty_rates_are_zero(self):
        split = SplitStats()
        assert split.is_empty
        assert split.win_rate == 0.0
        assert split.goals_for_per_match == 0.0

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            SplitStats(matches=-1)

    def test_from_counts_sanitizes(self):
        split = SplitStats.from_counts(wins="3", draws=None, losses=-2, goals_for="x", goals_against=4.0)
        assert split.wins == 3
        assert split.draws == 0
        assert split.losses == 0
        assert split.goals_for == 0
        assert split.matches == 3

    def test_from_counts_oversized(self):
        split = SplitStats.from_counts(matches=10 ** 400, wins=3, goals_for=2e26)
        assert split.matches == 3
        assert split.goals_for == 0

    def test_over_cap_rejected(self):
        with pytest.raises(ValidationError):
            SplitStats(goals_for=MAX_COUNT + 1)

    def test_frozen(self):
        split = SplitStats(matches=1, wins=1)
        with pytest.raises(ValidationError):
            split.wins = 2


class TestTeamSeasonStats:

    def test_from_flat(self):
        stats = TeamSeasonStats.from_flat({
            "team_name": "Lions",
            "dataSource": "api-football",
            "matches_played": 20,
            "wins": 11,
            "home_matches": 10,
            "home_wins": 7,
            "home_goals_for": 20,
            "away_goals_against": None,
        })
        assert stats.team == "Lions"
        assert stats.data_source == "api-football"
        assert stats.matches_played == 20
        assert stats.home.wins == 7
        assert stats.away.goals_against == 0

    def test_from_flat_empty(self):
        assert TeamSeasonStats.from_flat(None).is_empty
        assert TeamSeasonStats.from_flat({}).is_empty

    def test_matches_played_from_splits(self):
        stats = TeamSeasonStats(home=SplitStats(matches=4), away=SplitStats(matches=5))
        assert stats.matches_played == 9

    def test_split(self, strong_home):
        assert strong_home.split(True) is strong_home.home
        assert strong_home.split(False) is strong_home.away


class TestHeadToHeadRecord:

    def test_derived_fields(self):
        record = HeadToHeadRecord(home_team="Lions", away_team="Tigers", home_goals=2, away_goals=1)
        assert record.total_goals == 3
        assert record.result is Outcome.HOME
        assert record.is_btts
        assert record.overs == {"0.5": True, "1.5": True, "2.5": True, "3.5": False}

    def test_result_for_flips(self):
        record = HeadToHeadRecord(home_team="Tigers", away_team="Lions", home_goals=0, away_goals=1)
        assert record.result_for("Lions") is Outcome.HOME
        assert record.result_for("Tigers") is Outcome.AWAY
        assert record.result_for("Bears") is Outcome.AWAY
        assert record.result_for(None) is Outcome.AWAY

    def test_from_flat(self):
        record = HeadToHeadRecord.from_flat({
            "match_date": "2023-04-01T15:00:00Z",
            "home_team_id": 42,
            "away_team": "Tigers",
            "home_goals": "1",
            "away_goals": 0,
        })
        assert record.home_team == "42"
        assert record.home_goals == 1
        assert record.match_date.year == 2023

    def test_from_flat_without_score(self):
        assert HeadToHeadRecord.from_flat({"home_goals": 1}) is None

    @pytest.mark.parametrize("bad", ["n/a", float("nan"), float("inf"), -1, 1.5, True, 10 ** 400])
    def test_from_flat_rejects_unusable_score(self, bad):
        assert HeadToHeadRecord.from_flat({"home_goals": bad, "away_goals": 1}) is None
        assert HeadToHeadRecord.from_flat({"home_goals": 1, "away_goals": bad}) is None

    def test_from_flat_accepts_numeric_text(self):
        record = HeadToHeadRecord.from_flat({"home_goals": "2", "away_goals": 3.0})
        assert (record.home_goals, record.away_goals) == (2, 3)

    def test_records_from_rows_drops_unusable(self):
        rows = [
            {"home_goals": 1, "away_goals": 1},
            {"home_goals": None, "away_goals": 2},
            {"home_goals": "n/a", "away_goals": "n/a"},
            {"home_goals": 0, "away_goals": 0, "match_date": "not a date"},
        ]
        records = records_from_rows(rows)
        assert len(records) == 2
        assert records[1].match_date is None


class TestOrdering:

    def test_recent_first_undated_last(self):
        records = [
            HeadToHeadRecord(home_goals=9, away_goals=9),
            HeadToHeadRecord(match_date=datetime(2020, 1, 1), home_goals=1, away_goals=0),
            HeadToHeadRecord(match_date=datetime(2023, 1, 1), home_goals=2, away_goals=0),
        ]
        ordered = sort_recent_first(records)
        assert [r.home_goals for r in ordered] == [2, 1, 9]

    def test_last_n(self, low_scoring_h2h):
        assert len(last_n(low_scoring_h2h, 3)) == 3
        assert last_n(low_scoring_h2h, 0) == []
        assert last_n(low_scoring_h2h, 1)[0].match_date.year == 2023


class TestOutputSchemas:

    def test_outcome_must_sum_to_hundred(self):
        OutcomeDistribution(home=Decimal("42.0"), draw=Decimal("28.0"), away=Decimal("30.0"))
        with pytest.raises(ValidationError):
            OutcomeDistribution(home=Decimal("42.0"), draw=Decimal("28.0"), away=Decimal("30.1"))

    def test_favourite(self):
        outcome = OutcomeDistribution(home=Decimal("20.0"), draw=Decimal("30.0"), away=Decimal("50.0"))
        assert outcome.favourite == "away"

    def test_goals_complement(self):
        line = GoalsDistribution(threshold=2.5, over=Decimal("50.6"), under=Decimal("49.4"))
        assert line.key == "25"
        with pytest.raises(ValidationError):
            GoalsDistribution(threshold=2.5, over=Decimal("50.6"), under=Decimal("49.5"))

    def test_btts_complement(self):
        with pytest.raises(ValidationError):
            BttsDistribution(
                yes=Decimal("58.0"), no=Decimal("41.0"),
                home_scores=Decimal("75.0"), away_scores=Decimal("68.0"),
            )

    def test_reliability_from_count(self):
        assert Reliability.from_count(0) is Reliability.NONE
        assert not Reliability.NONE.allows_blending
        assert Reliability.from_count(3).allows_blending
