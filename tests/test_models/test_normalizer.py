"""
Tests for models.ensemble.normalizer: the single rounding point
"""

from decimal import Decimal

import pytest
from hypothesis import given, strategies as st

from pronostico.data.schemas import Reliability
from pronostico.features import H2HStats
from pronostico.models.base import RawEstimate
from pronostico.models.ensemble import (
    OutcomeNormalizer,
    complements_hold,
    largest_remainder,
    to_decimal,
    to_percent,
)


def _raw(**changes):
    raw = RawEstimate(
        home=70.6342, draw=18.7592, away=10.6066,
        overs={0.5: 93.28, 1.5: 75.13, 2.5: 50.64, 3.5: 28.58},
        expected_total=2.7, expected_home=1.9, expected_away=0.8,
        btts_yes=47.6249, home_scores=86.47, away_scores=55.07,
        home_clean_sheet=16.53, away_clean_sheet=44.93,
    )
    return raw.with_values(**changes)


class TestRounding:

    def test_half_up(self):
        assert to_decimal(0.25) == Decimal("0.3")
        assert to_decimal(2.675, Decimal("0.01")) == Decimal("2.68")

    def test_non_finite(self):
        assert to_decimal(float("nan")) == Decimal("0.0")
        assert to_percent(float("inf")) == Decimal("0.0")

    def test_out_of_context_value(self):
        assert to_decimal(1e30, Decimal("0.01")) == Decimal("0.00")

    def test_percent_clamped(self):
        assert to_percent(104.2) == Decimal("100.0")
        assert to_percent(-3) == Decimal("0.0")

    def test_largest_remainder_thirds(self):
        values = largest_remainder([1, 1, 1])
        assert sum(values) == Decimal("100.0")
        assert values == [Decimal("33.4"), Decimal("33.3"), Decimal("33.3")]

    def test_largest_remainder_proportional(self):
        assert largest_remainder([2, 1, 1]) == [Decimal("50.0"), Decimal("25.0"), Decimal("25.0")]


class TestOutcome:

    def test_rescaled_to_hundred(self):
        outcome = OutcomeNormalizer().outcome(35.0, 14.0, 21.0)
        assert outcome.home == Decimal("50.0")
        assert outcome.draw == Decimal("20.0")
        assert outcome.away == Decimal("30.0")

    def test_empty_mass_uses_defaults(self):
        outcome = OutcomeNormalizer().outcome(0.0, 0.0, 0.0)
        assert (outcome.home, outcome.draw, outcome.away) == (
            Decimal("42.0"), Decimal("28.0"), Decimal("30.0")
        )

    def test_nan_uses_defaults(self):
        outcome = OutcomeNormalizer().outcome(float("nan"), 30.0, 30.0)
        assert outcome.home == Decimal("42.0")


class TestGoals:

    def test_under_is_exact_complement(self):
        for line in OutcomeNormalizer().goals({2.5: 50.64}):
            assert line.over == Decimal("50.6")
            assert line.under == Decimal("49.4")

    def test_monotone_enforced(self):
        lines = OutcomeNormalizer().goals({0.5: 80.0, 1.5: 85.0, 2.5: 40.0})
        assert [line.over for line in lines] == [Decimal("80.0"), Decimal("80.0"), Decimal("40.0")]

    def test_expected_goals_two_places(self):
        goals = OutcomeNormalizer().expected_goals(_raw(expected_total=1.7933))
        assert goals.total == Decimal("1.79")

    def test_expected_goals_clamped(self):
        assert OutcomeNormalizer().expected_goals(_raw(expected_total=9.0)).total == Decimal("5.00")
        assert OutcomeNormalizer().expected_goals(_raw(expected_total=0.0)).total == Decimal("2.50")


class TestNormalize:

    def test_full_estimate(self):
        estimate = OutcomeNormalizer().normalize(_raw(), confidence=80, data_completeness=80)
        assert estimate.outcome.home == Decimal("70.6")
        assert estimate.over(2.5) == Decimal("50.6")
        assert estimate.btts.yes == Decimal("47.6")
        assert estimate.btts.no == Decimal("52.4")
        assert estimate.confidence == 80
        assert complements_hold(estimate)

    def test_h2h_summary(self):
        h2h = H2HStats(
            total_matches=8, home_wins=4, draws=2, away_wins=2,
            avg_total_goals=1.0, btts_rate=0.0,
            over_rates={2.5: 0.0, 1.5: 0.25},
            reliability=Reliability.HIGH,
        )
        summary = OutcomeNormalizer.h2h_summary(h2h)
        assert summary.total_matches == 8
        assert summary.over_rates["1.5"] == Decimal("25.0")
        assert summary.reliability is Reliability.HIGH

    def test_confidence_clamped(self):
        assert OutcomeNormalizer().normalize(_raw(), confidence=140).confidence == 100


percent = st.floats(min_value=0.0, max_value=1e6, allow_nan=False, allow_infinity=False)
wild = st.one_of(
    percent,
    st.floats(min_value=-50.0, max_value=0.0),
    st.just(float("nan")),
    st.just(float("inf")),
)


class TestComplementProperty:
    """Every estimate leaving the normalizer has exact complementary pairs."""

    @given(
        home=wild, draw=wild, away=wild,
        overs=st.lists(wild, min_size=4, max_size=4),
        btts=wild,
        total=wild,
    )
    def test_complements_always_hold(self, home, draw, away, overs, btts, total):
        raw = _raw(
            home=home, draw=draw, away=away,
            overs=dict(zip((0.5, 1.5, 2.5, 3.5), overs)),
            btts_yes=btts, expected_total=total,
        )
        estimate = OutcomeNormalizer().normalize(raw, confidence=50)

        assert complements_hold(estimate)
        values = [line.over for line in estimate.goals]
        assert values == sorted(values, reverse=True)
        assert all(Decimal("0.0") <= v <= Decimal("100.0") for v in values)
        assert Decimal("1.00") <= estimate.expected_goals.total <= Decimal("5.00")
