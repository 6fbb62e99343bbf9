# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Tests for aggregating scored events into a raw score."""

from dataclasses import replace

import pytest

from fulltime.engine.aggregation import InvolvementLevel, RatingAggregator
from fulltime.engine.config import AggregationConfig
from fulltime.engine.errors import InternalInvariantError
from fulltime.engine.events import EventType, ImpactBreakdown, MatchEvent, make_event
from fulltime.models.snapshot import SubRole


def _scored(sequence: int, event_type: EventType, impact: float, minute: int = 10) -> MatchEvent:
    event = make_event(sequence, 7, SubRole.CM, event_type, minute)
    breakdown = ImpactBreakdown(
        base_value=impact,
        time_multiplier=1.0,
        position_multiplier=1.0,
        difficulty_multiplier=1.0,
        clutch_multiplier=1.0,
        final_impact=impact,
    )
    return replace(event, impact=breakdown)


class TestWeights:
    """Tests for type weights and diminishing returns."""

    def test_type_weight_overrides_category(self) -> None:
        """Goals and passes have their own weights."""
        agg = RatingAggregator()
        assert agg.type_weight(EventType.GOAL) == pytest.approx(1.4)
        assert agg.type_weight(EventType.PASS) == pytest.approx(0.5)
        assert agg.type_weight(EventType.TACKLE) == pytest.approx(0.8)
        assert agg.type_weight(EventType.PRESS) == pytest.approx(0.6)

    def test_mistakes_weigh_extra(self) -> None:
        """Negative impacts pick up the mistake weight."""
        agg = RatingAggregator()
        assert agg.weighted_impact(_scored(0, EventType.TACKLE, 1.0)) == pytest.approx(0.8)
        assert agg.weighted_impact(_scored(0, EventType.TACKLE, -1.0)) == pytest.approx(-0.8 * 1.15)

    @pytest.mark.parametrize("event_type", [EventType.ERROR_LEADING_TO_GOAL, EventType.OWN_GOAL])
    def test_costly_incidents_keep_minimum_penalty(self, event_type: EventType) -> None:
        """Goal-costing incidents weigh at least the configured penalty."""
        agg = RatingAggregator()
        assert agg.weighted_impact(_scored(0, event_type, -1.0)) == pytest.approx(-7.0)
        harsh = agg.weighted_impact(_scored(0, event_type, -10.0))
        assert harsh == pytest.approx(-10.0 * agg.type_weight(event_type) * 1.15)

    def test_minimum_penalty_only_for_costly_incidents(self) -> None:
        """Other mistakes keep their weighted value."""
        agg = RatingAggregator()
        assert agg.weighted_impact(_scored(0, EventType.DEFENSIVE_ERROR, -1.0)) == pytest.approx(-0.8 * 1.15)
        lenient = RatingAggregator(AggregationConfig(costly_incident_penalty=0.0))
        assert lenient.weighted_impact(_scored(0, EventType.OWN_GOAL, -1.0)) == pytest.approx(-0.8 * 1.15)

    def test_unscored_event_rejected(self) -> None:
        """Aggregation requires scored events."""
        agg = RatingAggregator()
        with pytest.raises(InternalInvariantError):
            agg.weighted_impact(make_event(0, 7, SubRole.CM, EventType.PASS, 5))

    def test_diminishing_factor(self) -> None:
        """Repeats decay, negatives more slowly."""
        agg = RatingAggregator()
        assert agg.diminishing_factor(1, negative=False) == pytest.approx(1.0)
        assert agg.diminishing_factor(2, negative=False) == pytest.approx(1 / 1.35)
        assert agg.diminishing_factor(3, negative=True) == pytest.approx(1 / 1.24)
        assert agg.diminishing_factor(3, negative=True) > agg.diminishing_factor(3, negative=False)

    def test_largest_contribution_keeps_full_value(self) -> None:
        """Repeats are ranked by size, not by time."""
        agg = RatingAggregator()
        events = [_scored(0, EventType.TACKLE, 1.0, minute=5), _scored(1, EventType.TACKLE, 2.0, minute=6)]
        result = agg.aggregate(events)
        first, second = result.contributions
        assert second.occurrence == 1
        assert second.contribution == pytest.approx(1.6)
        assert first.occurrence == 2
        assert first.contribution == pytest.approx(0.8 / 1.35)

    def test_order_of_equal_types_does_not_matter(self) -> None:
        """Swapping two same-type events leaves the score unchanged."""
        agg = RatingAggregator()
        forward = agg.aggregate([_scored(0, EventType.PASS, 0.2, 5), _scored(1, EventType.PASS, 0.4, 6)])
        reverse = agg.aggregate([_scored(0, EventType.PASS, 0.4, 5), _scored(1, EventType.PASS, 0.2, 6)])
        assert forward.raw_score == pytest.approx(reverse.raw_score)

    def test_signs_decay_separately(self) -> None:
        """A failure does not discount a later success of the same type."""
        agg = RatingAggregator()
        result = agg.aggregate([_scored(0, EventType.TACKLE, -0.5), _scored(1, EventType.TACKLE, 1.2)])
        assert result.contributions[1].occurrence == 1
        assert result.contributions[1].contribution == pytest.approx(0.96)


class TestInvolvement:
    """Tests for involvement scoring and capping."""

    def test_touch_weights(self) -> None:
        """Passes count half, cards and injuries nothing."""
        agg = RatingAggregator()
        events = [
            _scored(0, EventType.PASS, 0.1),
            _scored(1, EventType.TACKLE, 1.0),
            _scored(2, EventType.YELLOW_CARD, -1.0),
            _scored(3, EventType.GOAL_CONCEDED, -1.0),
        ]
        assert agg.involvement_score(events) == pytest.approx(1.5)

    def test_involvement_ignores_outcome(self) -> None:
        """Succeeding or failing is the same touch."""
        agg = RatingAggregator()
        made = make_event(0, 7, SubRole.CM, EventType.DRIBBLE, 5, success=True)
        lost = make_event(0, 7, SubRole.CM, EventType.DRIBBLE, 5, success=False)
        assert agg.involvement_score([made]) == agg.involvement_score([lost])

    @pytest.mark.parametrize(
        "score, level",
        [
            (0.0, InvolvementLevel.VERY_LOW),
            (3.5, InvolvementLevel.VERY_LOW),
            (4.0, InvolvementLevel.LOW),
            (10.0, InvolvementLevel.NORMAL),
            (23.5, InvolvementLevel.NORMAL),
            (24.0, InvolvementLevel.HIGH),
        ],
    )
    def test_classify(self, score: float, level: InvolvementLevel) -> None:
        """Thresholds are lower edges."""
        assert RatingAggregator().classify(score) is level

    def test_caps(self) -> None:
        """Caps rise with involvement and vanish at the top."""
        agg = RatingAggregator()
        assert agg.cap_for(InvolvementLevel.VERY_LOW) == pytest.approx(10.0)
        assert agg.cap_for(InvolvementLevel.LOW) == pytest.approx(20.0)
        assert agg.cap_for(InvolvementLevel.NORMAL) == pytest.approx(46.0)
        assert agg.cap_for(InvolvementLevel.HIGH) is None

    def test_single_event_is_capped(self) -> None:
        """One huge moment cannot carry a match with no involvement."""
        agg = RatingAggregator()
        result = agg.aggregate([_scored(0, EventType.GOAL, 12.0)])
        assert result.involvement is InvolvementLevel.VERY_LOW
        assert result.uncapped_score == pytest.approx(16.8)
        assert result.raw_score == pytest.approx(10.0)
        assert result.capped

    def test_invalid_thresholds_rejected(self) -> None:
        """Thresholds must increase."""
        with pytest.raises(ValueError):
            AggregationConfig(involvement_thresholds=(10.0, 4.0, 24.0))
        with pytest.raises(ValueError):
            AggregationConfig(raw_caps=(20.0, 10.0, 46.0, None))


class TestConsistency:
    """Tests for the consistency pull."""

    def test_no_pull_below_threshold(self) -> None:
        """Ordinary matches are untouched."""
        agg = RatingAggregator()
        assert agg.consistency_pull(1.0, 5.0, -4.0) == pytest.approx(1.0)

    def test_pull_toward_target(self) -> None:
        """Both highs and lows beyond the threshold add a bonus."""
        agg = RatingAggregator()
        assert agg.consistency_pull(1.0, 10.0, -9.0) == pytest.approx(1.9)

    def test_pull_stops_at_target(self) -> None:
        """The pull never pushes past the target."""
        agg = RatingAggregator()
        assert agg.consistency_pull(7.5, 16.0, -8.5) == pytest.approx(8.0)
        assert agg.consistency_pull(9.0, 30.0, -21.0) == pytest.approx(9.0)

    def test_never_lowers_score(self) -> None:
        """The pull only ever adds."""
        agg = RatingAggregator()
        for raw in (-5.0, 0.0, 3.0, 12.0):
            assert agg.consistency_pull(raw, 20.0, -15.0) >= raw


class TestAggregate:
    """Tests for the full aggregation."""

    def test_empty_log(self) -> None:
        """No events means a zero score."""
        result = RatingAggregator().aggregate([])
        assert result.raw_score == 0.0
        assert result.involvement is InvolvementLevel.VERY_LOW
        assert result.contributions == ()

    def test_totals(self) -> None:
        """Positive and negative totals are kept apart."""
        result = RatingAggregator().aggregate(
            [_scored(0, EventType.TACKLE, 1.0), _scored(1, EventType.PRESS, -1.0)]
        )
        assert result.positive_total == pytest.approx(0.8)
        assert result.negative_total == pytest.approx(-0.6 * 1.15)
        assert result.raw_score == pytest.approx(0.8 - 0.69)
