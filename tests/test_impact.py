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
"""Tests for the per-event impact calculator."""

import pytest

from fulltime.engine.config import ImpactConfig
from fulltime.engine.events import DifficultyFactors, EventType, MatchHalf, make_event
from fulltime.engine.impact import ImpactCalculator
from fulltime.models.context import CompetitionTier, MatchContext
from fulltime.models.snapshot import SubRole
from fulltime.utils.debug import MatchDebugger


def _event(event_type: EventType, minute: int = 30, role: SubRole = SubRole.CF, **kwargs: object):
    return make_event(0, 7, role, event_type, minute, **kwargs)


class TestBaseValue:
    """Tests for base value lookup."""

    def test_success_and_failure(self) -> None:
        """Attempts read the success or failure column."""
        calc = ImpactCalculator()
        assert calc.base_value(_event(EventType.TACKLE, success=True)) == pytest.approx(1.2)
        assert calc.base_value(_event(EventType.TACKLE, success=False)) == pytest.approx(-0.5)

    def test_success_never_below_failure(self) -> None:
        """A success is never worth less than a failure of the same type."""
        for value in ImpactConfig().base_values.values():
            assert value.success >= value.failure

    def test_table_must_cover_every_type(self) -> None:
        """A partial value table is rejected."""
        base_values = dict(ImpactConfig().base_values)
        del base_values[EventType.PASS]
        with pytest.raises(ValueError):
            ImpactConfig(base_values=base_values)


class TestTimeMultiplier:
    """Tests for the lateness factor."""

    def test_grows_across_regulation(self) -> None:
        """The factor grows linearly with the minute."""
        calc = ImpactCalculator()
        context = MatchContext()
        assert calc.time_multiplier(_event(EventType.PASS, minute=1), context) == pytest.approx(1 + 0.35 / 90)
        assert calc.time_multiplier(_event(EventType.PASS, minute=45), context) == pytest.approx(1.175)
        assert calc.time_multiplier(_event(EventType.PASS, minute=90), context) == pytest.approx(1.35)

    def test_second_half_stoppage_bonus(self) -> None:
        """Second-half stoppage adds a flat bonus per minute."""
        calc = ImpactCalculator()
        event = _event(EventType.PASS, minute=90, added_minute=4)
        assert calc.time_multiplier(event, MatchContext()) == pytest.approx(1.47)

    def test_first_half_stoppage_has_no_bonus(self) -> None:
        """First-half stoppage keeps the value of the last regulation minute."""
        calc = ImpactCalculator()
        event = _event(EventType.PASS, minute=45, half=MatchHalf.FIRST, added_minute=3)
        assert calc.time_multiplier(event, MatchContext()) == pytest.approx(1.175)

    def test_capped(self) -> None:
        """Long stoppage time cannot push the factor past its cap."""
        calc = ImpactCalculator()
        event = _event(EventType.PASS, minute=90, added_minute=12)
        assert calc.time_multiplier(event, MatchContext(second_half_added=12)) == pytest.approx(1.5)

    def test_scales_with_regulation_length(self) -> None:
        """Shorter matches reach the full factor sooner."""
        calc = ImpactCalculator()
        context = MatchContext(regulation_minutes=60)
        event = _event(EventType.PASS, minute=60, half=MatchHalf.SECOND)
        assert calc.time_multiplier(event, context) == pytest.approx(1.35)


class TestPositionMultiplier:
    """Tests for the role-responsibility factor."""

    def test_defender_goal_worth_more_than_forward_goal(self) -> None:
        """Scoring outside the usual remit earns more."""
        calc = ImpactCalculator()
        defender = calc.position_multiplier(_event(EventType.GOAL, role=SubRole.CD), 8.0)
        forward = calc.position_multiplier(_event(EventType.GOAL, role=SubRole.CF), 8.0)
        assert defender == pytest.approx(1.35)
        assert forward == pytest.approx(1.0)
        assert defender > forward

    def test_role_override(self) -> None:
        """Attacking full backs use their sub-role override."""
        calc = ImpactCalculator()
        assert calc.position_multiplier(_event(EventType.CROSS, role=SubRole.RD), 0.8) == pytest.approx(1.25)
        assert calc.position_multiplier(_event(EventType.TACKLE, role=SubRole.AM), 1.2) == pytest.approx(1.2)

    def test_mistakes_in_core_remit_cost_more(self) -> None:
        """Negative impacts read the mistake table."""
        calc = ImpactCalculator()
        defender = calc.position_multiplier(_event(EventType.DEFENSIVE_ERROR, role=SubRole.CD), -3.0)
        forward = calc.position_multiplier(_event(EventType.DEFENSIVE_ERROR, role=SubRole.CF), -3.0)
        assert defender == pytest.approx(1.1)
        assert forward == pytest.approx(0.9)

    def test_goalkeeper_saves_in_remit(self) -> None:
        """A goalkeeper's save is core work."""
        calc = ImpactCalculator()
        assert calc.position_multiplier(_event(EventType.SAVE, role=SubRole.GK), 2.5) == pytest.approx(1.0)


class TestDifficultyMultiplier:
    """Tests for the situational-hardship factor."""

    def test_neutral_is_one(self) -> None:
        """Neutral factors leave the impact unchanged."""
        calc = ImpactCalculator()
        assert calc.difficulty_multiplier(_event(EventType.PASS), 0.3) == pytest.approx(1.0)

    def test_extreme_hardship_clamped(self) -> None:
        """Stacked hardship stays within the bounds."""
        calc = ImpactCalculator()
        factors = DifficultyFactors(
            pressure=1.0, distance=40.0, weak_foot=True, last_man=True, opposition_strength=100.0
        )
        event = _event(EventType.TACKLE, difficulty=factors)
        assert calc.difficulty_multiplier(event, 1.2) == pytest.approx(1.3)

    def test_hardship_softens_mistakes(self) -> None:
        """Negative impacts use the mirrored factor."""
        calc = ImpactCalculator()
        hard = DifficultyFactors(pressure=1.0)
        easy = DifficultyFactors(pressure=0.0)
        assert calc.difficulty_multiplier(_event(EventType.PASS, difficulty=hard), 0.3) == pytest.approx(1.1)
        assert calc.difficulty_multiplier(_event(EventType.PASS, difficulty=hard), -0.4) == pytest.approx(0.9)
        assert calc.difficulty_multiplier(_event(EventType.PASS, difficulty=easy), -0.4) == pytest.approx(1.1)

    def test_range_only_beyond_start(self) -> None:
        """Short-range actions gain nothing from distance."""
        calc = ImpactCalculator()
        near = _event(EventType.CROSS, difficulty=DifficultyFactors(distance=10.0))
        far = _event(EventType.CROSS, difficulty=DifficultyFactors(distance=26.0))
        assert calc.difficulty_multiplier(near, 0.8) == pytest.approx(1.0)
        assert calc.difficulty_multiplier(far, 0.8) == pytest.approx(1.06)


class TestClutchMultiplier:
    """Tests for the high-pressure factor."""

    def test_tier_factor(self) -> None:
        """Early in the match only the tier counts."""
        calc = ImpactCalculator()
        event = _event(EventType.PASS, minute=10)
        friendly = MatchContext(competition=CompetitionTier.FRIENDLY)
        cup = MatchContext(competition=CompetitionTier.CUP)
        assert calc.clutch_multiplier(event, friendly, 1.0) == pytest.approx(0.9)
        assert calc.clutch_multiplier(event, cup, 1.0) == pytest.approx(1.1)

    def test_late_and_tight(self) -> None:
        """Late moments in a tight match are boosted, more so when not ahead."""
        calc = ImpactCalculator()
        context = MatchContext(competition=CompetitionTier.CUP)
        level = _event(EventType.GOAL, minute=75, goal_difference=0)
        ahead = _event(EventType.GOAL, minute=75, goal_difference=1)
        comfortable = _event(EventType.GOAL, minute=75, goal_difference=2)
        assert calc.clutch_multiplier(level, context, 1.0) == pytest.approx(1.32)
        assert calc.clutch_multiplier(ahead, context, 1.0) == pytest.approx(1.21)
        assert calc.clutch_multiplier(comfortable, context, 1.0) == pytest.approx(1.1)

    def test_clamped(self) -> None:
        """The clutch factor never exceeds its upper bound."""
        calc = ImpactCalculator()
        context = MatchContext(competition=CompetitionTier.FINAL)
        event = _event(EventType.GOAL, minute=80, goal_difference=-1)
        assert calc.clutch_multiplier(event, context, 1.0) == pytest.approx(1.44)
        hot = ImpactCalculator(ImpactConfig(level_or_trailing_factor=1.5))
        assert hot.clutch_multiplier(event, context, 1.0) == pytest.approx(1.45)

    def test_time_clutch_product_capped(self) -> None:
        """Time and clutch together stay under the combined cap."""
        calc = ImpactCalculator()
        context = MatchContext(competition=CompetitionTier.FINAL)
        event = _event(EventType.GOAL, minute=85, goal_difference=0)
        time_factor = calc.time_multiplier(event, context)
        clutch = calc.clutch_multiplier(event, context, time_factor)
        assert time_factor * clutch == pytest.approx(1.75)


class TestCalculate:
    """Tests for the full impact product."""

    def test_product(self) -> None:
        """The final impact multiplies every factor."""
        calc = ImpactCalculator()
        breakdown = calc.calculate(_event(EventType.GOAL, minute=30), MatchContext())
        assert breakdown.base_value == pytest.approx(8.0)
        assert breakdown.time_multiplier == pytest.approx(1 + 0.35 / 3)
        assert breakdown.final_impact == pytest.approx(8.0 * (1 + 0.35 / 3))

    def test_mistake_is_negative(self) -> None:
        """Mistakes always score below zero."""
        calc = ImpactCalculator()
        breakdown = calc.calculate(_event(EventType.ERROR_LEADING_TO_GOAL, role=SubRole.CD), MatchContext())
        assert breakdown.final_impact < 0

    def test_injury_is_neutral(self) -> None:
        """An injury neither helps nor hurts."""
        calc = ImpactCalculator()
        assert calc.calculate(_event(EventType.INJURY), MatchContext()).final_impact == 0.0

    def test_score_is_pure(self) -> None:
        """Scoring returns new events and is reproducible."""
        calc = ImpactCalculator()
        events = [_event(EventType.PASS, minute=5), _event(EventType.GOAL, minute=6)]
        first = calc.score(events, MatchContext())
        second = calc.score(events, MatchContext())
        assert first == second
        assert events[0].impact is None
        assert all(event.impact is not None for event in first)

    def test_debugger_receives_impact_lines(self) -> None:
        """Each scored event is traced."""
        debugger = MatchDebugger(output_dir=None)
        calc = ImpactCalculator(debugger=debugger)
        calc.calculate(_event(EventType.GOAL, minute=30), MatchContext())
        lines = debugger.get_recent_events()
        assert len(lines) == 1
        assert "IMPACT" in lines[0]
        assert "Event: goal" in lines[0]
