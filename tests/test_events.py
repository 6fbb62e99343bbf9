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
"""Tests for match events, categories and ordering checks."""

import pytest

from fulltime.engine.errors import InternalInvariantError
from fulltime.engine.events import (
    EVENT_CATEGORIES,
    INCIDENT_TYPES,
    EventCategory,
    EventType,
    MatchHalf,
    ScoreState,
    check_event_order,
    chronological_key,
    make_event,
)
from fulltime.models.snapshot import SubRole


def _event(sequence: int, event_type: EventType, minute: int, **kwargs: object):
    return make_event(sequence, 7, SubRole.CM, event_type, minute, **kwargs)


class TestCategories:
    """Tests for the event type partition."""

    def test_every_type_has_one_category(self) -> None:
        """Categories partition the event types."""
        assert set(EVENT_CATEGORIES) == set(EventType)
        for event_type in EventType:
            assert isinstance(event_type.category, EventCategory)

    def test_examples(self) -> None:
        """Spot-check category membership."""
        assert EventType.GOAL.category is EventCategory.ATTACKING
        assert EventType.OWN_GOAL.category is EventCategory.DEFENSIVE
        assert EventType.GOAL_CONCEDED.category is EventCategory.GOALKEEPING
        assert EventType.DISPOSSESSED.category is EventCategory.TRANSITION
        assert EventType.INJURY.category is EventCategory.DISCIPLINE
        assert EventType.MARKING_ERROR.category is EventCategory.OFF_BALL


class TestMakeEvent:
    """Tests for event construction."""

    def test_flags_derived_from_type(self) -> None:
        """Goal, assist and shot flags follow the event type."""
        goal = _event(0, EventType.GOAL, 10)
        assert goal.goal and goal.shot and not goal.assist
        assist = _event(1, EventType.ASSIST, 11)
        assert assist.assist and not assist.goal
        miss = _event(2, EventType.BIG_CHANCE_MISSED, 12)
        assert miss.shot and not miss.goal

    def test_incidents_are_always_successful(self) -> None:
        """Incidents describe something that happened."""
        for event_type in INCIDENT_TYPES:
            assert _event(0, event_type, 5, success=False).success is True

    def test_attempts_keep_outcome(self) -> None:
        """Attempts record whether they worked."""
        assert _event(0, EventType.PASS, 5, success=False).success is False

    def test_half_inferred_from_minute(self) -> None:
        """Minutes past the half length belong to the second half."""
        assert _event(0, EventType.PASS, 45).half is MatchHalf.FIRST
        assert _event(0, EventType.PASS, 46).half is MatchHalf.SECOND
        assert _event(0, EventType.PASS, 30, half_length=30).half is MatchHalf.FIRST

    def test_clock_label(self) -> None:
        """Stoppage time is shown as minute plus added minute."""
        assert _event(0, EventType.PASS, 45, half=MatchHalf.FIRST, added_minute=2).clock == "45+2'"
        assert _event(0, EventType.PASS, 12).clock == "12'"

    def test_score_state(self) -> None:
        """Score state derives from the goal difference."""
        assert _event(0, EventType.PASS, 5, goal_difference=2).score_state is ScoreState.LEADING
        assert _event(0, EventType.PASS, 5).score_state is ScoreState.DRAWING
        assert _event(0, EventType.PASS, 5, goal_difference=-1).score_state is ScoreState.TRAILING

    def test_unscored_event_has_zero_impact(self) -> None:
        """Events carry no impact until they are scored."""
        event = _event(0, EventType.GOAL, 5)
        assert event.impact is None
        assert event.final_impact == 0.0

    def test_minute_zero_rejected(self) -> None:
        """Minutes start at one."""
        with pytest.raises(InternalInvariantError):
            _event(0, EventType.PASS, 0)

    def test_negative_added_minute_rejected(self) -> None:
        """Added time cannot be negative."""
        with pytest.raises(InternalInvariantError):
            _event(0, EventType.PASS, 45, added_minute=-1)


class TestOrdering:
    """Tests for chronological ordering checks."""

    def test_ordered_log_passes(self) -> None:
        """Non-decreasing minutes are accepted."""
        events = [
            _event(0, EventType.PASS, 3),
            _event(1, EventType.TACKLE, 3),
            _event(2, EventType.PASS, 45, half=MatchHalf.FIRST, added_minute=1),
            _event(3, EventType.PASS, 46),
            _event(4, EventType.PASS, 90, added_minute=3),
        ]
        check_event_order(events)

    def test_backwards_minute_rejected(self) -> None:
        """An event earlier than its predecessor breaks the log."""
        events = [_event(0, EventType.PASS, 30), _event(1, EventType.PASS, 29)]
        with pytest.raises(InternalInvariantError):
            check_event_order(events)

    def test_backwards_stoppage_rejected(self) -> None:
        """Stoppage minutes must not run backwards either."""
        events = [
            _event(0, EventType.PASS, 90, added_minute=3),
            _event(1, EventType.PASS, 90, added_minute=1),
        ]
        with pytest.raises(InternalInvariantError):
            check_event_order(events)

    def test_events_after_terminal_rejected(self) -> None:
        """Nothing can follow an injury or a red card."""
        for terminal in (EventType.INJURY, EventType.RED_CARD):
            events = [_event(0, terminal, 30), _event(1, EventType.PASS, 31)]
            with pytest.raises(InternalInvariantError):
                check_event_order(events)

    def test_chronological_key_orders_halves(self) -> None:
        """First-half stoppage sorts before the second half."""
        stoppage = _event(0, EventType.PASS, 45, half=MatchHalf.FIRST, added_minute=3)
        restart = _event(1, EventType.PASS, 46)
        assert chronological_key(stoppage) < chronological_key(restart)
