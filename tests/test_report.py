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
"""Tests for report assembly."""

import pytest

from fulltime.engine.events import EventType, MatchHalf, make_event
from fulltime.engine.match_engine import MatchRatingEngine
from fulltime.engine.report import MatchReportAssembler
from fulltime.models.context import MatchContext
from fulltime.models.snapshot import (
    MentalAttributes,
    ParticipantSnapshot,
    PhysicalAttributes,
    SubRole,
    TechnicalAttributes,
)


def _snapshot() -> ParticipantSnapshot:
    return ParticipantSnapshot(
        participant_id=9,
        name="Report Player",
        role=SubRole.CF,
        technical=TechnicalAttributes(
            finishing=80,
            passing=60,
            dribbling=70,
            crossing=50,
            tackling=40,
            heading=60,
            first_touch=70,
            handling=10,
            reflexes=10,
            weak_foot=50,
        ),
        physical=PhysicalAttributes(pace=75, stamina=70, strength=65, agility=70, jumping=60),
        mental=MentalAttributes(
            composure=70, vision=60, work_rate=60, determination=70, positioning=75, decisions=65, teamwork=60
        ),
    )


def _event(sequence: int, event_type: EventType, minute: int, success: bool = True, **kwargs: object):
    return make_event(sequence, 9, SubRole.CF, event_type, minute, success=success, **kwargs)


class TestStats:
    """Tests for the stat line."""

    def test_counting_stats(self) -> None:
        """Stats count attempts and successes separately."""
        events = [
            _event(0, EventType.PASS, 2),
            _event(1, EventType.PASS, 4, success=False),
            _event(2, EventType.SHOT_ON_TARGET, 10),
            _event(3, EventType.SHOT_ON_TARGET, 15, success=False),
            _event(4, EventType.GOAL, 20),
            _event(5, EventType.KEY_PASS, 30),
            _event(6, EventType.ASSIST, 35),
            _event(7, EventType.TACKLE, 40, success=False),
            _event(8, EventType.YELLOW_CARD, 50),
        ]
        stats = MatchReportAssembler().build_stats(events, MatchContext())
        assert stats.goals == 1
        assert stats.assists == 1
        assert stats.shots == 3
        assert stats.shots_on_target == 2
        assert stats.key_passes == 2
        assert (stats.passes_completed, stats.passes_attempted) == (1, 2)
        assert stats.pass_accuracy == pytest.approx(0.5)
        assert (stats.tackles_won, stats.tackles_attempted) == (0, 1)
        assert stats.yellow_cards == 1
        assert stats.minutes_played == 96

    def test_pass_accuracy_without_passes(self) -> None:
        """No passes means zero accuracy, not an error."""
        stats = MatchReportAssembler().build_stats([], MatchContext())
        assert stats.pass_accuracy == 0.0

    def test_minutes_played_until_terminal(self) -> None:
        """A red card ends the participant's minutes."""
        context = MatchContext(first_half_added=3)
        first_half = [_event(0, EventType.RED_CARD, 45, half=MatchHalf.FIRST, added_minute=2)]
        second_half = [_event(0, EventType.INJURY, 60)]
        assembler = MatchReportAssembler()
        assert assembler.build_stats(first_half, context).minutes_played == 47
        assert assembler.build_stats(second_half, context).minutes_played == 63

    def test_event_counts_are_read_only(self) -> None:
        """Counts only include successes and cannot be edited."""
        events = [_event(0, EventType.PASS, 2), _event(1, EventType.PASS, 4, success=False)]
        counts = MatchReportAssembler().count_events(events)
        assert counts[EventType.PASS] == 1
        assert EventType.GOAL not in counts
        with pytest.raises(TypeError):
            counts[EventType.GOAL] = 1  # type: ignore[index]


class TestReport:
    """Tests for the assembled report."""

    def test_report_fields(self) -> None:
        """The report ties the rating back to the participant and match."""
        events = [_event(0, EventType.GOAL, 20), _event(1, EventType.BIG_CHANCE_MISSED, 70)]
        report = MatchRatingEngine().rate(_snapshot(), MatchContext(match_id=3), events)
        assert report.match_id == 3
        assert report.participant_id == 9
        assert report.name == "Report Player"
        assert report.result.participant_id == 9
        assert report.rating == report.result.rating
        assert len(report.events) == 2
        assert all(event.impact is not None for event in report.events)
        assert report.aggregate.raw_score == pytest.approx(report.result.raw_score)

    def test_summary_lists_headlines(self) -> None:
        """The summary picks out headline moments with their clock."""
        events = [
            _event(0, EventType.PASS, 10),
            _event(1, EventType.GOAL, 45, half=MatchHalf.FIRST, added_minute=2),
            _event(2, EventType.YELLOW_CARD, 80),
        ]
        report = MatchRatingEngine().rate(_snapshot(), MatchContext(), events)
        assert report.summary() == ["45+2' goal", "80' yellow card"]
