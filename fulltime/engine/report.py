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
"""Outward-facing match report structures and their assembler."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, FrozenSet, List, Mapping, Sequence, Tuple

from fulltime.engine.aggregation import AggregateScore, InvolvementLevel
from fulltime.engine.events import TERMINAL_TYPES, EventType, MatchEvent, MatchHalf
from fulltime.engine.normalization import RatingBand

if TYPE_CHECKING:
    from fulltime.models.context import MatchContext
    from fulltime.models.snapshot import ParticipantSnapshot


HEADLINE_TYPES: FrozenSet[EventType] = frozenset(
    {
        EventType.GOAL,
        EventType.ASSIST,
        EventType.BIG_CHANCE_MISSED,
        EventType.PENALTY_WON,
        EventType.PENALTY_CONCEDED,
        EventType.PENALTY_SAVE,
        EventType.ERROR_LEADING_TO_GOAL,
        EventType.OWN_GOAL,
        EventType.YELLOW_CARD,
        EventType.SECOND_YELLOW,
        EventType.RED_CARD,
        EventType.INJURY,
    }
)


@dataclass(frozen=True)
class RatingResult:
    """Final rating of one participant in one match.

    Parameters
    ----------
    participant_id : int
        Participant the rating belongs to.
    rating : float
        Clamped rating on the bounded scale.
    band : RatingBand
        Verbal grade of ``rating``.
    involvement : InvolvementLevel
        Involvement classification.
    involvement_score : float
        Weighted touch count behind ``involvement``.
    raw_score : float
        Signed pre-normalization score.
    events : Tuple[MatchEvent, ...]
        Full ordered, scored event log.
    """

    participant_id: int
    rating: float
    band: RatingBand
    involvement: InvolvementLevel
    involvement_score: float
    raw_score: float
    events: Tuple[MatchEvent, ...]


@dataclass(frozen=True)
class StatLine:
    """Counting stats derived from the event log.

    Parameters
    ----------
    goals : int
        Goals scored.
    assists : int
        Assists provided.
    shots : int
        Shots taken, on or off target.
    shots_on_target : int
        Shots that hit the target, goals included.
    key_passes : int
        Chance-creating passes, assists included.
    passes_completed : int
        Passes that found a teammate.
    passes_attempted : int
        Passes attempted.
    dribbles_completed : int
        Successful take-ons.
    dribbles_attempted : int
        Take-ons attempted.
    tackles_won : int
        Successful tackles, last-man tackles included.
    tackles_attempted : int
        Tackles attempted.
    interceptions : int
        Passes cut out.
    clearances : int
        Successful clearances, goal-line clearances included.
    blocks : int
        Shots or passes blocked.
    aerials_won : int
        Aerial duels won.
    saves : int
        Saves of every kind.
    fouls_committed : int
        Fouls given against the participant, penalties included.
    yellow_cards : int
        Bookings, a second booking included.
    red_cards : int
        Dismissals.
    errors : int
        Defensive errors, errors leading to goals and own goals.
    minutes_played : int
        Minutes on the pitch, stoppage time included.
    """

    goals: int = 0
    assists: int = 0
    shots: int = 0
    shots_on_target: int = 0
    key_passes: int = 0
    passes_completed: int = 0
    passes_attempted: int = 0
    dribbles_completed: int = 0
    dribbles_attempted: int = 0
    tackles_won: int = 0
    tackles_attempted: int = 0
    interceptions: int = 0
    clearances: int = 0
    blocks: int = 0
    aerials_won: int = 0
    saves: int = 0
    fouls_committed: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    errors: int = 0
    minutes_played: int = 0

    @property
    def pass_accuracy(self) -> float:
        """Return completed passes as a share of attempts, ``0.0`` without attempts."""
        if not self.passes_attempted:
            return 0.0
        return self.passes_completed / self.passes_attempted


@dataclass(frozen=True)
class MatchReport:
    """Everything collaborators receive about one participant's match.

    Parameters
    ----------
    match_id : int
        Fixture identifier.
    participant_id : int
        Participant identifier.
    name : str
        Participant display name.
    result : RatingResult
        Final rating and event log.
    stats : StatLine
        Counting stats.
    event_counts : Mapping[EventType, int]
        Read-only count of successful occurrences per event type.
    aggregate : AggregateScore
        Raw-score breakdown behind the rating.
    """

    match_id: int
    participant_id: int
    name: str
    result: RatingResult
    stats: StatLine
    event_counts: Mapping[EventType, int]
    aggregate: AggregateScore

    @property
    def rating(self) -> float:
        """Return the clamped rating."""
        return self.result.rating

    @property
    def events(self) -> Tuple[MatchEvent, ...]:
        """Return the scored event log."""
        return self.result.events

    def summary(self) -> List[str]:
        """Return the headline moments of the match.

        Returns
        -------
        List[str]
            Entries such as ``"45+2' goal"`` in match order.
        """
        return [
            f"{event.clock} {event.event_type.value.replace('_', ' ')}"
            for event in self.result.events
            if event.event_type in HEADLINE_TYPES and event.success
        ]


def _minutes_played(events: Sequence[MatchEvent], context: "MatchContext") -> int:
    """Return the number of minutes the participant was on the pitch.

    Parameters
    ----------
    events : Sequence[MatchEvent]
        Ordered event log.
    context : MatchContext
        Fixture providing duration and stoppage time.

    Returns
    -------
    int
        Played minutes up to a terminal event, or the full match.
    """
    if not events or events[-1].event_type not in TERMINAL_TYPES:
        return context.total_minutes
    last = events[-1]
    if last.half is MatchHalf.FIRST:
        return last.minute + last.added_minute
    return last.minute + context.first_half_added + last.added_minute


class MatchReportAssembler:
    """Package already-computed results into a :class:`MatchReport`.

    The assembler only counts and formats; it performs no scoring.
    """

    def count_events(self, events: Sequence[MatchEvent]) -> Mapping[EventType, int]:
        """Count successful occurrences of every event type.

        Parameters
        ----------
        events : Sequence[MatchEvent]
            Event log.

        Returns
        -------
        Mapping[EventType, int]
            Read-only mapping of event type to count; absent types are
            omitted.
        """
        counts = Counter(event.event_type for event in events if event.success)
        return MappingProxyType(dict(counts))

    def build_stats(self, events: Sequence[MatchEvent], context: "MatchContext") -> StatLine:
        """Derive the stat line from the event log.

        Parameters
        ----------
        events : Sequence[MatchEvent]
            Event log.
        context : MatchContext
            Fixture providing the duration.

        Returns
        -------
        StatLine
            Counting stats.
        """
        made = Counter(event.event_type for event in events if event.success)
        tried = Counter(event.event_type for event in events)
        return StatLine(
            goals=made[EventType.GOAL],
            assists=made[EventType.ASSIST],
            shots=tried[EventType.GOAL] + tried[EventType.SHOT_ON_TARGET] + tried[EventType.BIG_CHANCE_MISSED],
            shots_on_target=made[EventType.GOAL] + made[EventType.SHOT_ON_TARGET],
            key_passes=made[EventType.KEY_PASS] + made[EventType.ASSIST],
            passes_completed=made[EventType.PASS],
            passes_attempted=tried[EventType.PASS],
            dribbles_completed=made[EventType.DRIBBLE],
            dribbles_attempted=tried[EventType.DRIBBLE],
            tackles_won=made[EventType.TACKLE] + made[EventType.LAST_MAN_TACKLE],
            tackles_attempted=tried[EventType.TACKLE] + tried[EventType.LAST_MAN_TACKLE],
            interceptions=made[EventType.INTERCEPTION],
            clearances=made[EventType.CLEARANCE] + made[EventType.GOAL_LINE_CLEARANCE],
            blocks=made[EventType.BLOCK],
            aerials_won=made[EventType.AERIAL_DUEL],
            saves=sum(
                made[t]
                for t in (EventType.SAVE, EventType.REFLEX_SAVE, EventType.ONE_ON_ONE_SAVE, EventType.PENALTY_SAVE)
            ),
            fouls_committed=made[EventType.FOUL_COMMITTED] + made[EventType.PENALTY_CONCEDED],
            yellow_cards=made[EventType.YELLOW_CARD] + made[EventType.SECOND_YELLOW],
            red_cards=made[EventType.RED_CARD],
            errors=made[EventType.DEFENSIVE_ERROR] + made[EventType.ERROR_LEADING_TO_GOAL] + made[EventType.OWN_GOAL],
            minutes_played=_minutes_played(events, context),
        )

    def assemble(
        self,
        snapshot: "ParticipantSnapshot",
        context: "MatchContext",
        events: Sequence[MatchEvent],
        aggregate: AggregateScore,
        rating: float,
        band: RatingBand,
    ) -> MatchReport:
        """Build the report of one participant's match.

        Parameters
        ----------
        snapshot : ParticipantSnapshot
            Participant the report describes.
        context : MatchContext
            Fixture the report describes.
        events : Sequence[MatchEvent]
            Scored event log, passed through unchanged.
        aggregate : AggregateScore
            Aggregation result.
        rating : float
            Normalized, clamped rating.
        band : RatingBand
            Verbal grade of ``rating``.

        Returns
        -------
        MatchReport
            Immutable report.
        """
        event_log = tuple(events)
        result = RatingResult(
            participant_id=snapshot.participant_id,
            rating=rating,
            band=band,
            involvement=aggregate.involvement,
            involvement_score=aggregate.involvement_score,
            raw_score=aggregate.raw_score,
            events=event_log,
        )
        return MatchReport(
            match_id=context.match_id,
            participant_id=snapshot.participant_id,
            name=snapshot.name,
            result=result,
            stats=self.build_stats(event_log, context),
            event_counts=self.count_events(event_log),
            aggregate=aggregate,
        )
