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
"""Event domain models for the match engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from fulltime.engine.errors import InternalInvariantError
from fulltime.models.snapshot import SubRole


class EventCategory(str, Enum):
    """Closed partition of every action type."""

    ATTACKING = "attacking"
    DEFENSIVE = "defensive"
    GOALKEEPING = "goalkeeping"
    TRANSITION = "transition"
    DISCIPLINE = "discipline"
    OFF_BALL = "off_ball"


class EventType(str, Enum):
    """Every action or incident the generator can record."""

    # Attacking
    GOAL = "goal"
    ASSIST = "assist"
    KEY_PASS = "key_pass"
    SHOT_ON_TARGET = "shot_on_target"
    BIG_CHANCE_MISSED = "big_chance_missed"
    DRIBBLE = "dribble"
    CROSS = "cross"
    THROUGH_BALL = "through_ball"
    PASS = "pass"
    PENALTY_WON = "penalty_won"
    FOUL_WON = "foul_won"

    # Defensive
    TACKLE = "tackle"
    INTERCEPTION = "interception"
    BLOCK = "block"
    CLEARANCE = "clearance"
    AERIAL_DUEL = "aerial_duel"
    LAST_MAN_TACKLE = "last_man_tackle"
    GOAL_LINE_CLEARANCE = "goal_line_clearance"
    DEFENSIVE_ERROR = "defensive_error"
    ERROR_LEADING_TO_GOAL = "error_leading_to_goal"
    OWN_GOAL = "own_goal"

    # Goalkeeping
    SAVE = "save"
    REFLEX_SAVE = "reflex_save"
    ONE_ON_ONE_SAVE = "one_on_one_save"
    PENALTY_SAVE = "penalty_save"
    CLAIM_CROSS = "claim_cross"
    PUNCH_CLEAR = "punch_clear"
    SWEEPER_CLEARANCE = "sweeper_clearance"
    GOAL_CONCEDED = "goal_conceded"

    # Transition
    BALL_RECOVERY = "ball_recovery"
    COUNTER_ATTACK_START = "counter_attack_start"
    TURNOVER_FORCED = "turnover_forced"
    TURNOVER_COMMITTED = "turnover_committed"
    DISPOSSESSED = "dispossessed"

    # Discipline
    FOUL_COMMITTED = "foul_committed"
    YELLOW_CARD = "yellow_card"
    SECOND_YELLOW = "second_yellow"
    RED_CARD = "red_card"
    PENALTY_CONCEDED = "penalty_conceded"
    INJURY = "injury"

    # Off-ball
    PRESS = "press"
    OFF_BALL_RUN = "off_ball_run"
    SPACE_CREATED = "space_created"
    TRACKING_BACK = "tracking_back"
    MARKING_ERROR = "marking_error"

    @property
    def category(self) -> EventCategory:
        """Return the category this event type belongs to."""
        return EVENT_CATEGORIES[self]


def _categorise() -> Dict[EventType, EventCategory]:
    """Invert the per-category membership lists.

    Returns
    -------
    Dict[EventType, EventCategory]
        Category of every event type.
    """
    groups = {
        EventCategory.ATTACKING: (
            EventType.GOAL,
            EventType.ASSIST,
            EventType.KEY_PASS,
            EventType.SHOT_ON_TARGET,
            EventType.BIG_CHANCE_MISSED,
            EventType.DRIBBLE,
            EventType.CROSS,
            EventType.THROUGH_BALL,
            EventType.PASS,
            EventType.PENALTY_WON,
            EventType.FOUL_WON,
        ),
        EventCategory.DEFENSIVE: (
            EventType.TACKLE,
            EventType.INTERCEPTION,
            EventType.BLOCK,
            EventType.CLEARANCE,
            EventType.AERIAL_DUEL,
            EventType.LAST_MAN_TACKLE,
            EventType.GOAL_LINE_CLEARANCE,
            EventType.DEFENSIVE_ERROR,
            EventType.ERROR_LEADING_TO_GOAL,
            EventType.OWN_GOAL,
        ),
        EventCategory.GOALKEEPING: (
            EventType.SAVE,
            EventType.REFLEX_SAVE,
            EventType.ONE_ON_ONE_SAVE,
            EventType.PENALTY_SAVE,
            EventType.CLAIM_CROSS,
            EventType.PUNCH_CLEAR,
            EventType.SWEEPER_CLEARANCE,
            EventType.GOAL_CONCEDED,
        ),
        EventCategory.TRANSITION: (
            EventType.BALL_RECOVERY,
            EventType.COUNTER_ATTACK_START,
            EventType.TURNOVER_FORCED,
            EventType.TURNOVER_COMMITTED,
            EventType.DISPOSSESSED,
        ),
        EventCategory.DISCIPLINE: (
            EventType.FOUL_COMMITTED,
            EventType.YELLOW_CARD,
            EventType.SECOND_YELLOW,
            EventType.RED_CARD,
            EventType.PENALTY_CONCEDED,
            EventType.INJURY,
        ),
        EventCategory.OFF_BALL: (
            EventType.PRESS,
            EventType.OFF_BALL_RUN,
            EventType.SPACE_CREATED,
            EventType.TRACKING_BACK,
            EventType.MARKING_ERROR,
        ),
    }
    return {event_type: category for category, members in groups.items() for event_type in members}


EVENT_CATEGORIES = _categorise()

INCIDENT_TYPES = frozenset(
    {
        EventType.BIG_CHANCE_MISSED,
        EventType.PENALTY_WON,
        EventType.FOUL_WON,
        EventType.DEFENSIVE_ERROR,
        EventType.ERROR_LEADING_TO_GOAL,
        EventType.OWN_GOAL,
        EventType.GOAL_CONCEDED,
        EventType.TURNOVER_COMMITTED,
        EventType.DISPOSSESSED,
        EventType.FOUL_COMMITTED,
        EventType.YELLOW_CARD,
        EventType.SECOND_YELLOW,
        EventType.RED_CARD,
        EventType.PENALTY_CONCEDED,
        EventType.INJURY,
        EventType.MARKING_ERROR,
    }
)
"""Happenings rather than attempts; they are always recorded as ``success=True``."""

TERMINAL_TYPES = frozenset({EventType.INJURY, EventType.RED_CARD})

SHOT_TYPES = frozenset({EventType.GOAL, EventType.SHOT_ON_TARGET, EventType.BIG_CHANCE_MISSED})


class MatchHalf(str, Enum):
    """Half in which an event happened."""

    FIRST = "first"
    SECOND = "second"


class PitchZone(str, Enum):
    """Area of the pitch seen from the participant's side."""

    OWN_BOX = "own_box"
    DEFENSIVE_THIRD = "defensive_third"
    MIDDLE_THIRD = "middle_third"
    ATTACKING_THIRD = "attacking_third"
    OPPOSITION_BOX = "opposition_box"


class ScoreState(str, Enum):
    """Whether the participant's side is ahead, level or behind."""

    LEADING = "leading"
    DRAWING = "drawing"
    TRAILING = "trailing"

    @classmethod
    def from_goal_difference(cls, goal_difference: int) -> "ScoreState":
        """Classify a signed team goal difference.

        Parameters
        ----------
        goal_difference : int
            Goals scored minus goals conceded by the participant's side.

        Returns
        -------
        ScoreState
            ``LEADING`` for a positive difference, ``TRAILING`` for a negative
            one and ``DRAWING`` otherwise.
        """
        if goal_difference > 0:
            return cls.LEADING
        if goal_difference < 0:
            return cls.TRAILING
        return cls.DRAWING


@dataclass(frozen=True)
class DifficultyFactors:
    """Situational hardship attached to an event.

    Parameters
    ----------
    pressure : float, optional
        Opponent pressure from 0 (unchallenged) to 1 (swarmed).
    distance : float, optional
        Range of the action in metres; ``0`` when range does not apply.
    weak_foot : bool, optional
        Whether the action was executed on the weaker side.
    last_man : bool, optional
        Whether the participant was the last line of defence.
    opposition_strength : float, optional
        Level of the opponent on the 0-100 scale.
    """

    pressure: float = 0.5
    distance: float = 0.0
    weak_foot: bool = False
    last_man: bool = False
    opposition_strength: float = 50.0


@dataclass(frozen=True)
class ImpactBreakdown:
    """How an event's signed impact was assembled.

    Parameters
    ----------
    base_value : float
        Table value for the event type and outcome.
    time_multiplier : float
        Lateness factor.
    position_multiplier : float
        Role-responsibility factor.
    difficulty_multiplier : float
        Situational hardship factor.
    clutch_multiplier : float
        High-pressure state factor after the time-clutch cap.
    final_impact : float
        Product of the base value and every multiplier.
    """

    base_value: float
    time_multiplier: float
    position_multiplier: float
    difficulty_multiplier: float
    clutch_multiplier: float
    final_impact: float


@dataclass(frozen=True)
class MatchEvent:
    """Snapshot of a noteworthy moment during a simulation.

    Parameters
    ----------
    sequence : int
        Position of the event in the participant's match log.
    participant_id : int
        Primary participant.
    role : SubRole
        Role the participant played when the event happened.
    event_type : EventType
        What happened.
    minute : int
        Regulation minute, starting at 1. Stoppage time keeps the last
        minute of the half and counts up :attr:`added_minute`.
    half : MatchHalf
        Half in which the event happened.
    added_minute : int, optional
        Stoppage minute, ``0`` outside stoppage time.
    zone : PitchZone, optional
        Area of the pitch.
    success : bool, optional
        Outcome favourable to the participant; incidents are always ``True``.
    goal : bool, optional
        Whether the event is a goal by the participant.
    assist : bool, optional
        Whether the event is an assist by the participant.
    shot : bool, optional
        Whether the event is a shot.
    goal_difference : int, optional
        Team goal difference when the event happened.
    difficulty : DifficultyFactors, optional
        Situational hardship inputs.
    secondary_participant_id : int | None, optional
        Teammate or opponent involved in the event.
    impact : ImpactBreakdown | None, optional
        Filled in by the impact calculator.
    """

    sequence: int
    participant_id: int
    role: SubRole
    event_type: EventType
    minute: int
    half: MatchHalf
    added_minute: int = 0
    zone: PitchZone = PitchZone.MIDDLE_THIRD
    success: bool = True
    goal: bool = False
    assist: bool = False
    shot: bool = False
    goal_difference: int = 0
    difficulty: DifficultyFactors = DifficultyFactors()
    secondary_participant_id: Optional[int] = None
    impact: Optional[ImpactBreakdown] = None

    def __post_init__(self) -> None:
        """Fail loudly on timings the engine can never produce."""
        if self.minute < 1:
            raise InternalInvariantError(f"event {self.sequence} has minute {self.minute}; minutes start at 1")
        if self.added_minute < 0:
            raise InternalInvariantError(f"event {self.sequence} has negative added minute {self.added_minute}")

    @property
    def category(self) -> EventCategory:
        """Return the category of :attr:`event_type`."""
        return self.event_type.category

    @property
    def score_state(self) -> ScoreState:
        """Return the score state derived from :attr:`goal_difference`."""
        return ScoreState.from_goal_difference(self.goal_difference)

    @property
    def clock(self) -> str:
        """Return the match clock label, for example ``"45+2'"``."""
        if self.added_minute:
            return f"{self.minute}+{self.added_minute}'"
        return f"{self.minute}'"

    @property
    def final_impact(self) -> float:
        """Return the computed impact, or ``0.0`` before scoring."""
        return self.impact.final_impact if self.impact is not None else 0.0


def make_event(
    sequence: int,
    participant_id: int,
    role: SubRole,
    event_type: EventType,
    minute: int,
    half: Optional[MatchHalf] = None,
    *,
    added_minute: int = 0,
    zone: PitchZone = PitchZone.MIDDLE_THIRD,
    success: bool = True,
    goal_difference: int = 0,
    difficulty: Optional[DifficultyFactors] = None,
    secondary_participant_id: Optional[int] = None,
    half_length: int = 45,
) -> MatchEvent:
    """Build a :class:`MatchEvent` with its goal, assist and shot flags derived.

    Parameters
    ----------
    sequence : int
        Position in the match log.
    participant_id : int
        Primary participant.
    role : SubRole
        Role the participant is playing.
    event_type : EventType
        What happened.
    minute : int
        Regulation minute.
    half : MatchHalf | None, optional
        Half of the match; inferred from ``minute`` and ``half_length`` when
        omitted.
    added_minute : int, optional
        Stoppage minute.
    zone : PitchZone, optional
        Area of the pitch.
    success : bool, optional
        Outcome flag; forced to ``True`` for incidents.
    goal_difference : int, optional
        Team goal difference at the time.
    difficulty : DifficultyFactors | None, optional
        Hardship inputs; neutral when omitted.
    secondary_participant_id : int | None, optional
        Teammate or opponent involved.
    half_length : int, optional
        Minutes per half, used to infer ``half``.

    Returns
    -------
    MatchEvent
        The assembled, unscored event.
    """
    if half is None:
        half = MatchHalf.FIRST if minute <= half_length else MatchHalf.SECOND
    if event_type in INCIDENT_TYPES or event_type in (EventType.GOAL, EventType.ASSIST):
        success = True
    return MatchEvent(
        sequence=sequence,
        participant_id=participant_id,
        role=role,
        event_type=event_type,
        minute=minute,
        half=half,
        added_minute=added_minute,
        zone=zone,
        success=success,
        goal=event_type is EventType.GOAL,
        assist=event_type is EventType.ASSIST,
        shot=event_type in SHOT_TYPES,
        goal_difference=goal_difference,
        difficulty=difficulty if difficulty is not None else DifficultyFactors(),
        secondary_participant_id=secondary_participant_id,
    )


def chronological_key(event: MatchEvent) -> Tuple[int, int, int]:
    """Return the sort key that orders events as they were played.

    Parameters
    ----------
    event : MatchEvent
        Event to position on the match clock.

    Returns
    -------
    Tuple[int, int, int]
        ``(half index, minute, added minute)``.
    """
    half_index = 0 if event.half is MatchHalf.FIRST else 1
    return (half_index, event.minute, event.added_minute)


def check_event_order(events: Iterable[MatchEvent]) -> None:
    """Verify that an event log never runs backwards.

    Parameters
    ----------
    events : Iterable[MatchEvent]
        Event log in recorded order.

    Raises
    ------
    InternalInvariantError
        If minutes decrease, the clock goes backwards or a terminal event is
        followed by further events.
    """
    previous: Optional[MatchEvent] = None
    for event in events:
        if previous is not None:
            if event.minute < previous.minute or chronological_key(event) < chronological_key(previous):
                raise InternalInvariantError(
                    f"event {event.sequence} at {event.clock} precedes event {previous.sequence} at {previous.clock}"
                )
            if previous.event_type in TERMINAL_TYPES:
                raise InternalInvariantError(
                    f"event {event.sequence} follows terminal {previous.event_type.value} event"
                )
        previous = event
