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
"""Shared role profile scaffolding for all positional event mixes."""
from __future__ import annotations

import random
from typing import TYPE_CHECKING, Dict, List, Tuple

from fulltime.engine.events import EventCategory, EventType, PitchZone
from fulltime.models.snapshot import SubRole

if TYPE_CHECKING:
    from fulltime.models.snapshot import ParticipantSnapshot


# (event type, base weight, driving attribute) for every action a participant
# can choose to attempt. Derived outcomes such as goals, assists and cards are
# resolved by the generator and never picked directly.
ACTION_TABLE: Dict[EventCategory, Tuple[Tuple[EventType, float, str], ...]] = {
    EventCategory.ATTACKING: (
        (EventType.PASS, 10.0, "passing"),
        (EventType.KEY_PASS, 1.2, "vision"),
        (EventType.SHOT_ON_TARGET, 1.0, "finishing"),
        (EventType.DRIBBLE, 2.0, "dribbling"),
        (EventType.CROSS, 1.0, "crossing"),
        (EventType.THROUGH_BALL, 0.8, "vision"),
        (EventType.FOUL_WON, 0.6, "agility"),
        (EventType.PENALTY_WON, 0.05, "dribbling"),
    ),
    EventCategory.DEFENSIVE: (
        (EventType.TACKLE, 3.0, "tackling"),
        (EventType.INTERCEPTION, 3.0, "positioning"),
        (EventType.BLOCK, 1.0, "positioning"),
        (EventType.CLEARANCE, 2.0, "heading"),
        (EventType.AERIAL_DUEL, 2.0, "jumping"),
        (EventType.LAST_MAN_TACKLE, 0.2, "tackling"),
        (EventType.GOAL_LINE_CLEARANCE, 0.05, "positioning"),
    ),
    EventCategory.GOALKEEPING: (
        (EventType.SAVE, 3.0, "reflexes"),
        (EventType.REFLEX_SAVE, 0.8, "reflexes"),
        (EventType.ONE_ON_ONE_SAVE, 0.4, "positioning"),
        (EventType.PENALTY_SAVE, 0.05, "reflexes"),
        (EventType.CLAIM_CROSS, 2.0, "handling"),
        (EventType.PUNCH_CLEAR, 1.0, "jumping"),
        (EventType.SWEEPER_CLEARANCE, 0.6, "pace"),
    ),
    EventCategory.TRANSITION: (
        (EventType.BALL_RECOVERY, 3.0, "positioning"),
        (EventType.COUNTER_ATTACK_START, 1.2, "vision"),
        (EventType.TURNOVER_FORCED, 1.5, "work_rate"),
    ),
    EventCategory.DISCIPLINE: ((EventType.FOUL_COMMITTED, 1.0, "professionalism"),),
    EventCategory.OFF_BALL: (
        (EventType.PRESS, 3.0, "work_rate"),
        (EventType.OFF_BALL_RUN, 2.0, "pace"),
        (EventType.SPACE_CREATED, 1.5, "vision"),
        (EventType.TRACKING_BACK, 1.5, "work_rate"),
    ),
}

# Attributes whose average scales how often a category comes up.
CATEGORY_ATTRIBUTES: Dict[EventCategory, Tuple[str, ...]] = {
    EventCategory.ATTACKING: ("finishing", "passing", "dribbling"),
    EventCategory.DEFENSIVE: ("tackling", "positioning"),
    EventCategory.GOALKEEPING: ("handling", "reflexes"),
    EventCategory.TRANSITION: ("decisions", "pace"),
    EventCategory.OFF_BALL: ("work_rate", "teamwork"),
}

MISTAKE_TYPES: Dict[EventCategory, EventType] = {
    EventCategory.ATTACKING: EventType.DISPOSSESSED,
    EventCategory.DEFENSIVE: EventType.DEFENSIVE_ERROR,
    EventCategory.GOALKEEPING: EventType.DEFENSIVE_ERROR,
    EventCategory.TRANSITION: EventType.TURNOVER_COMMITTED,
    EventCategory.DISCIPLINE: EventType.FOUL_COMMITTED,
    EventCategory.OFF_BALL: EventType.MARKING_ERROR,
}

ZONE_TABLE: Dict[EventCategory, Tuple[Tuple[PitchZone, float], ...]] = {
    EventCategory.ATTACKING: (
        (PitchZone.DEFENSIVE_THIRD, 0.15),
        (PitchZone.MIDDLE_THIRD, 0.45),
        (PitchZone.ATTACKING_THIRD, 0.3),
        (PitchZone.OPPOSITION_BOX, 0.1),
    ),
    EventCategory.DEFENSIVE: (
        (PitchZone.OWN_BOX, 0.3),
        (PitchZone.DEFENSIVE_THIRD, 0.45),
        (PitchZone.MIDDLE_THIRD, 0.25),
    ),
    EventCategory.GOALKEEPING: ((PitchZone.OWN_BOX, 0.9), (PitchZone.DEFENSIVE_THIRD, 0.1)),
    EventCategory.TRANSITION: (
        (PitchZone.DEFENSIVE_THIRD, 0.3),
        (PitchZone.MIDDLE_THIRD, 0.5),
        (PitchZone.ATTACKING_THIRD, 0.2),
    ),
    EventCategory.DISCIPLINE: (
        (PitchZone.OWN_BOX, 0.1),
        (PitchZone.DEFENSIVE_THIRD, 0.35),
        (PitchZone.MIDDLE_THIRD, 0.4),
        (PitchZone.ATTACKING_THIRD, 0.15),
    ),
    EventCategory.OFF_BALL: (
        (PitchZone.DEFENSIVE_THIRD, 0.3),
        (PitchZone.MIDDLE_THIRD, 0.4),
        (PitchZone.ATTACKING_THIRD, 0.3),
    ),
}

SHOT_ZONES: Tuple[Tuple[PitchZone, float], ...] = (
    (PitchZone.OPPOSITION_BOX, 0.7),
    (PitchZone.ATTACKING_THIRD, 0.3),
)


class RoleProfile:
    """Base event-mix profile shared by every tactical role.

    Subclasses tune :attr:`involvement_weight`, :attr:`category_weights` and
    :attr:`action_bias`; the selection logic lives here.

    Parameters
    ----------
    role : SubRole
        Tactical role described by this profile instance.
    side : str
        Pitch side the role normally occupies (``"left"``, ``"right"`` or
        ``"central"``).
    """

    involvement_weight: float = 1.0
    category_weights: Dict[EventCategory, float] = {
        EventCategory.ATTACKING: 0.30,
        EventCategory.DEFENSIVE: 0.25,
        EventCategory.GOALKEEPING: 0.0,
        EventCategory.TRANSITION: 0.18,
        EventCategory.DISCIPLINE: 0.05,
        EventCategory.OFF_BALL: 0.22,
    }
    action_bias: Dict[EventType, float] = {}

    def __init__(self, role: SubRole, side: str = "central") -> None:
        """Store metadata describing the role being profiled.

        Parameters
        ----------
        role : SubRole
            Tactical role described by this profile instance.
        side : str
            Pitch side the role normally occupies.
        """
        self.role = role
        self.side = side

    def __repr__(self) -> str:
        return f"{type(self).__name__}(role={self.role.value!r}, side={self.side!r})"

    @staticmethod
    def attribute_factor(value: float, floor: float = 0.7, span: float = 0.6) -> float:
        """Map a 0-100 rating onto a linear weighting factor.

        Parameters
        ----------
        value : float
            Rating on the 0-100 scale.
        floor : float
            Factor returned for a rating of zero.
        span : float
            Factor added between a rating of zero and a rating of 100.

        Returns
        -------
        float
            ``floor + span * value / 100``.
        """
        return floor + span * value / 100.0

    def category_mix(self, snapshot: "ParticipantSnapshot") -> Dict[EventCategory, float]:
        """Weight each event category for ``snapshot``.

        The role's base mix is scaled by the participant's strengths so a
        gifted finisher sees more attacking involvement and an unprofessional
        one more fouls.

        Parameters
        ----------
        snapshot : ParticipantSnapshot
            Participant whose attributes scale the base mix.

        Returns
        -------
        Dict[EventCategory, float]
            Non-negative selection weight per category.
        """
        mix: Dict[EventCategory, float] = {}
        for category, base in self.category_weights.items():
            if base <= 0:
                mix[category] = 0.0
                continue
            if category is EventCategory.DISCIPLINE:
                factor = self.attribute_factor(snapshot.hidden.professionalism, floor=1.3, span=-0.6)
            else:
                names = CATEGORY_ATTRIBUTES[category]
                average = sum(snapshot.attribute(name) for name in names) / len(names)
                factor = self.attribute_factor(average)
            mix[category] = base * factor
        return mix

    def action_mix(
        self, category: EventCategory, snapshot: "ParticipantSnapshot"
    ) -> List[Tuple[EventType, float]]:
        """Weight the actions available inside ``category``.

        Parameters
        ----------
        category : EventCategory
            Category that has already been selected.
        snapshot : ParticipantSnapshot
            Participant whose driving attributes scale each action.

        Returns
        -------
        List[Tuple[EventType, float]]
            Candidate actions with their non-negative weights.
        """
        weighted: List[Tuple[EventType, float]] = []
        for event_type, base, attribute in ACTION_TABLE[category]:
            bias = self.action_bias.get(event_type, 1.0)
            if bias <= 0:
                continue
            factor = self.attribute_factor(snapshot.attribute(attribute), floor=0.5, span=1.0)
            weighted.append((event_type, base * bias * factor))
        return weighted

    def choose_category(self, snapshot: "ParticipantSnapshot", rng: random.Random) -> EventCategory:
        """Draw the category of the next action.

        Parameters
        ----------
        snapshot : ParticipantSnapshot
            Participant taking the action.
        rng : random.Random
            Per-match random source.

        Returns
        -------
        EventCategory
            Selected category.
        """
        mix = self.category_mix(snapshot)
        categories = list(mix)
        return rng.choices(categories, weights=[mix[c] for c in categories])[0]

    def choose_action(
        self, category: EventCategory, snapshot: "ParticipantSnapshot", rng: random.Random
    ) -> EventType:
        """Draw the action attempted inside ``category``.

        Parameters
        ----------
        category : EventCategory
            Category already selected for this action.
        snapshot : ParticipantSnapshot
            Participant taking the action.
        rng : random.Random
            Per-match random source.

        Returns
        -------
        EventType
            Selected action type.
        """
        weighted = self.action_mix(category, snapshot)
        return rng.choices([t for t, _ in weighted], weights=[w for _, w in weighted])[0]

    def driving_attribute(self, event_type: EventType) -> str:
        """Return the attribute that decides whether ``event_type`` succeeds.

        Parameters
        ----------
        event_type : EventType
            Attempted action.

        Returns
        -------
        str
            Attribute name understood by :meth:`ParticipantSnapshot.attribute`.
        """
        category = event_type.category
        for candidate, _, attribute in ACTION_TABLE[category]:
            if candidate is event_type:
                return attribute
        return "decisions"

    def mistake_for(self, category: EventCategory) -> EventType:
        """Return the negative incident recorded when an action in ``category`` goes wrong.

        Parameters
        ----------
        category : EventCategory
            Category of the action that was attempted.

        Returns
        -------
        EventType
            Negative incident type.
        """
        return MISTAKE_TYPES[category]

    def choose_zone(self, event_type: EventType, rng: random.Random) -> PitchZone:
        """Draw the pitch zone of an event.

        Parameters
        ----------
        event_type : EventType
            Event being placed on the pitch.
        rng : random.Random
            Per-match random source.

        Returns
        -------
        PitchZone
            Zone seen from the participant's side.
        """
        if event_type in (EventType.SHOT_ON_TARGET, EventType.GOAL, EventType.BIG_CHANCE_MISSED):
            table = SHOT_ZONES
        elif event_type in (EventType.PENALTY_WON,):
            return PitchZone.OPPOSITION_BOX
        elif event_type in (EventType.PENALTY_CONCEDED, EventType.GOAL_LINE_CLEARANCE, EventType.PENALTY_SAVE):
            return PitchZone.OWN_BOX
        else:
            table = ZONE_TABLE[event_type.category]
        return rng.choices([zone for zone, _ in table], weights=[w for _, w in table])[0]


__all__ = [
    "ACTION_TABLE",
    "CATEGORY_ATTRIBUTES",
    "MISTAKE_TYPES",
    "RoleProfile",
]
