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
"""Domain models describing a participant as they walk out for a match."""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional

from fulltime.engine.errors import InvalidSnapshot

ATTRIBUTE_MIN = 0
ATTRIBUTE_MAX = 100


class Position(str, Enum):
    """Broad positional line used by the responsibility tables."""

    GOALKEEPER = "goalkeeper"
    DEFENDER = "defender"
    MIDFIELDER = "midfielder"
    FORWARD = "forward"


class SubRole(str, Enum):
    """Specific tactical role code within a positional line."""

    GK = "GK"
    RD = "RD"
    CD = "CD"
    LD = "LD"
    DM = "DM"
    RM = "RM"
    CM = "CM"
    LM = "LM"
    AM = "AM"
    RCF = "RCF"
    CF = "CF"
    LCF = "LCF"

    @property
    def position(self) -> Position:
        """Return the positional line this role belongs to."""
        return _ROLE_POSITIONS[self]


_ROLE_POSITIONS = {
    SubRole.GK: Position.GOALKEEPER,
    SubRole.RD: Position.DEFENDER,
    SubRole.CD: Position.DEFENDER,
    SubRole.LD: Position.DEFENDER,
    SubRole.DM: Position.MIDFIELDER,
    SubRole.RM: Position.MIDFIELDER,
    SubRole.CM: Position.MIDFIELDER,
    SubRole.LM: Position.MIDFIELDER,
    SubRole.AM: Position.MIDFIELDER,
    SubRole.RCF: Position.FORWARD,
    SubRole.CF: Position.FORWARD,
    SubRole.LCF: Position.FORWARD,
}


class TacticalInstruction(str, Enum):
    """Manager instruction that scales how often a participant gets involved."""

    DEFEND = "defend"
    BALANCED = "balanced"
    SUPPORT = "support"
    ATTACK = "attack"
    FREE_ROLE = "free_role"


def _check_bounds(group: object, prefix: str) -> None:
    """Reject any dataclass field of ``group`` outside the 0-100 scale.

    Parameters
    ----------
    group : object
        Dataclass instance whose numeric fields should be inspected.
    prefix : str
        Dotted prefix used when naming the offending field.

    Raises
    ------
    InvalidSnapshot
        If a field is not numeric or falls outside ``[0, 100]``.
    """
    for field_def in fields(group):
        value = getattr(group, field_def.name)
        _check_value(value, f"{prefix}.{field_def.name}")


def _check_value(value: object, name: str) -> None:
    """Validate a single bounded value.

    Parameters
    ----------
    value : object
        Candidate attribute value.
    name : str
        Dotted field name used in the error message.

    Raises
    ------
    InvalidSnapshot
        If ``value`` is not a number within ``[0, 100]``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidSnapshot(f"{name} must be numeric, got {value!r}", name, value)
    if not ATTRIBUTE_MIN <= value <= ATTRIBUTE_MAX:
        raise InvalidSnapshot(
            f"{name} must be between {ATTRIBUTE_MIN} and {ATTRIBUTE_MAX}, got {value}",
            name,
            value,
        )


@dataclass(frozen=True)
class TechnicalAttributes:
    """Ball-skill ratings on the 0-100 scale.

    Parameters
    ----------
    finishing : int
        Shot placement and conversion.
    passing : int
        Accuracy and weight of passes.
    dribbling : int
        Close control when running with the ball.
    crossing : int
        Delivery from wide areas.
    tackling : int
        Timing of standing and sliding challenges.
    heading : int
        Power and accuracy in the air.
    first_touch : int
        Ability to kill the ball under pressure.
    handling : int
        Goalkeeper catching and claiming.
    reflexes : int
        Goalkeeper shot-stopping reactions.
    weak_foot : int
        Quality of execution on the weaker side.
    """

    finishing: int
    passing: int
    dribbling: int
    crossing: int
    tackling: int
    heading: int
    first_touch: int
    handling: int
    reflexes: int
    weak_foot: int

    def __post_init__(self) -> None:
        """Validate every rating against the 0-100 scale."""
        self.validate()

    def validate(self) -> None:
        """Raise :class:`InvalidSnapshot` for any out-of-range rating."""
        _check_bounds(self, "technical")

    def average(self) -> float:
        """Return the mean of the outfield technical ratings.

        Returns
        -------
        float
            Average of every rating except the goalkeeper-only ones.
        """
        outfield = (
            self.finishing,
            self.passing,
            self.dribbling,
            self.crossing,
            self.tackling,
            self.heading,
            self.first_touch,
        )
        return sum(outfield) / len(outfield)


@dataclass(frozen=True)
class PhysicalAttributes:
    """Athletic ratings on the 0-100 scale.

    Parameters
    ----------
    pace : int
        Top speed.
    stamina : int
        Resistance to fatigue over ninety minutes.
    strength : int
        Power in physical contests.
    agility : int
        Balance and change of direction.
    jumping : int
        Vertical leap for aerial duels.
    """

    pace: int
    stamina: int
    strength: int
    agility: int
    jumping: int

    def __post_init__(self) -> None:
        """Validate every rating against the 0-100 scale."""
        self.validate()

    def validate(self) -> None:
        """Raise :class:`InvalidSnapshot` for any out-of-range rating."""
        _check_bounds(self, "physical")


@dataclass(frozen=True)
class MentalAttributes:
    """Decision-making and temperament ratings on the 0-100 scale.

    Parameters
    ----------
    composure : int
        Calmness on the ball under pressure.
    vision : int
        Awareness of passing options.
    work_rate : int
        Willingness to get involved without the ball.
    determination : int
        Drive to keep competing when things go wrong.
    positioning : int
        Reading of the game when defending.
    decisions : int
        Quality of choices in possession.
    teamwork : int
        Willingness to follow the collective plan.
    """

    composure: int
    vision: int
    work_rate: int
    determination: int
    positioning: int
    decisions: int
    teamwork: int

    def __post_init__(self) -> None:
        """Validate every rating against the 0-100 scale."""
        self.validate()

    def validate(self) -> None:
        """Raise :class:`InvalidSnapshot` for any out-of-range rating."""
        _check_bounds(self, "mental")


@dataclass(frozen=True)
class HiddenAttributes:
    """Modifiers that are never displayed to the user.

    Parameters
    ----------
    consistency : int
        How little the participant's level swings between matches.
    professionalism : int
        Discipline; high values reduce cards and fouls.
    big_moment : int
        Temperament in high-pressure states.
    injury_proneness : int
        Likelihood of breaking down mid-match.
    """

    consistency: int = 50
    professionalism: int = 50
    big_moment: int = 50
    injury_proneness: int = 20

    def __post_init__(self) -> None:
        """Validate every modifier against the 0-100 scale."""
        self.validate()

    def validate(self) -> None:
        """Raise :class:`InvalidSnapshot` for any out-of-range modifier."""
        _check_bounds(self, "hidden")


@dataclass(frozen=True)
class ParticipantSnapshot:
    """Immutable view of one participant supplied for a single match run.

    Parameters
    ----------
    participant_id : int
        Identifier used to tie events and results back to the participant.
    name : str
        Display name.
    role : SubRole
        Tactical role code for this match.
    technical : TechnicalAttributes
        Ball-skill ratings.
    physical : PhysicalAttributes
        Athletic ratings.
    mental : MentalAttributes
        Decision-making ratings.
    hidden : HiddenAttributes, optional
        Hidden modifiers; neutral defaults when omitted.
    form : float, optional
        Recent form, 0-100.
    fitness : float, optional
        Match fitness, 0-100; low values sharply raise mistake rates.
    fatigue : float, optional
        Fatigue carried into kick-off, 0-100.
    morale : float, optional
        Confidence proxy, 0-100.
    instruction : TacticalInstruction, optional
        Tactical-role instruction scaling involvement.
    injury_minute : int | None, optional
        Minute at which a collaborator has marked the participant as injured.
    """

    participant_id: int
    name: str
    role: SubRole
    technical: TechnicalAttributes
    physical: PhysicalAttributes
    mental: MentalAttributes
    hidden: HiddenAttributes = HiddenAttributes()
    form: float = 60.0
    fitness: float = 90.0
    fatigue: float = 10.0
    morale: float = 60.0
    instruction: TacticalInstruction = TacticalInstruction.BALANCED
    injury_minute: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate the snapshot as soon as it is built."""
        self.validate()

    def validate(self) -> None:
        """Check every bounded field, including nested attribute groups.

        Raises
        ------
        InvalidSnapshot
            If any bounded value lies outside ``[0, 100]``, the role is not a
            :class:`SubRole`, the instruction is not a
            :class:`TacticalInstruction` or the injury minute is not a positive integer.
        """
        if not isinstance(self.role, SubRole):
            raise InvalidSnapshot(f"role must be a SubRole, got {self.role!r}", "role", self.role)
        if not isinstance(self.instruction, TacticalInstruction):
            raise InvalidSnapshot(
                f"instruction must be a TacticalInstruction, got {self.instruction!r}", "instruction", self.instruction
            )
        self.technical.validate()
        self.physical.validate()
        self.mental.validate()
        self.hidden.validate()
        for name in ("form", "fitness", "fatigue", "morale"):
            _check_value(getattr(self, name), name)
        if self.injury_minute is not None:
            if isinstance(self.injury_minute, bool) or not isinstance(self.injury_minute, int):
                raise InvalidSnapshot("injury_minute must be an integer", "injury_minute", self.injury_minute)
            if self.injury_minute < 1:
                raise InvalidSnapshot("injury_minute must be at least 1", "injury_minute", self.injury_minute)

    @property
    def position(self) -> Position:
        """Return the positional line derived from :attr:`role`."""
        return self.role.position

    def attribute(self, name: str) -> float:
        """Look up an attribute by name across all attribute groups.

        Parameters
        ----------
        name : str
            Attribute name such as ``"finishing"`` or ``"work_rate"``.

        Returns
        -------
        float
            The stored rating.

        Raises
        ------
        KeyError
            If no group defines an attribute called ``name``.
        """
        for group in (self.technical, self.physical, self.mental, self.hidden):
            if any(field_def.name == name for field_def in fields(group)):
                return float(getattr(group, name))
        if name in ("form", "fitness", "fatigue", "morale"):
            return float(getattr(self, name))
        raise KeyError(f"Unknown attribute '{name}'")
