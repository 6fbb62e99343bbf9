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
"""Utilities that synthesise participants and fixtures for quick simulations."""
import random
from typing import Dict, List, Optional, Sequence

from fulltime.engine.match_engine import Fixture
from fulltime.models.context import CompetitionTier, MatchContext, PitchCondition, Weather
from fulltime.models.snapshot import (
    HiddenAttributes,
    MentalAttributes,
    ParticipantSnapshot,
    PhysicalAttributes,
    SubRole,
    TacticalInstruction,
    TechnicalAttributes,
)

ROLE_IMPORTANT_ATTRIBUTES: Dict[SubRole, List[str]] = {
    SubRole.GK: ["handling", "reflexes", "positioning", "jumping"],
    SubRole.RD: ["tackling", "pace", "stamina", "crossing"],
    SubRole.CD: ["tackling", "heading", "strength", "positioning"],
    SubRole.LD: ["tackling", "pace", "stamina", "crossing"],
    SubRole.DM: ["tackling", "positioning", "passing", "work_rate"],
    SubRole.RM: ["dribbling", "pace", "crossing", "vision"],
    SubRole.CM: ["passing", "vision", "decisions", "stamina"],
    SubRole.LM: ["dribbling", "pace", "crossing", "vision"],
    SubRole.AM: ["passing", "vision", "dribbling", "finishing"],
    SubRole.CF: ["finishing", "positioning", "strength", "heading"],
    SubRole.RCF: ["finishing", "dribbling", "pace", "vision"],
    SubRole.LCF: ["finishing", "dribbling", "pace", "vision"],
}

FIRST_NAMES = ["John", "James", "David", "Michael", "Robert", "Carlos", "Juan", "Luis"]
LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Rodriguez"]


def generate_random_snapshot(
    participant_id: int,
    name: Optional[str] = None,
    role: Optional[SubRole] = None,
    rng: Optional[random.Random] = None,
) -> ParticipantSnapshot:
    """Generate a participant with random attributes.

    Parameters
    ----------
    participant_id : int
        Unique identifier assigned to the created participant.
    name : Optional[str]
        Display name to apply; a pseudo-random name is chosen when omitted.
    role : Optional[SubRole]
        Role influencing attribute weighting; random when ``None``.
    rng : Optional[random.Random]
        Random source; a fresh unseeded one when omitted.

    Returns
    -------
    ParticipantSnapshot
        A newly constructed snapshot with stochastic attribute scores.
    """
    rng = rng or random.Random()
    if name is None:
        name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
    if role is None:
        role = rng.choice(list(ROLE_IMPORTANT_ATTRIBUTES))

    important = ROLE_IMPORTANT_ATTRIBUTES[role]

    def get_attribute(attr: str) -> int:
        if attr in important:
            return rng.randint(60, 90)
        return rng.randint(40, 80)

    technical = TechnicalAttributes(
        finishing=get_attribute("finishing"),
        passing=get_attribute("passing"),
        dribbling=get_attribute("dribbling"),
        crossing=get_attribute("crossing"),
        tackling=get_attribute("tackling"),
        heading=get_attribute("heading"),
        first_touch=get_attribute("first_touch"),
        handling=get_attribute("handling") if role is SubRole.GK else rng.randint(5, 25),
        reflexes=get_attribute("reflexes") if role is SubRole.GK else rng.randint(5, 25),
        weak_foot=rng.randint(20, 80),
    )
    physical = PhysicalAttributes(
        pace=get_attribute("pace"),
        stamina=get_attribute("stamina"),
        strength=get_attribute("strength"),
        agility=get_attribute("agility"),
        jumping=get_attribute("jumping"),
    )
    mental = MentalAttributes(
        composure=get_attribute("composure"),
        vision=get_attribute("vision"),
        work_rate=get_attribute("work_rate"),
        determination=get_attribute("determination"),
        positioning=get_attribute("positioning"),
        decisions=get_attribute("decisions"),
        teamwork=get_attribute("teamwork"),
    )
    hidden = HiddenAttributes(
        consistency=rng.randint(30, 90),
        professionalism=rng.randint(30, 90),
        big_moment=rng.randint(30, 90),
        injury_proneness=rng.randint(5, 60),
    )
    return ParticipantSnapshot(
        participant_id=participant_id,
        name=name,
        role=role,
        technical=technical,
        physical=physical,
        mental=mental,
        hidden=hidden,
        form=float(rng.randint(35, 85)),
        fitness=float(rng.randint(70, 100)),
        fatigue=float(rng.randint(0, 30)),
        morale=float(rng.randint(35, 85)),
        instruction=rng.choice(list(TacticalInstruction)),
    )


def generate_random_context(match_id: int, rng: Optional[random.Random] = None) -> MatchContext:
    """Generate a fixture with random conditions.

    Parameters
    ----------
    match_id : int
        Identifier assigned to the fixture.
    rng : Optional[random.Random]
        Random source; a fresh unseeded one when omitted.

    Returns
    -------
    MatchContext
        Regulation-length fixture with random tier, weather and strengths.
    """
    rng = rng or random.Random()
    return MatchContext(
        match_id=match_id,
        competition=rng.choices(list(CompetitionTier), weights=[1, 8, 2, 0.5])[0],
        first_half_added=rng.randint(0, 4),
        second_half_added=rng.randint(2, 7),
        is_home=rng.random() < 0.5,
        weather=rng.choices(list(Weather), weights=[6, 3, 1, 0.5, 1, 1])[0],
        pitch=rng.choices(list(PitchCondition), weights=[2, 6, 2, 1])[0],
        team_strength=float(rng.randint(35, 85)),
        opposition_strength=float(rng.randint(35, 85)),
    )


def generate_fixtures(
    count: int,
    roles: Optional[Sequence[SubRole]] = None,
    rng: Optional[random.Random] = None,
) -> List[Fixture]:
    """Generate a matchday of independent fixtures.

    Parameters
    ----------
    count : int
        Number of fixtures to create.
    roles : Optional[Sequence[SubRole]]
        Roles cycled through for the participants; random when omitted.
    rng : Optional[random.Random]
        Random source for attributes, conditions and per-fixture seeds.

    Returns
    -------
    List[Fixture]
        Fixtures with distinct participant and match identifiers, each
        carrying its own seed.

    Raises
    ------
    ValueError
        If ``count`` is negative.
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    rng = rng or random.Random()
    fixtures: List[Fixture] = []
    for index in range(count):
        role = roles[index % len(roles)] if roles else None
        fixtures.append(
            Fixture(
                snapshot=generate_random_snapshot(index + 1, role=role, rng=rng),
                context=generate_random_context(index + 1, rng=rng),
                seed=rng.randrange(2**31),
            )
        )
    return fixtures
