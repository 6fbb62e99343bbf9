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
"""Utilities for constructing snapshots and fixtures from serialized data.

The helpers translate plain dictionaries or JSON payloads into the immutable
inputs the rating engine understands. They are used by the CLI entrypoint and
test fixtures to describe matches without hand-coding every attribute.
Missing attribute values default to a neutral 50 so incomplete datasets stay
usable, while out-of-range values are still rejected by the models.
"""
import json
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any, List, Mapping, Type, TypeVar

from fulltime.engine.errors import EmptyContext, InvalidSnapshot
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

E = TypeVar("E", bound=Enum)
DEFAULT_ATTRIBUTE = 50


def _attribute_group(cls: type, payload: Mapping[str, Any]) -> Any:
    """Build an attribute dataclass, filling missing ratings with the default.

    Parameters
    ----------
    cls : type
        Attribute dataclass to instantiate.
    payload : Mapping[str, Any]
        Serialized ratings; unknown keys are ignored.

    Returns
    -------
    Any
        Instance of ``cls``.
    """
    values = {}
    for field_def in fields(cls):
        if field_def.name in payload:
            values[field_def.name] = payload[field_def.name]
        elif cls is not HiddenAttributes:
            values[field_def.name] = DEFAULT_ATTRIBUTE
    return cls(**values)


def _enum_value(enum_cls: Type[E], raw: Any, field_name: str, error: Type[Exception]) -> E:
    """Parse an enum member by value or by name.

    Parameters
    ----------
    enum_cls : Type[E]
        Enum to parse into.
    raw : Any
        Serialized value such as ``"CF"`` or ``"league"``.
    field_name : str
        Field name reported on failure.
    error : Type[Exception]
        Input validation error raised on failure.

    Returns
    -------
    E
        Parsed member.
    """
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(raw)
    except ValueError:
        pass
    if isinstance(raw, str) and raw.upper() in enum_cls.__members__:
        return enum_cls[raw.upper()]
    known = ", ".join(member.value for member in enum_cls)
    raise error(f"Unknown {field_name} '{raw}'. Known values: {known}", field_name, raw)


def snapshot_from_dict(d: dict) -> ParticipantSnapshot:
    """Build a ``ParticipantSnapshot`` from a plain dictionary payload.

    Parameters
    ----------
    d
        A mapping containing the serialized participant. Supported keys
        include ``id``, ``name``, ``role`` (or legacy ``position``),
        ``technical``, ``physical``, ``mental`` and ``hidden`` attribute
        mappings, ``form``, ``fitness``, ``fatigue``, ``morale``,
        ``instruction`` and ``injury_minute``.

    Returns
    -------
    ParticipantSnapshot
        Validated snapshot with neutral defaults for missing ratings.

    Raises
    ------
    InvalidSnapshot
        Raised when a value is out of range or an enum code is unknown.
    """
    role = _enum_value(SubRole, d.get("role") or d.get("position", "CM"), "role", InvalidSnapshot)
    instruction = _enum_value(
        TacticalInstruction, d.get("instruction", "balanced"), "instruction", InvalidSnapshot
    )
    participant_id = d.get("id", 0)
    return ParticipantSnapshot(
        participant_id=participant_id,
        name=d.get("name", f"player_{participant_id}"),
        role=role,
        technical=_attribute_group(TechnicalAttributes, d.get("technical", {}) or {}),
        physical=_attribute_group(PhysicalAttributes, d.get("physical", {}) or {}),
        mental=_attribute_group(MentalAttributes, d.get("mental", {}) or {}),
        hidden=_attribute_group(HiddenAttributes, d.get("hidden", {}) or {}),
        form=d.get("form", 60.0),
        fitness=d.get("fitness", 90.0),
        fatigue=d.get("fatigue", 10.0),
        morale=d.get("morale", 60.0),
        instruction=instruction,
        injury_minute=d.get("injury_minute"),
    )


def context_from_dict(d: dict) -> MatchContext:
    """Build a ``MatchContext`` from a plain dictionary payload.

    Parameters
    ----------
    d
        A mapping whose keys mirror the :class:`MatchContext` fields;
        ``id`` is accepted for ``match_id``.

    Returns
    -------
    MatchContext
        Validated context with neutral defaults for missing keys.

    Raises
    ------
    EmptyContext
        Raised when the duration is not positive or an enum code is unknown.
    """
    defaults = MatchContext()
    return MatchContext(
        match_id=d.get("match_id", d.get("id", defaults.match_id)),
        competition=_enum_value(
            CompetitionTier, d.get("competition", defaults.competition), "competition", EmptyContext
        ),
        regulation_minutes=d.get("regulation_minutes", defaults.regulation_minutes),
        first_half_added=d.get("first_half_added", defaults.first_half_added),
        second_half_added=d.get("second_half_added", defaults.second_half_added),
        is_home=bool(d.get("is_home", defaults.is_home)),
        weather=_enum_value(Weather, d.get("weather", defaults.weather), "weather", EmptyContext),
        pitch=_enum_value(PitchCondition, d.get("pitch", defaults.pitch), "pitch", EmptyContext),
        team_strength=d.get("team_strength", defaults.team_strength),
        opposition_strength=d.get("opposition_strength", defaults.opposition_strength),
        starting_goal_difference=d.get("starting_goal_difference", defaults.starting_goal_difference),
        teammate_ids=tuple(d.get("teammate_ids", ())),
        opponent_ids=tuple(d.get("opponent_ids", ())),
    )


def load_fixtures_from_json(path: str) -> List[Fixture]:
    """Load a matchday of fixtures from JSON.

    The document holds a ``fixtures`` list. Each entry has a ``participant``
    mapping, an optional ``context`` mapping and an optional ``seed``. A
    top-level ``context`` mapping supplies defaults shared by every fixture.

    Parameters
    ----------
    path
        The filesystem path to the JSON document.

    Returns
    -------
    list[Fixture]
        Fixtures in document order, ready for
        :meth:`MatchRatingEngine.simulate_matchday`.

    Raises
    ------
    FileNotFoundError
        Raised when ``path`` does not exist.
    KeyError
        Raised when the payload has no ``fixtures`` section or an entry has
        no ``participant``.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Fixtures JSON not found: {path}")

    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)

    shared_context = data.get("context", {}) or {}
    fixtures = []
    for entry in data["fixtures"]:
        context_data = {**shared_context, **(entry.get("context", {}) or {})}
        fixtures.append(
            Fixture(
                snapshot=snapshot_from_dict(entry["participant"]),
                context=context_from_dict(context_data),
                seed=entry.get("seed"),
            )
        )
    return fixtures
