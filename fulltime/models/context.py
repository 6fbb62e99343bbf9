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
"""Static situational data for a single fixture."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from fulltime.engine.errors import EmptyContext


class CompetitionTier(str, Enum):
    """Importance of the fixture, feeding the clutch multiplier."""

    FRIENDLY = "friendly"
    LEAGUE = "league"
    CUP = "cup"
    FINAL = "final"


class Weather(str, Enum):
    """Conditions that nudge success rates and fatigue."""

    CLEAR = "clear"
    RAIN = "rain"
    HEAVY_RAIN = "heavy_rain"
    SNOW = "snow"
    HEAT = "heat"
    WIND = "wind"


class PitchCondition(str, Enum):
    """State of the playing surface."""

    EXCELLENT = "excellent"
    GOOD = "good"
    WORN = "worn"
    POOR = "poor"


@dataclass(frozen=True)
class MatchContext:
    """Per-match parameters shared by every participant in the fixture.

    Parameters
    ----------
    match_id : int, optional
        Identifier of the fixture.
    competition : CompetitionTier, optional
        Importance tier of the fixture.
    regulation_minutes : int, optional
        Length of regulation time; must be a positive even number.
    first_half_added : int, optional
        Stoppage minutes played at the end of the first half.
    second_half_added : int, optional
        Stoppage minutes played at the end of the second half.
    is_home : bool, optional
        Whether the participant's side plays at home.
    weather : Weather, optional
        Weather during the match; neutral by default.
    pitch : PitchCondition, optional
        Surface quality; neutral by default.
    team_strength : float, optional
        Overall level of the participant's side, 0-100.
    opposition_strength : float, optional
        Overall level of the opponent, 0-100.
    starting_goal_difference : int, optional
        Team goal difference at kick-off, signed.
    teammate_ids : Tuple[int, ...], optional
        Candidates for secondary participants in constructive events.
    opponent_ids : Tuple[int, ...], optional
        Candidates for secondary participants in duels and fouls.
    """

    match_id: int = 0
    competition: CompetitionTier = CompetitionTier.LEAGUE
    regulation_minutes: int = 90
    first_half_added: int = 2
    second_half_added: int = 4
    is_home: bool = True
    weather: Weather = Weather.CLEAR
    pitch: PitchCondition = PitchCondition.GOOD
    team_strength: float = 50.0
    opposition_strength: float = 50.0
    starting_goal_difference: int = 0
    teammate_ids: Tuple[int, ...] = ()
    opponent_ids: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        """Reject malformed contexts at construction."""
        self.validate()

    def validate(self) -> None:
        """Check duration, stoppage time and strength ranges.

        Raises
        ------
        EmptyContext
            If the match has no duration or any field is malformed.
        """
        minutes = self.regulation_minutes
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes <= 0:
            raise EmptyContext(
                f"regulation_minutes must be a positive integer, got {minutes!r}",
                "regulation_minutes",
                minutes,
            )
        if minutes % 2:
            raise EmptyContext("regulation_minutes must split into two equal halves", "regulation_minutes", minutes)
        for name in ("first_half_added", "second_half_added"):
            added = getattr(self, name)
            if isinstance(added, bool) or not isinstance(added, int) or added < 0:
                raise EmptyContext(f"{name} must be a non-negative integer, got {added!r}", name, added)
        for name in ("team_strength", "opposition_strength"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 100:
                raise EmptyContext(f"{name} must be between 0 and 100, got {value!r}", name, value)
        if not isinstance(self.competition, CompetitionTier):
            raise EmptyContext("competition must be a CompetitionTier", "competition", self.competition)
        if not isinstance(self.weather, Weather):
            raise EmptyContext(f"weather must be a Weather, got {self.weather!r}", "weather", self.weather)
        if not isinstance(self.pitch, PitchCondition):
            raise EmptyContext(f"pitch must be a PitchCondition, got {self.pitch!r}", "pitch", self.pitch)
        if not isinstance(self.is_home, bool):
            raise EmptyContext(f"is_home must be a bool, got {self.is_home!r}", "is_home", self.is_home)
        if not isinstance(self.starting_goal_difference, int):
            raise EmptyContext(
                "starting_goal_difference must be an integer",
                "starting_goal_difference",
                self.starting_goal_difference,
            )

    @property
    def half_length(self) -> int:
        """Return the number of regulation minutes in each half."""
        return self.regulation_minutes // 2

    @property
    def total_minutes(self) -> int:
        """Return the number of minutes actually played, stoppage included."""
        return self.regulation_minutes + self.first_half_added + self.second_half_added
