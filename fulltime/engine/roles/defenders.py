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
"""Event profiles for the back line."""
from __future__ import annotations

from fulltime.engine.events import EventCategory, EventType
from fulltime.models.snapshot import SubRole

from .base import RoleProfile


class DefenderBaseProfile(RoleProfile):
    """Shared defender mix: heavy on defensive and covering work.

    Parameters
    ----------
    role : SubRole
        Defensive role code described by the profile.
    side : str
        Pitch side ordinarily occupied by the defender.
    """

    involvement_weight = 0.8
    category_weights = {
        EventCategory.ATTACKING: 0.16,
        EventCategory.DEFENSIVE: 0.42,
        EventCategory.GOALKEEPING: 0.0,
        EventCategory.TRANSITION: 0.16,
        EventCategory.DISCIPLINE: 0.06,
        EventCategory.OFF_BALL: 0.20,
    }
    action_bias = {
        EventType.SHOT_ON_TARGET: 0.25,
        EventType.DRIBBLE: 0.5,
        EventType.KEY_PASS: 0.5,
        EventType.THROUGH_BALL: 0.6,
        EventType.PENALTY_WON: 0.3,
        EventType.LAST_MAN_TACKLE: 2.0,
        EventType.GOAL_LINE_CLEARANCE: 2.0,
        EventType.OFF_BALL_RUN: 0.5,
        EventType.TRACKING_BACK: 1.5,
    }


class FullBackProfile(DefenderBaseProfile):
    """Shared full-back mix: overlaps and crosses more than a centre back.

    Parameters
    ----------
    role : SubRole
        Full-back role code described by the profile.
    side : str
        Flank ordinarily occupied by the full back.
    """

    involvement_weight = 0.9
    category_weights = {
        EventCategory.ATTACKING: 0.24,
        EventCategory.DEFENSIVE: 0.32,
        EventCategory.GOALKEEPING: 0.0,
        EventCategory.TRANSITION: 0.18,
        EventCategory.DISCIPLINE: 0.05,
        EventCategory.OFF_BALL: 0.21,
    }
    action_bias = {
        **DefenderBaseProfile.action_bias,
        EventType.CROSS: 1.8,
        EventType.DRIBBLE: 0.8,
        EventType.OFF_BALL_RUN: 1.0,
        EventType.CLEARANCE: 0.7,
        EventType.AERIAL_DUEL: 0.7,
    }


class RightDefenderProfile(FullBackProfile):
    """Right back."""

    def __init__(self) -> None:
        """Instantiate the right-sided fullback profile."""
        super().__init__(role=SubRole.RD, side="right")


class CentralDefenderProfile(DefenderBaseProfile):
    """Centre back: clearances, aerial duels and last-ditch defending."""

    action_bias = {
        **DefenderBaseProfile.action_bias,
        EventType.CROSS: 0.2,
        EventType.CLEARANCE: 1.4,
        EventType.AERIAL_DUEL: 1.4,
        EventType.BLOCK: 1.5,
    }

    def __init__(self) -> None:
        """Instantiate the central defender profile."""
        super().__init__(role=SubRole.CD, side="central")


class LeftDefenderProfile(FullBackProfile):
    """Left back."""

    def __init__(self) -> None:
        """Instantiate the left-sided fullback profile."""
        super().__init__(role=SubRole.LD, side="left")
