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
"""Event profiles for midfield roles."""
from __future__ import annotations

from fulltime.engine.events import EventCategory, EventType
from fulltime.models.snapshot import SubRole

from .base import RoleProfile


class MidfielderBaseProfile(RoleProfile):
    """Shared midfield mix: the busiest circulation of the ball.

    Parameters
    ----------
    role : SubRole
        Midfield role code described by the profile.
    side : str
        Pitch side ordinarily occupied by the midfielder.
    """

    involvement_weight = 1.1
    category_weights = {
        EventCategory.ATTACKING: 0.36,
        EventCategory.DEFENSIVE: 0.20,
        EventCategory.GOALKEEPING: 0.0,
        EventCategory.TRANSITION: 0.18,
        EventCategory.DISCIPLINE: 0.04,
        EventCategory.OFF_BALL: 0.22,
    }
    action_bias = {
        EventType.SHOT_ON_TARGET: 0.8,
        EventType.KEY_PASS: 1.2,
        EventType.THROUGH_BALL: 1.2,
        EventType.GOAL_LINE_CLEARANCE: 0.2,
        EventType.LAST_MAN_TACKLE: 0.5,
    }


class DefensiveMidfielderProfile(MidfielderBaseProfile):
    """Holding midfielder screening the back line."""

    involvement_weight = 1.0
    category_weights = {
        EventCategory.ATTACKING: 0.26,
        EventCategory.DEFENSIVE: 0.30,
        EventCategory.GOALKEEPING: 0.0,
        EventCategory.TRANSITION: 0.20,
        EventCategory.DISCIPLINE: 0.05,
        EventCategory.OFF_BALL: 0.19,
    }
    action_bias = {
        **MidfielderBaseProfile.action_bias,
        EventType.SHOT_ON_TARGET: 0.4,
        EventType.DRIBBLE: 0.6,
        EventType.INTERCEPTION: 1.4,
        EventType.TRACKING_BACK: 1.4,
    }

    def __init__(self) -> None:
        """Instantiate the defensive midfielder profile."""
        super().__init__(role=SubRole.DM, side="central")


class CentralMidfielderProfile(MidfielderBaseProfile):
    """Box-to-box central midfielder."""

    def __init__(self) -> None:
        """Instantiate the central midfielder profile."""
        super().__init__(role=SubRole.CM, side="central")


class WideMidfielderProfile(MidfielderBaseProfile):
    """Shared wide midfield mix: crossing and running beyond the full back.

    Parameters
    ----------
    role : SubRole
        Wide role code described by the profile.
    side : str
        Flank ordinarily occupied by the midfielder.
    """

    involvement_weight = 1.0
    category_weights = {
        EventCategory.ATTACKING: 0.40,
        EventCategory.DEFENSIVE: 0.14,
        EventCategory.GOALKEEPING: 0.0,
        EventCategory.TRANSITION: 0.16,
        EventCategory.DISCIPLINE: 0.04,
        EventCategory.OFF_BALL: 0.26,
    }
    action_bias = {
        **MidfielderBaseProfile.action_bias,
        EventType.CROSS: 2.2,
        EventType.DRIBBLE: 1.4,
        EventType.OFF_BALL_RUN: 1.3,
    }


class RightMidfielderProfile(WideMidfielderProfile):
    """Right-sided wide midfielder."""

    def __init__(self) -> None:
        """Instantiate the right midfielder profile."""
        super().__init__(role=SubRole.RM, side="right")


class LeftMidfielderProfile(WideMidfielderProfile):
    """Left-sided wide midfielder."""

    def __init__(self) -> None:
        """Instantiate the left midfielder profile."""
        super().__init__(role=SubRole.LM, side="left")


class AttackingMidfielderProfile(MidfielderBaseProfile):
    """Playmaker operating between the lines."""

    involvement_weight = 1.05
    category_weights = {
        EventCategory.ATTACKING: 0.48,
        EventCategory.DEFENSIVE: 0.08,
        EventCategory.GOALKEEPING: 0.0,
        EventCategory.TRANSITION: 0.14,
        EventCategory.DISCIPLINE: 0.04,
        EventCategory.OFF_BALL: 0.26,
    }
    action_bias = {
        **MidfielderBaseProfile.action_bias,
        EventType.SHOT_ON_TARGET: 1.4,
        EventType.KEY_PASS: 1.8,
        EventType.THROUGH_BALL: 1.8,
        EventType.DRIBBLE: 1.3,
        EventType.CLEARANCE: 0.4,
        EventType.AERIAL_DUEL: 0.6,
    }

    def __init__(self) -> None:
        """Instantiate the attacking midfielder profile."""
        super().__init__(role=SubRole.AM, side="central")
