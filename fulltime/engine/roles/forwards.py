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
"""Event profiles for the forward line."""
from __future__ import annotations

from fulltime.engine.events import EventCategory, EventType
from fulltime.models.snapshot import SubRole

from .base import RoleProfile


class ForwardBaseProfile(RoleProfile):
    """Shared forward mix: shots, runs and pressing from the front.

    Parameters
    ----------
    role : SubRole
        Forward role code described by the profile.
    side : str
        Channel ordinarily occupied by the forward.
    """

    involvement_weight = 0.9
    category_weights = {
        EventCategory.ATTACKING: 0.52,
        EventCategory.DEFENSIVE: 0.06,
        EventCategory.GOALKEEPING: 0.0,
        EventCategory.TRANSITION: 0.12,
        EventCategory.DISCIPLINE: 0.04,
        EventCategory.OFF_BALL: 0.26,
    }
    action_bias = {
        EventType.PASS: 0.6,
        EventType.SHOT_ON_TARGET: 3.0,
        EventType.DRIBBLE: 1.3,
        EventType.PENALTY_WON: 2.0,
        EventType.FOUL_WON: 1.4,
        EventType.LAST_MAN_TACKLE: 0.1,
        EventType.GOAL_LINE_CLEARANCE: 0.1,
        EventType.OFF_BALL_RUN: 1.6,
        EventType.TRACKING_BACK: 0.6,
    }


class CentreForwardProfile(ForwardBaseProfile):
    """Central striker leading the line."""

    action_bias = {
        **ForwardBaseProfile.action_bias,
        EventType.CROSS: 0.3,
        EventType.AERIAL_DUEL: 1.5,
    }

    def __init__(self) -> None:
        """Instantiate the centre forward profile."""
        super().__init__(role=SubRole.CF, side="central")


class ChannelForwardProfile(ForwardBaseProfile):
    """Shared mix for forwards drifting into a channel.

    Parameters
    ----------
    role : SubRole
        Channel forward role code.
    side : str
        Channel ordinarily occupied by the forward.
    """

    involvement_weight = 0.95
    category_weights = {
        EventCategory.ATTACKING: 0.50,
        EventCategory.DEFENSIVE: 0.07,
        EventCategory.GOALKEEPING: 0.0,
        EventCategory.TRANSITION: 0.13,
        EventCategory.DISCIPLINE: 0.04,
        EventCategory.OFF_BALL: 0.26,
    }
    action_bias = {
        **ForwardBaseProfile.action_bias,
        EventType.SHOT_ON_TARGET: 2.4,
        EventType.CROSS: 1.2,
        EventType.KEY_PASS: 1.3,
    }


class LeftCentreForwardProfile(ChannelForwardProfile):
    """Left-sided striker in a front two or three."""

    def __init__(self) -> None:
        """Instantiate the left centre forward profile."""
        super().__init__(role=SubRole.LCF, side="left")


class RightCentreForwardProfile(ChannelForwardProfile):
    """Right-sided striker in a front two or three."""

    def __init__(self) -> None:
        """Instantiate the right centre forward profile."""
        super().__init__(role=SubRole.RCF, side="right")
