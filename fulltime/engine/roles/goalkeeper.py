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
"""Goalkeeper event profile."""
from __future__ import annotations

from fulltime.engine.events import EventCategory, EventType
from fulltime.models.snapshot import SubRole

from .base import RoleProfile


class GoalkeeperRoleProfile(RoleProfile):
    """Shot-stopper profile: mostly goalkeeping actions and short distribution."""

    involvement_weight = 0.35
    category_weights = {
        EventCategory.ATTACKING: 0.14,
        EventCategory.DEFENSIVE: 0.06,
        EventCategory.GOALKEEPING: 0.66,
        EventCategory.TRANSITION: 0.08,
        EventCategory.DISCIPLINE: 0.02,
        EventCategory.OFF_BALL: 0.04,
    }
    # Distribution only; the keeper never dribbles or shoots in this model.
    action_bias = {
        EventType.KEY_PASS: 0.1,
        EventType.SHOT_ON_TARGET: 0.0,
        EventType.DRIBBLE: 0.0,
        EventType.CROSS: 0.0,
        EventType.THROUGH_BALL: 0.2,
        EventType.FOUL_WON: 0.2,
        EventType.PENALTY_WON: 0.0,
        EventType.LAST_MAN_TACKLE: 0.0,
        EventType.GOAL_LINE_CLEARANCE: 0.0,
        EventType.COUNTER_ATTACK_START: 1.5,
        EventType.PRESS: 0.0,
        EventType.OFF_BALL_RUN: 0.0,
        EventType.SPACE_CREATED: 0.0,
    }

    def __init__(self) -> None:
        """Instantiate the goalkeeper profile."""
        super().__init__(role=SubRole.GK, side="central")
