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
"""Role profiles that bias the event mix by tactical role."""
from __future__ import annotations

from typing import Dict, Type, Union

from fulltime.models.snapshot import SubRole

from .base import RoleProfile
from .defenders import (
    CentralDefenderProfile,
    DefenderBaseProfile,
    FullBackProfile,
    LeftDefenderProfile,
    RightDefenderProfile,
)
from .forwards import (
    CentreForwardProfile,
    ChannelForwardProfile,
    ForwardBaseProfile,
    LeftCentreForwardProfile,
    RightCentreForwardProfile,
)
from .goalkeeper import GoalkeeperRoleProfile
from .midfielders import (
    AttackingMidfielderProfile,
    CentralMidfielderProfile,
    DefensiveMidfielderProfile,
    LeftMidfielderProfile,
    MidfielderBaseProfile,
    RightMidfielderProfile,
    WideMidfielderProfile,
)

ROLE_PROFILE_CLASSES: Dict[SubRole, Type[RoleProfile]] = {
    SubRole.GK: GoalkeeperRoleProfile,
    SubRole.RD: RightDefenderProfile,
    SubRole.CD: CentralDefenderProfile,
    SubRole.LD: LeftDefenderProfile,
    SubRole.DM: DefensiveMidfielderProfile,
    SubRole.RM: RightMidfielderProfile,
    SubRole.CM: CentralMidfielderProfile,
    SubRole.LM: LeftMidfielderProfile,
    SubRole.AM: AttackingMidfielderProfile,
    SubRole.CF: CentreForwardProfile,
    SubRole.LCF: LeftCentreForwardProfile,
    SubRole.RCF: RightCentreForwardProfile,
}


def create_role_profile(role: Union[SubRole, str]) -> RoleProfile:
    """Instantiate the profile registered for ``role``.

    Parameters
    ----------
    role : SubRole | str
        Role member or its code, for example ``"CF"``.

    Returns
    -------
    RoleProfile
        Fresh profile instance for the role.

    Raises
    ------
    ValueError
        If no profile is registered for ``role``.
    """
    try:
        profile_cls = ROLE_PROFILE_CLASSES[SubRole(role)]
    except (KeyError, ValueError) as exc:
        known_roles = ", ".join(sorted(r.value for r in ROLE_PROFILE_CLASSES))
        raise ValueError(f"Unknown role '{role}'. Known roles: {known_roles}") from exc
    return profile_cls()


__all__ = [
    "RoleProfile",
    "GoalkeeperRoleProfile",
    "DefenderBaseProfile",
    "FullBackProfile",
    "RightDefenderProfile",
    "CentralDefenderProfile",
    "LeftDefenderProfile",
    "MidfielderBaseProfile",
    "DefensiveMidfielderProfile",
    "CentralMidfielderProfile",
    "WideMidfielderProfile",
    "RightMidfielderProfile",
    "LeftMidfielderProfile",
    "AttackingMidfielderProfile",
    "ForwardBaseProfile",
    "CentreForwardProfile",
    "ChannelForwardProfile",
    "LeftCentreForwardProfile",
    "RightCentreForwardProfile",
    "ROLE_PROFILE_CLASSES",
    "create_role_profile",
]
