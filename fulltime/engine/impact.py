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
"""Signed impact of individual events.

Every event is scored as ``base x time x position x difficulty x clutch``.
The calculator is a pure function of the event, the fixture and its
configuration, so replaying an event log always reproduces the same values.
"""
from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Iterable, Optional, Tuple

from fulltime.engine.config import ENGINE_CONFIG, ImpactConfig
from fulltime.engine.errors import InternalInvariantError
from fulltime.engine.events import EventCategory, ImpactBreakdown, MatchEvent, MatchHalf

if TYPE_CHECKING:
    from fulltime.models.context import MatchContext
    from fulltime.utils.debug import MatchDebugger


class ImpactCalculator:
    """Compute the :class:`ImpactBreakdown` of match events.

    Parameters
    ----------
    config : ImpactConfig, optional
        Value tables and multiplier bounds; the engine-wide defaults when
        omitted.
    debugger : MatchDebugger | None, optional
        Sink that receives an ``IMPACT`` line per scored event.
    """

    def __init__(
        self,
        config: Optional[ImpactConfig] = None,
        debugger: Optional["MatchDebugger"] = None,
    ) -> None:
        """Store the tuning tables and optional debugger.

        Parameters
        ----------
        config : ImpactConfig | None
            Value tables and multiplier bounds.
        debugger : MatchDebugger | None
            Sink that receives a line per scored event.
        """
        self.config = config if config is not None else ENGINE_CONFIG.impact
        self.debugger = debugger

    def base_value(self, event: MatchEvent) -> float:
        """Look up the table value for the event's type and outcome.

        Parameters
        ----------
        event : MatchEvent
            Event being scored.

        Returns
        -------
        float
            Signed base value.
        """
        return self.config.base_values[event.event_type].for_outcome(event.success)

    def time_multiplier(self, event: MatchEvent, context: "MatchContext") -> float:
        """Return the lateness factor of the event.

        The factor grows linearly across regulation time; second-half
        stoppage adds a flat amount per minute. First-half stoppage keeps the
        value of the last regulation minute of the half so the factor never
        drops as the clock moves on.

        Parameters
        ----------
        event : MatchEvent
            Event being scored.
        context : MatchContext
            Fixture providing the regulation length.

        Returns
        -------
        float
            Time multiplier in ``[1.0, time_cap]``.
        """
        cfg = self.config
        multiplier = 1.0 + cfg.time_slope * min(event.minute, context.regulation_minutes) / context.regulation_minutes
        if event.half is MatchHalf.SECOND and event.added_minute:
            multiplier += cfg.stoppage_bonus * event.added_minute
        return min(multiplier, cfg.time_cap)

    def position_multiplier(self, event: MatchEvent, base_value: float) -> float:
        """Return the role-responsibility factor of the event.

        Constructive impacts read the remit table, where work outside a
        role's usual duties earns more. Negative impacts read the mistake
        table, where errors inside a role's core duties cost more.

        Parameters
        ----------
        event : MatchEvent
            Event being scored.
        base_value : float
            Signed base value, selecting which table applies.

        Returns
        -------
        float
            Responsibility multiplier.

        Raises
        ------
        InternalInvariantError
            If the event category is not handled.
        """
        cfg = self.config
        category = event.category
        position = event.role.position
        if base_value < 0:
            return cfg.mistakes[(category, position)]
        if category is EventCategory.ATTACKING:
            return cfg.role_overrides.get((category, event.role), cfg.remit[(category, position)])
        elif category is EventCategory.DEFENSIVE:
            return cfg.role_overrides.get((category, event.role), cfg.remit[(category, position)])
        elif category is EventCategory.GOALKEEPING:
            return cfg.remit[(category, position)]
        elif category is EventCategory.TRANSITION:
            return cfg.remit[(category, position)]
        elif category is EventCategory.DISCIPLINE:
            return cfg.remit[(category, position)]
        elif category is EventCategory.OFF_BALL:
            return cfg.remit[(category, position)]
        raise InternalInvariantError(f"no responsibility rule for category {category!r}")

    def difficulty_multiplier(self, event: MatchEvent, base_value: float) -> float:
        """Return the situational-hardship factor of the event.

        Parameters
        ----------
        event : MatchEvent
            Event being scored.
        base_value : float
            Signed base value; negative impacts use the mirrored factor so
            hardship softens a mistake instead of magnifying it.

        Returns
        -------
        float
            Difficulty multiplier within the configured bounds, exactly
            ``1.0`` for neutral factors.
        """
        cfg = self.config
        factors = event.difficulty
        difficulty = 1.0 + cfg.pressure_weight * (factors.pressure - 0.5)
        if factors.distance > 0:
            difficulty += max(0.0, min((factors.distance - cfg.range_start) * cfg.range_slope, cfg.range_cap))
        if factors.weak_foot:
            difficulty += cfg.weak_foot_bonus
        if factors.last_man:
            difficulty += cfg.last_man_bonus
        difficulty += cfg.opposition_weight * (factors.opposition_strength - 50.0) / 50.0
        low, high = cfg.difficulty_bounds
        difficulty = max(low, min(high, difficulty))
        if base_value < 0:
            difficulty = max(low, min(high, 2.0 - difficulty))
        return difficulty

    def clutch_multiplier(self, event: MatchEvent, context: "MatchContext", time_multiplier: float) -> float:
        """Return the high-pressure factor of the event.

        Parameters
        ----------
        event : MatchEvent
            Event being scored.
        context : MatchContext
            Fixture providing the competition tier and regulation length.
        time_multiplier : float
            Time factor already applied; the product of both is capped.

        Returns
        -------
        float
            Clutch multiplier after the clamp and the time-clutch cap.
        """
        cfg = self.config
        clutch = cfg.tier_factors[context.competition]
        late = event.minute >= cfg.late_fraction * context.regulation_minutes
        if late and abs(event.goal_difference) <= cfg.tight_margin:
            if event.goal_difference <= 0:
                clutch *= cfg.level_or_trailing_factor
            else:
                clutch *= cfg.narrow_lead_factor
        low, high = cfg.clutch_bounds
        clutch = max(low, min(high, clutch))
        if time_multiplier * clutch > cfg.time_clutch_cap:
            clutch = cfg.time_clutch_cap / time_multiplier
        return clutch

    def calculate(self, event: MatchEvent, context: "MatchContext") -> ImpactBreakdown:
        """Score one event.

        Parameters
        ----------
        event : MatchEvent
            Event being scored.
        context : MatchContext
            Fixture the event belongs to.

        Returns
        -------
        ImpactBreakdown
            Base value, every multiplier and the signed final impact.
        """
        base = self.base_value(event)
        time_factor = self.time_multiplier(event, context)
        position = self.position_multiplier(event, base)
        difficulty = self.difficulty_multiplier(event, base)
        clutch = self.clutch_multiplier(event, context, time_factor)
        breakdown = ImpactBreakdown(
            base_value=base,
            time_multiplier=time_factor,
            position_multiplier=position,
            difficulty_multiplier=difficulty,
            clutch_multiplier=clutch,
            final_impact=base * time_factor * position * difficulty * clutch,
        )
        if self.debugger:
            self.debugger.log_impact(
                event.clock,
                event.event_type.value,
                f"base={base:+.2f} time={time_factor:.3f} pos={position:.3f} "
                f"diff={difficulty:.3f} clutch={clutch:.3f} final={breakdown.final_impact:+.3f}",
            )
        return breakdown

    def score(self, events: Iterable[MatchEvent], context: "MatchContext") -> Tuple[MatchEvent, ...]:
        """Attach an impact breakdown to every event.

        Parameters
        ----------
        events : Iterable[MatchEvent]
            Unscored events; they are not modified.
        context : MatchContext
            Fixture the events belong to.

        Returns
        -------
        Tuple[MatchEvent, ...]
            New event instances carrying their :class:`ImpactBreakdown`.
        """
        return tuple(replace(event, impact=self.calculate(event, context)) for event in events)
