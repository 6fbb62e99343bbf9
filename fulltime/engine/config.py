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
"""Central configuration for rating engine tuning parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

from fulltime.engine.events import EventCategory, EventType
from fulltime.models.context import CompetitionTier, PitchCondition, Weather
from fulltime.models.snapshot import Position, SubRole, TacticalInstruction


@dataclass(frozen=True, slots=True)
class BaseValue:
    """Table value of an event type for each outcome.

    Parameters
    ----------
    success : float
        Value when the outcome favours the participant (or the incident happened).
    failure : float
        Value when the attempt failed; never greater than ``success``.
    """

    success: float
    failure: float

    def for_outcome(self, success: bool) -> float:
        """Return the value for the given outcome flag.

        Parameters
        ----------
        success : bool
            Outcome recorded on the event.

        Returns
        -------
        float
            ``success`` or ``failure`` value.
        """
        return self.success if success else self.failure


def _action(success: float, failure: float) -> BaseValue:
    """Build the value pair of an attempted action.

    Parameters
    ----------
    success : float
        Value of a successful attempt.
    failure : float
        Value of a failed attempt.

    Returns
    -------
    BaseValue
        Immutable value pair.
    """
    return BaseValue(success, failure)


def _incident(value: float) -> BaseValue:
    """Build the value pair of an incident, identical for both flags.

    Parameters
    ----------
    value : float
        Value of the incident.

    Returns
    -------
    BaseValue
        Immutable value pair with equal entries.
    """
    return BaseValue(value, value)


def _default_base_values() -> Mapping[EventType, BaseValue]:
    """Return the per-event-type value table.

    Returns
    -------
    Mapping[EventType, BaseValue]
        Read-only table covering every event type.
    """
    return MappingProxyType(
        {
            EventType.GOAL: _action(8.0, 0.0),
            EventType.ASSIST: _action(5.0, 0.0),
            EventType.KEY_PASS: _action(2.5, 0.0),
            EventType.SHOT_ON_TARGET: _action(1.5, -0.3),
            EventType.BIG_CHANCE_MISSED: _incident(-2.5),
            EventType.DRIBBLE: _action(0.7, -0.3),
            EventType.CROSS: _action(0.8, -0.2),
            EventType.THROUGH_BALL: _action(1.2, -0.2),
            EventType.PASS: _action(0.3, -0.4),
            EventType.PENALTY_WON: _incident(2.0),
            EventType.FOUL_WON: _incident(0.3),
            EventType.TACKLE: _action(1.2, -0.5),
            EventType.INTERCEPTION: _action(1.0, 0.0),
            EventType.BLOCK: _action(2.0, 0.0),
            EventType.CLEARANCE: _action(0.8, -0.2),
            EventType.AERIAL_DUEL: _action(0.6, -0.3),
            EventType.LAST_MAN_TACKLE: _action(3.0, -2.0),
            EventType.GOAL_LINE_CLEARANCE: _action(3.5, 0.0),
            EventType.DEFENSIVE_ERROR: _incident(-3.0),
            EventType.ERROR_LEADING_TO_GOAL: _incident(-4.5),
            EventType.OWN_GOAL: _incident(-4.0),
            EventType.SAVE: _action(2.5, -0.8),
            EventType.REFLEX_SAVE: _action(3.5, -0.5),
            EventType.ONE_ON_ONE_SAVE: _action(4.0, -0.5),
            EventType.PENALTY_SAVE: _action(4.0, -0.3),
            EventType.CLAIM_CROSS: _action(0.5, -1.0),
            EventType.PUNCH_CLEAR: _action(0.6, -0.4),
            EventType.SWEEPER_CLEARANCE: _action(1.0, -1.0),
            EventType.GOAL_CONCEDED: _incident(-0.6),
            EventType.BALL_RECOVERY: _action(0.8, 0.0),
            EventType.COUNTER_ATTACK_START: _action(1.0, -0.2),
            EventType.TURNOVER_FORCED: _action(1.0, 0.0),
            EventType.TURNOVER_COMMITTED: _incident(-1.0),
            EventType.DISPOSSESSED: _incident(-0.6),
            EventType.FOUL_COMMITTED: _incident(-0.5),
            EventType.YELLOW_CARD: _incident(-1.0),
            EventType.SECOND_YELLOW: _incident(-5.0),
            EventType.RED_CARD: _incident(-6.0),
            EventType.PENALTY_CONCEDED: _incident(-2.5),
            EventType.INJURY: _incident(0.0),
            EventType.PRESS: _action(0.5, -0.2),
            EventType.OFF_BALL_RUN: _action(0.4, 0.0),
            EventType.SPACE_CREATED: _action(0.6, 0.0),
            EventType.TRACKING_BACK: _action(0.8, 0.0),
            EventType.MARKING_ERROR: _incident(-1.5),
        }
    )


def _default_remit_table() -> Mapping[Tuple[EventCategory, Position], float]:
    """Return the constructive-action responsibility table.

    Values above ``1.0`` reward actions outside a position's normal remit.

    Returns
    -------
    Mapping[Tuple[EventCategory, Position], float]
        Multiplier per (category, position).
    """
    rows = {
        EventCategory.ATTACKING: (1.6, 1.35, 1.15, 1.0),
        EventCategory.DEFENSIVE: (1.05, 1.0, 1.1, 1.3),
        EventCategory.GOALKEEPING: (1.0, 1.5, 1.5, 1.5),
        EventCategory.TRANSITION: (1.1, 1.05, 1.0, 1.05),
        EventCategory.DISCIPLINE: (1.0, 1.0, 1.0, 1.0),
        EventCategory.OFF_BALL: (1.1, 1.0, 1.0, 1.1),
    }
    return _expand_rows(rows)


def _default_mistake_table() -> Mapping[Tuple[EventCategory, Position], float]:
    """Return the responsibility table applied to negative impacts.

    Mistakes inside a position's core remit weigh more.

    Returns
    -------
    Mapping[Tuple[EventCategory, Position], float]
        Multiplier per (category, position).
    """
    rows = {
        EventCategory.ATTACKING: (0.9, 0.9, 1.0, 1.1),
        EventCategory.DEFENSIVE: (1.1, 1.1, 1.0, 0.9),
        EventCategory.GOALKEEPING: (1.15, 1.0, 1.0, 1.0),
        EventCategory.TRANSITION: (1.0, 1.0, 1.0, 1.0),
        EventCategory.DISCIPLINE: (1.0, 1.0, 1.0, 1.0),
        EventCategory.OFF_BALL: (1.0, 1.05, 1.0, 1.0),
    }
    return _expand_rows(rows)


def _expand_rows(
    rows: Mapping[EventCategory, Tuple[float, float, float, float]],
) -> Mapping[Tuple[EventCategory, Position], float]:
    """Flatten goalkeeper/defender/midfielder/forward rows into a keyed table.

    Parameters
    ----------
    rows : Mapping[EventCategory, Tuple[float, float, float, float]]
        Per-category values ordered goalkeeper, defender, midfielder, forward.

    Returns
    -------
    Mapping[Tuple[EventCategory, Position], float]
        Read-only table keyed by (category, position).
    """
    order = (Position.GOALKEEPER, Position.DEFENDER, Position.MIDFIELDER, Position.FORWARD)
    table = {}
    for category, values in rows.items():
        for position, value in zip(order, values):
            table[(category, position)] = value
    return MappingProxyType(table)


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Rates and modifiers used by the event generator.

    Parameters
    ----------
    base_event_rate : float, default=0.3
        Expected events per played minute for an involvement score of ``1.0``.
    phase_boundaries : Tuple[float, ...], default=(15/90, 35/90, 45/90, 65/90, 80/90)
        Upper edges of the first five intensity phases as fractions of
        regulation time.
    phase_weights : Tuple[float, ...], default=(0.90, 0.95, 1.00, 1.00, 1.08, 1.15)
        Non-decreasing intensity weight of each of the six phases.
    work_rate_floor : float, default=0.7
        Work-rate factor at a rating of zero.
    work_rate_span : float, default=0.6
        Added work-rate factor at a rating of 100.
    stamina_floor : float, default=0.75
        Stamina factor at a rating of zero.
    stamina_span : float, default=0.5
        Added stamina factor at a rating of 100.
    form_floor : float, default=0.85
        Event-frequency factor at zero form.
    form_span : float, default=0.3
        Added event-frequency factor at full form.
    instruction_factors : Mapping[TacticalInstruction, float]
        Involvement factor per tactical instruction.
    low_fitness_threshold : float, default=35.0
        Fitness below which involvement drops and mistakes multiply.
    low_fitness_involvement : float, default=0.6
        Involvement multiplier below the fitness threshold.
    low_fitness_mistake_multiplier : float, default=2.5
        Mistake-rate multiplier below the fitness threshold.
    fatigue_rate : float, default=0.55
        Fatigue gained per played minute before stamina relief.
    base_mistake_rate : float, default=0.045
        Probability that a triggered action becomes a mistake for a composed,
        fresh participant.
    base_success : float, default=0.35
        Success probability contributed regardless of attribute.
    attribute_success_span : float, default=0.55
        Success probability added by a perfect attribute.
    success_bounds : Tuple[float, float], default=(0.05, 0.95)
        Clamp applied to every success probability.
    consistency_wobble_scale : float, default=800.0
        Divisor turning ``100 - consistency`` into the standard deviation of
        the per-match performance wobble.
    big_chance_share : float, default=0.35
        Share of failed shots recorded as a missed big chance.
    goal_conversion_floor : float, default=0.2
        Probability that an on-target shot is scored at zero finishing.
    goal_conversion_span : float, default=0.3
        Added conversion probability at perfect finishing.
    assist_conversion_floor : float, default=0.2
        Probability that a key pass becomes an assist at zero passing.
    assist_conversion_span : float, default=0.2
        Added assist probability at perfect passing.
    yellow_card_probability : float, default=0.2
        Chance that a committed foul is booked at neutral professionalism.
    straight_red_probability : float, default=0.01
        Chance that a committed foul draws a straight red card.
    penalty_share : float, default=0.4
        Share of fouls in the own box that concede a penalty.
    random_injury_rate : float, default=0.0004
        Per-minute injury probability at neutral proneness and no fatigue.
    background_goal_rate : float, default=0.014
        Per-minute probability of a goal by either side at equal strength.
    home_advantage : float, default=1.1
        Scoring-rate multiplier for the home side.
    weather_success : Mapping[Weather, float]
        Success-probability multiplier per weather condition.
    weather_fatigue : Mapping[Weather, float]
        Fatigue-rate multiplier per weather condition.
    pitch_success : Mapping[PitchCondition, float]
        Success-probability multiplier per pitch condition.
    """

    base_event_rate: float = 0.3
    phase_boundaries: Tuple[float, ...] = (15 / 90, 35 / 90, 45 / 90, 65 / 90, 80 / 90)
    phase_weights: Tuple[float, ...] = (0.90, 0.95, 1.00, 1.00, 1.08, 1.15)
    work_rate_floor: float = 0.7
    work_rate_span: float = 0.6
    stamina_floor: float = 0.75
    stamina_span: float = 0.5
    form_floor: float = 0.85
    form_span: float = 0.3
    instruction_factors: Mapping[TacticalInstruction, float] = field(
        default_factory=lambda: MappingProxyType(
            {
                TacticalInstruction.DEFEND: 0.9,
                TacticalInstruction.BALANCED: 1.0,
                TacticalInstruction.SUPPORT: 1.05,
                TacticalInstruction.ATTACK: 1.1,
                TacticalInstruction.FREE_ROLE: 1.15,
            }
        )
    )
    low_fitness_threshold: float = 35.0
    low_fitness_involvement: float = 0.6
    low_fitness_mistake_multiplier: float = 2.5
    fatigue_rate: float = 0.55
    base_mistake_rate: float = 0.045
    base_success: float = 0.35
    attribute_success_span: float = 0.55
    success_bounds: Tuple[float, float] = (0.05, 0.95)
    consistency_wobble_scale: float = 800.0
    big_chance_share: float = 0.35
    goal_conversion_floor: float = 0.2
    goal_conversion_span: float = 0.3
    assist_conversion_floor: float = 0.2
    assist_conversion_span: float = 0.2
    yellow_card_probability: float = 0.2
    straight_red_probability: float = 0.01
    penalty_share: float = 0.4
    random_injury_rate: float = 0.0004
    background_goal_rate: float = 0.014
    home_advantage: float = 1.1
    weather_success: Mapping[Weather, float] = field(
        default_factory=lambda: MappingProxyType(
            {
                Weather.CLEAR: 1.0,
                Weather.RAIN: 0.97,
                Weather.HEAVY_RAIN: 0.93,
                Weather.SNOW: 0.92,
                Weather.HEAT: 0.97,
                Weather.WIND: 0.96,
            }
        )
    )
    weather_fatigue: Mapping[Weather, float] = field(
        default_factory=lambda: MappingProxyType(
            {
                Weather.CLEAR: 1.0,
                Weather.RAIN: 1.05,
                Weather.HEAVY_RAIN: 1.12,
                Weather.SNOW: 1.1,
                Weather.HEAT: 1.25,
                Weather.WIND: 1.03,
            }
        )
    )
    pitch_success: Mapping[PitchCondition, float] = field(
        default_factory=lambda: MappingProxyType(
            {
                PitchCondition.EXCELLENT: 1.02,
                PitchCondition.GOOD: 1.0,
                PitchCondition.WORN: 0.97,
                PitchCondition.POOR: 0.94,
            }
        )
    )

    def __post_init__(self) -> None:
        """Reject phase tables that are malformed or decrease."""
        if len(self.phase_weights) != len(self.phase_boundaries) + 1:
            raise ValueError("phase_weights needs one more entry than phase_boundaries")
        if any(later < earlier for earlier, later in zip(self.phase_weights, self.phase_weights[1:])):
            raise ValueError("phase_weights must be non-decreasing")
        if any(later <= earlier for earlier, later in zip(self.phase_boundaries, self.phase_boundaries[1:])):
            raise ValueError("phase_boundaries must be strictly increasing")
        if self.base_event_rate < 0:
            raise ValueError("base_event_rate must be non-negative")


@dataclass(frozen=True, slots=True)
class ImpactConfig:
    """Tables and bounds for the per-event impact multipliers.

    Parameters
    ----------
    base_values : Mapping[EventType, BaseValue]
        Value pair per event type.
    time_slope : float, default=0.35
        Time multiplier gained across regulation time.
    stoppage_bonus : float, default=0.03
        Extra time multiplier per second-half stoppage minute.
    time_cap : float, default=1.5
        Maximum time multiplier.
    remit : Mapping[Tuple[EventCategory, Position], float]
        Responsibility multiplier for constructive impacts.
    role_overrides : Mapping[Tuple[EventCategory, SubRole], float]
        Sub-role specific replacements for ``remit`` entries.
    mistakes : Mapping[Tuple[EventCategory, Position], float]
        Responsibility multiplier for negative impacts.
    pressure_weight : float, default=0.2
        Difficulty gained per unit of pressure above neutral.
    range_start : float, default=16.0
        Distance in metres beyond which range adds difficulty.
    range_slope : float, default=0.006
        Difficulty gained per metre beyond ``range_start``.
    range_cap : float, default=0.12
        Maximum difficulty contributed by range.
    weak_foot_bonus : float, default=0.06
        Difficulty added for weak-side execution.
    last_man_bonus : float, default=0.1
        Difficulty added when the participant was the last defender.
    opposition_weight : float, default=0.1
        Difficulty gained between a neutral and an elite opponent.
    difficulty_bounds : Tuple[float, float], default=(0.8, 1.3)
        Clamp on the difficulty multiplier.
    tier_factors : Mapping[CompetitionTier, float]
        Clutch factor per competition tier.
    late_fraction : float, default=0.8
        Fraction of regulation time after which the match counts as late.
    tight_margin : int, default=1
        Largest goal difference considered tight.
    level_or_trailing_factor : float, default=1.2
        Clutch factor late in a tight match when drawing or trailing.
    narrow_lead_factor : float, default=1.1
        Clutch factor late in a tight match when leading.
    clutch_bounds : Tuple[float, float], default=(0.85, 1.45)
        Clamp on the clutch multiplier.
    time_clutch_cap : float, default=1.75
        Maximum product of the time and clutch multipliers.
    """

    base_values: Mapping[EventType, BaseValue] = field(default_factory=_default_base_values)
    time_slope: float = 0.35
    stoppage_bonus: float = 0.03
    time_cap: float = 1.5
    remit: Mapping[Tuple[EventCategory, Position], float] = field(default_factory=_default_remit_table)
    role_overrides: Mapping[Tuple[EventCategory, SubRole], float] = field(
        default_factory=lambda: MappingProxyType(
            {
                (EventCategory.ATTACKING, SubRole.AM): 1.05,
                (EventCategory.ATTACKING, SubRole.DM): 1.25,
                (EventCategory.ATTACKING, SubRole.RD): 1.25,
                (EventCategory.ATTACKING, SubRole.LD): 1.25,
                (EventCategory.DEFENSIVE, SubRole.DM): 1.0,
                (EventCategory.DEFENSIVE, SubRole.AM): 1.2,
            }
        )
    )
    mistakes: Mapping[Tuple[EventCategory, Position], float] = field(default_factory=_default_mistake_table)
    pressure_weight: float = 0.2
    range_start: float = 16.0
    range_slope: float = 0.006
    range_cap: float = 0.12
    weak_foot_bonus: float = 0.06
    last_man_bonus: float = 0.1
    opposition_weight: float = 0.1
    difficulty_bounds: Tuple[float, float] = (0.8, 1.3)
    tier_factors: Mapping[CompetitionTier, float] = field(
        default_factory=lambda: MappingProxyType(
            {
                CompetitionTier.FRIENDLY: 0.9,
                CompetitionTier.LEAGUE: 1.0,
                CompetitionTier.CUP: 1.1,
                CompetitionTier.FINAL: 1.2,
            }
        )
    )
    late_fraction: float = 0.8
    tight_margin: int = 1
    level_or_trailing_factor: float = 1.2
    narrow_lead_factor: float = 1.1
    clutch_bounds: Tuple[float, float] = (0.85, 1.45)
    time_clutch_cap: float = 1.75

    def __post_init__(self) -> None:
        """Check table coverage and the success-over-failure ordering."""
        missing = [event_type.value for event_type in EventType if event_type not in self.base_values]
        if missing:
            raise ValueError(f"base_values is missing entries for: {', '.join(missing)}")
        for event_type, value in self.base_values.items():
            if value.success < value.failure:
                raise ValueError(f"{event_type.value} values a failure above a success")
        for name in ("remit", "mistakes"):
            table = getattr(self, name)
            for category in EventCategory:
                for position in Position:
                    if (category, position) not in table:
                        raise ValueError(f"{name} has no entry for ({category.value}, {position.value})")
        low, high = self.difficulty_bounds
        if not 0 < low <= 1.0 <= high:
            raise ValueError("difficulty_bounds must bracket 1.0")
        if self.time_cap < 1.0:
            raise ValueError("time_cap must be at least 1.0")


@dataclass(frozen=True, slots=True)
class AggregationConfig:
    """Weights, decay rates and involvement thresholds for aggregation.

    Parameters
    ----------
    category_weights : Mapping[EventCategory, float]
        Coarse weight applied to impacts of each category.
    type_weights : Mapping[EventType, float]
        Per-type replacements for ``category_weights``.
    mistake_weight : float, default=1.15
        Extra weight applied to every negative contribution.
    costly_incidents : FrozenSet[EventType]
        Incidents that directly cost a goal.
    costly_incident_penalty : float, default=7.0
        Smallest weighted penalty a costly incident carries, whatever its
        context multipliers.
    positive_decay : float, default=0.35
        Diminishing-returns rate for repeated positive contributions.
    negative_decay : float, default=0.12
        Diminishing-returns rate for repeated negative contributions.
    default_touch_weight : float, default=1.0
        Involvement credited per event unless overridden.
    touch_weights : Mapping[EventType, float]
        Per-type replacements for ``default_touch_weight``.
    involvement_thresholds : Tuple[float, float, float], default=(4.0, 10.0, 24.0)
        Lower edges of the LOW, NORMAL and HIGH involvement classes.
    raw_caps : Tuple[Optional[float], ...], default=(10.0, 20.0, 46.0, None)
        Raw score ceiling for VERY_LOW, LOW, NORMAL and HIGH involvement.
    consistency_threshold : float, default=6.0
        Weighted total both signs must exceed before the pull applies.
    consistency_strength : float, default=0.3
        Share of the excess added back to the raw score.
    consistency_target : float, default=8.0
        Raw score the pull never pushes beyond.
    """

    category_weights: Mapping[EventCategory, float] = field(
        default_factory=lambda: MappingProxyType(
            {
                EventCategory.ATTACKING: 1.0,
                EventCategory.DEFENSIVE: 0.8,
                EventCategory.GOALKEEPING: 0.9,
                EventCategory.TRANSITION: 0.7,
                EventCategory.DISCIPLINE: 1.0,
                EventCategory.OFF_BALL: 0.6,
            }
        )
    )
    type_weights: Mapping[EventType, float] = field(
        default_factory=lambda: MappingProxyType(
            {
                EventType.GOAL: 1.4,
                EventType.ASSIST: 1.2,
                EventType.PASS: 0.5,
                EventType.TURNOVER_COMMITTED: 1.2,
                EventType.DISPOSSESSED: 1.2,
                EventType.ERROR_LEADING_TO_GOAL: 1.3,
            }
        )
    )
    mistake_weight: float = 1.15
    costly_incidents: FrozenSet[EventType] = frozenset({EventType.ERROR_LEADING_TO_GOAL, EventType.OWN_GOAL})
    costly_incident_penalty: float = 7.0
    positive_decay: float = 0.35
    negative_decay: float = 0.12
    default_touch_weight: float = 1.0
    touch_weights: Mapping[EventType, float] = field(
        default_factory=lambda: MappingProxyType(
            {
                EventType.PASS: 0.5,
                EventType.FOUL_WON: 0.5,
                EventType.OFF_BALL_RUN: 0.5,
                EventType.GOAL_CONCEDED: 0.0,
                EventType.INJURY: 0.0,
                EventType.YELLOW_CARD: 0.0,
                EventType.SECOND_YELLOW: 0.0,
                EventType.RED_CARD: 0.0,
            }
        )
    )
    involvement_thresholds: Tuple[float, float, float] = (4.0, 10.0, 24.0)
    raw_caps: Tuple[Optional[float], ...] = (10.0, 20.0, 46.0, None)
    consistency_threshold: float = 6.0
    consistency_strength: float = 0.3
    consistency_target: float = 8.0

    def __post_init__(self) -> None:
        """Reject thresholds and caps that would break monotonic ordering."""
        low, normal, high = self.involvement_thresholds
        if not 0 <= low < normal < high:
            raise ValueError("involvement_thresholds must be strictly increasing")
        if len(self.raw_caps) != 4:
            raise ValueError("raw_caps needs one entry per involvement class")
        finite = [cap for cap in self.raw_caps if cap is not None]
        if any(later < earlier for earlier, later in zip(finite, finite[1:])):
            raise ValueError("raw_caps must be non-decreasing")
        if not 0 <= self.consistency_strength < 1:
            raise ValueError("consistency_strength must lie in [0, 1)")
        if self.positive_decay < 0 or self.negative_decay < 0:
            raise ValueError("decay rates must be non-negative")
        if self.costly_incident_penalty < 0:
            raise ValueError("costly_incident_penalty must be non-negative")


@dataclass(frozen=True, slots=True)
class NormalizationConfig:
    """Shape of the raw-to-rating curve and the rating bands.

    Parameters
    ----------
    baseline : float, default=6.0
        Rating awarded to a raw score of zero.
    slope : float, default=0.1
        Rating gained per raw point in the linear region.
    knee : float, default=12.0
        Raw score at which upper-tail compression begins.
    upper_span : float, default=2.9
        Rating headroom the upper tail approaches asymptotically.
    lower_span : float, default=3.2
        Rating depth the lower tail approaches asymptotically.
    floor : float, default=3.0
        Lowest rating the engine produces.
    ceiling : float, default=9.9
        Highest rating the engine produces.
    band_thresholds : Tuple[float, ...], default=(5.5, 6.3, 7.0, 8.0, 9.3)
        Lower edges of BELOW_AVERAGE, AVERAGE, GOOD, EXCELLENT and LEGENDARY.
    """

    baseline: float = 6.0
    slope: float = 0.1
    knee: float = 12.0
    upper_span: float = 2.9
    lower_span: float = 3.2
    floor: float = 3.0
    ceiling: float = 9.9
    band_thresholds: Tuple[float, ...] = (5.5, 6.3, 7.0, 8.0, 9.3)

    def __post_init__(self) -> None:
        """Validate the curve parameters."""
        if not 3.0 <= self.floor <= 4.5:
            raise ValueError("floor must lie between 3.0 and 4.5")
        if not self.floor < self.baseline < self.ceiling <= 10.0:
            raise ValueError("baseline must lie strictly between floor and ceiling")
        if self.slope <= 0 or self.upper_span <= 0 or self.lower_span <= 0 or self.knee < 0:
            raise ValueError("curve parameters must be positive")
        if len(self.band_thresholds) != 5:
            raise ValueError("band_thresholds needs five entries")


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Top-level container for all rating engine tuning structures.

    Parameters
    ----------
    simulation : SimulationConfig, default=SimulationConfig()
        Event generator rates and modifiers.
    impact : ImpactConfig, default=ImpactConfig()
        Per-event impact tables.
    aggregation : AggregationConfig, default=AggregationConfig()
        Aggregation weights and involvement thresholds.
    normalization : NormalizationConfig, default=NormalizationConfig()
        Rating curve and bands.
    """

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    impact: ImpactConfig = field(default_factory=ImpactConfig)
    aggregation: AggregationConfig = field(default_factory=AggregationConfig)
    normalization: NormalizationConfig = field(default_factory=NormalizationConfig)


ENGINE_CONFIG = EngineConfig()
"""Singleton-style access to the engine configuration."""
