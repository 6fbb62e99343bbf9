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
"""Probabilistic event generation for a single participant.

The generator walks the match minute by minute. For every played minute the
number of actions is drawn from a Poisson distribution whose rate is the
participant's involvement score scaled by the intensity phase, form and
fatigue. Each action then picks a category and an action type from the role
profile, rolls for a mistake, resolves its outcome from the driving attribute
and, where relevant, escalates into goals, assists, cards or injuries.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from fulltime.engine.config import ENGINE_CONFIG, SimulationConfig
from fulltime.engine.errors import InvalidSnapshot
from fulltime.engine.events import (
    DifficultyFactors,
    EventCategory,
    EventType,
    MatchEvent,
    MatchHalf,
    PitchZone,
    ScoreState,
    check_event_order,
    make_event,
)
from fulltime.engine.roles import RoleProfile, create_role_profile
from fulltime.models.snapshot import Position

if TYPE_CHECKING:
    from fulltime.models.context import MatchContext
    from fulltime.models.snapshot import ParticipantSnapshot
    from fulltime.utils.debug import MatchDebugger


PENALTY_CONVERSION = 0.76
ESCALATION_TO_GOAL = 0.25
OWN_GOAL_SHARE = 0.03
STOPPABLE_CHANCE_SHARE = 0.45

TEAMMATE_EVENTS = frozenset(
    {
        EventType.PASS,
        EventType.KEY_PASS,
        EventType.ASSIST,
        EventType.THROUGH_BALL,
        EventType.CROSS,
        EventType.COUNTER_ATTACK_START,
        EventType.SPACE_CREATED,
    }
)
OPPONENT_EVENTS = frozenset(
    {
        EventType.TACKLE,
        EventType.LAST_MAN_TACKLE,
        EventType.DRIBBLE,
        EventType.AERIAL_DUEL,
        EventType.FOUL_WON,
        EventType.FOUL_COMMITTED,
        EventType.PENALTY_WON,
        EventType.PENALTY_CONCEDED,
        EventType.DISPOSSESSED,
        EventType.SAVE,
        EventType.REFLEX_SAVE,
        EventType.ONE_ON_ONE_SAVE,
        EventType.PENALTY_SAVE,
        EventType.PRESS,
        EventType.TURNOVER_FORCED,
    }
)
RANGED_EVENTS = frozenset({EventType.CROSS, EventType.THROUGH_BALL, EventType.KEY_PASS})
LAST_MAN_EVENTS = frozenset({EventType.LAST_MAN_TACKLE, EventType.SWEEPER_CLEARANCE, EventType.ONE_ON_ONE_SAVE})


@dataclass(frozen=True)
class MatchSlice:
    """One played minute on the match clock.

    Parameters
    ----------
    minute : int
        Regulation minute shown on the clock.
    added_minute : int
        Stoppage minute, ``0`` outside stoppage time.
    half : MatchHalf
        Half being played.
    elapsed : int
        Number of minutes played so far, this one included.
    """

    minute: int
    added_minute: int
    half: MatchHalf
    elapsed: int


def match_slices(context: "MatchContext") -> List[MatchSlice]:
    """Lay out every played minute of a fixture in chronological order.

    Parameters
    ----------
    context : MatchContext
        Fixture whose duration and stoppage time are used.

    Returns
    -------
    List[MatchSlice]
        First half, first-half stoppage, second half, second-half stoppage.
    """
    half = context.half_length
    regulation = context.regulation_minutes
    slices: List[MatchSlice] = []
    for minute in range(1, half + 1):
        slices.append(MatchSlice(minute, 0, MatchHalf.FIRST, len(slices) + 1))
    for added in range(1, context.first_half_added + 1):
        slices.append(MatchSlice(half, added, MatchHalf.FIRST, len(slices) + 1))
    for minute in range(half + 1, regulation + 1):
        slices.append(MatchSlice(minute, 0, MatchHalf.SECOND, len(slices) + 1))
    for added in range(1, context.second_half_added + 1):
        slices.append(MatchSlice(regulation, added, MatchHalf.SECOND, len(slices) + 1))
    return slices


def sample_poisson(rate: float, rng: random.Random) -> int:
    """Draw a Poisson-distributed count with Knuth's multiplication method.

    Parameters
    ----------
    rate : float
        Expected count; non-positive rates always return ``0``.
    rng : random.Random
        Random source.

    Returns
    -------
    int
        Number of occurrences.
    """
    if rate <= 0:
        return 0
    limit = math.exp(-rate)
    count = 0
    product = rng.random()
    while product > limit:
        count += 1
        product *= rng.random()
    return count


def _clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``.

    Parameters
    ----------
    value : float
        Value to clamp.
    low : float
        Lower bound.
    high : float
        Upper bound.

    Returns
    -------
    float
        Clamped value.
    """
    return max(low, min(high, value))


class EventGenerator:
    """Generate the ordered event log of one participant for one fixture.

    The generator holds no per-match state, so one instance can serve many
    concurrent match runs as long as each run supplies its own random source.

    Parameters
    ----------
    config : SimulationConfig, optional
        Rates and modifiers; the engine-wide defaults when omitted.
    debugger : MatchDebugger | None, optional
        Sink that receives a ``MATCH_EVENT`` line per generated event.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        debugger: Optional["MatchDebugger"] = None,
    ) -> None:
        """Store the tuning tables and optional debugger.

        Parameters
        ----------
        config : SimulationConfig | None
            Rates and modifiers; the engine-wide defaults when ``None``.
        debugger : MatchDebugger | None
            Sink that receives a line per generated event.
        """
        self.config = config if config is not None else ENGINE_CONFIG.simulation
        self.debugger = debugger

    def involvement_score(self, snapshot: "ParticipantSnapshot", profile: Optional[RoleProfile] = None) -> float:
        """Return how readily the participant gets on the ball.

        Parameters
        ----------
        snapshot : ParticipantSnapshot
            Participant being simulated.
        profile : RoleProfile | None, optional
            Role profile; created from ``snapshot.role`` when omitted.

        Returns
        -------
        float
            Position weight times work-rate, stamina and tactical factors,
            reduced when match fitness is below the low-fitness threshold.
        """
        cfg = self.config
        profile = profile or create_role_profile(snapshot.role)
        work_rate = cfg.work_rate_floor + cfg.work_rate_span * snapshot.mental.work_rate / 100.0
        stamina = cfg.stamina_floor + cfg.stamina_span * snapshot.physical.stamina / 100.0
        tactical = cfg.instruction_factors[snapshot.instruction]
        score = profile.involvement_weight * work_rate * stamina * tactical
        if snapshot.fitness < cfg.low_fitness_threshold:
            score *= cfg.low_fitness_involvement
        return score

    def phase_index(self, match_slice: MatchSlice, context: "MatchContext") -> int:
        """Return the intensity phase (0-5) that ``match_slice`` falls into.

        Parameters
        ----------
        match_slice : MatchSlice
            Minute being played.
        context : MatchContext
            Fixture providing the regulation length.

        Returns
        -------
        int
            Index into :attr:`SimulationConfig.phase_weights`.
        """
        position = match_slice.minute / context.regulation_minutes
        return sum(1 for boundary in self.config.phase_boundaries if position > boundary + 1e-9)

    def validate_inputs(self, snapshot: "ParticipantSnapshot", context: "MatchContext") -> None:
        """Re-check both inputs before a single event is generated.

        Parameters
        ----------
        snapshot : ParticipantSnapshot
            Participant to simulate.
        context : MatchContext
            Fixture to simulate.

        Raises
        ------
        InvalidSnapshot
            If the snapshot is malformed or its injury minute lies beyond
            the last played minute.
        EmptyContext
            If the context has no duration or is malformed.
        """
        context.validate()
        snapshot.validate()
        last_minute = context.regulation_minutes + context.second_half_added
        if snapshot.injury_minute is not None and snapshot.injury_minute > last_minute:
            raise InvalidSnapshot(
                f"injury_minute {snapshot.injury_minute} is after the final whistle ({last_minute})",
                "injury_minute",
                snapshot.injury_minute,
            )

    def generate(
        self,
        snapshot: "ParticipantSnapshot",
        context: "MatchContext",
        rng: random.Random,
    ) -> Tuple[MatchEvent, ...]:
        """Simulate the fixture for ``snapshot`` and return its event log.

        Parameters
        ----------
        snapshot : ParticipantSnapshot
            Participant to simulate.
        context : MatchContext
            Fixture parameters.
        rng : random.Random
            Random source owned by this match run.

        Returns
        -------
        Tuple[MatchEvent, ...]
            Chronologically ordered, unscored events.
        """
        self.validate_inputs(snapshot, context)
        run = _MatchRun(self, snapshot, context, rng)
        events = run.play()
        check_event_order(events)
        return events


class _MatchRun:
    """Mutable state of one simulation, private to a single :meth:`EventGenerator.generate` call.

    Parameters
    ----------
    generator : EventGenerator
        Owning generator providing tuning and logging.
    snapshot : ParticipantSnapshot
        Participant being simulated.
    context : MatchContext
        Fixture being simulated.
    rng : random.Random
        Random source owned by this run.
    """

    def __init__(
        self,
        generator: EventGenerator,
        snapshot: "ParticipantSnapshot",
        context: "MatchContext",
        rng: random.Random,
    ) -> None:
        """Prepare per-run state.

        Parameters
        ----------
        generator : EventGenerator
            Owning generator providing tuning and logging.
        snapshot : ParticipantSnapshot
            Participant being simulated.
        context : MatchContext
            Fixture being simulated.
        rng : random.Random
            Random source owned by this run.
        """
        self.cfg = generator.config
        self.generator = generator
        self.debugger = generator.debugger
        self.snapshot = snapshot
        self.context = context
        self.rng = rng
        self.profile = create_role_profile(snapshot.role)
        self.involvement = generator.involvement_score(snapshot, self.profile)
        self.events: List[MatchEvent] = []
        self.goal_difference = context.starting_goal_difference
        self.fatigue = float(snapshot.fatigue)
        self.yellow_cards = 0
        self.finished = False
        wobble_sd = (100 - snapshot.hidden.consistency) / self.cfg.consistency_wobble_scale
        self.wobble = rng.gauss(0.0, wobble_sd) if wobble_sd > 0 else 0.0

    # --- match loop ---------------------------------------------------------------
    def play(self) -> Tuple[MatchEvent, ...]:
        """Walk every played minute until full time or a terminal event.

        Returns
        -------
        Tuple[MatchEvent, ...]
            Events recorded for the participant.
        """
        for match_slice in match_slices(self.context):
            self._update_fatigue(match_slice)
            if self._injury_due(match_slice):
                self._record(EventType.INJURY, match_slice)
                break
            count = sample_poisson(self._event_rate(match_slice), self.rng)
            for _ in range(count):
                self._play_action(match_slice)
                if self.finished:
                    break
            if self.finished:
                break
            self._background_goals(match_slice)
            if self._random_injury(match_slice):
                self._record(EventType.INJURY, match_slice)
                break
        return tuple(self.events)

    def _update_fatigue(self, match_slice: MatchSlice) -> None:
        """Accumulate fatigue for one played minute.

        Parameters
        ----------
        match_slice : MatchSlice
            Minute being played.
        """
        relief = 1.3 - 0.6 * self.snapshot.physical.stamina / 100.0
        weather = self.cfg.weather_fatigue[self.context.weather]
        gained = self.cfg.fatigue_rate * relief * weather
        self.fatigue = min(100.0, float(self.snapshot.fatigue) + gained * match_slice.elapsed)

    def _event_rate(self, match_slice: MatchSlice) -> float:
        """Return the expected number of actions in ``match_slice``.

        Parameters
        ----------
        match_slice : MatchSlice
            Minute being played.

        Returns
        -------
        float
            Poisson rate for the minute.
        """
        cfg = self.cfg
        phase_weight = cfg.phase_weights[self.generator.phase_index(match_slice, self.context)]
        form = cfg.form_floor + cfg.form_span * self.snapshot.form / 100.0
        fatigue = 1.0 - 0.3 * self.fatigue / 100.0
        return cfg.base_event_rate * self.involvement * phase_weight * form * fatigue

    def _injury_due(self, match_slice: MatchSlice) -> bool:
        """Return whether the collaborator-supplied injury minute has arrived.

        Parameters
        ----------
        match_slice : MatchSlice
            Minute being played.

        Returns
        -------
        bool
            ``True`` on the first slice at or after the injury minute.
        """
        injury_minute = self.snapshot.injury_minute
        if injury_minute is None:
            return False
        regulation = self.context.regulation_minutes
        if injury_minute > regulation:
            return (
                match_slice.half is MatchHalf.SECOND
                and match_slice.minute == regulation
                and match_slice.added_minute == injury_minute - regulation
            )
        if match_slice.added_minute:
            return False
        return match_slice.minute >= injury_minute

    def _random_injury(self, match_slice: MatchSlice) -> bool:
        """Roll for a mid-match injury.

        Parameters
        ----------
        match_slice : MatchSlice
            Minute being played.

        Returns
        -------
        bool
            Whether the participant breaks down this minute.
        """
        proneness = 0.5 + self.snapshot.hidden.injury_proneness / 100.0
        chance = self.cfg.random_injury_rate * proneness * (1.0 + self.fatigue / 100.0)
        return self.rng.random() < chance

    # --- actions ------------------------------------------------------------------
    def _play_action(self, match_slice: MatchSlice) -> None:
        """Choose, resolve and record one action.

        Parameters
        ----------
        match_slice : MatchSlice
            Minute being played.
        """
        category = self.profile.choose_category(self.snapshot, self.rng)
        if self.rng.random() < self._mistake_chance():
            self._record_mistake(category, match_slice)
            return
        action = self.profile.choose_action(category, self.snapshot, self.rng)
        if action is EventType.FOUL_COMMITTED:
            self._record_foul(match_slice)
            return
        if action is EventType.PENALTY_WON:
            self._record(action, match_slice, zone=PitchZone.OPPOSITION_BOX)
            if self.rng.random() < PENALTY_CONVERSION:
                self.goal_difference += 1
            return
        if action is EventType.FOUL_WON:
            self._record(action, match_slice)
            return

        zone = self.profile.choose_zone(action, self.rng)
        difficulty = self._difficulty(action, zone)
        success = self.rng.random() < self._success_chance(action, difficulty, match_slice)

        if action is EventType.SHOT_ON_TARGET:
            self._resolve_shot(match_slice, zone, difficulty, success)
        elif action is EventType.KEY_PASS and success and self.rng.random() < self._assist_chance():
            self._record(EventType.ASSIST, match_slice, zone=zone, difficulty=difficulty)
            self.goal_difference += 1
        else:
            self._record(action, match_slice, zone=zone, difficulty=difficulty, success=success)

    def _mistake_chance(self) -> float:
        """Return the probability that the next action is a mistake.

        Returns
        -------
        float
            Mistake probability after fatigue, fitness, composure and
            opposition adjustments.
        """
        cfg = self.cfg
        chance = cfg.base_mistake_rate * (1.0 + self.fatigue / 100.0)
        if self.snapshot.fitness < cfg.low_fitness_threshold:
            chance *= cfg.low_fitness_mistake_multiplier
        chance *= 1.3 - 0.6 * self.snapshot.mental.composure / 100.0
        chance *= 0.8 + 0.4 * self.context.opposition_strength / 100.0
        return _clamp(chance, 0.0, 0.9)

    def _record_mistake(self, category: EventCategory, match_slice: MatchSlice) -> None:
        """Record the negative incident belonging to ``category``.

        Parameters
        ----------
        category : EventCategory
            Category of the action that went wrong.
        match_slice : MatchSlice
            Minute being played.
        """
        mistake = self.profile.mistake_for(category)
        if mistake is EventType.FOUL_COMMITTED:
            self._record_foul(match_slice)
            return
        if mistake is EventType.DEFENSIVE_ERROR:
            roll = self.rng.random()
            if roll < OWN_GOAL_SHARE:
                mistake = EventType.OWN_GOAL
            elif roll < ESCALATION_TO_GOAL:
                mistake = EventType.ERROR_LEADING_TO_GOAL
        pressure = _clamp(self.rng.gauss(0.6, 0.15), 0.0, 1.0)
        self._record(
            mistake,
            match_slice,
            difficulty=DifficultyFactors(pressure=pressure, opposition_strength=self.context.opposition_strength),
        )
        if mistake in (EventType.ERROR_LEADING_TO_GOAL, EventType.OWN_GOAL):
            self._concede(match_slice)

    def _record_foul(self, match_slice: MatchSlice) -> None:
        """Record a committed foul and any penalty or card that follows.

        Parameters
        ----------
        match_slice : MatchSlice
            Minute being played.
        """
        cfg = self.cfg
        zone = self.profile.choose_zone(EventType.FOUL_COMMITTED, self.rng)
        if zone is PitchZone.OWN_BOX and self.rng.random() < cfg.penalty_share:
            self._record(EventType.PENALTY_CONCEDED, match_slice, zone=zone)
            if self.rng.random() < PENALTY_CONVERSION:
                self._concede(match_slice)
        else:
            self._record(EventType.FOUL_COMMITTED, match_slice, zone=zone)

        if self.rng.random() < cfg.straight_red_probability:
            self._record(EventType.RED_CARD, match_slice)
            self.finished = True
            return
        discipline = 1.5 - self.snapshot.hidden.professionalism / 100.0
        if self.rng.random() < cfg.yellow_card_probability * discipline:
            self.yellow_cards += 1
            if self.yellow_cards >= 2:
                self._record(EventType.SECOND_YELLOW, match_slice)
                self._record(EventType.RED_CARD, match_slice)
                self.finished = True
            else:
                self._record(EventType.YELLOW_CARD, match_slice)

    def _resolve_shot(
        self,
        match_slice: MatchSlice,
        zone: PitchZone,
        difficulty: DifficultyFactors,
        on_target: bool,
    ) -> None:
        """Turn a shot attempt into a goal, a save, a miss or a missed big chance.

        Parameters
        ----------
        match_slice : MatchSlice
            Minute being played.
        zone : PitchZone
            Where the shot was taken.
        difficulty : DifficultyFactors
            Hardship of the attempt.
        on_target : bool
            Whether the attempt hit the target.
        """
        cfg = self.cfg
        if on_target:
            finishing = self.snapshot.technical.finishing / 100.0
            range_factor = _clamp(1.25 - difficulty.distance / 40.0, 0.4, 1.2)
            conversion = (cfg.goal_conversion_floor + cfg.goal_conversion_span * finishing) * range_factor
            if self.rng.random() < conversion:
                self._record(EventType.GOAL, match_slice, zone=zone, difficulty=difficulty)
                self.goal_difference += 1
                return
            self._record(EventType.SHOT_ON_TARGET, match_slice, zone=zone, difficulty=difficulty)
            return
        if zone is PitchZone.OPPOSITION_BOX and self.rng.random() < cfg.big_chance_share:
            self._record(EventType.BIG_CHANCE_MISSED, match_slice, zone=zone, difficulty=difficulty)
            return
        self._record(EventType.SHOT_ON_TARGET, match_slice, zone=zone, difficulty=difficulty, success=False)

    def _assist_chance(self) -> float:
        """Return the probability that a completed key pass is converted.

        Returns
        -------
        float
            Assist probability driven by passing.
        """
        cfg = self.cfg
        return cfg.assist_conversion_floor + cfg.assist_conversion_span * self.snapshot.technical.passing / 100.0

    # --- probability helpers ------------------------------------------------------
    def _difficulty(self, action: EventType, zone: PitchZone) -> DifficultyFactors:
        """Draw the situational hardship of an action.

        Parameters
        ----------
        action : EventType
            Attempted action.
        zone : PitchZone
            Where it takes place.

        Returns
        -------
        DifficultyFactors
            Pressure, range, weak-side and last-man flags.
        """
        rng = self.rng
        pressure = rng.gauss(0.5, 0.15)
        if zone in (PitchZone.OWN_BOX, PitchZone.OPPOSITION_BOX):
            pressure += 0.1
        distance = 0.0
        if action is EventType.SHOT_ON_TARGET:
            distance = rng.uniform(6.0, 16.0) if zone is PitchZone.OPPOSITION_BOX else rng.uniform(18.0, 30.0)
        elif action in RANGED_EVENTS:
            distance = rng.uniform(10.0, 35.0)
        weak_foot = action.category is EventCategory.ATTACKING and rng.random() < 0.2
        return DifficultyFactors(
            pressure=_clamp(pressure, 0.0, 1.0),
            distance=distance,
            weak_foot=weak_foot,
            last_man=action in LAST_MAN_EVENTS,
            opposition_strength=self.context.opposition_strength,
        )

    def _is_clutch(self, match_slice: MatchSlice) -> bool:
        """Return whether the minute is late in a tight match.

        Parameters
        ----------
        match_slice : MatchSlice
            Minute being played.

        Returns
        -------
        bool
            ``True`` from the final fifth of regulation time onwards with a
            goal difference of at most one.
        """
        late = match_slice.minute >= 0.8 * self.context.regulation_minutes
        return late and abs(self.goal_difference) <= 1

    def _success_chance(self, action: EventType, difficulty: DifficultyFactors, match_slice: MatchSlice) -> float:
        """Return the probability that ``action`` succeeds.

        Parameters
        ----------
        action : EventType
            Attempted action.
        difficulty : DifficultyFactors
            Hardship of the attempt.
        match_slice : MatchSlice
            Minute being played; late tight minutes bring in the big-moment trait.

        Returns
        -------
        float
            Success probability clamped to the configured bounds.
        """
        cfg = self.cfg
        snapshot = self.snapshot
        attribute = snapshot.attribute(self.profile.driving_attribute(action))
        chance = cfg.base_success + cfg.attribute_success_span * attribute / 100.0
        chance *= 0.85 + 0.3 * snapshot.morale / 100.0
        chance *= 1.0 - 0.15 * self.fatigue / 100.0
        chance *= cfg.weather_success[self.context.weather] * cfg.pitch_success[self.context.pitch]
        chance *= 1.1 - 0.2 * self.context.opposition_strength / 100.0
        chance *= 1.1 - 0.2 * difficulty.pressure
        if difficulty.weak_foot:
            chance *= 1.0 - 0.3 * (1.0 - snapshot.technical.weak_foot / 100.0)
        chance += self.wobble
        if self._is_clutch(match_slice):
            chance += (snapshot.hidden.big_moment - 50) / 500.0
        low, high = cfg.success_bounds
        return _clamp(chance, low, high)

    # --- recording ----------------------------------------------------------------
    def _background_goals(self, match_slice: MatchSlice) -> None:
        """Roll for goals by the rest of both teams.

        Parameters
        ----------
        match_slice : MatchSlice
            Minute being played.
        """
        cfg = self.cfg
        ctx = self.context
        home_for = cfg.home_advantage if ctx.is_home else 1.0
        home_against = 1.0 if ctx.is_home else cfg.home_advantage
        attack = 0.5 + ctx.team_strength / 100.0
        defence = 1.5 - ctx.opposition_strength / 100.0
        if self.rng.random() < cfg.background_goal_rate * attack * defence * home_for:
            self.goal_difference += 1
        their_attack = 0.5 + ctx.opposition_strength / 100.0
        our_defence = 1.5 - ctx.team_strength / 100.0
        if self.rng.random() < cfg.background_goal_rate * their_attack * our_defence * home_against:
            self._face_chance(match_slice)

    def _face_chance(self, match_slice: MatchSlice) -> None:
        """Let a goalkeeper try to keep out an opposition chance; concede otherwise.

        Only part of the chances are stoppable, and within that share the
        keeper's save probability decides.

        Parameters
        ----------
        match_slice : MatchSlice
            Minute being played.
        """
        if self.snapshot.position is Position.GOALKEEPER:
            zone = PitchZone.OWN_BOX
            difficulty = self._difficulty(EventType.SAVE, zone)
            stop = STOPPABLE_CHANCE_SHARE * self._success_chance(EventType.SAVE, difficulty, match_slice)
            if self.rng.random() < stop:
                self._record(EventType.SAVE, match_slice, zone=zone, difficulty=difficulty)
                return
        self._concede(match_slice)

    def _concede(self, match_slice: MatchSlice) -> None:
        """Register a goal against; the goalkeeper records it.

        Parameters
        ----------
        match_slice : MatchSlice
            Minute being played.
        """
        if self.snapshot.position is Position.GOALKEEPER:
            self._record(EventType.GOAL_CONCEDED, match_slice, zone=PitchZone.OWN_BOX)
        self.goal_difference -= 1

    def _secondary_participant(self, event_type: EventType) -> Optional[int]:
        """Pick the teammate or opponent involved in an event.

        Parameters
        ----------
        event_type : EventType
            Event being recorded.

        Returns
        -------
        int | None
            Participant identifier, or ``None`` when nobody else is involved
            or the context lists no candidates.
        """
        if event_type in TEAMMATE_EVENTS and self.context.teammate_ids:
            return self.rng.choice(self.context.teammate_ids)
        if event_type in OPPONENT_EVENTS and self.context.opponent_ids:
            return self.rng.choice(self.context.opponent_ids)
        return None

    def _record(
        self,
        event_type: EventType,
        match_slice: MatchSlice,
        *,
        zone: Optional[PitchZone] = None,
        difficulty: Optional[DifficultyFactors] = None,
        success: bool = True,
    ) -> MatchEvent:
        """Append an event stamped with the current clock and score.

        Parameters
        ----------
        event_type : EventType
            What happened.
        match_slice : MatchSlice
            Minute being played.
        zone : PitchZone | None, optional
            Area of the pitch; drawn from the role profile when omitted.
        difficulty : DifficultyFactors | None, optional
            Hardship inputs; neutral apart from the opposition when omitted.
        success : bool, optional
            Outcome flag.

        Returns
        -------
        MatchEvent
            The recorded event.
        """
        if zone is None:
            zone = self.profile.choose_zone(event_type, self.rng)
        if difficulty is None:
            difficulty = DifficultyFactors(opposition_strength=self.context.opposition_strength)
        event = make_event(
            len(self.events),
            self.snapshot.participant_id,
            self.snapshot.role,
            event_type,
            match_slice.minute,
            match_slice.half,
            added_minute=match_slice.added_minute,
            zone=zone,
            success=success,
            goal_difference=self.goal_difference,
            difficulty=difficulty,
            secondary_participant_id=self._secondary_participant(event_type),
        )
        self.events.append(event)
        if self.debugger:
            state = ScoreState.from_goal_difference(self.goal_difference).value
            outcome = "ok" if event.success else "failed"
            self.debugger.log_match_event(
                event.clock,
                event_type.value,
                f"#{self.snapshot.participant_id} {self.snapshot.role.value} {outcome} zone={zone.value} {state}",
            )
        return event
