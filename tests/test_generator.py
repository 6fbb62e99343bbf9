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
"""Tests for the stochastic event generator."""

import random
from collections import Counter
from dataclasses import replace
from typing import List

import pytest

from fulltime.engine.config import SimulationConfig
from fulltime.engine.errors import InvalidSnapshot
from fulltime.engine.events import TERMINAL_TYPES, EventCategory, EventType, MatchHalf, check_event_order
from fulltime.engine.generator import EventGenerator, match_slices, sample_poisson
from fulltime.models.context import MatchContext
from fulltime.models.snapshot import (
    MentalAttributes,
    ParticipantSnapshot,
    PhysicalAttributes,
    SubRole,
    TechnicalAttributes,
)

# Cards and random injuries end matches early; switching them off keeps counts comparable.
CALM = SimulationConfig(yellow_card_probability=0.0, straight_red_probability=0.0, random_injury_rate=0.0)

MISTAKE_TYPES = {
    EventType.DISPOSSESSED,
    EventType.TURNOVER_COMMITTED,
    EventType.DEFENSIVE_ERROR,
    EventType.ERROR_LEADING_TO_GOAL,
    EventType.OWN_GOAL,
    EventType.MARKING_ERROR,
}


def _snapshot(role: SubRole = SubRole.CM, work_rate: int = 60, stamina: int = 60, **overrides: object):
    values = dict(
        participant_id=7,
        name="Test Player",
        role=role,
        technical=TechnicalAttributes(
            finishing=60,
            passing=60,
            dribbling=60,
            crossing=60,
            tackling=60,
            heading=60,
            first_touch=60,
            handling=60 if role is SubRole.GK else 15,
            reflexes=60 if role is SubRole.GK else 15,
            weak_foot=50,
        ),
        physical=PhysicalAttributes(pace=60, stamina=stamina, strength=60, agility=60, jumping=60),
        mental=MentalAttributes(
            composure=60,
            vision=60,
            work_rate=work_rate,
            determination=60,
            positioning=60,
            decisions=60,
            teamwork=60,
        ),
    )
    values.update(overrides)
    return ParticipantSnapshot(**values)


def _run_many(generator: EventGenerator, snapshot: ParticipantSnapshot, runs: int = 40) -> List[tuple]:
    context = MatchContext()
    return [generator.generate(snapshot, context, random.Random(seed)) for seed in range(runs)]


class TestHelpers:
    """Tests for the clock and sampling helpers."""

    def test_match_slices_cover_the_match(self) -> None:
        """Every played minute appears once, stoppage included."""
        context = MatchContext(first_half_added=2, second_half_added=4)
        slices = match_slices(context)
        assert len(slices) == context.total_minutes
        assert slices[0].minute == 1
        assert (slices[46].minute, slices[46].added_minute, slices[46].half) == (45, 2, MatchHalf.FIRST)
        assert (slices[47].minute, slices[47].half) == (46, MatchHalf.SECOND)
        assert (slices[-1].minute, slices[-1].added_minute) == (90, 4)
        assert [s.elapsed for s in slices] == list(range(1, context.total_minutes + 1))

    def test_poisson_zero_rate(self) -> None:
        """A zero rate never produces events."""
        rng = random.Random(1)
        assert all(sample_poisson(0.0, rng) == 0 for _ in range(100))

    def test_poisson_mean(self) -> None:
        """Samples average out near the rate."""
        rng = random.Random(2)
        samples = [sample_poisson(0.4, rng) for _ in range(5000)]
        assert sum(samples) / len(samples) == pytest.approx(0.4, abs=0.05)


class TestDeterminism:
    """Tests for reproducibility and ordering."""

    def test_same_seed_same_events(self) -> None:
        """A seeded run is reproducible."""
        generator = EventGenerator()
        snapshot = _snapshot()
        first = generator.generate(snapshot, MatchContext(), random.Random(99))
        second = generator.generate(snapshot, MatchContext(), random.Random(99))
        assert first == second
        assert len(first) > 0

    def test_different_seeds_differ(self) -> None:
        """Different seeds give different matches."""
        generator = EventGenerator()
        snapshot = _snapshot()
        first = generator.generate(snapshot, MatchContext(), random.Random(1))
        second = generator.generate(snapshot, MatchContext(), random.Random(2))
        assert first != second

    def test_events_are_ordered(self) -> None:
        """Generated logs never run backwards and stop at a terminal event."""
        generator = EventGenerator()
        for role in (SubRole.GK, SubRole.CD, SubRole.CM, SubRole.CF):
            for events in _run_many(generator, _snapshot(role=role), runs=15):
                check_event_order(events)
                assert all(event.minute >= 1 for event in events)
                assert [event.sequence for event in events] == list(range(len(events)))
                terminal = [i for i, event in enumerate(events) if event.event_type in TERMINAL_TYPES]
                assert not terminal or terminal == [len(events) - 1]

    def test_events_belong_to_participant(self) -> None:
        """Every event names the simulated participant and role."""
        events = EventGenerator().generate(_snapshot(), MatchContext(), random.Random(5))
        assert {event.participant_id for event in events} == {7}
        assert {event.role for event in events} == {SubRole.CM}


class TestInvolvement:
    """Tests for how attributes drive involvement."""

    def test_work_rate_raises_involvement(self) -> None:
        """Harder workers get on the ball more."""
        generator = EventGenerator(CALM)
        lazy = generator.involvement_score(_snapshot(work_rate=20))
        busy = generator.involvement_score(_snapshot(work_rate=90))
        assert busy > lazy

    def test_work_rate_raises_event_count(self) -> None:
        """Higher involvement shows up as more events on average."""
        generator = EventGenerator(CALM)
        lazy = _run_many(generator, _snapshot(work_rate=20))
        busy = _run_many(generator, _snapshot(work_rate=90))
        assert sum(map(len, busy)) > sum(map(len, lazy))

    def test_stamina_raises_involvement(self) -> None:
        """Fitter players keep getting involved."""
        generator = EventGenerator(CALM)
        assert generator.involvement_score(_snapshot(stamina=90)) > generator.involvement_score(_snapshot(stamina=30))

    def test_low_fitness_cuts_involvement(self) -> None:
        """A participant short of fitness is involved less."""
        generator = EventGenerator(CALM)
        fit = generator.involvement_score(_snapshot(fitness=90.0))
        unfit = generator.involvement_score(_snapshot(fitness=20.0))
        assert unfit == pytest.approx(fit * 0.6)

    def test_low_fitness_multiplies_mistakes(self) -> None:
        """A participant short of fitness makes a larger share of mistakes."""
        generator = EventGenerator(CALM)

        def mistake_share(snapshot: ParticipantSnapshot) -> float:
            events = [event for run in _run_many(generator, snapshot) for event in run]
            mistakes = sum(1 for event in events if event.event_type in MISTAKE_TYPES)
            return mistakes / len(events)

        assert mistake_share(_snapshot(fitness=20.0)) > mistake_share(_snapshot(fitness=90.0))

    def test_role_biases_categories(self) -> None:
        """Forwards attack more and defenders defend more."""
        generator = EventGenerator(CALM)

        def categories(role: SubRole) -> Counter:
            return Counter(event.category for run in _run_many(generator, _snapshot(role=role)) for event in run)

        forward = categories(SubRole.CF)
        defender = categories(SubRole.CD)
        forward_total = sum(forward.values())
        defender_total = sum(defender.values())
        assert forward[EventCategory.ATTACKING] / forward_total > defender[EventCategory.ATTACKING] / defender_total
        assert defender[EventCategory.DEFENSIVE] / defender_total > forward[EventCategory.DEFENSIVE] / forward_total

    def test_only_goalkeepers_keep_goal(self) -> None:
        """Saves belong to the goalkeeper."""
        generator = EventGenerator(CALM)
        outfield = [event for run in _run_many(generator, _snapshot(role=SubRole.CD), 10) for event in run]
        keeper = [event for run in _run_many(generator, _snapshot(role=SubRole.GK), 10) for event in run]
        saves = {EventType.SAVE, EventType.REFLEX_SAVE, EventType.ONE_ON_ONE_SAVE}
        assert not any(event.event_type in saves for event in outfield)
        assert any(event.event_type in saves for event in keeper)

    def test_keepers_face_opposition_chances(self) -> None:
        """Goalkeepers can keep out chances the rest of the side allows."""
        chances_only = SimulationConfig(
            base_event_rate=0.0,
            background_goal_rate=0.05,
            yellow_card_probability=0.0,
            straight_red_probability=0.0,
            random_injury_rate=0.0,
        )
        generator = EventGenerator(chances_only)

        def stopped_share(reflexes: int) -> float:
            keeper = _snapshot(role=SubRole.GK)
            keeper = replace(keeper, technical=replace(keeper.technical, reflexes=reflexes))
            counts = Counter(event.event_type for run in _run_many(generator, keeper, 60) for event in run)
            assert set(counts) <= {EventType.SAVE, EventType.GOAL_CONCEDED}
            return counts[EventType.SAVE] / (counts[EventType.SAVE] + counts[EventType.GOAL_CONCEDED])

        strong = stopped_share(95)
        weak = stopped_share(20)
        assert 0.0 < weak < strong < 0.5
        assert not any(_run_many(generator, _snapshot(role=SubRole.CD), 10))


class TestInjuries:
    """Tests for collaborator-supplied injuries."""

    def test_injury_minute_ends_match(self) -> None:
        """The log ends with an injury at the given minute."""
        events = EventGenerator(CALM).generate(_snapshot(injury_minute=30), MatchContext(), random.Random(3))
        assert events[-1].event_type is EventType.INJURY
        assert events[-1].minute == 30
        assert all(event.minute <= 30 for event in events)

    def test_injury_in_stoppage_time(self) -> None:
        """Minutes past regulation fall in second-half stoppage."""
        context = MatchContext(second_half_added=4)
        events = EventGenerator(CALM).generate(_snapshot(injury_minute=93), context, random.Random(3))
        assert events[-1].event_type is EventType.INJURY
        assert (events[-1].minute, events[-1].added_minute) == (90, 3)

    def test_injury_after_final_whistle_rejected(self) -> None:
        """An injury minute the match never reaches is invalid input."""
        context = MatchContext(second_half_added=4)
        with pytest.raises(InvalidSnapshot):
            EventGenerator().generate(_snapshot(injury_minute=95), context, random.Random(3))
