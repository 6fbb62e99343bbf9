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
"""End-to-end rating pipeline and matchday scheduling."""
from __future__ import annotations

import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from fulltime.engine.aggregation import RatingAggregator
from fulltime.engine.config import ENGINE_CONFIG, EngineConfig
from fulltime.engine.errors import InputValidationError, InternalInvariantError, InvalidSnapshot
from fulltime.engine.events import MatchEvent, check_event_order
from fulltime.engine.generator import EventGenerator
from fulltime.engine.impact import ImpactCalculator
from fulltime.engine.normalization import RatingNormalizer
from fulltime.engine.report import MatchReport, MatchReportAssembler
from fulltime.models.context import MatchContext
from fulltime.models.snapshot import ParticipantSnapshot
from fulltime.utils.debug import MatchDebugger


@dataclass(frozen=True)
class Fixture:
    """One independently schedulable match run.

    Parameters
    ----------
    snapshot : ParticipantSnapshot
        Participant to simulate.
    context : MatchContext
        Fixture parameters.
    seed : int | None, optional
        Seed of the run's private random source; ``None`` seeds from the
        operating system.
    """

    snapshot: ParticipantSnapshot
    context: MatchContext
    seed: Optional[int] = None


class MatchRatingEngine:
    """Run snapshot and context through generation, scoring and reporting.

    Every stage is created once and holds only configuration, so a single
    engine can simulate many fixtures concurrently. Each run owns its random
    source; nothing mutable is shared apart from the optional debugger,
    which serialises its own writes.

    Parameters
    ----------
    config : EngineConfig, optional
        Tuning tables for every stage.
    debugger : MatchDebugger | None, optional
        Thread-safe sink for structured trace lines.
    """

    def __init__(self, config: EngineConfig = ENGINE_CONFIG, debugger: Optional[MatchDebugger] = None) -> None:
        """Build the pipeline stages.

        Parameters
        ----------
        config : EngineConfig
            Tuning tables for every stage.
        debugger : MatchDebugger | None
            Thread-safe sink for structured trace lines.
        """
        self.config = config
        self.debugger = debugger
        self.generator = EventGenerator(config.simulation, debugger)
        self.calculator = ImpactCalculator(config.impact, debugger)
        self.aggregator = RatingAggregator(config.aggregation, debugger)
        self.normalizer = RatingNormalizer(config.normalization, debugger)
        self.assembler = MatchReportAssembler()

    def simulate(
        self,
        snapshot: ParticipantSnapshot,
        context: MatchContext,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> MatchReport:
        """Simulate a fixture for one participant and rate the performance.

        Parameters
        ----------
        snapshot : ParticipantSnapshot
            Participant to simulate.
        context : MatchContext
            Fixture parameters.
        seed : int | None, optional
            Seed for a fresh random source; ignored when ``rng`` is given.
        rng : random.Random | None, optional
            Random source to draw from.

        Returns
        -------
        MatchReport
            Rating, stats and the scored event log.

        Raises
        ------
        InvalidSnapshot
            If the snapshot is malformed; raised before any event exists.
        EmptyContext
            If the context has no duration or is malformed.
        """
        source = rng if rng is not None else random.Random(seed)
        try:
            events = self.generator.generate(snapshot, context, source)
        except InputValidationError as exc:
            self._log_error(type(exc).__name__, f"participant {snapshot.participant_id}: {exc}")
            raise
        return self._rate_events(snapshot, context, events)

    def rate(
        self,
        snapshot: ParticipantSnapshot,
        context: MatchContext,
        events: Iterable[MatchEvent],
    ) -> MatchReport:
        """Rate an externally supplied event log.

        Parameters
        ----------
        snapshot : ParticipantSnapshot
            Participant the events belong to.
        context : MatchContext
            Fixture the events belong to.
        events : Iterable[MatchEvent]
            Chronologically ordered events; any existing impact is recomputed.

        Returns
        -------
        MatchReport
            Rating, stats and the scored event log.

        Raises
        ------
        InvalidSnapshot
            If the snapshot is malformed or an event belongs to another
            participant.
        EmptyContext
            If the context is malformed.
        InternalInvariantError
            If the events run backwards or continue after a terminal event.
        """
        self.generator.validate_inputs(snapshot, context)
        event_log = tuple(events)
        for event in event_log:
            if event.participant_id != snapshot.participant_id:
                raise InvalidSnapshot(
                    f"event {event.sequence} belongs to participant {event.participant_id}",
                    "participant_id",
                    event.participant_id,
                )
        try:
            check_event_order(event_log)
        except InternalInvariantError as exc:
            self._log_error(type(exc).__name__, str(exc))
            raise
        return self._rate_events(snapshot, context, event_log)

    def _rate_events(
        self,
        snapshot: ParticipantSnapshot,
        context: MatchContext,
        events: Sequence[MatchEvent],
    ) -> MatchReport:
        """Score, aggregate, normalize and package an ordered event log.

        Parameters
        ----------
        snapshot : ParticipantSnapshot
            Participant the events belong to.
        context : MatchContext
            Fixture the events belong to.
        events : Sequence[MatchEvent]
            Validated, ordered events.

        Returns
        -------
        MatchReport
            Immutable report.
        """
        scored = self.calculator.score(events, context)
        aggregate = self.aggregator.aggregate(scored)
        rating = self.normalizer.normalize(aggregate.raw_score)
        band = self.normalizer.band(rating)
        return self.assembler.assemble(snapshot, context, scored, aggregate, rating, band)

    def run_fixture(self, fixture: Fixture) -> MatchReport:
        """Simulate one :class:`Fixture` with its own random source.

        Parameters
        ----------
        fixture : Fixture
            Unit of work to run.

        Returns
        -------
        MatchReport
            Report of the run.
        """
        return self.simulate(fixture.snapshot, fixture.context, rng=random.Random(fixture.seed))

    def simulate_matchday(
        self,
        fixtures: Iterable[Fixture],
        max_workers: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> List[MatchReport]:
        """Simulate many independent fixtures concurrently.

        Parameters
        ----------
        fixtures : Iterable[Fixture]
            Units of work; each run is isolated from the others.
        max_workers : int | None, optional
            Thread pool size; the executor default when ``None``.
        timeout : float | None, optional
            Seconds to wait for the whole matchday; ``None`` waits forever.

        Returns
        -------
        List[MatchReport]
            Reports in the order the fixtures were given.

        Raises
        ------
        concurrent.futures.TimeoutError
            If the matchday does not finish within ``timeout``.
        """
        work = list(fixtures)
        if not work:
            return []
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self.run_fixture, work, timeout=timeout))

    def _log_error(self, error_type: str, message: str) -> None:
        """Forward an error line to the debugger when one is attached.

        Parameters
        ----------
        error_type : str
            Exception class name.
        message : str
            Description of the failure.
        """
        if self.debugger:
            self.debugger.log_error(error_type, message)
