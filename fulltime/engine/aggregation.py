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
"""Aggregation of scored events into a raw match score.

The aggregator applies a coarse per-type weight, diminishing returns for
repeated contributions of the same type and sign, a consistency pull for
matches full of both highs and lows, and an involvement-dependent ceiling.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from fulltime.engine.config import ENGINE_CONFIG, AggregationConfig
from fulltime.engine.errors import InternalInvariantError
from fulltime.engine.events import EventType, MatchEvent

if TYPE_CHECKING:
    from fulltime.utils.debug import MatchDebugger


class InvolvementLevel(str, Enum):
    """How much of the match the participant was involved in."""

    VERY_LOW = "very_low"
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


INVOLVEMENT_ORDER: Tuple[InvolvementLevel, ...] = (
    InvolvementLevel.VERY_LOW,
    InvolvementLevel.LOW,
    InvolvementLevel.NORMAL,
    InvolvementLevel.HIGH,
)


@dataclass(frozen=True)
class Contribution:
    """What one event added to the raw score.

    Parameters
    ----------
    sequence : int
        Sequence number of the source event.
    event_type : EventType
        Type of the source event.
    impact : float
        Final impact of the event.
    weighted : float
        Impact after the type weight and mistake weight.
    occurrence : int
        Rank of the event among same-type, same-sign contributions, by
        magnitude, starting at 1.
    contribution : float
        Weighted impact after diminishing returns.
    """

    sequence: int
    event_type: EventType
    impact: float
    weighted: float
    occurrence: int
    contribution: float


@dataclass(frozen=True)
class AggregateScore:
    """Raw, pre-normalization result of a match.

    Parameters
    ----------
    raw_score : float
        Signed final raw score.
    uncapped_score : float
        Raw score after the consistency pull, before the involvement ceiling.
    positive_total : float
        Sum of positive contributions.
    negative_total : float
        Sum of negative contributions, as a negative number.
    consistency_bonus : float
        Amount the consistency pull added.
    involvement_score : float
        Weighted touch count.
    involvement : InvolvementLevel
        Classification of ``involvement_score``.
    cap : float | None
        Raw ceiling applied for the involvement class, ``None`` when uncapped.
    contributions : Tuple[Contribution, ...]
        Per-event breakdown in event order.
    """

    raw_score: float
    uncapped_score: float
    positive_total: float
    negative_total: float
    consistency_bonus: float
    involvement_score: float
    involvement: InvolvementLevel
    cap: Optional[float]
    contributions: Tuple[Contribution, ...]

    @property
    def capped(self) -> bool:
        """Return whether the involvement ceiling lowered the score."""
        return self.cap is not None and self.uncapped_score > self.cap


class RatingAggregator:
    """Combine scored events into an :class:`AggregateScore`.

    Parameters
    ----------
    config : AggregationConfig, optional
        Weights, decay rates and thresholds; the engine-wide defaults when
        omitted.
    debugger : MatchDebugger | None, optional
        Sink that receives an ``AGGREGATE`` line per aggregation.
    """

    def __init__(
        self,
        config: Optional[AggregationConfig] = None,
        debugger: Optional["MatchDebugger"] = None,
    ) -> None:
        """Store the tuning tables and optional debugger.

        Parameters
        ----------
        config : AggregationConfig | None
            Weights, decay rates and thresholds.
        debugger : MatchDebugger | None
            Sink that receives a line per aggregation.
        """
        self.config = config if config is not None else ENGINE_CONFIG.aggregation
        self.debugger = debugger

    def type_weight(self, event_type: EventType) -> float:
        """Return the coarse weight of ``event_type``.

        Parameters
        ----------
        event_type : EventType
            Type being weighted.

        Returns
        -------
        float
            Type-specific weight, or the category default.
        """
        cfg = self.config
        return cfg.type_weights.get(event_type, cfg.category_weights[event_type.category])

    def weighted_impact(self, event: MatchEvent) -> float:
        """Return the event's impact after the type and mistake weights.

        Incidents that cost a goal never weigh less than the configured
        penalty, however soft their context.

        Parameters
        ----------
        event : MatchEvent
            Scored event.

        Returns
        -------
        float
            Weighted signed impact.

        Raises
        ------
        InternalInvariantError
            If the event has not been scored.
        """
        if event.impact is None:
            raise InternalInvariantError(f"event {event.sequence} reached aggregation without an impact")
        cfg = self.config
        weighted = event.impact.final_impact * self.type_weight(event.event_type)
        if weighted < 0:
            weighted *= cfg.mistake_weight
            if event.event_type in cfg.costly_incidents:
                weighted = min(weighted, -cfg.costly_incident_penalty)
        return weighted

    def diminishing_factor(self, occurrence: int, negative: bool) -> float:
        """Return the share kept by the ``occurrence``-th contribution.

        Parameters
        ----------
        occurrence : int
            Rank among same-type, same-sign contributions, starting at 1.
        negative : bool
            Whether the contributions are negative, which decay more slowly.

        Returns
        -------
        float
            ``1 / (1 + r * (occurrence - 1))``.
        """
        rate = self.config.negative_decay if negative else self.config.positive_decay
        return 1.0 / (1.0 + rate * (occurrence - 1))

    def involvement_score(self, events: Iterable[MatchEvent]) -> float:
        """Return the weighted touch count of an event log.

        The count only depends on which events happened, not on their
        outcome.

        Parameters
        ----------
        events : Iterable[MatchEvent]
            Event log.

        Returns
        -------
        float
            Sum of per-type touch weights.
        """
        cfg = self.config
        return sum(cfg.touch_weights.get(event.event_type, cfg.default_touch_weight) for event in events)

    def classify(self, involvement_score: float) -> InvolvementLevel:
        """Classify a weighted touch count.

        Parameters
        ----------
        involvement_score : float
            Weighted touch count.

        Returns
        -------
        InvolvementLevel
            Level whose threshold the score reaches.
        """
        level = InvolvementLevel.VERY_LOW
        for threshold, candidate in zip(self.config.involvement_thresholds, INVOLVEMENT_ORDER[1:]):
            if involvement_score >= threshold:
                level = candidate
        return level

    def cap_for(self, level: InvolvementLevel) -> Optional[float]:
        """Return the raw ceiling of an involvement level.

        Parameters
        ----------
        level : InvolvementLevel
            Involvement classification.

        Returns
        -------
        float | None
            Raw ceiling, or ``None`` when the level is uncapped.
        """
        return self.config.raw_caps[INVOLVEMENT_ORDER.index(level)]

    def consistency_pull(self, raw_score: float, positive_total: float, negative_total: float) -> float:
        """Pull a match full of both highs and lows toward the middle-high band.

        Parameters
        ----------
        raw_score : float
            Sum of all contributions.
        positive_total : float
            Sum of positive contributions.
        negative_total : float
            Sum of negative contributions, as a negative number.

        Returns
        -------
        float
            Adjusted raw score; never lower than ``raw_score`` and never
            pushed beyond the consistency target.
        """
        cfg = self.config
        overlap = min(positive_total, -negative_total) - cfg.consistency_threshold
        if overlap <= 0:
            return raw_score
        bonus = cfg.consistency_strength * overlap
        return max(raw_score, min(raw_score + bonus, cfg.consistency_target))

    def _contributions(self, events: List[MatchEvent]) -> List[Contribution]:
        """Apply weights and diminishing returns to every event.

        Same-type, same-sign contributions are ranked by magnitude so the
        largest keeps its full value regardless of when it happened.

        Parameters
        ----------
        events : List[MatchEvent]
            Scored event log.

        Returns
        -------
        List[Contribution]
            One entry per event, in event order.
        """
        weighted = [self.weighted_impact(event) for event in events]
        groups: Dict[Tuple[EventType, bool], List[int]] = defaultdict(list)
        for index, value in enumerate(weighted):
            if value != 0:
                groups[(events[index].event_type, value < 0)].append(index)

        occurrences: Dict[int, int] = {}
        for indices in groups.values():
            ranked = sorted(indices, key=lambda i: (-abs(weighted[i]), i))
            for rank, index in enumerate(ranked, start=1):
                occurrences[index] = rank

        contributions: List[Contribution] = []
        for index, event in enumerate(events):
            value = weighted[index]
            occurrence = occurrences.get(index, 1)
            factor = self.diminishing_factor(occurrence, value < 0) if value != 0 else 1.0
            contributions.append(
                Contribution(
                    sequence=event.sequence,
                    event_type=event.event_type,
                    impact=event.final_impact,
                    weighted=value,
                    occurrence=occurrence,
                    contribution=value * factor,
                )
            )
        return contributions

    def aggregate(self, events: Iterable[MatchEvent]) -> AggregateScore:
        """Aggregate a scored event log.

        Parameters
        ----------
        events : Iterable[MatchEvent]
            Scored events of one participant in one match.

        Returns
        -------
        AggregateScore
            Raw score, totals, involvement and per-event contributions.
        """
        event_list = list(events)
        contributions = self._contributions(event_list)
        positive_total = sum(c.contribution for c in contributions if c.contribution > 0)
        negative_total = sum(c.contribution for c in contributions if c.contribution < 0)
        summed = positive_total + negative_total
        adjusted = self.consistency_pull(summed, positive_total, negative_total)

        involvement_score = self.involvement_score(event_list)
        level = self.classify(involvement_score)
        cap = self.cap_for(level)
        raw_score = min(adjusted, cap) if cap is not None else adjusted

        result = AggregateScore(
            raw_score=raw_score,
            uncapped_score=adjusted,
            positive_total=positive_total,
            negative_total=negative_total,
            consistency_bonus=adjusted - summed,
            involvement_score=involvement_score,
            involvement=level,
            cap=cap,
            contributions=tuple(contributions),
        )
        if self.debugger:
            self.debugger.log_aggregate(
                f"events={len(event_list)} pos={positive_total:+.3f} neg={negative_total:+.3f} "
                f"bonus={result.consistency_bonus:+.3f} involvement={involvement_score:.1f} "
                f"({level.value}) cap={cap} raw={raw_score:+.3f}"
            )
        return result
