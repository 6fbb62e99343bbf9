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
"""Mapping from raw match scores onto the rating scale."""
from __future__ import annotations

import math
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from fulltime.engine.config import ENGINE_CONFIG, NormalizationConfig

if TYPE_CHECKING:
    from fulltime.utils.debug import MatchDebugger


class RatingBand(str, Enum):
    """Verbal grade of a match rating."""

    POOR = "poor"
    BELOW_AVERAGE = "below_average"
    AVERAGE = "average"
    GOOD = "good"
    EXCELLENT = "excellent"
    LEGENDARY = "legendary"


BAND_ORDER: Tuple[RatingBand, ...] = tuple(RatingBand)


class RatingNormalizer:
    """Compress a raw score onto the bounded rating scale.

    Near the baseline the curve is linear. Above the knee it approaches the
    ceiling exponentially, and below zero it approaches the floor the same
    way. Both tails join the linear region with matching value and slope, so
    the curve is continuous and non-decreasing.

    Parameters
    ----------
    config : NormalizationConfig, optional
        Curve parameters; the engine-wide defaults when omitted.
    debugger : MatchDebugger | None, optional
        Sink that receives a ``RATING`` line per normalization.
    """

    def __init__(
        self,
        config: Optional[NormalizationConfig] = None,
        debugger: Optional["MatchDebugger"] = None,
    ) -> None:
        """Store the curve parameters and optional debugger.

        Parameters
        ----------
        config : NormalizationConfig | None
            Curve parameters.
        debugger : MatchDebugger | None
            Sink that receives a line per normalization.
        """
        self.config = config if config is not None else ENGINE_CONFIG.normalization
        self.debugger = debugger

    def curve(self, raw_score: float) -> float:
        """Evaluate the unclamped curve.

        Parameters
        ----------
        raw_score : float
            Signed raw score.

        Returns
        -------
        float
            Rating before the final clamp.
        """
        cfg = self.config
        if raw_score < 0:
            return cfg.baseline - cfg.lower_span * (1.0 - math.exp(cfg.slope * raw_score / cfg.lower_span))
        if raw_score <= cfg.knee:
            return cfg.baseline + cfg.slope * raw_score
        knee_rating = cfg.baseline + cfg.slope * cfg.knee
        excess = raw_score - cfg.knee
        return knee_rating + cfg.upper_span * (1.0 - math.exp(-cfg.slope * excess / cfg.upper_span))

    def normalize(self, raw_score: float) -> float:
        """Map a raw score onto the rating scale.

        Parameters
        ----------
        raw_score : float
            Signed raw score.

        Returns
        -------
        float
            Rating clamped to ``[floor, ceiling]``.
        """
        cfg = self.config
        rating = max(cfg.floor, min(cfg.ceiling, self.curve(raw_score)))
        if self.debugger:
            self.debugger.log_rating(f"raw={raw_score:+.3f} rating={rating:.3f} band={self.band(rating).value}")
        return rating

    def band(self, rating: float) -> RatingBand:
        """Classify a rating.

        Parameters
        ----------
        rating : float
            Rating on the bounded scale.

        Returns
        -------
        RatingBand
            Highest band whose lower edge the rating reaches.
        """
        band = RatingBand.POOR
        for threshold, candidate in zip(self.config.band_thresholds, BAND_ORDER[1:]):
            if rating >= threshold:
                band = candidate
        return band
