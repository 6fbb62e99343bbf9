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
"""Tests for the raw-score to rating curve."""

import pytest

from fulltime.engine.config import NormalizationConfig
from fulltime.engine.normalization import RatingBand, RatingNormalizer


class TestCurve:
    """Tests for curve shape."""

    def test_zero_is_baseline(self) -> None:
        """A raw score of zero maps to the baseline."""
        assert RatingNormalizer().normalize(0.0) == pytest.approx(6.0)

    def test_linear_region(self) -> None:
        """Between zero and the knee the curve is linear."""
        norm = RatingNormalizer()
        assert norm.curve(5.0) == pytest.approx(6.5)
        assert norm.curve(12.0) == pytest.approx(7.2)

    def test_continuous_at_joins(self) -> None:
        """Both tails meet the linear region without a jump."""
        norm = RatingNormalizer()
        assert norm.curve(-1e-9) == pytest.approx(norm.curve(0.0))
        assert norm.curve(12.0 + 1e-9) == pytest.approx(norm.curve(12.0))
        assert norm.curve(12.01) - norm.curve(12.0) == pytest.approx(0.001, rel=1e-2)

    def test_monotonic(self) -> None:
        """Higher raw scores never give lower ratings."""
        norm = RatingNormalizer()
        raws = [x / 4.0 for x in range(-400, 400)]
        ratings = [norm.normalize(raw) for raw in raws]
        assert all(b >= a for a, b in zip(ratings, ratings[1:]))

    def test_clamped(self) -> None:
        """Ratings stay within the floor and ceiling."""
        norm = RatingNormalizer()
        assert norm.normalize(-1000.0) == pytest.approx(3.0)
        assert norm.normalize(1000.0) == pytest.approx(9.9)
        assert 3.0 <= norm.normalize(-20.0) <= 6.0

    def test_upper_tail_compresses(self) -> None:
        """Each extra raw point is worth less near the ceiling."""
        norm = RatingNormalizer()
        assert norm.curve(40.0) - norm.curve(30.0) < norm.curve(20.0) - norm.curve(10.0)

    def test_floor_bounds(self) -> None:
        """The floor must stay within the supported range."""
        with pytest.raises(ValueError):
            NormalizationConfig(floor=2.0)
        assert NormalizationConfig(floor=4.0).floor == 4.0


class TestBands:
    """Tests for verbal bands."""

    @pytest.mark.parametrize(
        "rating, band",
        [
            (3.0, RatingBand.POOR),
            (5.49, RatingBand.POOR),
            (5.5, RatingBand.BELOW_AVERAGE),
            (6.0, RatingBand.BELOW_AVERAGE),
            (6.3, RatingBand.AVERAGE),
            (7.0, RatingBand.GOOD),
            (8.0, RatingBand.EXCELLENT),
            (9.29, RatingBand.EXCELLENT),
            (9.3, RatingBand.LEGENDARY),
            (9.9, RatingBand.LEGENDARY),
        ],
    )
    def test_band_edges(self, rating: float, band: RatingBand) -> None:
        """Band thresholds are lower edges."""
        assert RatingNormalizer().band(rating) is band
