"""
Tests for Threshold Classification
==================================

Bucket tables for solar wind gauges and the fixed aurora score breakpoints.
"""

import math

import pytest

from solar_watch.monitoring.constants import (
    PALETTE,
    GAUGE_EMOJIS,
    ERROR_EMOJI,
    Bucket,
    Direction,
    buckets_by_severity,
)
from solar_watch.monitoring.thresholds import (
    SPEED,
    DENSITY,
    POWER,
    BT,
    BZ,
    TABLES,
    ThresholdTable,
    classify,
    classify_with_color,
    gauge_style,
    aurora_score_bucket,
    gradient_stops,
)


def _boundaries(*values):
    return dict(zip(buckets_by_severity(descending=False), values))


# =============================================================================
# TABLE VALIDATION
# =============================================================================

class TestThresholdTable:
    """ThresholdTable is validated at construction."""

    def test_builtin_tables_present(self):
        """Test built-in tables are present."""
        assert set(TABLES) == {'speed', 'density', 'power', 'bt', 'bz'}

    def test_palette_covers_every_bucket(self):
        """Test palette covers every bucket."""
        assert set(PALETTE) == set(Bucket)
        assert set(GAUGE_EMOJIS) == set(Bucket)

    def test_boundaries_are_read_only(self):
        """Test boundaries are read-only."""
        with pytest.raises(TypeError):
            SPEED.boundaries[Bucket.RED] = 1.0

    def test_missing_bucket_rejected(self):
        """Test missing bucket rejected."""
        boundaries = _boundaries(1, 2, 3, 4, 5, math.inf)
        del boundaries[Bucket.PURPLE]
        with pytest.raises(ValueError, match="missing buckets"):
            ThresholdTable('x', 'u', Direction.ASCENDING, boundaries, 10)

    def test_non_monotonic_rejected(self):
        """Test non-monotonic boundaries are rejected."""
        with pytest.raises(ValueError, match="not monotonic"):
            ThresholdTable('x', 'u', Direction.ASCENDING, _boundaries(1, 5, 3, 4, 6, math.inf), 10)

    def test_descending_must_decrease(self):
        """Test descending must decrease."""
        with pytest.raises(ValueError, match="not monotonic"):
            ThresholdTable('x', 'u', Direction.DESCENDING, _boundaries(-5, -10, -15, -20, -50, math.inf), -60)

    def test_nan_boundary_rejected(self):
        """Test NaN boundary rejected."""
        with pytest.raises(ValueError, match="NaN"):
            ThresholdTable('x', 'u', Direction.ASCENDING, _boundaries(1, 2, math.nan, 4, 5, math.inf), 10)

    def test_zero_max_expected_rejected(self):
        """Test zero max expected rejected."""
        with pytest.raises(ValueError, match="max_expected"):
            ThresholdTable('x', 'u', Direction.ASCENDING, _boundaries(1, 2, 3, 4, 5, math.inf), 0)


# =============================================================================
# CLASSIFICATION
# =============================================================================

class TestClassify:
    """Most severe matching bucket wins."""

    @pytest.mark.parametrize("value,expected", [
        (100, Bucket.GRAY),
        (349.9, Bucket.GRAY),
        (350, Bucket.YELLOW),
        (499, Bucket.YELLOW),
        (500, Bucket.ORANGE),
        (650, Bucket.RED),
        (800, Bucket.PURPLE),
        (2500, Bucket.PURPLE),
    ])
    def test_speed(self, value, expected):
        """Test speed."""
        assert classify(value, SPEED) == expected

    def test_density_and_power(self):
        """Test density and power."""
        assert classify(12, DENSITY) == Bucket.YELLOW
        assert classify(60, DENSITY) == Bucket.PURPLE
        assert classify(75, POWER) == Bucket.ORANGE
        assert classify(150, POWER) == Bucket.RED
        assert classify(19, POWER) == Bucket.GRAY

    @pytest.mark.parametrize("value,expected", [
        (5, Bucket.GRAY),
        (-4.9, Bucket.GRAY),
        (-10, Bucket.YELLOW),
        (-12, Bucket.YELLOW),
        (-15, Bucket.ORANGE),
        (-25, Bucket.RED),
        (-50, Bucket.PURPLE),
        (-80, Bucket.PURPLE),
    ])
    def test_bz_more_negative_is_worse(self, value, expected):
        """Test Bz more negative is worse."""
        assert classify(value, BZ) == expected

    @pytest.mark.parametrize("value", [None, math.nan, "fast", "", True])
    def test_non_numbers_are_baseline(self, value):
        """Test non-numbers fall in the baseline bucket."""
        assert classify(value, SPEED) == Bucket.GRAY
        assert classify(value, BZ) == Bucket.GRAY

    def test_infinity_does_not_reach_uncapped_bucket(self):
        """Test infinity does not reach uncapped bucket."""
        assert classify(math.inf, SPEED) == Bucket.PURPLE
        assert classify(-math.inf, BZ) == Bucket.PURPLE

    def test_numeric_strings_are_accepted(self):
        """Test numeric strings are accepted."""
        assert classify("520", SPEED) == Bucket.ORANGE

    def test_monotonic_for_ascending_tables(self):
        """Test monotonic for ascending tables."""
        for table in (SPEED, DENSITY, POWER, BT):
            values = [-10, 0, 3, 5, 7.5, 10, 14, 20, 49, 50, 200, 400, 700, 900, 1e6]
            severities = [classify(v, table).severity for v in values]
            assert severities == sorted(severities), table.name

    def test_monotonic_for_bz(self):
        """Test monotonic for Bz."""
        values = [10, 0, -5, -9, -10, -16, -21, -49, -50, -500]
        severities = [classify(v, BZ).severity for v in values]
        assert severities == sorted(severities)

    def test_classify_with_color(self):
        """Test classify with color."""
        result = classify_with_color(700, SPEED)
        assert result.bucket == Bucket.RED
        assert result.color == PALETTE[Bucket.RED]
        assert result.color.trans.endswith(', 0)')


# =============================================================================
# GAUGES
# =============================================================================

class TestGaugeStyle:
    """Gauge color, emoji and fill percentage."""

    def test_speed_percentage(self):
        """Test speed percentage."""
        style = gauge_style(500, SPEED)
        assert style.bucket == Bucket.ORANGE
        assert style.percentage == pytest.approx(50.0)
        assert style.emoji == GAUGE_EMOJIS[Bucket.ORANGE]

    def test_percentage_is_capped(self):
        """Test percentage is capped."""
        assert gauge_style(5000, SPEED).percentage == 100.0

    def test_percentage_is_not_negative(self):
        """Test percentage is not negative."""
        assert gauge_style(-3, BT).percentage == 0.0

    def test_bz_fills_only_southward(self):
        """Test Bz fills only southward."""
        assert gauge_style(-30, BZ).percentage == pytest.approx(50.0)
        assert gauge_style(10, BZ).percentage == 0.0
        assert gauge_style(-120, BZ).percentage == 100.0

    def test_missing_value(self):
        """Test missing value."""
        style = gauge_style(None, DENSITY)
        assert style.bucket == Bucket.GRAY
        assert style.emoji == ERROR_EMOJI
        assert style.percentage == 0.0
        assert gauge_style(math.nan, BZ).emoji == ERROR_EMOJI


# =============================================================================
# AURORA SCORE
# =============================================================================

class TestAuroraScoreBucket:
    """Fixed breakpoints for the aurora forecast score."""

    @pytest.mark.parametrize("score,expected", [
        (0, Bucket.GRAY),
        (9.9, Bucket.GRAY),
        (10, Bucket.YELLOW),
        (25, Bucket.ORANGE),
        (40, Bucket.RED),
        (49.9, Bucket.RED),
        (50, Bucket.PURPLE),
        (80, Bucket.PINK),
        (100, Bucket.PINK),
    ])
    def test_breakpoints(self, score, expected):
        """Test breakpoints."""
        assert aurora_score_bucket(score) == expected

    def test_nan_is_gray(self):
        """Test NaN is gray."""
        assert aurora_score_bucket(math.nan) == Bucket.GRAY
        assert aurora_score_bucket(None) == Bucket.GRAY


class TestGradientStops:
    """Chart fill gradient follows the table's boundaries."""

    def test_positions_within_chart(self):
        """Test positions within chart."""
        stops = gradient_stops(SPEED, 200, 900)
        assert all(0.0 <= pos <= 1.0 for pos, _ in stops)
        assert stops[0] == (1.0, PALETTE[Bucket.GRAY].semi)
        assert stops[-1] == (0.0, PALETTE[Bucket.PINK].trans)

    def test_flat_axis(self):
        """Test flat axis."""
        assert gradient_stops(BZ, 0, 0) == [(0.0, PALETTE[Bucket.GRAY].semi)]

    def test_bz_starts_transparent_at_top(self):
        """Test Bz starts transparent at top."""
        stops = gradient_stops(BZ, -30, 10)
        assert stops[0] == (0.0, PALETTE[Bucket.GRAY].trans)
