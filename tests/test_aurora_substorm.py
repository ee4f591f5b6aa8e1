"""
Tests for Aurora Score Adjustment and Substorm Analysis
=======================================================
"""

import math
from datetime import datetime, timedelta, timezone

import pytest

from solar_watch.monitoring.aurora import (
    SubstormState,
    adjusted_score,
    analyze_substorm,
    location_adjustment,
    substorm_probability,
)
from solar_watch.monitoring.constants import REFERENCE_LATITUDE
from solar_watch.monitoring.records import TimeSeriesSample


T0 = datetime(2026, 2, 3, 10, 0, tzinfo=timezone.utc)


def _series(values, start=T0):
    return [TimeSeriesSample(start + timedelta(minutes=i), v) for i, v in enumerate(values)]


# =============================================================================
# LOCATION ADJUSTMENT
# =============================================================================

class TestLocationAdjustment:
    """0.2 points per whole 10 km from the reference latitude."""

    def test_reference_site(self):
        """Test reference site."""
        assert location_adjustment(REFERENCE_LATITUDE) == 0.0

    def test_one_degree_north_and_south(self):
        """Test one degree north and south."""
        # 1° of latitude is ~111 km: 11 whole segments
        assert location_adjustment(REFERENCE_LATITUDE + 1) == pytest.approx(-2.2)
        assert location_adjustment(REFERENCE_LATITUDE - 1) == pytest.approx(2.2)

    def test_custom_reference(self):
        """Test custom reference."""
        assert location_adjustment(60.0, reference_latitude=60.0) == 0.0
        assert location_adjustment(59.0, reference_latitude=60.0) == pytest.approx(-2.2)

    def test_invalid_latitude(self):
        """Test invalid latitude."""
        assert location_adjustment(None) == 0.0
        assert location_adjustment(math.nan) == 0.0

    def test_adjusted_score_clamped(self):
        """Test adjusted score clamped."""
        assert adjusted_score(50, -2.2) == pytest.approx(47.8)
        assert adjusted_score(1, -10) == 0.0
        assert adjusted_score(99, 5) == 100.0
        assert adjusted_score(None, 3) is None


# =============================================================================
# SUBSTORM PROBABILITY
# =============================================================================

class TestSubstormProbability:
    @pytest.mark.parametrize("minutes,drop,score,expected", [
        (0, -16, None, 21.0),
        (30, -15, None, 20.0),
        (60, -20, None, 45.0),
        (60, -20, 40, 45.0),
        (60, -20, 80, 56.25),
        (200, -40, None, 95.0),
        (120, -25, 80, 95.0),
    ])
    def test_formula(self, minutes, drop, score, expected):
        """Test formula."""
        assert substorm_probability(minutes, drop, score) == pytest.approx(expected)

    def test_low_score_does_not_reduce(self):
        """Test low score does not reduce."""
        assert substorm_probability(60, -20, 10) == substorm_probability(60, -20)


# =============================================================================
# SUBSTORM ANALYSIS
# =============================================================================

class TestAnalyzeSubstorm:
    """Growth phase (stretching) and dipolarization (eruption) signatures."""

    def test_awaiting_data(self):
        """Test awaiting data."""
        result = analyze_substorm(_series([100.0] * 29))
        assert result.state == SubstormState.AWAITING_DATA
        assert not result.is_stretching and not result.is_erupting

    def test_invalid_points_do_not_count(self):
        """Test invalid points do not count."""
        result = analyze_substorm(_series([100.0] * 25 + [None, math.nan] * 5))
        assert result.state == SubstormState.AWAITING_DATA

    def test_stable(self):
        """Test stable."""
        result = analyze_substorm(_series([100.0] * 61))
        assert result.state == SubstormState.STABLE
        assert result.stretching_since is None

    def test_eruption(self):
        """Test eruption."""
        result = analyze_substorm(_series([100.0] * 60 + [125.0]))
        assert result.state == SubstormState.ERUPTING
        assert result.is_erupting
        assert result.stretching_since is None

    def test_stretching_starts(self):
        """Test stretching starts."""
        samples = _series([130.0 - 0.5 * i for i in range(61)])
        result = analyze_substorm(samples)
        assert result.state == SubstormState.STRETCHING
        assert result.is_stretching
        assert result.probability is None
        assert result.stretching_since == samples[-1].time

    def test_stretching_continues_with_probability(self):
        """Test stretching continues with probability."""
        samples = _series([130.0 - 0.5 * i for i in range(61)])
        since = samples[-1].time - timedelta(minutes=60)
        result = analyze_substorm(samples, stretching_since=since)
        assert result.probability == pytest.approx(55.0)
        assert result.predicted_start == since + timedelta(minutes=60)
        assert result.predicted_end == since + timedelta(minutes=90)
        assert result.stretching_since == since
        assert '55%' in result.text

    def test_score_boosts_probability(self):
        """Test score boosts probability."""
        samples = _series([130.0 - 0.5 * i for i in range(61)])
        since = samples[-1].time - timedelta(minutes=60)
        result = analyze_substorm(samples, stretching_since=since, adjusted_score=80)
        assert result.probability == pytest.approx(68.75)

    def test_unsorted_input(self):
        """Test unsorted input."""
        samples = _series([100.0] * 60 + [125.0])
        result = analyze_substorm(list(reversed(samples)))
        assert result.state == SubstormState.ERUPTING
