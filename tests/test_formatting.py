"""
Tests for Status Formatting
===========================

Rendered through a recording rich Console.
"""

from datetime import datetime, timedelta, timezone

import pytest
from rich.console import Console

from solar_watch.monitoring.aurora import SubstormActivity, SubstormState
from solar_watch.monitoring.cme import ImpactSample, ProcessedCME
from solar_watch.monitoring.constants import ActivityStatus
from solar_watch.monitoring.formatting import StatusFormatter
from solar_watch.monitoring.summary import ActivitySummary, FlareCounts, PeakReading


NOW = datetime(2026, 1, 11, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def output():
    return Console(record=True, width=140, color_system=None)


@pytest.fixture
def formatter(output):
    return StatusFormatter(output)


def _cme(**overrides):
    fields = dict(
        id='2026-01-10T12:00:00-CME-001', start_time=NOW - timedelta(days=1), speed=850.0,
        longitude=-12.0, latitude=4.0, half_angle=40.0, is_earth_directed=True,
        predicted_arrival_time=NOW + timedelta(hours=20), source_location='N04E12', note='',
    )
    fields.update(overrides)
    return ProcessedCME(**fields)


class TestStatusFormatter:
    """Each panel shows the values it was given."""

    def test_header(self, formatter, output):
        """Test header."""
        formatter.print_header(NOW)
        assert '2026-01-11 12:00:00 UTC' in output.export_text()

    def test_gauges(self, formatter, output):
        """Test gauges."""
        formatter.print_gauges({'speed': 650.0, 'bz': -12.0, 'density': None})
        text = output.export_text()
        assert '650.0 km/s' in text
        assert '-12.0 nT' in text
        assert 'red' in text
        assert 'n/a' in text

    def test_activity_status(self, formatter, output):
        """Test activity status."""
        formatter.print_activity_status('M2.3', 'S1', ActivityStatus.HIGH)
        text = output.export_text()
        assert 'M2.3' in text
        assert 'High' in text

    def test_summary(self, formatter, output):
        """Test summary."""
        summary = ActivitySummary(
            highest_xray=PeakReading(2.3e-5, 'M2.3', NOW - timedelta(hours=3)),
            highest_proton=None,
            flare_counts=FlareCounts(x=0, m=2, potential_cmes=1),
            window_start=NOW - timedelta(hours=24),
            window_end=NOW,
        )
        formatter.print_summary(summary)
        text = output.export_text()
        assert '24-HOUR SUMMARY' in text
        assert 'M2.3' in text
        assert 'N/A' in text

    def test_empty_summary(self, formatter, output):
        """Test empty summary."""
        formatter.print_summary(None)
        assert 'No data in the summary window' in output.export_text()

    def test_cme_list(self, formatter, output):
        """Test CME list."""
        formatter.print_cme_list([_cme(), _cme(id='other', is_earth_directed=False, predicted_arrival_time=None)])
        text = output.export_text()
        assert '850 km/s' in text
        assert '2026-01-12 08:00:00 UTC' in text
        assert 'yes' in text and 'no' in text

    def test_empty_cme_list(self, formatter, output):
        """Test empty CME list."""
        formatter.print_cme_list([])
        assert 'No modelled CMEs' in output.export_text()

    def test_impact_profile(self, formatter, output):
        """Test impact profile."""
        samples = [ImpactSample(NOW, 400.0, 5.0), ImpactSample(NOW + timedelta(hours=1), 850.0, 20.0)]
        formatter.print_impact_profile(_cme(), iter(samples))
        text = output.export_text()
        assert 'IMPACT PROFILE' in text
        assert '850' in text
        assert '20.0' in text

    def test_impact_profile_without_samples(self, formatter, output):
        """Test impact profile without samples."""
        formatter.print_impact_profile(_cme(), iter(()))
        assert 'no impact profile' in output.export_text()

    def test_substorm(self, formatter, output):
        """Test substorm."""
        activity = SubstormActivity(SubstormState.STABLE, 'The magnetic field appears stable.', False, False)
        formatter.print_substorm(activity)
        assert 'appears stable' in output.export_text()

    def test_footer(self, formatter, output):
        """Test footer."""
        formatter.print_footer()
        assert 'NOAA SWPC' in output.export_text()
