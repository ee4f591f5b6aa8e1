"""
Aurora Score and Substorm Heuristics
====================================

Location adjustment of the aurora forecast score, and a growth/expansion
phase heuristic over the GOES magnetometer Hp component.

Substorm signatures (Hp, nT):
    - Stretching (growth phase): Hp drops by more than 15 nT over 60 min
    - Eruption (dipolarization): Hp jumps by more than 20 nT over 10 min
"""

import enum
import math
from datetime import datetime, timedelta
from typing import Iterable, NamedTuple, Optional

from .constants import EARTH_RADIUS_KM, REFERENCE_LATITUDE
from .records import TimeSeriesSample
from .validation import as_finite_float
from ..utils.time import format_timestamp, parse_iso_timestamp


# =============================================================================
# LOCATION ADJUSTMENT
# =============================================================================

ADJUSTMENT_PER_SEGMENT = 0.2   # score points
SEGMENT_KM = 10.0


def location_adjustment(latitude: float, reference_latitude: float = REFERENCE_LATITUDE) -> float:
    """
    Score adjustment for an observer away from the reference site.

    0.2 points per whole 10 km of meridional distance: negative north of
    the reference (further from the auroral oval), positive south of it.
    """
    lat = as_finite_float(latitude)
    if lat is None:
        return 0.0
    distance_km = abs(math.radians(lat - reference_latitude)) * EARTH_RADIUS_KM
    adjustment = math.floor(distance_km / SEGMENT_KM) * ADJUSTMENT_PER_SEGMENT
    return -adjustment if lat > reference_latitude else adjustment


def adjusted_score(base_score, adjustment: float = 0.0) -> Optional[float]:
    """Apply a location adjustment and clamp to [0, 100]; None stays None."""
    base = as_finite_float(base_score)
    if base is None:
        return None
    return max(0.0, min(100.0, base + adjustment))


# =============================================================================
# SUBSTORM ANALYSIS
# =============================================================================

MIN_SAMPLES = 30
ERUPTION_JUMP_NT = 20.0
STRETCH_DROP_NT = -15.0
JUMP_LOOKBACK = timedelta(minutes=10)
DROP_LOOKBACK = timedelta(minutes=60)
PREDICTED_WINDOW = (timedelta(minutes=60), timedelta(minutes=90))
MAX_PROBABILITY = 95.0


class SubstormState(enum.StrEnum):
    AWAITING_DATA = 'awaiting-data'
    STABLE = 'stable'
    STRETCHING = 'stretching'
    ERUPTING = 'erupting'


class SubstormActivity(NamedTuple):
    """Result of one magnetometer analysis."""
    state: SubstormState
    text: str
    is_stretching: bool
    is_erupting: bool
    probability: Optional[float] = None
    predicted_start: Optional[datetime] = None
    predicted_end: Optional[datetime] = None
    # Carry forward into the next analysis
    stretching_since: Optional[datetime] = None


def substorm_probability(stretch_minutes: float, drop: float, score=None) -> float:
    """
    Chance (%) of a substorm given how long the field has been stretching.

    base       = clamp(20 + (minutes - 30) * 60/90, 20, 80)
    bonus      = clamp(|drop| - 15, 0, 15)
    multiplier = clamp(1 + (score - 40) * 0.25/40, 1, 1.25)   (1 without a score)
    """
    base = min(80.0, max(20.0, 20 + (stretch_minutes - 30) * (60 / 90)))
    bonus = min(15.0, max(0.0, abs(drop) - 15))
    score = as_finite_float(score)
    multiplier = 1.0
    if score:
        multiplier = min(1.25, max(1.0, 1 + (score - 40) * (0.25 / 40)))
    return min(MAX_PROBABILITY, (base + bonus) * multiplier)


def _first_at_or_after(points, when):
    # points are sorted and end with the latest reading, so this always finds one
    return next(p for p in points if p[0] >= when)


def analyze_substorm(
    samples: Iterable[TimeSeriesSample],
    stretching_since: Optional[datetime] = None,
    adjusted_score=None,
) -> SubstormActivity:
    """
    Look for substorm growth or expansion in GOES Hp samples.

    Args:
        samples: Hp readings (nT); invalid readings are ignored
        stretching_since: Start of the current stretching phase, as returned
            by the previous analysis
        adjusted_score: Location-adjusted aurora score, boosts the probability

    Returns:
        SubstormActivity; its ``stretching_since`` is the value to pass in next
    """
    points = []
    for sample in samples or ():
        time = parse_iso_timestamp(sample.time)
        value = as_finite_float(sample.value)
        if time is not None and value is not None:
            points.append((time, value))
    points.sort(key=lambda p: p[0])

    if len(points) < MIN_SAMPLES:
        return SubstormActivity(
            SubstormState.AWAITING_DATA, 'Awaiting more magnetic field data...', False, False,
        )

    latest_time, latest = points[-1]
    ten_min_ago = _first_at_or_after(points, latest_time - JUMP_LOOKBACK)
    hour_ago = _first_at_or_after(points, latest_time - DROP_LOOKBACK)
    jump = latest - ten_min_ago[1]
    drop = latest - hour_ago[1]

    if jump > ERUPTION_JUMP_NT:
        return SubstormActivity(
            SubstormState.ERUPTING,
            f"Substorm signature detected at {format_timestamp(latest_time, 'short')} UTC: "
            "a sharp field increase suggests a recent or ongoing eruption.",
            is_stretching=False,
            is_erupting=True,
        )

    if drop < STRETCH_DROP_NT:
        if stretching_since is None:
            return SubstormActivity(
                SubstormState.STRETCHING,
                'The magnetic field has begun stretching, storing energy for a potential substorm.',
                is_stretching=True,
                is_erupting=False,
                stretching_since=latest_time,
            )

        minutes = (latest_time - stretching_since).total_seconds() / 60
        probability = substorm_probability(minutes, drop, adjusted_score)
        start = stretching_since + PREDICTED_WINDOW[0]
        end = stretching_since + PREDICTED_WINDOW[1]
        return SubstormActivity(
            SubstormState.STRETCHING,
            f"The magnetic field is stretching: ~{probability:.0f}% chance of a substorm "
            f"between {format_timestamp(start, 'short')} and {format_timestamp(end, 'short')} UTC.",
            is_stretching=True,
            is_erupting=False,
            probability=probability,
            predicted_start=start,
            predicted_end=end,
            stretching_since=stretching_since,
        )

    return SubstormActivity(
        SubstormState.STABLE,
        'The magnetic field appears stable. No immediate signs of substorm development.',
        is_stretching=False,
        is_erupting=False,
    )
