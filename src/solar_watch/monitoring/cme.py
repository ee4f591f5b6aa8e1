"""
CME Arrival Estimation
======================

Kinematic arrival estimate and synthetic impact profile for catalog CMEs.

Model:
    travel_time = AU_KM / speed          (constant speed, 1 AU)
    arrival     = start_time + travel_time

Only Earth-directed CMEs with a plausible speed get an arrival. Everything
else returns None rather than a date far in the future.

The impact profile is display material, not a forecast: ambient solar wind
until the rise window opens, a raised-cosine ramp up to the peak at arrival,
and a raised-cosine decay back to ambient over the horizon.
"""

import enum
import logging
import math
import re
from datetime import datetime, timedelta, timezone
from typing import Iterable, Iterator, NamedTuple, Optional

from .constants import (
    AU_KM,
    DEFAULT_CME_HALF_ANGLE,
    EARTH_DIRECTED_MAX_LONGITUDE,
    MIN_PLAUSIBLE_CME_SPEED,
)
from .heliographic import is_cme_earth_directed
from .records import get_field
from .validation import as_finite_float
from ..utils.time import parse_iso_timestamp


logger = logging.getLogger(__name__)


class ProcessedCME(NamedTuple):
    """A catalog CME with its derived fields filled in at ingestion."""
    id: str
    start_time: datetime
    speed: float                # km/s
    longitude: float            # degrees, W positive
    latitude: float             # degrees, N positive
    half_angle: float           # degrees
    is_earth_directed: bool
    predicted_arrival_time: Optional[datetime]
    source_location: str
    note: str
    link: str = ''
    instruments: str = 'N/A'


class ImpactSample(NamedTuple):
    """One point of the synthetic impact profile."""
    time: datetime
    speed: float                # km/s
    density: float              # p/cm³


class CMEFilter(enum.StrEnum):
    """CME list filter."""
    ALL = 'all'
    EARTH_DIRECTED = 'earthDirected'
    NOT_EARTH_DIRECTED = 'notEarthDirected'


# =============================================================================
# ARRIVAL ESTIMATE
# =============================================================================

def travel_time(speed) -> Optional[timedelta]:
    """Sun-Earth travel time at constant ``speed`` (km/s); None if not positive."""
    value = as_finite_float(speed)
    if value is None or value <= 0:
        return None
    return timedelta(seconds=AU_KM / value)


def estimate_arrival(
    cme,
    *,
    min_speed: float = MIN_PLAUSIBLE_CME_SPEED,
    max_longitude: float = EARTH_DIRECTED_MAX_LONGITUDE,
) -> Optional[datetime]:
    """
    Predict the arrival time of a CME at Earth.

    The CME may be a ProcessedCME, a mapping or any object with start_time,
    speed and either is_earth_directed or longitude.

    Args:
        cme: CME record
        min_speed: Speeds below this floor (km/s) are treated as garbage
        max_longitude: Earth-directed half-width when only longitude is known

    Returns:
        start_time + AU_KM / speed, or None when the CME is not
        Earth-directed, the speed is implausible or the start time is missing
    """
    earth_directed = get_field(cme, 'is_earth_directed', 'isEarthDirected')
    if earth_directed is None:
        earth_directed = is_cme_earth_directed(get_field(cme, 'longitude'), max_longitude)
    if not earth_directed:
        return None

    speed = as_finite_float(get_field(cme, 'speed'))
    if speed is None or speed <= 0 or speed < min_speed:
        return None

    start_time = parse_iso_timestamp(get_field(cme, 'start_time', 'startTime'))
    if start_time is None:
        return None

    return start_time + travel_time(speed)


# =============================================================================
# IMPACT PROFILE
# =============================================================================

AMBIENT_SPEED = 400.0       # km/s
AMBIENT_DENSITY = 5.0       # p/cm³
DENSITY_COMPRESSION = 4.0   # sheath compression factor at arrival

# Rise window: 6 h at a 30° half-angle, scaled linearly and clamped
RISE_HOURS_PER_30_DEG = 6.0
MIN_RISE = timedelta(hours=2)
MAX_RISE = timedelta(hours=12)


def rise_window(half_angle) -> timedelta:
    """Length of the ramp before arrival; wider CMEs announce themselves earlier."""
    angle = as_finite_float(half_angle)
    if angle is None or angle <= 0:
        angle = DEFAULT_CME_HALF_ANGLE
    rise = timedelta(hours=RISE_HOURS_PER_30_DEG * angle / 30)
    return max(MIN_RISE, min(MAX_RISE, rise))


def _raised_cosine(fraction: float) -> float:
    # 0 → 0, 1 → 1, smooth at both ends
    return 0.5 * (1 - math.cos(math.pi * fraction))


def impact_profile(
    cme,
    *,
    step: timedelta = timedelta(minutes=30),
    horizon: timedelta = timedelta(hours=12),
    ambient_speed: float = AMBIENT_SPEED,
    ambient_density: float = AMBIENT_DENSITY,
    compression: float = DENSITY_COMPRESSION,
    min_speed: float = MIN_PLAUSIBLE_CME_SPEED,
    max_longitude: float = EARTH_DIRECTED_MAX_LONGITUDE,
) -> Iterator[ImpactSample]:
    """
    Yield the synthetic speed/density profile of a CME at Earth.

    Samples run from start_time to arrival + horizon every ``step`` (the
    end point is always included). Uses the record's predicted arrival time
    when it carries one, otherwise estimate_arrival(). A CME flagged as not
    Earth-directed, or one without an arrival, yields nothing.

    Raises:
        ValueError: if step or horizon is not positive
    """
    if step <= timedelta(0) or horizon <= timedelta(0):
        raise ValueError("impact_profile needs a positive step and horizon")

    if get_field(cme, 'is_earth_directed', 'isEarthDirected') is False:
        return

    arrival = parse_iso_timestamp(get_field(cme, 'predicted_arrival_time', 'predictedArrivalTime'))
    if arrival is None:
        arrival = estimate_arrival(cme, min_speed=min_speed, max_longitude=max_longitude)
    start_time = parse_iso_timestamp(get_field(cme, 'start_time', 'startTime'))
    if arrival is None or start_time is None or arrival < start_time:
        return

    speed = as_finite_float(get_field(cme, 'speed'))
    peak_speed = max(speed if speed is not None else ambient_speed, ambient_speed)
    peak_density = ambient_density * compression

    rise_start = max(start_time, arrival - rise_window(get_field(cme, 'half_angle', 'halfAngle')))
    rise_seconds = (arrival - rise_start).total_seconds()
    horizon_seconds = horizon.total_seconds()
    end = arrival + horizon

    def sample(t: datetime) -> ImpactSample:
        if t < rise_start:
            weight = 0.0
        elif t <= arrival:
            fraction = (t - rise_start).total_seconds() / rise_seconds if rise_seconds else 1.0
            weight = _raised_cosine(fraction)
        else:
            weight = 1 - _raised_cosine(min(1.0, (t - arrival).total_seconds() / horizon_seconds))
        return ImpactSample(
            time=t,
            speed=ambient_speed + (peak_speed - ambient_speed) * weight,
            density=ambient_density + (peak_density - ambient_density) * weight,
        )

    t = start_time
    while t < end:
        yield sample(t)
        t += step
    yield sample(end)


# =============================================================================
# CATALOG PROCESSING
# =============================================================================

# Interplanetary shock IDs encode their time: YYYYMMDD-HHMM-GST-NNN
_SHOCK_ID_RE = re.compile(r'(\d{4})(\d{2})(\d{2})-(\d{2})(\d{2})-GST')


def parse_shock_arrival(activity_id: str) -> Optional[datetime]:
    """Arrival time encoded in a DONKI GST activity ID, or None."""
    if not isinstance(activity_id, str):
        return None
    m = _SHOCK_ID_RE.match(activity_id)
    if m is None:
        return None
    try:
        return datetime(*(int(part) for part in m.groups()), tzinfo=timezone.utc)
    except ValueError:
        logger.warning("Could not parse shock arrival from %s", activity_id)
        return None


def _shock_arrival(record: dict) -> Optional[datetime]:
    for event in record.get('linkedEvents') or []:
        activity_id = event.get('activityID') if isinstance(event, dict) else None
        if activity_id and '-GST' in activity_id:
            return parse_shock_arrival(activity_id)
    return None


def _pick_analysis(record: dict) -> Optional[dict]:
    analyses = [a for a in record.get('cmeAnalyses') or [] if isinstance(a, dict)]
    if not analyses:
        return None
    for analysis in analyses:
        if analysis.get('isMostAccurate'):
            return analysis
    return analyses[0]


def process_cme(
    record: dict,
    *,
    max_longitude: float = EARTH_DIRECTED_MAX_LONGITUDE,
    min_speed: float = MIN_PLAUSIBLE_CME_SPEED,
) -> Optional[ProcessedCME]:
    """
    Turn one DONKI CME entry into a ProcessedCME.

    Returns None for entries that cannot be modelled (no analysis, or an
    analysis without speed, longitude or latitude, or no start time).
    """
    if not isinstance(record, dict):
        return None
    analysis = _pick_analysis(record)
    if analysis is None:
        return None

    speed = as_finite_float(analysis.get('speed'))
    longitude = as_finite_float(analysis.get('longitude'))
    latitude = as_finite_float(analysis.get('latitude'))
    if speed is None or longitude is None or latitude is None:
        return None

    start_time = parse_iso_timestamp(record.get('startTime'))
    cme_id = record.get('activityID')
    if start_time is None or not cme_id:
        logger.warning("Skipping CME without activityID/startTime: %r", cme_id)
        return None

    half_angle = as_finite_float(analysis.get('halfAngle')) or DEFAULT_CME_HALF_ANGLE
    is_earth_directed = is_cme_earth_directed(longitude, max_longitude)

    # Only Earth-directed CMEs ever carry a predicted arrival
    predicted = _shock_arrival(record) if is_earth_directed else None
    if predicted is None and is_earth_directed:
        predicted = estimate_arrival(
            {'start_time': start_time, 'speed': speed, 'is_earth_directed': is_earth_directed},
            min_speed=min_speed,
        )

    instruments = ', '.join(
        inst['displayName'] for inst in record.get('instruments') or []
        if isinstance(inst, dict) and inst.get('displayName')
    )

    return ProcessedCME(
        id=str(cme_id),
        start_time=start_time,
        speed=speed,
        longitude=longitude,
        latitude=latitude,
        half_angle=half_angle,
        is_earth_directed=is_earth_directed,
        predicted_arrival_time=predicted,
        source_location=record.get('sourceLocation') or 'N/A',
        note=record.get('note') or 'No additional details.',
        link=record.get('link') or '',
        instruments=instruments or 'N/A',
    )


def process_cme_catalog(
    records,
    *,
    max_longitude: float = EARTH_DIRECTED_MAX_LONGITUDE,
    min_speed: float = MIN_PLAUSIBLE_CME_SPEED,
) -> list[ProcessedCME]:
    """
    Process a DONKI CME list, newest first.

    Non-list payloads yield an empty list; unmodellable entries are dropped.
    """
    if not isinstance(records, list):
        logger.warning("CME payload is not a list (%s), ignoring", type(records).__name__)
        return []

    processed = []
    skipped = 0
    for record in records:
        cme = process_cme(record, max_longitude=max_longitude, min_speed=min_speed)
        if cme is None:
            skipped += 1
        else:
            processed.append(cme)

    if skipped:
        logger.debug("Skipped %d of %d CME entries without a usable analysis", skipped, len(records))
    return sorted(processed, key=lambda cme: cme.start_time, reverse=True)


def filter_cmes(cmes: Iterable[ProcessedCME], cme_filter=CMEFilter.ALL) -> list[ProcessedCME]:
    """
    Filter CMEs by Earth-directedness.

    Raises:
        ValueError: for an unknown filter name
    """
    cme_filter = CMEFilter(cme_filter)
    if cme_filter == CMEFilter.EARTH_DIRECTED:
        return [c for c in cmes if c.is_earth_directed]
    if cme_filter == CMEFilter.NOT_EARTH_DIRECTED:
        return [c for c in cmes if not c.is_earth_directed]
    return list(cmes)
