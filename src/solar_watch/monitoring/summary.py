"""
Activity Summary
================

Reduces the X-ray series, the proton series and the flare list over a
rolling window (24 h by default) into peak readings and flare counts.

The reduction is deterministic: samples are stably ordered by time before
taking the maximum, so ties go to the earliest timestamp regardless of the
input order. Inputs are never mutated.

Samples and flares may be records or raw mappings (snake_case or the
camelCase keys of NOAA/DONKI payloads).
"""

from datetime import datetime, timedelta
from typing import Iterable, NamedTuple, Optional

import numpy as np

from .constants import EARTH_DIRECTED_MAX_LONGITUDE
from .flares import get_proton_class, get_xray_class
from .heliographic import is_potential_earth_directed
from .records import FlareEvent, TimeSeriesSample, get_field
from .validation import as_finite_float
from ..utils.time import parse_iso_timestamp


DEFAULT_WINDOW = timedelta(hours=24)


class PeakReading(NamedTuple):
    """Highest in-window reading of a series."""
    flux: float
    class_label: str
    timestamp: datetime


class FlareCounts(NamedTuple):
    x: int
    m: int
    potential_cmes: int


class ActivitySummary(NamedTuple):
    """Rolling-window activity summary, fully replaced on every refresh."""
    highest_xray: Optional[PeakReading]
    highest_proton: Optional[PeakReading]
    flare_counts: FlareCounts
    window_start: datetime
    window_end: datetime


def _in_window(samples, start: datetime, end: datetime) -> list[tuple[datetime, float]]:
    kept = []
    for sample in samples or ():
        time = parse_iso_timestamp(get_field(sample, 'time', 'time_tag'))
        value = as_finite_float(get_field(sample, 'value', 'flux'))
        if time is None or value is None:
            continue
        if start <= time <= end:
            kept.append((time, value))
    return kept


def _flare_time(flare) -> Optional[datetime]:
    # peak, then begin, then end time
    for names in (('peak_time', 'peakTime'), ('begin_time', 'beginTime'), ('end_time', 'endTime')):
        when = parse_iso_timestamp(get_field(flare, *names))
        if when is not None:
            return when
    return None


def _peak(samples: list[tuple[datetime, float]], label) -> Optional[PeakReading]:
    if not samples:
        return None
    ordered = sorted(samples, key=lambda s: s[0])
    values = np.array([value for _, value in ordered])
    # argmax returns the first occurrence of the maximum
    idx = int(np.argmax(values))
    time, value = ordered[idx]
    return PeakReading(flux=value, class_label=label(value), timestamp=time)


def summarize(
    xray_series: Iterable[TimeSeriesSample],
    proton_series: Iterable[TimeSeriesSample],
    flares: Iterable[FlareEvent],
    now: datetime,
    *,
    window: timedelta = DEFAULT_WINDOW,
    max_longitude: float = EARTH_DIRECTED_MAX_LONGITUDE,
) -> Optional[ActivitySummary]:
    """
    Summarize solar activity in [now - window, now] (inclusive).

    Args:
        xray_series: GOES 0.1-0.8 nm flux samples (W/m²)
        proton_series: GOES >=10 MeV proton flux samples (pfu)
        flares: Flare events; placed in time by peak, begin, then end time
        now: End of the window (timezone-aware)
        window: Window length
        max_longitude: Earth-directed half-width for potential CME counting

    Returns:
        ActivitySummary, or None when nothing falls inside the window
    """
    end = parse_iso_timestamp(now)
    if end is None:
        raise ValueError(f"summarize needs a valid 'now', got {now!r}")
    start = end - window

    xray = _in_window(xray_series, start, end)
    proton = _in_window(proton_series, start, end)

    recent_flares = []
    for flare in flares or ():
        when = _flare_time(flare)
        if when is not None and start <= when <= end:
            recent_flares.append(flare)

    if not xray and not proton and not recent_flares:
        return None

    def first_letter(flare):
        class_type = get_field(flare, 'class_type', 'classType')
        return class_type[:1].upper() if isinstance(class_type, str) else ''

    counts = FlareCounts(
        x=sum(1 for f in recent_flares if first_letter(f) == 'X'),
        m=sum(1 for f in recent_flares if first_letter(f) == 'M'),
        potential_cmes=sum(
            1 for f in recent_flares if is_potential_earth_directed(f, max_longitude)
        ),
    )

    return ActivitySummary(
        highest_xray=_peak(xray, get_xray_class),
        highest_proton=_peak(proton, get_proton_class),
        flare_counts=counts,
        window_start=start,
        window_end=end,
    )
