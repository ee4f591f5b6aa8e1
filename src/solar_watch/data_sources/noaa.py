"""
NOAA SWPC Payloads
==================

Pure parsers for already-fetched NOAA SWPC JSON products:

- GOES X-ray flux (``xrays-1-day.json``): list of records, one per channel
- GOES integral protons (``integral-protons-plot-1-day.json``)
- DSCOVR plasma/mag (``products/solar-wind/*.json``): table, header row first
- GOES magnetometer (``magnetometers-1-day.json``): Hp component

Parsers never raise on malformed entries: bad rows are dropped (or become
gaps for the solar wind tables) and a non-list payload yields [].
"""

import logging
from typing import Optional

from ..monitoring.records import TimeSeriesSample
from ..monitoring.validation import validate_reading
from ..utils.time import parse_iso_timestamp


logger = logging.getLogger(__name__)

XRAY_LONG_CHANNEL = '0.1-0.8nm'
PROTON_CHANNEL = '>=10 MeV'
TIME_COLUMN = 'time_tag'

# Solar wind product columns
PLASMA_COLUMNS = ('speed', 'density')
MAG_COLUMNS = ('bt', 'bz_gsm')


def _as_list(payload, product: str) -> list:
    if not isinstance(payload, list):
        logger.warning("%s payload is not a list (%s), ignoring", product, type(payload).__name__)
        return []
    return payload


def _channel_series(payload, channel: str, value_key: str, product: str) -> list[TimeSeriesSample]:
    by_time = {}
    rejected = 0
    for record in _as_list(payload, product):
        if not isinstance(record, dict):
            rejected += 1
            continue
        time = parse_iso_timestamp(record.get(TIME_COLUMN))
        if time is None:
            rejected += 1
            continue
        by_time.setdefault(time, None)
        if record.get('energy') != channel:
            continue
        check = validate_reading(record.get(value_key), product)
        if check['is_valid']:
            by_time[time] = check['value']
        else:
            rejected += 1

    if rejected:
        logger.debug("%s: dropped %d malformed or invalid entries", product, rejected)
    return [
        TimeSeriesSample(time, value)
        for time, value in sorted(by_time.items())
        if value is not None
    ]


def parse_xray_flux(payload) -> list[TimeSeriesSample]:
    """GOES 0.1-0.8 nm X-ray flux (W/m²), grouped by timestamp, sorted by time."""
    return _channel_series(payload, XRAY_LONG_CHANNEL, 'flux', 'xray')


def parse_proton_flux(payload) -> list[TimeSeriesSample]:
    """GOES >=10 MeV integral proton flux (pfu), sorted by time."""
    return _channel_series(payload, PROTON_CHANNEL, 'flux', 'proton')


def parse_solar_wind_table(payload, column: str) -> list[TimeSeriesSample]:
    """
    Extract one column from a NOAA products table.

    The first row holds the column names. Fill values (<= -9999) and
    non-numeric cells become ``None`` so the series keeps its gaps.

    Args:
        payload: Decoded JSON table (list of rows)
        column: Column name, e.g. 'speed', 'density', 'bt', 'bz_gsm'
    """
    rows = _as_list(payload, column)
    if not rows or not isinstance(rows[0], list):
        return []

    header = rows[0]
    if column not in header or TIME_COLUMN not in header:
        logger.warning("Solar wind table has no '%s' column (columns: %s)", column, header)
        return []
    value_idx = header.index(column)
    time_idx = header.index(TIME_COLUMN)

    samples = []
    for row in rows[1:]:
        if not isinstance(row, list) or len(row) <= max(value_idx, time_idx):
            continue
        time = parse_iso_timestamp(row[time_idx])
        if time is None:
            continue
        check = validate_reading(row[value_idx], column)
        samples.append(TimeSeriesSample(time, check['value']))

    samples.sort(key=lambda s: s.time)
    return samples


def parse_magnetometer(payload) -> list[TimeSeriesSample]:
    """GOES magnetometer Hp component (nT), invalid readings dropped."""
    samples = []
    for record in _as_list(payload, 'magnetometer'):
        if not isinstance(record, dict):
            continue
        time = parse_iso_timestamp(record.get(TIME_COLUMN))
        check = validate_reading(record.get('Hp'), 'Hp')
        if time is not None and check['is_valid']:
            samples.append(TimeSeriesSample(time, check['value']))
    if not samples:
        logger.warning("GOES magnetometer: no valid Hp data points")
    samples.sort(key=lambda s: s.time)
    return samples


def latest_valid(samples: list[TimeSeriesSample]) -> Optional[TimeSeriesSample]:
    """Most recent sample that carries a value."""
    for sample in reversed(samples):
        if sample.value is not None:
            return sample
    return None
