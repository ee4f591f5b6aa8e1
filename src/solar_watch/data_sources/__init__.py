"""
Solar Watch Data Sources
========================

Parsers for already-fetched space weather payloads. Fetching is left to
the caller; everything here works on decoded JSON.

- NOAA SWPC: GOES X-ray and proton flux, DSCOVR solar wind, GOES magnetometer
- NASA DONKI: flare (FLR) and CME catalogs
"""

from .noaa import (
    parse_xray_flux,
    parse_proton_flux,
    parse_solar_wind_table,
    parse_magnetometer,
    latest_valid,
    PLASMA_COLUMNS,
    MAG_COLUMNS,
)
from .donki import parse_flares, parse_cmes
from .payload import load_payload

__all__ = [
    # NOAA SWPC
    'parse_xray_flux',
    'parse_proton_flux',
    'parse_solar_wind_table',
    'parse_magnetometer',
    'latest_valid',
    'PLASMA_COLUMNS',
    'MAG_COLUMNS',
    # NASA DONKI
    'parse_flares',
    'parse_cmes',
    # Files
    'load_payload',
]
