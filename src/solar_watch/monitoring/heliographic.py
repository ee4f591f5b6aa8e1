"""
Heliographic Source Locations
=============================

Parses catalog source locations such as ``N12W34`` or ``S05E120`` (the
leading hemisphere letter is optional, e.g. ``12W34``) and decides
whether a flare with a linked CME is plausibly Earth-directed.

Sign convention (Earth view, central meridian = 0):
    West  → positive longitude
    East  → negative longitude
    North → positive latitude
    South → negative latitude
"""

import re

from .constants import EARTH_DIRECTED_MAX_LONGITUDE
from .records import get_field


_LOCATION_RE = re.compile(r'([NS])?([0-9]{1,2})([EW])([0-9]{1,3})', re.IGNORECASE)


def _match(location):
    if not location or not isinstance(location, str):
        return None
    return _LOCATION_RE.fullmatch(location)


def parse_longitude(location: str | None) -> int | None:
    """
    Parse the signed longitude from a source location.

    Returns None for None, empty or malformed strings; never raises.

    Examples:
        >>> parse_longitude("N12W34")
        34
        >>> parse_longitude("S05E120")
        -120
    """
    m = _match(location)
    if m is None:
        return None
    degrees = int(m.group(4))
    return degrees if m.group(3).upper() == 'W' else -degrees


def parse_latitude(location: str | None) -> int | None:
    """Parse the signed latitude (North positive); None without a hemisphere letter."""
    m = _match(location)
    if m is None or m.group(1) is None:
        return None
    degrees = int(m.group(2))
    return degrees if m.group(1).upper() == 'N' else -degrees


def is_potential_earth_directed(flare, max_longitude: float = EARTH_DIRECTED_MAX_LONGITUDE) -> bool:
    """
    Heuristic: could the CME linked to this flare hit Earth?

    A flare qualifies when it has a linked CME and its source lies within
    ``max_longitude`` degrees of the central meridian. This is a proxy for a
    proper cone/impact model and ignores latitude, width and speed.

    Args:
        flare: FlareEvent, or any mapping/object with has_cme and
            source_location (camelCase keys from the catalog also work)
        max_longitude: Half-width around the central meridian (degrees)
    """
    if not get_field(flare, 'has_cme', 'hasCME'):
        return False
    longitude = parse_longitude(get_field(flare, 'source_location', 'sourceLocation'))
    if longitude is None:
        return False
    return abs(longitude) <= max_longitude


def is_cme_earth_directed(longitude, max_longitude: float = EARTH_DIRECTED_MAX_LONGITUDE) -> bool:
    """Same heuristic for a catalog CME with an analysed longitude."""
    if longitude is None:
        return False
    try:
        return abs(float(longitude)) <= max_longitude
    except (TypeError, ValueError):
        return False
