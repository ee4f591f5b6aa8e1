"""
Monitoring Constants
====================

Physical constants, severity buckets and color palettes shared by every
classifier.
"""

import enum
from typing import NamedTuple


# Sun-Earth distance (1 AU) in km
AU_KM = 149_597_870.7

# Earth-directed heuristic: half-width around the central meridian (degrees).
# Approximation only, not a cone or impact model.
EARTH_DIRECTED_MAX_LONGITUDE = 30.0

# Catalog speeds below this are treated as garbage (km/s)
MIN_PLAUSIBLE_CME_SPEED = 100.0

# Default CME half-angle when the analysis does not provide one (degrees)
DEFAULT_CME_HALF_ANGLE = 30.0

# NOAA products use -9999 style fill values
FILL_VALUE_FLOOR = -9999


# =============================================================================
# SEVERITY BUCKETS
# =============================================================================
# Closed set of bucket names, ordered from baseline to most severe.
#
#   gray    → baseline / quiet
#   yellow  → slightly elevated
#   orange  → elevated
#   red     → high
#   purple  → very high
#   pink    → extreme

class Bucket(enum.StrEnum):
    """Severity bucket shared by all threshold tables."""
    GRAY = 'gray'
    YELLOW = 'yellow'
    ORANGE = 'orange'
    RED = 'red'
    PURPLE = 'purple'
    PINK = 'pink'

    @property
    def severity(self) -> int:
        return _BUCKET_ORDER.index(self)


_BUCKET_ORDER = (
    Bucket.GRAY,
    Bucket.YELLOW,
    Bucket.ORANGE,
    Bucket.RED,
    Bucket.PURPLE,
    Bucket.PINK,
)

BASELINE_BUCKET = Bucket.GRAY


def buckets_by_severity(descending: bool = True) -> tuple[Bucket, ...]:
    """Return all buckets, most severe first unless descending=False."""
    return tuple(reversed(_BUCKET_ORDER)) if descending else _BUCKET_ORDER


class Direction(enum.StrEnum):
    """Which way a quantity gets worse."""
    ASCENDING = 'ascending-severity'    # higher is worse (speed, density, ...)
    DESCENDING = 'descending-severity'  # more negative is worse (bz)


class SeverityColor(NamedTuple):
    """Display colors for one bucket."""
    solid: str   # line color
    semi: str    # fill
    trans: str   # gradient stop (fully transparent)


PALETTE: dict[Bucket, SeverityColor] = {
    Bucket.GRAY: SeverityColor('#808080', 'rgba(128, 128, 128, 0.2)', 'rgba(128, 128, 128, 0)'),
    Bucket.YELLOW: SeverityColor('#FFD700', 'rgba(255, 215, 0, 0.2)', 'rgba(255, 215, 0, 0)'),
    Bucket.ORANGE: SeverityColor('#FFA500', 'rgba(255, 165, 0, 0.2)', 'rgba(255, 165, 0, 0)'),
    Bucket.RED: SeverityColor('#FF4500', 'rgba(255, 69, 0, 0.2)', 'rgba(255, 69, 0, 0)'),
    Bucket.PURPLE: SeverityColor('#800080', 'rgba(128, 0, 128, 0.2)', 'rgba(128, 0, 128, 0)'),
    Bucket.PINK: SeverityColor('#FF1493', 'rgba(255, 20, 147, 0.2)', 'rgba(255, 20, 147, 0)'),
}

GAUGE_EMOJIS: dict[Bucket, str] = {
    Bucket.GRAY: '😐',
    Bucket.YELLOW: '🙂',
    Bucket.ORANGE: '😊',
    Bucket.RED: '😀',
    Bucket.PURPLE: '😍',
    Bucket.PINK: '🤩',
}
ERROR_EMOJI = '❓'

if set(PALETTE) != set(Bucket) or set(GAUGE_EMOJIS) != set(Bucket):
    raise RuntimeError("Palette keys must match the Bucket enumeration exactly")


# =============================================================================
# FLARE PALETTE
# =============================================================================
# RGB triplets used for X-ray / proton flux coloring.

FLARE_RGB = {
    'ab': '34, 197, 94',
    'c': '245, 158, 11',
    'm': '255, 69, 0',
    'x': '147, 112, 219',
    'x5plus': '255, 105, 180',
    'extreme': '255, 20, 147',
}


# =============================================================================
# X-RAY AND PROTON CLASSES
# =============================================================================

# Flare classification thresholds (W/m²), most severe first
FLARE_THRESHOLDS = {
    'X': 1e-4,   # X-class: >= 10⁻⁴
    'M': 1e-5,   # M-class: >= 10⁻⁵
    'C': 1e-6,   # C-class: >= 10⁻⁶
    'B': 1e-7,   # B-class: >= 10⁻⁷
}
A_CLASS_DECADE = 1e-8

# Proton S-scale thresholds (pfu, >=10 MeV), most severe first
PROTON_THRESHOLDS = {
    'S5': 1e5,
    'S4': 1e4,
    'S3': 1e3,
    'S2': 1e2,
    'S1': 1e1,
}

NOT_AVAILABLE = 'N/A'


class ActivityStatus(enum.StrEnum):
    """Overall solar activity status."""
    NOT_AVAILABLE = 'N/A'
    QUIET = 'Quiet'
    MODERATE = 'Moderate'
    HIGH = 'High'
    VERY_HIGH = 'Very High'

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)


_STATUS_ORDER = (
    ActivityStatus.NOT_AVAILABLE,
    ActivityStatus.QUIET,
    ActivityStatus.MODERATE,
    ActivityStatus.HIGH,
    ActivityStatus.VERY_HIGH,
)


# =============================================================================
# AURORA SCORE
# =============================================================================

# Fixed breakpoints for the aurora forecast score (0-100), most severe first
AURORA_SCORE_BREAKPOINTS = (
    (80, Bucket.PINK),
    (50, Bucket.PURPLE),
    (40, Bucket.RED),
    (25, Bucket.ORANGE),
    (10, Bucket.YELLOW),
)

# Reference site for the aurora score (Greymouth, NZ)
REFERENCE_LATITUDE = -42.45
EARTH_RADIUS_KM = 6371.0
