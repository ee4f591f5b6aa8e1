"""
X-ray and Proton Classes
========================

GOES X-ray flux (0.1-0.8 nm, W/m²) is labelled by logarithmic decade:

    >= 1e-4  X      >= 1e-5  M      >= 1e-6  C      >= 1e-7  B      else A

with the label ``{letter}{flux / decade:.1f}`` (2.3e-5 → 'M2.3'). The decade
boundaries are authoritative: 9.9e-7 is below the C boundary and labels as
'B9.9'.

Proton flux (>=10 MeV, pfu) maps onto the NOAA S-scale S0..S5.

Missing, NaN or negative readings label as 'N/A'.
"""

from .constants import (
    A_CLASS_DECADE,
    FLARE_RGB,
    FLARE_THRESHOLDS,
    NOT_AVAILABLE,
    PROTON_THRESHOLDS,
    ActivityStatus,
)
from .validation import as_finite_float


def _valid_flux(flux) -> float | None:
    value = as_finite_float(flux)
    if value is None or value < 0:
        return None
    return value


def xray_letter(flux) -> str:
    """Flare letter only ('X', 'M', 'C', 'B', 'A'), or 'N/A'."""
    value = _valid_flux(flux)
    if value is None:
        return NOT_AVAILABLE
    for letter, threshold in FLARE_THRESHOLDS.items():
        if value >= threshold:
            return letter
    return 'A'


def get_xray_class(flux) -> str:
    """
    Convert X-ray flux to a flare class label.

    Args:
        flux: X-ray flux in W/m² (0.1-0.8 nm)

    Returns:
        Flare class string (e.g., 'M2.3', 'X1.0', 'A5.0') or 'N/A'
    """
    value = _valid_flux(flux)
    if value is None:
        return NOT_AVAILABLE

    letter = xray_letter(value)
    decade = FLARE_THRESHOLDS.get(letter, A_CLASS_DECADE)
    return f"{letter}{value / decade:.1f}"


def get_proton_class(flux) -> str:
    """Map >=10 MeV proton flux (pfu) to the S-scale ('S0'..'S5') or 'N/A'."""
    value = _valid_flux(flux)
    if value is None:
        return NOT_AVAILABLE
    for level, threshold in PROTON_THRESHOLDS.items():
        if value >= threshold:
            return level
    return 'S0'


def get_overall_activity_status(xray_class: str, proton_class: str) -> ActivityStatus:
    """
    Combine X-ray and proton classes into an overall activity status.

    X-ray: X → Very High, M → High, C → Moderate, otherwise Quiet.
    Proton: S5/S4 → Very High; S3/S2 raise to High; S1 raises Quiet to
    Moderate. Both 'N/A' → N/A.
    """
    xray_class = xray_class or NOT_AVAILABLE
    proton_class = proton_class or NOT_AVAILABLE
    if xray_class == NOT_AVAILABLE and proton_class == NOT_AVAILABLE:
        return ActivityStatus.NOT_AVAILABLE

    letter = xray_class[:1].upper()
    if letter == 'X':
        level = ActivityStatus.VERY_HIGH
    elif letter == 'M':
        level = ActivityStatus.HIGH
    elif letter == 'C':
        level = ActivityStatus.MODERATE
    else:
        level = ActivityStatus.QUIET

    proton = proton_class.upper()
    if proton in ('S5', 'S4'):
        proton_level = ActivityStatus.VERY_HIGH
    elif proton in ('S3', 'S2'):
        proton_level = ActivityStatus.HIGH
    elif proton == 'S1':
        proton_level = ActivityStatus.MODERATE
    else:
        proton_level = ActivityStatus.QUIET

    return max(level, proton_level, key=lambda status: status.rank)


# =============================================================================
# FLARE PALETTE
# =============================================================================

def _rgba(key: str, opacity: float) -> str:
    return f"rgba({FLARE_RGB[key]}, {opacity:g})"


def flux_color(flux, opacity: float = 1) -> str:
    """Color for an X-ray flux value (X5+ gets its own shade)."""
    value = _valid_flux(flux)
    if value is None:
        key = 'ab'
    elif value >= 5e-4:
        key = 'x5plus'
    elif value >= FLARE_THRESHOLDS['X']:
        key = 'x'
    elif value >= FLARE_THRESHOLDS['M']:
        key = 'm'
    elif value >= FLARE_THRESHOLDS['C']:
        key = 'c'
    else:
        key = 'ab'
    return _rgba(key, opacity)


def proton_flux_color(flux, opacity: float = 1) -> str:
    """Color for a >=10 MeV proton flux value, following the S-scale."""
    value = _valid_flux(flux)
    keys = {'S5': 'extreme', 'S4': 'x5plus', 'S3': 'x', 'S2': 'm', 'S1': 'c'}
    if value is None:
        return _rgba('ab', opacity)
    return _rgba(keys.get(get_proton_class(value), 'ab'), opacity)


def flare_class_color(class_type: str, opacity: float = 1) -> str:
    """Color for a catalog class string such as 'X5.1' or 'M1.2'."""
    if not class_type or not isinstance(class_type, str):
        return _rgba('ab', opacity)

    letter = class_type[0].upper()
    if letter == 'X':
        magnitude = as_finite_float(class_type[1:])
        key = 'x5plus' if magnitude is not None and magnitude >= 5 else 'x'
    elif letter == 'M':
        key = 'm'
    elif letter == 'C':
        key = 'c'
    else:
        key = 'ab'
    return _rgba(key, opacity)
