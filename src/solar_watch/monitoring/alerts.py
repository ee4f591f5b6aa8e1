"""
Alert Thresholds
================

Notification categories crossed by the latest X-ray flux or aurora score.
Only the thresholds live here; delivering notifications is someone else's job.
"""

from .validation import as_finite_float


# Minimum flux worth alerting on by default (M0.5)
FLARE_ALERT_MIN_FLUX = 5e-6

# M1.0 and above is a flare alert in the status view
FLARE_ALERT_FLUX = 1e-5

# Most severe first
FLARE_ALERT_LEVELS = (
    ('flare-X10', 1e-3),
    ('flare-X5', 5e-4),
    ('flare-X1', 1e-4),
    ('flare-M5', 5e-5),
    ('flare-M1', 1e-5),
)

AURORA_ALERT_LEVELS = (
    ('aurora-80percent', 80),
    ('aurora-60percent', 60),
    ('aurora-50percent', 50),
    ('aurora-40percent', 40),
)


def is_flare_alert(flux, min_flux: float = FLARE_ALERT_FLUX) -> bool:
    """True when the X-ray flux reaches ``min_flux`` (default M1.0)."""
    value = as_finite_float(flux)
    return value is not None and value >= min_flux


def flare_alert_categories(flux, min_flux: float = FLARE_ALERT_MIN_FLUX) -> list[str]:
    """
    Flare notification categories crossed by ``flux``, most severe first.

    Nothing is reported below ``min_flux``.
    """
    if not is_flare_alert(flux, min_flux):
        return []
    value = float(flux)
    return [category for category, threshold in FLARE_ALERT_LEVELS if value >= threshold]


def aurora_alert_categories(score) -> list[str]:
    """Aurora notification categories crossed by a forecast score (0-100)."""
    value = as_finite_float(score)
    if value is None:
        return []
    return [category for category, threshold in AURORA_ALERT_LEVELS if value >= threshold]
