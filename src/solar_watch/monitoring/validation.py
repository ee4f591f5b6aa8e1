"""
Data Validation
===============

Validation gates that run BEFORE classification or reduction, so that
missing, non-numeric or non-finite readings never leak into a bucket,
a peak value or a count.
"""

import numpy as np

from .constants import FILL_VALUE_FLOOR


def as_finite_float(value) -> float | None:
    """
    Coerce a reading to a finite float.

    Returns None for None, booleans, non-numeric strings, NaN and ±Inf.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not np.isfinite(number):
        return None
    return number


def validate_reading(value, quantity: str = None) -> dict:
    """
    Validate a single instrument reading.

    Args:
        value: Raw reading (number, numeric string or None)
        quantity: Quantity name for reporting

    Returns:
        dict with 'is_valid', 'error_type', 'error_reason', 'value'
    """
    if value is None:
        return {
            'is_valid': False,
            'error_type': 'MISSING',
            'error_reason': f'No {quantity or "value"} reported',
            'value': None,
        }

    number = as_finite_float(value)
    if number is None:
        return {
            'is_valid': False,
            'error_type': 'INVALID_VALUE',
            'error_reason': f'Non-finite or non-numeric value: {value!r}',
            'value': None,
        }

    # NOAA fill values (-9999, -99999, ...)
    if number <= FILL_VALUE_FLOOR:
        return {
            'is_valid': False,
            'error_type': 'FILL_VALUE',
            'error_reason': f'{quantity or "value"}={number} is a fill value',
            'value': None,
        }

    return {'is_valid': True, 'error_type': None, 'error_reason': None, 'value': number}
