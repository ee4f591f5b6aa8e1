"""
Time Utilities
==============

Timestamp parsing and formatting. Every timestamp handled by solar_watch is
a timezone-aware UTC datetime; catalog strings and epoch milliseconds are
converted at the edges.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import numpy as np


def parse_iso_timestamp(ts) -> Optional[datetime]:
    """
    Parse a timestamp to a timezone-aware datetime.

    Handles common formats:
    - '2026-01-11T12:00:00Z'
    - '2026-01-11T12:00Z' (DONKI catalog)
    - '2026-01-11 12:00:00.000' (NOAA products, assumes UTC)
    - datetime objects (naive ones are assumed UTC)
    - epoch milliseconds (int/float)

    Args:
        ts: Timestamp string, datetime or epoch milliseconds

    Returns:
        Timezone-aware datetime (UTC) or None if parsing fails
    """
    if ts is None or isinstance(ts, bool):
        return None

    if isinstance(ts, datetime):
        return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)

    if isinstance(ts, (int, float, np.integer, np.floating)):
        return from_epoch_ms(ts)

    if not isinstance(ts, str) or not ts:
        return None

    # Handle 'Z' suffix (common in APIs)
    ts = ts.strip().replace('Z', '+00:00')

    try:
        dt = datetime.fromisoformat(ts)
    except (ValueError, TypeError):
        return None
    # Ensure timezone awareness (default to UTC)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def from_epoch_ms(value) -> Optional[datetime]:
    """Convert epoch milliseconds to a UTC datetime (None if not finite)."""
    try:
        ms = float(value)
    except (TypeError, ValueError):
        return None
    if not np.isfinite(ms):
        return None
    try:
        return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(milliseconds=ms)
    except OverflowError:
        return None


def to_epoch_ms(dt: datetime) -> int:
    """Convert a datetime to epoch milliseconds."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return round(dt.timestamp() * 1000)


def format_timestamp(dt: datetime, fmt: str = 'iso') -> str:
    """
    Format datetime for display or storage.

    Args:
        dt: Datetime object
        fmt: Format type ('iso', 'display', 'compact', 'short')

    Returns:
        Formatted timestamp string
    """
    if dt is None:
        return ''

    if fmt == 'iso':
        return dt.isoformat()
    elif fmt == 'display':
        return dt.strftime('%Y-%m-%d %H:%M:%S UTC')
    elif fmt == 'compact':
        return dt.strftime('%Y%m%d_%H%M%S')
    elif fmt == 'short':
        return dt.strftime('%d %b %H:%M')
    else:
        return dt.isoformat()


def now_utc() -> datetime:
    """Get current time as timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
