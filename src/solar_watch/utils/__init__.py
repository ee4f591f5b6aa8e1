"""
Solar Watch Utilities
=====================

Common utility functions used across the library.
"""

from .time import parse_iso_timestamp, from_epoch_ms, to_epoch_ms, format_timestamp, now_utc

__all__ = ['parse_iso_timestamp', 'from_epoch_ms', 'to_epoch_ms', 'format_timestamp', 'now_utc']
