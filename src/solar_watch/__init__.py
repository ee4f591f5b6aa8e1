"""
Solar Watch - Space weather classification and estimation
=========================================================

Turns already-fetched NOAA and DONKI data into severity buckets, flare and
proton classes, an activity summary, Earth-directed CME flags and predicted
arrival times.
"""

__version__ = "0.1.0"

from solar_watch.monitoring import (
    classify,
    get_xray_class,
    get_proton_class,
    get_overall_activity_status,
    parse_longitude,
    is_potential_earth_directed,
    estimate_arrival,
    impact_profile,
    summarize,
)
from solar_watch.config import Settings, load_settings
from solar_watch.scheduler import PollScheduler

__all__ = [
    "classify",
    "get_xray_class",
    "get_proton_class",
    "get_overall_activity_status",
    "parse_longitude",
    "is_potential_earth_directed",
    "estimate_arrival",
    "impact_profile",
    "summarize",
    "Settings",
    "load_settings",
    "PollScheduler",
]
