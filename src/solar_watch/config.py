"""
Configuration
=============

User-tunable heuristics, read from a TOML file:

    ~/.config/solar-watch/config.toml

    earth_directed_max_longitude = 30.0
    min_cme_speed = 100.0
    refresh_interval = 300
    summary_window_hours = 24
    flare_alert_min_flux = 5e-6
    reference_latitude = -42.45

A missing file means defaults. Unknown keys, wrong types and out-of-range
values raise ValueError.
"""

import tomllib
from dataclasses import dataclass, fields, replace
from datetime import timedelta
from pathlib import Path

from .monitoring.alerts import FLARE_ALERT_MIN_FLUX
from .monitoring.constants import (
    EARTH_DIRECTED_MAX_LONGITUDE,
    MIN_PLAUSIBLE_CME_SPEED,
    REFERENCE_LATITUDE,
)


def default_config_path() -> Path:
    return Path.home() / ".config" / "solar-watch" / "config.toml"


@dataclass(frozen=True)
class Settings:
    """Heuristic constants exposed as settings."""
    earth_directed_max_longitude: float = EARTH_DIRECTED_MAX_LONGITUDE  # degrees
    min_cme_speed: float = MIN_PLAUSIBLE_CME_SPEED                      # km/s
    refresh_interval: float = 300.0                                     # seconds
    summary_window_hours: float = 24.0
    flare_alert_min_flux: float = FLARE_ALERT_MIN_FLUX                  # W/m²
    reference_latitude: float = REFERENCE_LATITUDE                      # degrees

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Setting '{f.name}' must be a number, got {value!r}")
            object.__setattr__(self, f.name, float(value))

        if not 0 < self.earth_directed_max_longitude <= 180:
            raise ValueError("earth_directed_max_longitude must be in (0, 180]")
        if not -90 <= self.reference_latitude <= 90:
            raise ValueError("reference_latitude must be in [-90, 90]")
        for name in ('min_cme_speed', 'refresh_interval', 'summary_window_hours', 'flare_alert_min_flux'):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    @property
    def summary_window(self) -> timedelta:
        return timedelta(hours=self.summary_window_hours)

    def with_overrides(self, **overrides) -> 'Settings':
        """Copy with the given (non-None) overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_settings(path=None) -> Settings:
    """
    Load settings from a TOML file.

    Args:
        path: Config file (default: ~/.config/solar-watch/config.toml)

    Returns:
        Settings (defaults when the file does not exist)

    Raises:
        ValueError: on invalid TOML, unknown keys or bad values
    """
    path = Path(path) if path is not None else default_config_path()
    if not path.exists():
        return Settings()

    try:
        with open(path, 'rb') as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"{path}: invalid TOML ({e})") from e

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"{path}: unknown settings: {', '.join(unknown)}")

    return Settings(**data)
