"""
Threshold Classification
========================

Maps scalar physical readings (solar wind speed, density, hemispheric power,
Bt, Bz, aurora score) to a severity bucket and its display colors.

Every threshold table is an explicit, validated record. Classification walks
the buckets from most to least severe and the first boundary that the value
reaches wins:

    ascending-severity  (speed, density, power, bt):  boundary <= value
    descending-severity (bz, more negative is worse): boundary >= value

Infinite boundaries mean "no cap": that bucket is never reached through the
table. Anything that is not a number (None, NaN, strings) is baseline.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, NamedTuple

from .constants import (
    AURORA_SCORE_BREAKPOINTS,
    BASELINE_BUCKET,
    ERROR_EMOJI,
    GAUGE_EMOJIS,
    PALETTE,
    Bucket,
    Direction,
    SeverityColor,
    buckets_by_severity,
)


@dataclass(frozen=True)
class ThresholdTable:
    """Ordered bucket boundaries for one physical quantity."""
    name: str
    unit: str
    direction: Direction
    boundaries: Mapping[Bucket, float]
    max_expected: float

    def __post_init__(self):
        missing = set(Bucket) - set(self.boundaries)
        if missing:
            names = ', '.join(sorted(b.value for b in missing))
            raise ValueError(f"Threshold table '{self.name}' is missing buckets: {names}")

        values = [float(self.boundaries[b]) for b in buckets_by_severity(descending=False)]
        if any(math.isnan(v) for v in values):
            raise ValueError(f"Threshold table '{self.name}' has NaN boundaries")

        pairs = list(zip(values, values[1:]))
        if self.direction == Direction.ASCENDING:
            ordered = all(lo <= hi for lo, hi in pairs)
        else:
            ordered = all(lo >= hi for lo, hi in pairs)
        if not ordered:
            raise ValueError(
                f"Threshold table '{self.name}' boundaries are not monotonic "
                f"for {self.direction.value}: {values}"
            )

        if not math.isfinite(self.max_expected) or self.max_expected == 0:
            raise ValueError(f"Threshold table '{self.name}' needs a finite, non-zero max_expected")

        object.__setattr__(self, 'boundaries', MappingProxyType(
            {b: float(self.boundaries[b]) for b in Bucket}
        ))


def _table(name, unit, direction, gray, yellow, orange, red, purple, pink, max_expected):
    return ThresholdTable(
        name=name,
        unit=unit,
        direction=direction,
        boundaries={
            Bucket.GRAY: gray,
            Bucket.YELLOW: yellow,
            Bucket.ORANGE: orange,
            Bucket.RED: red,
            Bucket.PURPLE: purple,
            Bucket.PINK: pink,
        },
        max_expected=max_expected,
    )


INF = float('inf')

SPEED = _table('speed', 'km/s', Direction.ASCENDING, 250, 350, 500, 650, 800, INF, 1000)
DENSITY = _table('density', 'p/cm³', Direction.ASCENDING, 5, 10, 15, 20, 50, INF, 70)
POWER = _table('power', 'GW', Direction.ASCENDING, 20, 40, 70, 150, 200, INF, 250)
BT = _table('bt', 'nT', Direction.ASCENDING, 5, 10, 15, 20, 50, INF, 60)
BZ = _table('bz', 'nT', Direction.DESCENDING, -5, -10, -15, -20, -50, -INF, -60)

TABLES: dict[str, ThresholdTable] = {t.name: t for t in (SPEED, DENSITY, POWER, BT, BZ)}


def _as_number(value) -> float | None:
    # ±Inf stays a number here so that classification remains monotonic
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def classify(value, table: ThresholdTable) -> Bucket:
    """
    Classify a reading against a threshold table.

    Args:
        value: Reading in the table's unit
        table: ThresholdTable to evaluate

    Returns:
        Highest bucket whose boundary the value reaches, else Bucket.GRAY
    """
    number = _as_number(value)
    if number is None:
        return BASELINE_BUCKET

    ascending = table.direction == Direction.ASCENDING
    for bucket in buckets_by_severity():
        if bucket == BASELINE_BUCKET:
            break
        boundary = table.boundaries[bucket]
        if math.isinf(boundary):
            continue
        if ascending and boundary <= number:
            return bucket
        if not ascending and boundary >= number:
            return bucket
    return BASELINE_BUCKET


class ClassifiedValue(NamedTuple):
    """Bucket plus palette entry, as handed to the view layer."""
    bucket: Bucket
    color: SeverityColor


def classify_with_color(value, table: ThresholdTable) -> ClassifiedValue:
    bucket = classify(value, table)
    return ClassifiedValue(bucket, PALETTE[bucket])


class GaugeStyle(NamedTuple):
    """Display style of a single gauge."""
    bucket: Bucket
    color: SeverityColor
    emoji: str
    percentage: float


def gauge_style(value, table: ThresholdTable) -> GaugeStyle:
    """
    Compute bucket, color, emoji and fill percentage for a gauge.

    Ascending tables fill relative to max_expected; Bz fills only when
    southward (negative), relative to the most negative expected value.
    """
    number = _as_number(value)
    if number is None:
        return GaugeStyle(BASELINE_BUCKET, PALETTE[BASELINE_BUCKET], ERROR_EMOJI, 0.0)

    bucket = classify(number, table)
    if table.direction == Direction.DESCENDING:
        percentage = min(100.0, abs(number / table.max_expected) * 100) if number < 0 else 0.0
    else:
        percentage = min(100.0, max(0.0, number / table.max_expected * 100))

    return GaugeStyle(bucket, PALETTE[bucket], GAUGE_EMOJIS[bucket], percentage)


def aurora_score_bucket(score) -> Bucket:
    """
    Classify an aurora forecast score (0-100).

    Fixed breakpoints, not table driven:
    >=80 pink, >=50 purple, >=40 red, >=25 orange, >=10 yellow, else gray.
    """
    number = _as_number(score)
    if number is None:
        return BASELINE_BUCKET
    for breakpoint, bucket in AURORA_SCORE_BREAKPOINTS:
        if number >= breakpoint:
            return bucket
    return BASELINE_BUCKET


def gradient_stops(table: ThresholdTable, y_min: float, y_max: float) -> list[tuple[float, str]]:
    """
    Vertical fill gradient for a chart whose y-axis spans [y_min, y_max].

    Returns (position, rgba) stops where position 0 is the top of the
    chart area and 1 the bottom.
    """
    span = y_max - y_min
    if span == 0 or not math.isfinite(span):
        return [(0.0, PALETTE[BASELINE_BUCKET].semi)]

    def position(value: float) -> float:
        return max(0.0, min(1.0, 1 - (value - y_min) / span))

    if table.direction == Direction.DESCENDING:
        stops = [(position(y_max), PALETTE[Bucket.GRAY].trans)]
        for bucket in buckets_by_severity():
            boundary = table.boundaries[bucket]
            if math.isfinite(boundary):
                stops.append((position(boundary), PALETTE[bucket].semi))
        stops.append((position(y_min), PALETTE[Bucket.PINK].semi))
    else:
        stops = [(position(y_min), PALETTE[Bucket.GRAY].semi)]
        for bucket in buckets_by_severity(descending=False):
            boundary = table.boundaries[bucket]
            if math.isfinite(boundary):
                stops.append((position(boundary), PALETTE[bucket].semi))
        stops.append((position(y_max), PALETTE[Bucket.PINK].trans))
    return stops
