"""
Solar Watch Monitoring Module
=============================

Classification and estimation core: threshold buckets, X-ray/proton
classes, Earth-directed heuristics, CME arrival estimates and the rolling
activity summary.

Usage:
    from solar_watch.monitoring import classify, SPEED, get_xray_class
    from solar_watch.monitoring import summarize, estimate_arrival

    bucket = classify(520.0, SPEED)        # Bucket.ORANGE
    label = get_xray_class(2.3e-5)         # 'M2.3'
    summary = summarize(xray, protons, flares, now)
"""

from .constants import (
    AU_KM,
    EARTH_DIRECTED_MAX_LONGITUDE,
    MIN_PLAUSIBLE_CME_SPEED,
    Bucket,
    Direction,
    SeverityColor,
    ActivityStatus,
    PALETTE,
    GAUGE_EMOJIS,
)
from .validation import as_finite_float, validate_reading
from .thresholds import (
    ThresholdTable,
    GaugeStyle,
    ClassifiedValue,
    SPEED,
    DENSITY,
    POWER,
    BT,
    BZ,
    TABLES,
    classify,
    classify_with_color,
    gauge_style,
    aurora_score_bucket,
    gradient_stops,
)
from .flares import (
    get_xray_class,
    xray_letter,
    get_proton_class,
    get_overall_activity_status,
    flux_color,
    proton_flux_color,
    flare_class_color,
)
from .records import TimeSeriesSample, FlareEvent
from .heliographic import (
    parse_longitude,
    parse_latitude,
    is_potential_earth_directed,
    is_cme_earth_directed,
)
from .cme import (
    ProcessedCME,
    ImpactSample,
    CMEFilter,
    travel_time,
    estimate_arrival,
    impact_profile,
    process_cme,
    process_cme_catalog,
    filter_cmes,
)
from .summary import PeakReading, FlareCounts, ActivitySummary, summarize
from .aurora import (
    SubstormState,
    SubstormActivity,
    location_adjustment,
    adjusted_score,
    analyze_substorm,
)
from .alerts import is_flare_alert, flare_alert_categories, aurora_alert_categories
from .formatting import StatusFormatter

__all__ = [
    # Constants & buckets
    'AU_KM',
    'EARTH_DIRECTED_MAX_LONGITUDE',
    'MIN_PLAUSIBLE_CME_SPEED',
    'Bucket',
    'Direction',
    'SeverityColor',
    'ActivityStatus',
    'PALETTE',
    'GAUGE_EMOJIS',
    # Validation
    'as_finite_float',
    'validate_reading',
    # Threshold classifier
    'ThresholdTable',
    'GaugeStyle',
    'ClassifiedValue',
    'SPEED',
    'DENSITY',
    'POWER',
    'BT',
    'BZ',
    'TABLES',
    'classify',
    'classify_with_color',
    'gauge_style',
    'aurora_score_bucket',
    'gradient_stops',
    # X-ray / proton classes
    'get_xray_class',
    'xray_letter',
    'get_proton_class',
    'get_overall_activity_status',
    'flux_color',
    'proton_flux_color',
    'flare_class_color',
    # Records
    'TimeSeriesSample',
    'FlareEvent',
    # Source locations
    'parse_longitude',
    'parse_latitude',
    'is_potential_earth_directed',    # Heuristic, not a cone model
    'is_cme_earth_directed',
    # CME arrival
    'ProcessedCME',
    'ImpactSample',
    'CMEFilter',
    'travel_time',
    'estimate_arrival',
    'impact_profile',
    'process_cme',
    'process_cme_catalog',
    'filter_cmes',
    # Summary
    'PeakReading',
    'FlareCounts',
    'ActivitySummary',
    'summarize',
    # Aurora / substorm
    'SubstormState',
    'SubstormActivity',
    'location_adjustment',
    'adjusted_score',
    'analyze_substorm',
    # Alerts
    'is_flare_alert',
    'flare_alert_categories',
    'aurora_alert_categories',
    # Formatting
    'StatusFormatter',
]
