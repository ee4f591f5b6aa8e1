"""
Data Model
==========

Immutable records produced by ingestion and consumed by the classifiers,
the estimator and the summarizer. Derived fields (``has_cme``) are computed
exactly once, when the record is built from a catalog entry.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import NamedTuple, Optional

from ..utils.time import parse_iso_timestamp


class TimeSeriesSample(NamedTuple):
    """One reading of a time series (UTC time, value in the series' unit)."""
    time: datetime
    value: Optional[float]


class FlareEvent(NamedTuple):
    """A DONKI solar flare (FLR) record."""
    id: str
    class_type: str                       # e.g. 'M5.2'
    source_location: Optional[str]        # e.g. 'N12W34'
    begin_time: Optional[datetime]
    peak_time: Optional[datetime]
    end_time: Optional[datetime]
    active_region_num: Optional[int]
    linked_events: tuple[str, ...]        # linked activity IDs
    has_cme: bool

    @property
    def reference_time(self) -> Optional[datetime]:
        """Peak time, falling back to begin then end time."""
        return self.peak_time or self.begin_time or self.end_time

    @classmethod
    def from_donki(cls, record: dict) -> 'FlareEvent':
        """
        Build a FlareEvent from a raw DONKI FLR entry.

        ``has_cme`` is true when any linked activity ID contains 'CME'.

        Raises:
            ValueError: if the entry has no flare ID or class type
        """
        flare_id = record.get('flrID') or record.get('id')
        class_type = record.get('classType')
        if not flare_id or not isinstance(class_type, str) or not class_type:
            raise ValueError(f"Flare entry lacks flrID/classType: {record!r}")

        linked = tuple(
            str(event['activityID'])
            for event in (record.get('linkedEvents') or [])
            if isinstance(event, dict) and event.get('activityID')
        )

        region = record.get('activeRegionNum')
        try:
            region = int(region) if region is not None else None
        except (TypeError, ValueError):
            region = None

        return cls(
            id=str(flare_id),
            class_type=class_type,
            source_location=record.get('sourceLocation') or None,
            begin_time=parse_iso_timestamp(record.get('beginTime')),
            peak_time=parse_iso_timestamp(record.get('peakTime')),
            end_time=parse_iso_timestamp(record.get('endTime')),
            active_region_num=region,
            linked_events=linked,
            has_cme=any('CME' in activity_id for activity_id in linked),
        )


def get_field(obj, *names):
    """
    First present attribute/key among ``names`` (mappings and objects alike).

    Lets catalog dicts with camelCase keys and records with snake_case
    attributes go through the same code paths.
    """
    for name in names:
        if isinstance(obj, Mapping):
            if name in obj:
                return obj[name]
        elif hasattr(obj, name):
            return getattr(obj, name)
    return None
