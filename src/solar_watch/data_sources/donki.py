"""
NASA DONKI Payloads
===================

Parsers for already-fetched DONKI catalog lists. Flares become FlareEvent
records; CMEs go through the arrival estimator (see monitoring.cme).
"""

import logging

from ..monitoring.cme import ProcessedCME, process_cme_catalog
from ..monitoring.records import FlareEvent


logger = logging.getLogger(__name__)


def parse_flares(payload) -> list[FlareEvent]:
    """
    DONKI FLR list → FlareEvent list (input order kept).

    Entries without an ID or class type are skipped with a warning.
    """
    if not isinstance(payload, list):
        logger.warning("Flare payload is not a list (%s), ignoring", type(payload).__name__)
        return []

    flares = []
    for record in payload:
        if not isinstance(record, dict):
            logger.warning("Skipping non-object flare entry: %r", record)
            continue
        try:
            flares.append(FlareEvent.from_donki(record))
        except ValueError as e:
            logger.warning("Skipping flare: %s", e)
    return flares


def parse_cmes(payload, **kwargs) -> list[ProcessedCME]:
    """DONKI CME list → ProcessedCME list, newest first (see process_cme_catalog)."""
    return process_cme_catalog(payload, **kwargs)
