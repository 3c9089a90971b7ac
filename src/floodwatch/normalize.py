"""
Normalization of raw feed records into Station values.

The feed is a JSON object keyed by station identifier. Every attribute is
optional; absent, empty or malformed values resolve to the Station defaults
so normalization never fails on data.
"""

import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Tuple

from .exceptions import FeedParseError
from .models import AlertLevel, Station, make_station
from .utils import coerce_float, isoformat, utc_now

logger = logging.getLogger(__name__)

def _text(value: Any) -> Optional[str]:
    if not value:
        return None
    return str(value)


def normalize_station(
    key: Any, raw: Any, now: Optional[datetime] = None
) -> Station:
    """
    Map one feed entry to a Station.

    Args:
        key: Station identifier (the feed mapping key)
        raw: Attribute mapping for the station; anything else is treated as empty
        now: Reference time used when ``measured_at`` is missing

    Returns:
        Fully-populated Station
    """
    if not isinstance(raw, Mapping):
        raw = {}

    station_id = str(key)

    # Falsy values (0, "", None) take the default, like the upstream dashboard.
    level = coerce_float(raw.get("water_level")) or 0.0
    rate_of_rise = coerce_float(raw.get("rate_of_rise")) or 0.0
    measured_at = _text(raw.get("measured_at")) or isoformat(now or utc_now())

    alert_raw = raw.get("alert_level")
    alert_level = AlertLevel.parse(alert_raw)
    if alert_raw and alert_raw != alert_level.value:
        logger.debug(
            f"Unrecognized alert level {alert_raw!r} for station {station_id}, using normal"
        )

    return make_station(
        station_id,
        station=_text(raw.get("station_name")) or station_id,
        river=_text(raw.get("river_name")) or "Unknown",
        level=level,
        alert_level=alert_level,
        rate_of_rise=rate_of_rise,
        measured_at=measured_at,
        latitude=coerce_float(raw.get("latitude")),
        longitude=coerce_float(raw.get("longitude")),
    )


def normalize_feed(data: Any, now: Optional[datetime] = None) -> Tuple[Station, ...]:
    """
    Normalize a decoded feed payload into a tuple of Stations in feed order.

    Args:
        data: Decoded JSON object keyed by station identifier
        now: Reference time shared by every defaulted ``measured_at``

    Returns:
        Tuple of Station objects

    Raises:
        FeedParseError: If the payload is not a JSON object
    """
    if not isinstance(data, Mapping):
        raise FeedParseError(
            f"Expected a JSON object keyed by station, got {type(data).__name__}"
        )

    if now is None:
        now = utc_now()

    stations = tuple(normalize_station(key, value, now=now) for key, value in data.items())
    logger.debug(f"Normalized {len(stations)} stations")
    return stations
