"""
Risk scoring, filtering and aggregate statistics for station snapshots.
"""

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from .config import STALE_AFTER
from .models import AlertLevel, Station
from .utils import utc_now

ALERT_SCORES = {
    AlertLevel.MAJOR_FLOOD: 100,
    AlertLevel.MINOR_FLOOD: 70,
    AlertLevel.ALERT: 40,
}
RAPID_RISE_SCORE = 30
RISING_SCORE = 10

# Rate of rise above which a station counts as "rising fast" in the stats
STATS_RISING_THRESHOLD = 0.02

FILTER_ALL = "all"
FILTER_RISK = "risk"
FILTER_RISING = "rising"

FILTER_MODES = (
    FILTER_ALL,
    FILTER_RISK,
    AlertLevel.MAJOR_FLOOD.value,
    AlertLevel.MINOR_FLOOD.value,
    AlertLevel.ALERT.value,
    FILTER_RISING,
)

FILTER_LABELS = {
    FILTER_ALL: "All Stations",
    FILTER_RISK: "At Risk",
    AlertLevel.MAJOR_FLOOD.value: "Major Flood",
    AlertLevel.MINOR_FLOOD.value: "Minor Flood",
    AlertLevel.ALERT.value: "Alert",
    FILTER_RISING: "Rising",
}


@dataclass(frozen=True)
class StationStats:
    """Counts over a full, unfiltered snapshot."""

    total: int
    major_flood: int
    minor_flood: int
    alert: int
    rising: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def score(station: Station) -> int:
    """
    Compute the risk score for a station.

    The alert level contributes 100 (major flood), 70 (minor flood),
    40 (alert) or 0. A rate of rise above 0.05 m/hr adds 30, any other
    positive rate adds 10. Scores range from 0 to 130.
    """
    total = ALERT_SCORES.get(station.alert_level, 0)
    if station.is_rapid_rise:
        total += RAPID_RISE_SCORE
    elif station.is_rising:
        total += RISING_SCORE
    return total


def matches_filter(station: Station, mode: str) -> bool:
    """Check whether a station is shown under the given filter mode."""
    if mode == FILTER_ALL:
        return True
    if mode == FILTER_RISK:
        return station.alert_level.is_elevated or station.is_rising
    if mode == FILTER_RISING:
        return station.is_rising
    return station.alert_level.value == mode


def filter_stations(stations: Iterable[Station], mode: str = FILTER_ALL) -> List[Station]:
    """Return the stations matching ``mode`` in their original order."""
    return [s for s in stations if matches_filter(s, mode)]


def filter_and_sort(stations: Iterable[Station], mode: str = FILTER_ALL) -> List[Station]:
    """
    Filter stations by mode and order them by descending risk score.

    Args:
        stations: Snapshot to filter (any iterable of Station)
        mode: 'all', 'risk', 'rising' or an alert level value. Unknown
              modes match nothing.

    Returns:
        List of matching stations, highest score first. Stations with equal
        scores keep their snapshot order.
    """
    # sorted() is stable, so ties keep snapshot order
    return sorted(filter_stations(stations, mode), key=score, reverse=True)


def get_stats(stations: Iterable[Station]) -> StationStats:
    """Aggregate counts over the full snapshot."""
    stations = list(stations)
    counts = {level: 0 for level in AlertLevel}
    rising = 0
    for station in stations:
        counts[station.alert_level] += 1
        if station.rate_of_rise > STATS_RISING_THRESHOLD:
            rising += 1

    return StationStats(
        total=len(stations),
        major_flood=counts[AlertLevel.MAJOR_FLOOD],
        minor_flood=counts[AlertLevel.MINOR_FLOOD],
        alert=counts[AlertLevel.ALERT],
        rising=rising,
    )


def is_stale(
    station: Station,
    now: Optional[datetime] = None,
    max_age: timedelta = STALE_AFTER,
) -> bool:
    """
    Check whether a station's reading is older than ``max_age``.

    Readings with an unparseable timestamp are never reported stale.
    """
    measured = station.measured_time
    if measured is None:
        return False
    if now is None:
        now = utc_now()
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now - measured > max_age


def format_rate(rate_of_rise: float) -> str:
    """Render a rate of rise like ``+0.015m/hr`` or ``-0.087m/hr``."""
    sign = "+" if rate_of_rise > 0 else ""
    return f"{sign}{rate_of_rise:.3f}m/hr"
