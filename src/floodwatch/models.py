"""
Data models for river water-level telemetry.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

from .utils import isoformat, parse_timestamp, utc_now

RAPID_RISE_THRESHOLD = 0.05  # m/hr


class AlertLevel(str, Enum):
    """Flood-severity category reported for a station reading."""

    NORMAL = "normal"
    ALERT = "alert"
    MINOR_FLOOD = "minor_flood"
    MAJOR_FLOOD = "major_flood"

    @classmethod
    def parse(cls, value: Any) -> "AlertLevel":
        """Map a raw feed value to an AlertLevel, falling back to NORMAL."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        return cls.NORMAL

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @property
    def is_elevated(self) -> bool:
        """True for any level above normal."""
        return self is not AlertLevel.NORMAL

    def __str__(self) -> str:
        return self.value


_LABELS = {
    AlertLevel.NORMAL: "Normal",
    AlertLevel.ALERT: "Alert",
    AlertLevel.MINOR_FLOOD: "Minor Flood",
    AlertLevel.MAJOR_FLOOD: "Major Flood",
}

_ICONS = {
    AlertLevel.NORMAL: "🟢",
    AlertLevel.ALERT: "🟡",
    AlertLevel.MINOR_FLOOD: "🟠",
    AlertLevel.MAJOR_FLOOD: "🔴",
}


@dataclass(frozen=True)
class Station:
    """A single river monitoring point and its latest reading."""

    id: str
    station: str
    river: str
    level: float  # meters
    alert_level: AlertLevel
    rate_of_rise: float  # meters/hour, positive = rising
    measured_at: str  # ISO-8601
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def measured_time(self) -> Optional[datetime]:
        """``measured_at`` as an aware datetime, or None if unparseable."""
        return parse_timestamp(self.measured_at)

    @property
    def is_rising(self) -> bool:
        return self.rate_of_rise > 0

    @property
    def is_rapid_rise(self) -> bool:
        return self.rate_of_rise > RAPID_RISE_THRESHOLD

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view with the alert level as its string value."""
        data = asdict(self)
        data["alert_level"] = self.alert_level.value
        return data


def make_station(
    id: str,
    *,
    station: Optional[str] = None,
    river: str = "Unknown",
    level: float = 0.0,
    alert_level: Any = AlertLevel.NORMAL,
    rate_of_rise: float = 0.0,
    measured_at: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    now: Optional[datetime] = None,
) -> Station:
    """
    Build a Station, filling every omitted field with its default.

    Args:
        id: Station identifier from the feed mapping
        station: Display name; defaults to ``id``
        river: River name
        level: Water level in meters
        alert_level: AlertLevel or raw string; unknown values become NORMAL
        rate_of_rise: Signed rate of change in meters/hour
        measured_at: ISO-8601 reading time; defaults to ``now``
        latitude: Optional latitude
        longitude: Optional longitude
        now: Reference time for the ``measured_at`` default

    Returns:
        Frozen Station instance
    """
    if measured_at is None:
        measured_at = isoformat(now or utc_now())

    return Station(
        id=id,
        station=station if station is not None else id,
        river=river,
        level=float(level),
        alert_level=AlertLevel.parse(alert_level),
        rate_of_rise=float(rate_of_rise),
        measured_at=measured_at,
        latitude=latitude,
        longitude=longitude,
    )


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time set of stations from one refresh."""

    stations: Tuple[Station, ...]
    fetched_at: datetime
    source: str = "live"  # 'live' or 'fallback'

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"

    def __len__(self) -> int:
        return len(self.stations)

    def __iter__(self) -> Iterator[Station]:
        return iter(self.stations)

    def to_pandas(self) -> Any:
        """Convert the stations to a pandas DataFrame, one row per station."""
        try:
            import pandas as pd
        except ImportError:
            raise ImportError(
                "pandas is required for DataFrame conversion. Install with: pip install pandas"
            ) from None

        columns = [
            "id",
            "station",
            "river",
            "level",
            "alert_level",
            "rate_of_rise",
            "measured_at",
            "latitude",
            "longitude",
        ]
        df = pd.DataFrame([s.to_dict() for s in self.stations], columns=columns)
        if not df.empty:
            df["measured_at"] = pd.to_datetime(
                df["measured_at"], errors="coerce", utc=True
            )
            for col in ["latitude", "longitude"]:
                df[col] = pd.to_numeric(df[col], errors="coerce")
        return df
