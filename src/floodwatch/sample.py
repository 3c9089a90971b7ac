"""
Fixed sample dataset used when the live feed cannot be fetched.
"""

from datetime import datetime, timedelta
from typing import Optional, Tuple

from .models import AlertLevel, Station, make_station
from .utils import isoformat, utc_now

# (id, station, river, level, alert level, rate of rise, age in days)
SAMPLE_READINGS = (
    ("1", "Nagalagam Street", "Kelani Ganga", 2.56, AlertLevel.MAJOR_FLOOD, 0.015, 0),
    ("2", "Hanwella", "Kelani Ganga", 9.69, AlertLevel.MINOR_FLOOD, -0.087, 0),
    ("3", "Rathnapura", "Kalu Ganga", 5.82, AlertLevel.ALERT, -0.059, 0),
    ("4", "Kalawellawa", "Kalu Ganga", 7.38, AlertLevel.MINOR_FLOOD, -0.051, 0),
    ("5", "Putupaula", "Kalu Ganga", 4.28, AlertLevel.MINOR_FLOOD, -0.010, 0),
    ("6", "Dunamale", "Aththanagalu Oya", 4.40, AlertLevel.MINOR_FLOOD, -0.121, 0),
    ("7", "Horowpothana", "Yan Oya", 7.29, AlertLevel.ALERT, -0.020, 0),
    ("8", "Thanthirimale", "Malwathu Oya", 10.64, AlertLevel.MAJOR_FLOOD, -0.033, 0),
    ("9", "Peradeniya", "Mahaweli Ganga", 10.56, AlertLevel.MAJOR_FLOOD, 0.595, 4),
    ("10", "Badalgama", "Maha Oya", 4.44, AlertLevel.NORMAL, -0.115, 0),
)


def sample_stations(now: Optional[datetime] = None) -> Tuple[Station, ...]:
    """
    Build the fallback snapshot.

    Args:
        now: Reference time for the readings; defaults to the current UTC time

    Returns:
        Tuple of 10 Station objects. Peradeniya is dated four days before
        ``now``; every other station is dated ``now``.
    """
    if now is None:
        now = utc_now()

    return tuple(
        make_station(
            station_id,
            station=name,
            river=river,
            level=level,
            alert_level=alert_level,
            rate_of_rise=rate,
            measured_at=isoformat(now - timedelta(days=age_days)),
        )
        for station_id, name, river, level, alert_level, rate, age_days in SAMPLE_READINGS
    )
