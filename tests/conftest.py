"""
Shared fixtures for floodwatch tests.
"""

from datetime import datetime, timezone

import pytest

from floodwatch.sample import sample_stations

NOW = datetime(2024, 5, 20, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed reference time."""
    return NOW


@pytest.fixture
def fallback_stations():
    """The 10-station sample dataset dated at NOW."""
    return sample_stations(NOW)


@pytest.fixture
def raw_feed():
    """A small feed payload shaped like the live JSON."""
    return {
        "hanwella": {
            "station_name": "Hanwella",
            "river_name": "Kelani Ganga",
            "water_level": 9.69,
            "alert_level": "minor_flood",
            "rate_of_rise": -0.087,
            "measured_at": "2024-05-20T11:30:00+05:30",
            "latitude": 6.9097,
            "longitude": 80.0814,
        },
        "peradeniya": {
            "station_name": "Peradeniya",
            "river_name": "Mahaweli Ganga",
            "water_level": 10.56,
            "alert_level": "major_flood",
            "rate_of_rise": 0.595,
            "measured_at": "2024-05-20T11:45:00+05:30",
        },
        "unnamed": {},
    }
