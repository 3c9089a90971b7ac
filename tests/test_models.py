"""
Tests for station models.
"""

import dataclasses
from datetime import datetime, timezone

import pytest

from floodwatch.models import AlertLevel, Snapshot, Station, make_station


class TestAlertLevel:
    """Test AlertLevel parsing and display metadata."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("normal", AlertLevel.NORMAL),
            ("alert", AlertLevel.ALERT),
            ("minor_flood", AlertLevel.MINOR_FLOOD),
            ("major_flood", AlertLevel.MAJOR_FLOOD),
            (AlertLevel.ALERT, AlertLevel.ALERT),
        ],
    )
    def test_parse_known(self, raw, expected):
        assert AlertLevel.parse(raw) is expected

    @pytest.mark.parametrize(
        "raw", ["severe", "", None, 3, ["alert"], "MAJOR_FLOOD", " alert ", "Minor_Flood"]
    )
    def test_parse_unknown_falls_back_to_normal(self, raw):
        assert AlertLevel.parse(raw) is AlertLevel.NORMAL

    def test_compares_equal_to_string_value(self):
        assert AlertLevel.MINOR_FLOOD == "minor_flood"
        assert str(AlertLevel.MAJOR_FLOOD) == "major_flood"

    def test_labels_and_icons(self):
        assert AlertLevel.MAJOR_FLOOD.label == "Major Flood"
        assert AlertLevel.MINOR_FLOOD.label == "Minor Flood"
        assert AlertLevel.ALERT.label == "Alert"
        assert AlertLevel.NORMAL.label == "Normal"
        assert AlertLevel.MAJOR_FLOOD.icon == "🔴"
        assert AlertLevel.NORMAL.icon == "🟢"

    def test_is_elevated(self):
        assert not AlertLevel.NORMAL.is_elevated
        assert all(
            level.is_elevated
            for level in (AlertLevel.ALERT, AlertLevel.MINOR_FLOOD, AlertLevel.MAJOR_FLOOD)
        )


class TestMakeStation:
    """Test the Station factory."""

    def test_defaults(self, now):
        station = make_station("42", now=now)

        assert station.id == "42"
        assert station.station == "42"
        assert station.river == "Unknown"
        assert station.level == 0.0
        assert station.alert_level is AlertLevel.NORMAL
        assert station.rate_of_rise == 0.0
        assert station.measured_at == "2024-05-20T12:00:00+00:00"
        assert station.latitude is None
        assert station.longitude is None

    def test_raw_alert_level_string_is_parsed(self):
        station = make_station("1", alert_level="major_flood", measured_at="2024-01-01")
        assert station.alert_level is AlertLevel.MAJOR_FLOOD

    def test_station_is_immutable(self, now):
        station = make_station("1", now=now)
        with pytest.raises(dataclasses.FrozenInstanceError):
            station.level = 5.0  # type: ignore[misc]


class TestStation:
    """Test derived Station properties."""

    def test_measured_time_parses_zulu_and_offsets(self):
        station = make_station("1", measured_at="2024-05-20T06:30:00Z")
        assert station.measured_time == datetime(2024, 5, 20, 6, 30, tzinfo=timezone.utc)

        station = make_station("1", measured_at="2024-05-20T12:00:00+05:30")
        assert station.measured_time == datetime(2024, 5, 20, 6, 30, tzinfo=timezone.utc)

    def test_measured_time_naive_is_utc(self):
        station = make_station("1", measured_at="2024-05-20T06:30:00")
        assert station.measured_time.tzinfo is not None
        assert station.measured_time.utcoffset().total_seconds() == 0

    def test_measured_time_unparseable(self):
        assert make_station("1", measured_at="yesterday").measured_time is None

    def test_rise_flags(self, now):
        assert make_station("1", rate_of_rise=0.051, now=now).is_rapid_rise
        assert not make_station("1", rate_of_rise=0.05, now=now).is_rapid_rise
        assert make_station("1", rate_of_rise=0.001, now=now).is_rising
        assert not make_station("1", rate_of_rise=0.0, now=now).is_rising
        assert not make_station("1", rate_of_rise=-0.2, now=now).is_rising

    def test_has_location(self, now):
        assert make_station("1", latitude=7.0, longitude=80.0, now=now).has_location
        assert not make_station("1", latitude=7.0, now=now).has_location

    def test_to_dict(self, now):
        data = make_station(
            "1", station="Hanwella", alert_level="alert", now=now
        ).to_dict()

        assert data["station"] == "Hanwella"
        assert data["alert_level"] == "alert"
        assert type(data["alert_level"]) is str
        assert set(data) == {f.name for f in dataclasses.fields(Station)}


class TestSnapshot:
    """Test Snapshot container behaviour."""

    def test_len_iter_and_source(self, fallback_stations, now):
        snapshot = Snapshot(stations=fallback_stations, fetched_at=now, source="fallback")

        assert len(snapshot) == 10
        assert list(snapshot) == list(fallback_stations)
        assert snapshot.is_fallback
        assert not Snapshot(stations=(), fetched_at=now).is_fallback

    def test_to_pandas(self, fallback_stations, now):
        pytest.importorskip("pandas")
        snapshot = Snapshot(stations=fallback_stations, fetched_at=now)

        df = snapshot.to_pandas()

        assert len(df) == 10
        assert list(df["station"])[:2] == ["Nagalagam Street", "Hanwella"]
        assert df["alert_level"].iloc[0] == "major_flood"
        assert str(df["measured_at"].dtype).startswith("datetime64")
        assert df["latitude"].isna().all()

    def test_to_pandas_empty(self, now):
        pytest.importorskip("pandas")
        df = Snapshot(stations=(), fetched_at=now).to_pandas()

        assert df.empty
        assert "rate_of_rise" in df.columns
