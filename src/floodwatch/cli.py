"""
Command-line front end: one refresh, printed as a text dashboard.
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from .client import FloodFeedClient
from .config import STALE_AFTER, FeedConfig
from .dashboard import FloodDashboard
from .models import Snapshot, Station
from .risk import (
    FILTER_LABELS,
    FILTER_MODES,
    StationStats,
    format_rate,
    is_stale,
    score,
)

DATA_SOURCE = (
    "Data source: Sri Lanka Irrigation Department - "
    "Hydrology and Disaster Management Division"
)


def format_stats(stats: StationStats) -> str:
    return (
        f"Total Stations: {stats.total} | Major Flood: {stats.major_flood} | "
        f"Minor Flood: {stats.minor_flood} | Alert Level: {stats.alert} | "
        f"Rising Fast: {stats.rising}"
    )


def format_card(
    station: Station,
    now: Optional[datetime] = None,
    max_age: timedelta = STALE_AFTER,
) -> str:
    """Render one station as a multi-line text card."""
    level = station.alert_level
    lines = [
        f"{station.station} ({station.river})  {level.icon} {level.label}  [risk {score(station)}]",
        f"  Water Level:    {station.level:.2f}m",
        f"  Rate of Change: {format_rate(station.rate_of_rise)} "
        + ("↑ rising" if station.is_rising else "↓ falling"),
    ]
    if station.has_location:
        lines.append(f"  Location:       {station.latitude:.4f}, {station.longitude:.4f}")
    if station.is_rapid_rise:
        lines.append("  ! Rapid rise detected!")
    measured = f"  Measured: {station.measured_at}"
    if is_stale(station, now=now, max_age=max_age):
        measured += "  (stale data)"
    lines.append(measured)
    return "\n".join(lines)


def render(
    snapshot: Snapshot,
    stations: List[Station],
    stats: StationStats,
    mode: str,
    max_age: timedelta = STALE_AFTER,
) -> str:
    """Render the stats header and station cards as text."""
    now = snapshot.fetched_at
    parts = [
        "Sri Lanka Flood Risk Dashboard",
        f"Last updated: {now.isoformat()}"
        + ("  (sample data, live feed unavailable)" if snapshot.is_fallback else ""),
        format_stats(stats),
        f"Filter: {FILTER_LABELS.get(mode, mode)}",
        "",
    ]
    if stations:
        parts.extend(format_card(s, now=now, max_age=max_age) + "\n" for s in stations)
    else:
        parts.append("No stations match the current filter\n")
    parts.append(DATA_SOURCE)
    return "\n".join(parts)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="floodwatch",
        description="Show Sri Lanka river stations ranked by flood risk.",
    )
    parser.add_argument(
        "--filter",
        dest="mode",
        default="all",
        choices=FILTER_MODES,
        help="Which stations to show (default: all)",
    )
    parser.add_argument("--url", help="Feed URL (overrides FLOODWATCH_FEED_URL)")
    parser.add_argument(
        "--timeout", type=float, help="Request timeout in seconds"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print stats and stations as JSON"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = FeedConfig.from_env()
    if args.url:
        config.url = args.url
    if args.timeout:
        config.timeout = args.timeout

    with FloodFeedClient.from_config(config) as client:
        dashboard = FloodDashboard(client, refresh_interval=config.refresh_interval)
        snapshot = dashboard.refresh()
        dashboard.select_filter(args.mode)
        stations = dashboard.visible_stations()
        stats = dashboard.stats()

    if args.json:
        payload = {
            "fetched_at": snapshot.fetched_at.isoformat(),
            "source": snapshot.source,
            "filter": args.mode,
            "stats": stats.to_dict(),
            "stations": [
                dict(
                    s.to_dict(),
                    risk_score=score(s),
                    stale=is_stale(
                        s, now=snapshot.fetched_at, max_age=config.stale_after
                    ),
                )
                for s in stations
            ],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(render(snapshot, stations, stats, args.mode, max_age=config.stale_after))

    return 0


if __name__ == "__main__":
    sys.exit(main())
