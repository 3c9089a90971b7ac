"""
River water-level telemetry client with flood risk scoring.

Fetch the Sri Lanka river gauge feed, rank stations by flood risk and
summarize a snapshot.
"""

try:
    from importlib import metadata

    __version__ = metadata.version(__name__)
except Exception:
    __version__ = "unknown"

from .client import FloodFeedClient
from .config import (
    DEFAULT_FEED_URL,
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_TIMEOUT,
    STALE_AFTER,
    FeedConfig,
)
from .dashboard import FloodDashboard, Scheduler, ThreadingScheduler
from .exceptions import FeedConnectionError, FeedParseError, FloodFeedError
from .models import AlertLevel, Snapshot, Station, make_station
from .normalize import normalize_feed, normalize_station
from .risk import (
    FILTER_LABELS,
    FILTER_MODES,
    StationStats,
    filter_and_sort,
    filter_stations,
    format_rate,
    get_stats,
    is_stale,
    matches_filter,
    score,
)
from .sample import sample_stations

__all__ = [
    # Client and state
    "FloodFeedClient",
    "FloodDashboard",
    "Scheduler",
    "ThreadingScheduler",
    # Configuration
    "FeedConfig",
    "DEFAULT_FEED_URL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_REFRESH_INTERVAL",
    "STALE_AFTER",
    # Models
    "AlertLevel",
    "Station",
    "Snapshot",
    "make_station",
    # Normalization
    "normalize_station",
    "normalize_feed",
    "sample_stations",
    # Risk scoring and filtering
    "score",
    "matches_filter",
    "filter_stations",
    "filter_and_sort",
    "get_stats",
    "is_stale",
    "format_rate",
    "StationStats",
    "FILTER_MODES",
    "FILTER_LABELS",
    # Exceptions
    "FloodFeedError",
    "FeedConnectionError",
    "FeedParseError",
]
