"""
Snapshot state container with periodic refresh.

FloodDashboard owns the current station snapshot and the selected filter
mode. The snapshot is only replaced by ``refresh()``, which the injected
scheduler calls on a fixed interval.
"""

import logging
import threading
from datetime import datetime
from typing import Any, Callable, List, Optional, Protocol

from .client import FloodFeedClient
from .config import DEFAULT_REFRESH_INTERVAL
from .exceptions import FloodFeedError
from .models import Snapshot, Station
from .risk import FILTER_ALL, StationStats, filter_and_sort, get_stats
from .sample import sample_stations
from .utils import utc_now

logger = logging.getLogger(__name__)


class ScheduledTask(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs a callback repeatedly every ``interval`` seconds."""

    def schedule(self, interval: float, callback: Callable[[], Any]) -> ScheduledTask: ...


class _RepeatingTimer:
    """Background thread calling ``callback`` every ``interval`` seconds."""

    def __init__(self, interval: float, callback: Callable[[], Any]):
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name="floodwatch-refresh", daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self.callback()
            except Exception as e:
                logger.error(f"Scheduled refresh failed: {e}", exc_info=True)

    def cancel(self) -> None:
        self._stopped.set()


class ThreadingScheduler:
    """Scheduler backed by a daemon thread per scheduled callback."""

    def schedule(self, interval: float, callback: Callable[[], Any]) -> _RepeatingTimer:
        return _RepeatingTimer(interval, callback)


class FloodDashboard:
    """
    Holds the current station snapshot and filter selection.

    Example:
        >>> with FloodFeedClient() as client:
        ...     dashboard = FloodDashboard(client)
        ...     dashboard.refresh()
        ...     dashboard.select_filter("risk")
        ...     for station in dashboard.visible_stations():
        ...         print(station.station, station.alert_level.label)
    """

    def __init__(
        self,
        client: FloodFeedClient,
        scheduler: Optional[Scheduler] = None,
        clock: Optional[Callable[[], datetime]] = None,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
    ):
        self.client = client
        self.scheduler = scheduler or ThreadingScheduler()
        self.clock = clock or utc_now
        self.refresh_interval = refresh_interval
        self.filter_mode = FILTER_ALL
        self._snapshot: Optional[Snapshot] = None
        self._task: Optional[ScheduledTask] = None

    @property
    def snapshot(self) -> Optional[Snapshot]:
        """The current snapshot, or None before the first refresh."""
        return self._snapshot

    @property
    def last_update(self) -> Optional[datetime]:
        return self._snapshot.fetched_at if self._snapshot else None

    @property
    def stations(self) -> List[Station]:
        return list(self._snapshot) if self._snapshot else []

    def refresh(self) -> Snapshot:
        """
        Fetch the feed and replace the snapshot.

        Any fetch or parse failure is logged and the fixed sample dataset is
        used instead, so this never raises a feed error.

        Returns:
            The new snapshot
        """
        now = self.clock()
        try:
            stations = self.client.fetch_stations(now=now)
            snapshot = Snapshot(stations=stations, fetched_at=now, source="live")
        except FloodFeedError as e:
            logger.warning(f"Error fetching station feed, using sample data: {e}")
            snapshot = Snapshot(
                stations=sample_stations(now), fetched_at=now, source="fallback"
            )

        self._snapshot = snapshot
        logger.info(
            f"Loaded {len(snapshot)} stations ({snapshot.source}) at {now.isoformat()}"
        )
        return snapshot

    def select_filter(self, mode: str) -> None:
        self.filter_mode = mode

    def visible_stations(self) -> List[Station]:
        """Stations matching the selected filter, highest risk first."""
        return filter_and_sort(self.stations, self.filter_mode)

    def stats(self) -> StationStats:
        """Counts over the full snapshot, ignoring the filter."""
        return get_stats(self.stations)

    def start(self) -> Snapshot:
        """Load the first snapshot and schedule periodic refreshes."""
        snapshot = self.refresh()
        if self._task is None:
            self._task = self.scheduler.schedule(self.refresh_interval, self.refresh)
        return snapshot

    def stop(self) -> None:
        """Cancel periodic refreshes."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
