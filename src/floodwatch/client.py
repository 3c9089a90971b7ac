"""
HTTP client for the river water-level telemetry feed.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

import httpx

from . import __version__
from .config import DEFAULT_FEED_URL, DEFAULT_TIMEOUT, FeedConfig
from .exceptions import FeedConnectionError, FeedParseError
from .models import Station
from .normalize import normalize_feed

logger = logging.getLogger(__name__)


class FloodFeedClient:
    """
    Client for the Sri Lanka Irrigation Department river water-level feed.

    The feed is published as a single JSON object keyed by station
    identifier, mirrored from https://github.com/nuuuwan/lk_irrigation.
    """

    def __init__(
        self,
        url: str = DEFAULT_FEED_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._client = http_client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers={
                "User-Agent": f"floodwatch/{__version__}",
                "Accept": "application/json",
            },
        )

    @classmethod
    def from_config(cls, config: FeedConfig) -> "FloodFeedClient":
        return cls(url=config.url, timeout=config.timeout)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "FloodFeedClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def fetch_raw(self) -> Dict[str, Any]:
        """
        Download and decode the feed.

        Returns:
            Decoded JSON object keyed by station identifier

        Raises:
            FeedConnectionError: On timeout, network failure or non-2xx status
            FeedParseError: If the body is not a JSON object
        """
        logger.debug(f"Fetching station feed from {self.url}")

        try:
            response = self._client.get(self.url)
            response.raise_for_status()
            data = response.json()

        except httpx.TimeoutException as e:
            raise FeedConnectionError(
                f"Request timeout after {self.timeout}s", url=self.url
            ) from e
        except httpx.HTTPStatusError as e:
            raise FeedConnectionError(
                f"HTTP error {e.response.status_code} fetching {self.url}",
                url=self.url,
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise FeedConnectionError(f"Network error: {e}", url=self.url) from e
        except json.JSONDecodeError as e:
            raise FeedParseError(f"Invalid JSON response: {e}", url=self.url) from e

        if not isinstance(data, dict):
            raise FeedParseError(
                f"Expected a JSON object keyed by station, got {type(data).__name__}",
                url=self.url,
            )
        return data

    def fetch_stations(self, now: Optional[datetime] = None) -> Tuple[Station, ...]:
        """
        Fetch the feed and normalize it into Stations.

        Args:
            now: Reference time for defaulted reading timestamps

        Returns:
            Tuple of Station objects in feed order
        """
        stations = normalize_feed(self.fetch_raw(), now=now)
        logger.debug(f"Fetched {len(stations)} stations from feed")
        return stations
