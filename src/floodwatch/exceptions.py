"""
Exceptions for flood feed operations.

Every failure to fetch or decode the feed is a FloodFeedError, which is the
one error FloodDashboard.refresh() recovers from by using sample data.
"""

from typing import Optional


class FloodFeedError(Exception):
    """Failure fetching or parsing the telemetry feed."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class FeedConnectionError(FloodFeedError):
    """Network failure, timeout or non-2xx response from the feed."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, url=url)
        self.status_code = status_code


class FeedParseError(FloodFeedError):
    """Feed body is not JSON or not an object keyed by station."""
