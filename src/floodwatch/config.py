"""
Configuration for the flood feed client and dashboard.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_FEED_URL = (
    "https://raw.githubusercontent.com/nuuuwan/lk_irrigation/main/data/rwlds/latest.json"
)
DEFAULT_TIMEOUT = 30.0
DEFAULT_REFRESH_INTERVAL = 300.0  # 5 minutes
STALE_AFTER = timedelta(hours=24)

ENV_FEED_URL = "FLOODWATCH_FEED_URL"
ENV_TIMEOUT = "FLOODWATCH_TIMEOUT"
ENV_REFRESH_INTERVAL = "FLOODWATCH_REFRESH_INTERVAL"


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name)
    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={value!r}, using {default}")
        return default
    if parsed <= 0:
        logger.warning(f"Ignoring non-positive {name}={value!r}, using {default}")
        return default
    return parsed


@dataclass
class FeedConfig:
    """Settings for fetching and refreshing the station feed."""

    url: str = DEFAULT_FEED_URL
    timeout: float = DEFAULT_TIMEOUT
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    stale_after: timedelta = field(default=STALE_AFTER)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "FeedConfig":
        """
        Build a config from environment variables.

        Args:
            env: Mapping to read from; defaults to ``os.environ``

        Returns:
            FeedConfig with any valid overrides applied
        """
        if env is None:
            env = os.environ

        return cls(
            url=env.get(ENV_FEED_URL) or DEFAULT_FEED_URL,
            timeout=_env_float(env, ENV_TIMEOUT, DEFAULT_TIMEOUT),
            refresh_interval=_env_float(
                env, ENV_REFRESH_INTERVAL, DEFAULT_REFRESH_INTERVAL
            ),
        )
