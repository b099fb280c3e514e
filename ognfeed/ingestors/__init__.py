"""Feed ingestors for ognfeed."""

from .aprs import (
    FeedConfig,
    FeedSession,
    FeedSessionError,
    SessionState,
    build_feed_config,
    build_login_line,
    open_feed_connection,
)
from .beacons import BeaconParseError, ParsedReport, PositionReport, parse_beacon

__all__ = [
    "BeaconParseError",
    "FeedConfig",
    "FeedSession",
    "FeedSessionError",
    "ParsedReport",
    "PositionReport",
    "SessionState",
    "build_feed_config",
    "build_login_line",
    "open_feed_connection",
    "parse_beacon",
]
