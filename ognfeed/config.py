"""Configuration settings for the ognfeed client."""

from __future__ import annotations

import os
from dataclasses import dataclass

from ognfeed import __version__
from ognfeed.domain import AircraftType

DEFAULT_FILTER = "r/47.217/8.804/30"  # 30 km around Rapperswil


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def _get_float(env_var: str) -> float | None:
    value = os.getenv(env_var)
    return float(value) if value else None


def _default_filter() -> str | None:
    centre = ("OGN_FILTER_CENTER_LAT", "OGN_FILTER_CENTER_LON", "OGN_FILTER_RADIUS_KM")
    if all(os.getenv(name) for name in centre):
        return None
    return DEFAULT_FILTER


def parse_aircraft_types(value: str) -> tuple[AircraftType, ...]:
    """Parse a comma separated list of aircraft type names.

    ``*`` selects every type and is returned as an empty tuple.
    """

    names = [part.strip() for part in value.split(",") if part.strip()]
    if not names:
        raise ValueError("At least one aircraft type (or '*') is required")
    if names == ["*"]:
        return ()
    return tuple(AircraftType.from_name(name) for name in names)


@dataclass
class Settings:
    """Client configuration loaded from environment variables."""

    log_level: str = os.getenv("OGN_LOG_LEVEL", "INFO")

    # APRS-IS server and login
    host: str = os.getenv("OGN_HOST", "aprs.glidernet.org")
    port: int = int(os.getenv("OGN_PORT", "14580"))  # filtered port
    user: str = os.getenv("OGN_USER", "bolOGNese")
    passcode: str = os.getenv("OGN_PASSCODE", "-1")  # receive-only
    app_name: str = os.getenv("OGN_APP_NAME", "ognfeed")
    app_version: str = os.getenv("OGN_APP_VERSION", __version__)
    tcp_nodelay: bool = _get_bool("OGN_TCP_NODELAY", default=True)
    reconnect: bool = _get_bool("OGN_RECONNECT")

    # Server-side filter; centre/radius is used when no explicit filter is set
    filter_center_lat: float | None = _get_float("OGN_FILTER_CENTER_LAT")
    filter_center_lon: float | None = _get_float("OGN_FILTER_CENTER_LON")
    filter_radius_km: float | None = _get_float("OGN_FILTER_RADIUS_KM")
    aprs_filter: str | None = os.getenv("OGN_FILTER") or _default_filter()

    # Identity filter
    aircraft_types: str = os.getenv("OGN_AIRCRAFT_TYPES", "Paraglider")

    # Optional event forwarding
    forward_url: str | None = os.getenv("OGN_FORWARD_URL") or None
    forward_path: str = os.getenv("OGN_FORWARD_PATH", "/api/v1/events")
    forward_timeout: float = float(os.getenv("OGN_FORWARD_TIMEOUT", "15"))


settings = Settings()

__all__ = ["DEFAULT_FILTER", "Settings", "parse_aircraft_types", "settings"]
