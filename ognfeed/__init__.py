"""Streaming APRS-IS client for OGN glider and paraglider tracking beacons."""

__version__ = "0.1.0"
