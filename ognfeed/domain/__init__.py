"""Aircraft identity enumerations for OGN tracker beacons."""

from .aircraft import AddressType, AircraftType

__all__ = ["AddressType", "AircraftType"]
