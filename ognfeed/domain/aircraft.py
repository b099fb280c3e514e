"""Aircraft and address type definitions carried in the OGN flags byte.

See ``AcftType`` in the FLARM DataPort Specification.
"""

from __future__ import annotations

from enum import Enum


class AircraftType(str, Enum):
    """Aircraft category encoded in bits 5..2 of the flags byte."""

    UNKNOWN = "Unknown"
    GLIDER = "Glider"
    TOW_PLANE = "TowPlane"
    HELICOPTER = "Helicopter"
    SKYDIVER = "Skydiver"
    DROP_PLANE = "DropPlane"
    HANGGLIDER = "Hangglider"
    PARAGLIDER = "Paraglider"
    POWERED_AIRCRAFT = "PoweredAircraft"
    JET_AIRCRAFT = "JetAircraft"
    BALLOON = "Balloon"
    AIRSHIP = "Airship"
    UAV = "Uav"
    STATIC = "Static"

    @classmethod
    def from_code(cls, code: int) -> "AircraftType":
        """Map a 4-bit aircraft code to its type; reserved codes are Unknown."""

        return _AIRCRAFT_CODES[code & 0x0F]

    @classmethod
    def from_name(cls, name: str) -> "AircraftType":
        """Look up a type by its display name, ignoring case."""

        wanted = name.strip().lower()
        for member in cls:
            if member.value.lower() == wanted or member.name.lower() == wanted:
                return member
        raise ValueError(f"Unknown aircraft type: {name!r}")

    def __str__(self) -> str:
        return self.value


# 0xA and 0xF are reserved and decode as Unknown.
_AIRCRAFT_CODES: tuple[AircraftType, ...] = (
    AircraftType.UNKNOWN,
    AircraftType.GLIDER,
    AircraftType.TOW_PLANE,
    AircraftType.HELICOPTER,
    AircraftType.SKYDIVER,
    AircraftType.DROP_PLANE,
    AircraftType.HANGGLIDER,
    AircraftType.PARAGLIDER,
    AircraftType.POWERED_AIRCRAFT,
    AircraftType.JET_AIRCRAFT,
    AircraftType.UNKNOWN,
    AircraftType.BALLOON,
    AircraftType.AIRSHIP,
    AircraftType.UAV,
    AircraftType.STATIC,
    AircraftType.UNKNOWN,
)


class AddressType(str, Enum):
    """Origin of the device address, encoded in bits 1..0 of the flags byte."""

    RANDOM = "Random"
    ICAO = "ICAO"
    FLARM = "FLARM"
    OGN = "OGN"

    @classmethod
    def from_code(cls, code: int) -> "AddressType":
        return _ADDRESS_CODES[code & 0x03]

    def __str__(self) -> str:
        return self.value


_ADDRESS_CODES: tuple[AddressType, ...] = (
    AddressType.RANDOM,
    AddressType.ICAO,
    AddressType.FLARM,
    AddressType.OGN,
)


__all__ = ["AddressType", "AircraftType"]
