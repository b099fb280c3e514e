"""Decoder for the OGN tracker identity token (``idXXYYYYYY``) in beacon comments.

The token is the literal ``id`` marker, two hex digits holding the flags byte,
then the device address. Flags byte layout::

    bit 7     stealth mode
    bit 6     no tracking
    bits 5..2 aircraft type
    bits 1..0 address type
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from ognfeed.domain import AddressType, AircraftType

ID_MARKER = "id"

_FLAGS_RE = re.compile(r"[0-9A-Fa-f]{2}")


@dataclass(frozen=True)
class IdentityFlags:
    stealth_mode: bool
    no_tracking: bool
    aircraft_type: AircraftType
    address_type: AddressType


@dataclass(frozen=True)
class IdentityRecord:
    """Tracker identity recovered from a single comment."""

    address: str
    flags: IdentityFlags

    @property
    def aircraft_type(self) -> AircraftType:
        return self.flags.aircraft_type

    @property
    def address_type(self) -> AddressType:
        return self.flags.address_type


IdentityPredicate = Callable[[IdentityRecord], bool]


def decode_flags(value: int) -> IdentityFlags:
    """Split a flags byte into its fields. Total over 0..255."""

    return IdentityFlags(
        stealth_mode=bool(value & 0b10000000),
        no_tracking=bool(value & 0b01000000),
        aircraft_type=AircraftType.from_code((value & 0b00111100) >> 2),
        address_type=AddressType.from_code(value & 0b00000011),
    )


def decode_identity(comment: str) -> IdentityRecord | None:
    """Return the identity carried by ``comment``, or ``None`` if there is none.

    Only the first space-separated token starting with ``id`` is considered.
    A comment without such a token, or whose token has no valid two-digit hex
    flags, is not an error: most non-tracker beacons simply do not carry one.
    """

    token = next(
        (part for part in comment.split(" ") if part.startswith(ID_MARKER)), None
    )
    if token is None:
        return None

    start = len(ID_MARKER)
    raw_flags = token[start : start + 2]
    if not _FLAGS_RE.fullmatch(raw_flags):
        return None

    # The address is kept verbatim; leading zeros are part of the device id.
    return IdentityRecord(
        address=token[start + 2 :],
        flags=decode_flags(int(raw_flags, 16)),
    )


def aircraft_type_is(*types: AircraftType) -> IdentityPredicate:
    """Build a predicate accepting identities of any of the given types.

    With no types given, every decoded identity is accepted.
    """

    wanted = frozenset(types)

    def predicate(record: IdentityRecord) -> bool:
        return not wanted or record.aircraft_type in wanted

    return predicate


__all__ = [
    "ID_MARKER",
    "IdentityFlags",
    "IdentityPredicate",
    "IdentityRecord",
    "aircraft_type_is",
    "decode_flags",
    "decode_identity",
]
