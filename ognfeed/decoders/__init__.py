"""Decoders for vendor-specific payloads embedded in APRS comments."""

from .ogn import (
    IdentityFlags,
    IdentityPredicate,
    IdentityRecord,
    aircraft_type_is,
    decode_flags,
    decode_identity,
)

__all__ = [
    "IdentityFlags",
    "IdentityPredicate",
    "IdentityRecord",
    "aircraft_type_is",
    "decode_flags",
    "decode_identity",
]
