"""Events emitted by a feed session, one per classified input line."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ognfeed.domain import AddressType, AircraftType


class ServerComment(BaseModel):
    """Server status, keepalive or login response line (starts with ``#``)."""

    kind: Literal["server_comment"] = "server_comment"
    text: str = Field(..., description="Line as received from the server")

    model_config = ConfigDict(frozen=True)


class ParseError(BaseModel):
    """A beacon line the parser could not make sense of."""

    kind: Literal["parse_error"] = "parse_error"
    raw: str = Field(..., description="Line as received from the server")
    detail: str = Field(..., description="Parser error message")

    model_config = ConfigDict(frozen=True)


class UnknownData(BaseModel):
    """A well-formed record of a type that is not modelled as a position."""

    kind: Literal["unknown_data"] = "unknown_data"
    raw: str = Field(..., description="Line as received from the server")

    model_config = ConfigDict(frozen=True)


class DisplayLine(BaseModel):
    """Position report of a tracked aircraft that passed the identity filter."""

    kind: Literal["display_line"] = "display_line"
    timestamp: str = Field(
        ..., description="Canonical timestamp (DD/HH:MM, Today/HH:MM:SS, raw or ?)"
    )
    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")
    aircraft_type: AircraftType
    address_type: AddressType
    address: str = Field(..., description="Device address exactly as transmitted")
    source_call: str
    dest_call: str
    path: list[str] = Field(default_factory=list, description="Digipeater path calls")

    model_config = ConfigDict(frozen=True)


FeedEvent = Union[ServerComment, ParseError, UnknownData, DisplayLine]


__all__ = ["DisplayLine", "FeedEvent", "ParseError", "ServerComment", "UnknownData"]
