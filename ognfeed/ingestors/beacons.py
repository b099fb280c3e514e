"""Beacon line parsing on top of aprslib.

Splits an APRS-IS line into source/destination/path, timestamp, position and
comment. The grammar itself is aprslib's; this module only maps its output
onto the small set of types the feed session works with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Literal, Optional, Union

import aprslib
from aprslib.exceptions import ParseError as AprsParseError
from aprslib.exceptions import UnknownFormat

logger = logging.getLogger("ognfeed.ingestors.beacons")


@dataclass(frozen=True)
class DayHourMinute:
    """Absolute ``DDHHMM`` timestamp (day of month)."""

    day: int
    hour: int
    minute: int


@dataclass(frozen=True)
class HourMinuteSecond:
    """``HHMMSS`` timestamp relative to the current UTC day."""

    hour: int
    minute: int
    second: int


@dataclass(frozen=True)
class UnsupportedRaw:
    """Timestamp in a format that is passed through untouched."""

    raw: str


Timestamp = Union[DayHourMinute, HourMinuteSecond, UnsupportedRaw]


@dataclass
class PositionReport:
    """Position carrying beacon, as needed by the feed session."""

    timestamp: Optional[Timestamp]
    latitude: float
    longitude: float
    comment: str
    source_call: str
    dest_call: str
    path: list[str] = field(default_factory=list)


@dataclass
class ParsedReport:
    """Result of parsing one line: a position or a record type not modelled."""

    kind: Literal["position", "unknown"]
    position: Optional[PositionReport] = None


class BeaconParseError(Exception):
    """Raised when a line is not a structurally valid APRS record."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


BeaconParser = Callable[[str], ParsedReport]


def format_timestamp(timestamp: Optional[Timestamp]) -> str:
    """Render a timestamp for display; ``?`` when the beacon carried none."""

    if timestamp is None:
        return "?"
    if isinstance(timestamp, DayHourMinute):
        return f"{timestamp.day:02}/{timestamp.hour:02}:{timestamp.minute:02}"
    if isinstance(timestamp, HourMinuteSecond):
        return f"Today/{timestamp.hour:02}:{timestamp.minute:02}:{timestamp.second:02}"
    return timestamp.raw


def timestamp_from_raw(raw: str | None) -> Optional[Timestamp]:
    """Convert aprslib's ``raw_timestamp`` (six digits plus a format char)."""

    if not raw:
        return None
    digits, form = raw[:6], raw[6:]
    if len(digits) != 6 or not digits.isdigit():
        return UnsupportedRaw(raw)
    first, second, third = int(digits[0:2]), int(digits[2:4]), int(digits[4:6])
    if form == "h":
        return HourMinuteSecond(first, second, third)
    if form in ("z", "/"):
        return DayHourMinute(first, second, third)
    return UnsupportedRaw(raw)


def _position_from_packet(packet: dict[str, Any]) -> PositionReport:
    return PositionReport(
        timestamp=timestamp_from_raw(packet.get("raw_timestamp")),
        latitude=float(packet["latitude"]),
        longitude=float(packet["longitude"]),
        comment=packet.get("comment") or "",
        source_call=packet.get("from", ""),
        dest_call=packet.get("to", ""),
        path=list(packet.get("path") or []),
    )


def parse_beacon(line: str) -> ParsedReport:
    """Parse a single APRS-IS line.

    Raises ``BeaconParseError`` for malformed lines. Records aprslib does not
    know, or that carry no position, come back as ``kind="unknown"``.
    """

    try:
        packet = aprslib.parse(line)
    except UnknownFormat as exc:
        logger.debug("Unsupported APRS format: %s", exc)
        return ParsedReport(kind="unknown")
    except AprsParseError as exc:
        raise BeaconParseError(str(exc)) from exc

    if packet.get("latitude") is None or packet.get("longitude") is None:
        return ParsedReport(kind="unknown")

    return ParsedReport(kind="position", position=_position_from_packet(packet))


__all__ = [
    "BeaconParseError",
    "BeaconParser",
    "DayHourMinute",
    "HourMinuteSecond",
    "ParsedReport",
    "PositionReport",
    "Timestamp",
    "UnsupportedRaw",
    "format_timestamp",
    "parse_beacon",
    "timestamp_from_raw",
]
