"""APRS-IS feed session for OGN tracker beacons."""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass
from enum import Enum
import logging
import socket
from typing import TYPE_CHECKING, AsyncIterator, Awaitable, Callable

from ognfeed.decoders import IdentityPredicate, IdentityRecord, aircraft_type_is, decode_identity
from ognfeed.domain import AircraftType
from ognfeed.ingestors.beacons import (
    BeaconParseError,
    BeaconParser,
    format_timestamp,
    parse_beacon,
)
from ognfeed.models import DisplayLine, FeedEvent, ParseError, ServerComment, UnknownData

if TYPE_CHECKING:
    from ognfeed.config import Settings

logger = logging.getLogger("ognfeed.ingestors.aprs")


@dataclass
class FeedConfig:
    """Connection and login parameters for one feed session."""

    host: str
    port: int
    user: str
    passcode: str
    app_name: str
    app_version: str
    aprs_filter: str | None = None
    filter_center_lat: float | None = None
    filter_center_lon: float | None = None
    filter_radius_km: float | None = None
    tcp_nodelay: bool = True

    def build_filter(self) -> str:
        if self.aprs_filter:
            return self.aprs_filter
        if (
            self.filter_center_lat is not None
            and self.filter_center_lon is not None
            and self.filter_radius_km is not None
        ):
            return "r/{lat}/{lon}/{radius}".format(
                lat=self.filter_center_lat,
                lon=self.filter_center_lon,
                radius=self.filter_radius_km,
            )
        raise ValueError("A server-side filter or a filter centre and radius is required")


def build_login_line(config: FeedConfig) -> str:
    """Return the APRS-IS login line, CR LF terminated."""

    tokens = {
        "user": config.user,
        "pass": config.passcode,
        "app name": config.app_name,
        "app version": config.app_version,
        "filter": config.build_filter(),
    }
    for name, value in tokens.items():
        if not value or any(ch.isspace() for ch in value):
            raise ValueError(f"Login {name} must be a single non-empty token: {value!r}")

    return (
        f"user {tokens['user']} pass {tokens['pass']} "
        f"vers {tokens['app name']} {tokens['app version']} "
        f"filter {tokens['filter']}\r\n"
    )


def build_feed_config(settings: Settings) -> FeedConfig:
    """Build the session configuration from application settings."""

    return FeedConfig(
        host=settings.host,
        port=settings.port,
        user=settings.user,
        passcode=settings.passcode,
        app_name=settings.app_name,
        app_version=settings.app_version,
        aprs_filter=settings.aprs_filter,
        filter_center_lat=settings.filter_center_lat,
        filter_center_lon=settings.filter_center_lon,
        filter_radius_km=settings.filter_radius_km,
        tcp_nodelay=settings.tcp_nodelay,
    )


StreamPair = tuple[asyncio.StreamReader, asyncio.StreamWriter]
Connector = Callable[[FeedConfig], Awaitable[StreamPair]]
EventSink = Callable[[FeedEvent], Awaitable[None]]


async def open_feed_connection(config: FeedConfig) -> StreamPair:
    """Open the TCP stream to the APRS-IS server."""

    reader, writer = await asyncio.open_connection(config.host, config.port)
    if config.tcp_nodelay:
        sock = writer.get_extra_info("socket")
        try:
            if sock is not None:
                sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        except OSError as exc:
            logger.warning("Could not set TCP_NODELAY on socket: %s", exc)
    logger.info("Connected to %s", writer.get_extra_info("peername"))
    return reader, writer


class SessionState(str, Enum):
    CONNECTING = "connecting"
    AUTHENTICATING = "authenticating"
    STREAMING = "streaming"
    CLOSED = "closed"


class FeedSessionError(Exception):
    """Transport failure that ended a feed session."""


class LineTooLongError(Exception):
    """A received line was longer than the stream reader accepts."""


class FeedSession:
    """One authenticated, long-lived APRS-IS connection turned into events.

    ``events()`` yields one event per received line, in order, except for
    position reports whose identity is missing or rejected by ``predicate``,
    which are dropped. The sequence is consumed once; the connection is closed
    when it ends, fails, or the consumer stops iterating.
    """

    def __init__(
        self,
        *,
        config: FeedConfig,
        predicate: IdentityPredicate | None = None,
        parser: BeaconParser = parse_beacon,
        connector: Connector = open_feed_connection,
        decoder: Callable[[str], IdentityRecord | None] = decode_identity,
    ) -> None:
        self.config = config
        self.predicate = predicate or aircraft_type_is(AircraftType.PARAGLIDER)
        self.parser = parser
        self.connector = connector
        self.decoder = decoder
        self.login_line = build_login_line(config)
        self.state = SessionState.CONNECTING
        self._consumed = False

    def classify_line(self, line: str) -> FeedEvent | None:
        """Turn one received line into an event, or ``None`` if filtered out."""

        if line.startswith("#"):
            return ServerComment(text=line)

        try:
            report = self.parser(line)
        except BeaconParseError as exc:
            logger.debug("Unparseable beacon %r: %s", line, exc.detail)
            return ParseError(raw=line, detail=exc.detail)

        position = report.position
        if report.kind != "position" or position is None:
            return UnknownData(raw=line)

        identity = self.decoder(position.comment)
        if identity is None or not self.predicate(identity):
            return None

        return DisplayLine(
            timestamp=format_timestamp(position.timestamp),
            latitude=position.latitude,
            longitude=position.longitude,
            aircraft_type=identity.aircraft_type,
            address_type=identity.address_type,
            address=identity.address,
            source_call=position.source_call,
            dest_call=position.dest_call,
            path=list(position.path),
        )

    async def events(self) -> AsyncIterator[FeedEvent]:
        """Connect, log in and yield events until the stream ends."""

        if self._consumed:
            raise RuntimeError("A feed session can only be consumed once")
        self._consumed = True

        writer: asyncio.StreamWriter | None = None
        try:
            try:
                reader, writer = await self.connector(self.config)
            except OSError as exc:
                raise FeedSessionError(
                    f"Could not connect to {self.config.host}:{self.config.port}: {exc}"
                ) from exc

            self.state = SessionState.AUTHENTICATING
            await self._send_login(writer)

            self.state = SessionState.STREAMING
            while True:
                try:
                    line = await self._read_line(reader)
                except LineTooLongError as exc:
                    logger.warning("Dropped over-long line from APRS-IS: %s", exc)
                    yield ParseError(raw="", detail=str(exc))
                    continue
                if line is None:
                    logger.info("APRS-IS server closed the stream")
                    break
                event = self.classify_line(line)
                if event is not None:
                    yield event
        finally:
            self.state = SessionState.CLOSED
            if writer is not None:
                writer.close()
                with contextlib.suppress(Exception):  # pragma: no cover - best effort close
                    await writer.wait_closed()
                logger.info(
                    "APRS-IS connection to %s:%s closed", self.config.host, self.config.port
                )

    async def run(self, sink: EventSink) -> None:
        """Deliver every event to ``sink``, awaiting each before the next read."""

        async with contextlib.aclosing(self.events()) as events:
            async for event in events:
                await sink(event)

    async def _send_login(self, writer: asyncio.StreamWriter) -> None:
        logger.info(
            "Logging in to APRS-IS as %s with filter %s",
            self.config.user,
            self.config.build_filter(),
        )
        try:
            writer.write(self.login_line.encode())
            await writer.drain()
        except OSError as exc:
            raise FeedSessionError(f"Could not send login line: {exc}") from exc

    async def _read_line(self, reader: asyncio.StreamReader) -> str | None:
        try:
            data = await reader.readline()
        except ValueError as exc:
            # The reader has already discarded the offending line.
            raise LineTooLongError(f"Line exceeds the read limit: {exc}") from exc
        except OSError as exc:
            raise FeedSessionError(f"Failed reading from APRS-IS: {exc}") from exc

        if not data:
            return None
        if not data.endswith(b"\n"):
            logger.debug("Discarding incomplete line at end of stream: %r", data)
            return None
        return data.decode("utf-8", errors="replace").rstrip("\r\n")


__all__ = [
    "Connector",
    "EventSink",
    "FeedConfig",
    "FeedSession",
    "FeedSessionError",
    "LineTooLongError",
    "SessionState",
    "build_feed_config",
    "build_login_line",
    "open_feed_connection",
]
