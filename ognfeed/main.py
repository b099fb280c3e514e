"""Command line entry point: stream OGN beacons to the console."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import dataclasses
import logging
import sys
from typing import Awaitable, Callable, TextIO

import httpx

from ognfeed import __version__
from ognfeed.config import Settings, parse_aircraft_types, settings
from ognfeed.decoders import IdentityPredicate, aircraft_type_is
from ognfeed.ingestors import FeedSession, FeedSessionError, build_feed_config, open_feed_connection
from ognfeed.ingestors.aprs import Connector
from ognfeed.models import FeedEvent
from ognfeed.render import render_event
from ognfeed.services import EventForwarder

logger = logging.getLogger("ognfeed")

MAX_BACKOFF_SECONDS = 60


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ognfeed",
        description="Stream OGN tracker beacons from an APRS-IS server.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--host", help="APRS-IS server host")
    parser.add_argument("--port", type=int, help="APRS-IS server port")
    parser.add_argument("--user", help="Login callsign")
    parser.add_argument("--passcode", help="Login passcode (-1 for receive-only)")
    parser.add_argument("--filter", dest="aprs_filter", help="Server-side filter expression")
    parser.add_argument(
        "--aircraft-types",
        help="Comma separated aircraft types to show, or '*' for all",
    )
    parser.add_argument("--forward-url", help="Base URL to forward events to")
    parser.add_argument(
        "--reconnect",
        action="store_true",
        default=None,
        help="Reconnect with backoff when the stream ends or fails",
    )
    parser.add_argument("--log-level", help="Logging level")
    return parser


def apply_overrides(base: Settings, args: argparse.Namespace) -> Settings:
    """Return ``base`` with every option given on the command line applied."""

    overrides = {
        name: value
        for name, value in vars(args).items()
        if value is not None and hasattr(base, name)
    }
    return dataclasses.replace(base, **overrides)


def build_predicate(config: Settings) -> IdentityPredicate:
    return aircraft_type_is(*parse_aircraft_types(config.aircraft_types))


async def stream(
    config: Settings,
    *,
    connector: Connector = open_feed_connection,
    output: TextIO | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> int:
    """Run feed sessions until one ends and reconnecting is off.

    Returns the process exit code.
    """

    out = output if output is not None else sys.stdout
    predicate = build_predicate(config)
    feed_config = build_feed_config(config)

    async with contextlib.AsyncExitStack() as stack:
        forwarder: EventForwarder | None = None
        if config.forward_url:
            client = await stack.enter_async_context(
                httpx.AsyncClient(
                    base_url=config.forward_url,
                    timeout=config.forward_timeout,
                    transport=transport,
                )
            )
            forwarder = EventForwarder(http_client=client, events_path=config.forward_path)

        received = 0

        async def sink(event: FeedEvent) -> None:
            nonlocal received
            received += 1
            out.write(render_event(event) + "\n")
            out.flush()
            if forwarder is not None:
                await forwarder(event)

        backoff = 1
        while True:
            received = 0
            session = FeedSession(config=feed_config, predicate=predicate, connector=connector)
            try:
                await session.run(sink)
                logger.warning("APRS-IS stream ended")
            except FeedSessionError as exc:
                logger.error("Feed session failed: %s", exc)

            if not config.reconnect:
                return 1

            backoff = 1 if received else min(backoff * 2, MAX_BACKOFF_SECONDS)
            logger.info("Reconnecting in %s s", backoff)
            await sleep(backoff)


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    config = apply_overrides(settings, args)

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    try:
        return asyncio.run(stream(config))
    except ValueError as exc:
        sys.stderr.write(f"Invalid configuration: {exc}\n")
        return 2
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
