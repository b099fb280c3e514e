#!/usr/bin/env python
"""
Run this to exercise a feed session against the live OGN APRS-IS servers.

This script will:
  * Connect to the server configured in your environment (OGN_HOST/OGN_PORT)
  * Log in receive-only with the configured filter
  * Print every event for a fixed amount of time, including filtered-in beacons
  * Log a per-kind summary when done

Usage (from repo root):

    OGN_FILTER=r/47.217/8.804/100 OGN_AIRCRAFT_TYPES='*' python scripts/tests/run_feed_live_test.py
"""

from __future__ import annotations

import asyncio
import contextlib
from collections import Counter
import logging

from ognfeed.config import settings
from ognfeed.ingestors import FeedSession, FeedSessionError, build_feed_config
from ognfeed.main import build_predicate
from ognfeed.models import FeedEvent
from ognfeed.render import render_event

logger = logging.getLogger("ognfeed.scripts.feed_live_test")


async def main() -> None:
    # How long to run the live feed test.
    duration_seconds = 60

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = build_feed_config(settings)
    print(
        f"\nStarting OGN feed live test for {duration_seconds} seconds "
        f"against {config.host}:{config.port} as {config.user!r} "
        f"with filter {config.build_filter()!r}\n"
    )

    counts: Counter[str] = Counter()

    async def sink(event: FeedEvent) -> None:
        counts[event.kind] += 1
        print(render_event(event), flush=True)

    session = FeedSession(config=config, predicate=build_predicate(settings))
    task = asyncio.create_task(session.run(sink))

    try:
        await asyncio.wait_for(asyncio.shield(task), timeout=duration_seconds)
    except asyncio.TimeoutError:
        pass
    except FeedSessionError as exc:
        logger.error("Feed session failed: %s", exc)
    finally:
        print("\nStopping OGN feed live test, cancelling session task...")
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError, FeedSessionError):
            await task

    logger.info("Events received: %s", dict(counts))
    print("OGN feed live test complete.\n")


if __name__ == "__main__":
    asyncio.run(main())
