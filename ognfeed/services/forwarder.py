"""Forward feed events to an HTTP endpoint as JSON."""

from __future__ import annotations

import logging

import httpx

from ognfeed.models import FeedEvent

logger = logging.getLogger("ognfeed.forwarder")


class EventForwarder:
    """Post each event to ``events_path`` on the given client.

    Delivery problems are logged and never interrupt the feed.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        events_path: str = "/api/v1/events",
    ) -> None:
        self.http_client = http_client
        self.events_path = events_path

    async def __call__(self, event: FeedEvent) -> None:
        payload = event.model_dump(mode="json")
        try:
            response = await self.http_client.post(self.events_path, json=payload)
            if response.status_code >= 400:
                logger.warning(
                    "Failed to forward %s event: status=%s body=%s",
                    event.kind,
                    response.status_code,
                    response.text,
                )
        except httpx.RequestError as exc:
            logger.warning("Event forward failed: %s", exc)


__all__ = ["EventForwarder"]
