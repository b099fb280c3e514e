import json

import httpx
import pytest

from ognfeed.domain import AddressType, AircraftType
from ognfeed.models import DisplayLine, ServerComment
from ognfeed.services import EventForwarder


@pytest.mark.anyio
async def test_forwarder_posts_event_json():
    captured: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(201, json={"status": "ok"})

    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        forwarder = EventForwarder(http_client=client, events_path="/api/v1/events")
        await forwarder(
            DisplayLine(
                timestamp="05/14:30",
                latitude=47.0,
                longitude=8.0,
                aircraft_type=AircraftType.PARAGLIDER,
                address_type=AddressType.FLARM,
                address="DD1234",
                source_call="FLRDD1234",
                dest_call="APRS",
                path=["qAS", "RECV"],
            )
        )

    assert len(captured) == 1
    assert captured[0].url.path == "/api/v1/events"
    body = json.loads(captured[0].content.decode())
    assert body["kind"] == "display_line"
    assert body["aircraft_type"] == "Paraglider"
    assert body["address_type"] == "FLARM"
    assert body["address"] == "DD1234"
    assert body["path"] == ["qAS", "RECV"]


@pytest.mark.anyio
async def test_forwarder_logs_http_errors(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        forwarder = EventForwarder(http_client=client)
        await forwarder(ServerComment(text="#keepalive"))

    assert "status=503" in caplog.text


@pytest.mark.anyio
async def test_forwarder_swallows_request_errors(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        forwarder = EventForwarder(http_client=client)
        await forwarder(ServerComment(text="#keepalive"))

    assert "Event forward failed" in caplog.text
