import asyncio

import pytest

from ognfeed.ingestors import FeedConfig


@pytest.fixture
def anyio_backend():
    return "asyncio"


class RecordingWriter:
    """Stand-in for asyncio.StreamWriter that keeps what was written."""

    def __init__(self) -> None:
        self.buffer = bytearray()
        self.closed = False

    def write(self, data: bytes) -> None:
        self.buffer.extend(data)

    async def drain(self) -> None:
        return None

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        return None

    def get_extra_info(self, name, default=None):
        return default


class FakeServer:
    """Connector serving canned bytes and recording the client's writes."""

    def __init__(self, data: bytes = b"", *, eof: bool = True, error: Exception | None = None):
        self.data = data
        self.eof = eof
        self.error = error
        self.writer = RecordingWriter()
        self.connects = 0

    async def __call__(self, config: FeedConfig):
        self.connects += 1
        reader = asyncio.StreamReader()
        if self.data:
            reader.feed_data(self.data)
        if self.error is not None:
            reader.set_exception(self.error)
        elif self.eof:
            reader.feed_eof()
        return reader, self.writer


@pytest.fixture
def feed_config() -> FeedConfig:
    return FeedConfig(
        host="aprs.example.test",
        port=14580,
        user="N0CALL",
        passcode="-1",
        app_name="ognfeed",
        app_version="0.1.0",
        aprs_filter="r/47.217/8.804/30",
    )


@pytest.fixture
def make_server():
    return FakeServer
