"""Pydantic models for feed session output."""

from .events import DisplayLine, FeedEvent, ParseError, ServerComment, UnknownData

__all__ = [
    "DisplayLine",
    "FeedEvent",
    "ParseError",
    "ServerComment",
    "UnknownData",
]
