"""Plain-text rendering of feed events for the console."""

from __future__ import annotations

from ognfeed.models import DisplayLine, FeedEvent, ParseError, ServerComment, UnknownData


def _render_path(path: list[str]) -> str:
    return "[" + ", ".join(f'"{call}"' for call in path) + "]"


def render_event(event: FeedEvent) -> str:
    """Return the single console line for ``event`` (without newline)."""

    if isinstance(event, ServerComment):
        return event.text
    if isinstance(event, UnknownData):
        return f"Unknown data: {event.raw}"
    if isinstance(event, ParseError):
        return f"Err: {event.detail}"
    if isinstance(event, DisplayLine):
        return (
            f"{event.timestamp}: {event.latitude:.6f}/{event.longitude:.6f} "
            f"({event.aircraft_type} {event.address_type} {event.address} "
            f"from {event.source_call} to {event.dest_call} "
            f"via {_render_path(event.path)})"
        )
    raise TypeError(f"Unsupported event type: {type(event).__name__}")


__all__ = ["render_event"]
