"""Downstream services fed by the feed session."""

from .forwarder import EventForwarder

__all__ = ["EventForwarder"]
