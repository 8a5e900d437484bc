"""Domain models."""

from .stream import Hub, Segment, Stream

__all__ = ["Hub", "Segment", "Stream"]
