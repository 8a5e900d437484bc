"""Repository implementations."""

from .hub import HubRepository
from .segment import SegmentRepository
from .stream import StreamRepository

__all__ = [
    "HubRepository",
    "SegmentRepository",
    "StreamRepository",
]
