"""Application services."""

from .hubs import Defer, HubFanoutService
from .identifiers import IdentifierService
from .ingestion import SegmentIngestionService
from .playlist import PlaylistService
from .streams import StreamService

__all__ = [
    "Defer",
    "HubFanoutService",
    "IdentifierService",
    "PlaylistService",
    "SegmentIngestionService",
    "StreamService",
]
