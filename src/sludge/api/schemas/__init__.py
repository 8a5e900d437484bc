"""Request/response schemas."""

from .streams import SegmentResponse, StreamResponse

__all__ = ["SegmentResponse", "StreamResponse"]
