"""Relay error kinds.

Every kind carries a human readable message. The HTTP layer renders all of
them the same way (404 with the message as a plain text body), so the kinds
exist for logging and for the code paths that recover from them.
"""

from typing import Any, Dict, Optional


class RelayError(Exception):
    """Base exception for relay operations."""

    error_code = "RELAY_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidRequest(RelayError):
    """Malformed headers, missing body, malformed hub URL or unreadable upload."""

    error_code = "INVALID_REQUEST"


class UnknownStream(RelayError):
    """An identifier did not resolve to a stream."""

    error_code = "UNKNOWN_STREAM"

    def __init__(self, message: str = "Unknown stream", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class InvalidPath(RelayError):
    """The request path matches no recognized shape."""

    error_code = "INVALID_PATH"

    def __init__(self, message: str = "Invalid path", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class UpstreamWriteFailure(RelayError):
    """Segment metadata could not be registered after its file was written."""

    error_code = "UPSTREAM_WRITE_FAILURE"

    def __init__(self, segment_id: str, stream_public_id: str):
        super().__init__(
            f"Failed to create segment entry {segment_id} for {stream_public_id}",
            {"segment_id": segment_id, "stream_public_id": stream_public_id},
        )
