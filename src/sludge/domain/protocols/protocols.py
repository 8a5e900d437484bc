"""Domain protocols - interfaces for dependency inversion."""

from typing import Optional, Protocol

from ..models.stream import Hub, Segment, Stream


class MetadataStore(Protocol):
    """Source of truth for stream, segment and hub records.

    Implementations must not cache across calls; every call reads or writes
    through to the backing store.
    """

    async def create_stream(self, stream: Stream) -> Stream:
        """Persist a new stream."""
        ...

    async def get_stream(self, admin_id: str) -> Optional[Stream]:
        """Get stream by admin identifier."""
        ...

    async def get_stream_by_public_id(self, public_id: str) -> Optional[Stream]:
        """Get stream by public identifier."""
        ...

    async def add_segment(self, segment: Segment) -> Segment:
        """Append a segment to its stream's playlist."""
        ...

    async def list_segments(
        self, public_id: str, after_segment_id: Optional[str] = None
    ) -> list[Segment]:
        """List segments in creation order, optionally after a cursor segment."""
        ...

    async def add_hub(self, hub: Hub) -> Hub:
        """Register a hub for a stream."""
        ...

    async def remove_hub(self, admin_id: str, hub_id: str) -> bool:
        """Remove a hub registration. Returns whether one was removed."""
        ...

    async def list_hubs(self, admin_id: str) -> list[Hub]:
        """List hub registrations of a stream."""
        ...


class AudioStorage(Protocol):
    """Storage for segment payloads."""

    def segment_key(self, public_id: str, segment_id: str) -> str:
        """Storage-relative key of a segment payload."""
        ...

    async def write(self, key: str, data: bytes) -> None:
        """Write payload bytes under key."""
        ...

    def url_for(self, key: str) -> str:
        """Public URL a key is served under."""
        ...


class HubNotifier(Protocol):
    """Outbound delivery to downstream hubs."""

    async def announce(self, hub_url: str, stream: Stream, playlist_url: str) -> None:
        """Tell a hub that a stream has connected to it."""
        ...

    async def notify_segment(self, hub_url: str, stream: Stream, segment: Segment) -> None:
        """Tell a hub about a new segment."""
        ...
