"""Playlist queries by public stream identifier."""

from typing import Optional

from ...domain.exceptions import UnknownStream
from ...domain.models.stream import Segment
from ...domain.protocols import MetadataStore


class PlaylistService:
    """Read side of a stream: its segments in creation order."""

    def __init__(self, store: MetadataStore):
        self.store = store

    async def segments(
        self, public_id: str, after_segment_id: Optional[str] = None
    ) -> list[Segment]:
        """List a stream's segments, optionally only those after a cursor.

        An unknown cursor is treated as absent and yields the full list.

        Args:
            public_id: Public identifier of the stream.
            after_segment_id: Segment to resume after.

        Raises:
            UnknownStream: If public_id does not resolve to a stream.
        """
        stream = await self.store.get_stream_by_public_id(public_id)
        if stream is None:
            raise UnknownStream()

        return await self.store.list_segments(public_id, after_segment_id)
