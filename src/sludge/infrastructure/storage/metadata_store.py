"""SQL-backed metadata store.

Each operation runs in its own session so the store can be shared between
request handlers and background jobs that outlive the request.
"""

from typing import Optional

from ...domain.models.stream import Hub, Segment, Stream
from ..database.database import Database
from .repositories import HubRepository, SegmentRepository, StreamRepository


class SQLMetadataStore:
    """``MetadataStore`` implementation on top of the repositories."""

    def __init__(self, database: Database):
        self.database = database

    async def create_stream(self, stream: Stream) -> Stream:
        async with self.database.session() as session:
            return await StreamRepository(session).add(stream)

    async def get_stream(self, admin_id: str) -> Optional[Stream]:
        async with self.database.session() as session:
            return await StreamRepository(session).get(admin_id)

    async def get_stream_by_public_id(self, public_id: str) -> Optional[Stream]:
        async with self.database.session() as session:
            return await StreamRepository(session).get_by_public_id(public_id)

    async def add_segment(self, segment: Segment) -> Segment:
        async with self.database.session() as session:
            return await SegmentRepository(session).add(segment)

    async def list_segments(
        self, public_id: str, after_segment_id: Optional[str] = None
    ) -> list[Segment]:
        """List segments, starting after ``after_segment_id`` when it is known."""
        async with self.database.session() as session:
            repository = SegmentRepository(session)

            after_sequence = None
            if after_segment_id is not None:
                after_sequence = await repository.get_sequence(
                    public_id, after_segment_id
                )

            return await repository.list_by_stream(public_id, after_sequence)

    async def add_hub(self, hub: Hub) -> Hub:
        async with self.database.session() as session:
            return await HubRepository(session).add(hub)

    async def remove_hub(self, admin_id: str, hub_id: str) -> bool:
        async with self.database.session() as session:
            return await HubRepository(session).delete(admin_id, hub_id)

    async def list_hubs(self, admin_id: str) -> list[Hub]:
        async with self.database.session() as session:
            return await HubRepository(session).list_by_stream(admin_id)
