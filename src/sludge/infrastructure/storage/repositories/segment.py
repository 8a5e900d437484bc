"""Segment repository implementation."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ....domain.models.stream import Segment
from ...database.models import SegmentModel


class SegmentRepository:
    """SQLAlchemy implementation of segment repository."""

    def __init__(self, session: AsyncSession):
        """Initialize with database session."""
        self.session = session

    async def add(self, entity: Segment) -> Segment:
        """Append segment to its stream."""
        model = SegmentModel(
            segment_id=entity.segment_id,
            stream_public_id=entity.stream_public_id,
            segment_url=entity.segment_url,
            created_at=entity.created_at,
        )

        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    async def get_sequence(self, public_id: str, segment_id: str) -> Optional[int]:
        """Get the playlist position of a segment, if it exists."""
        result = await self.session.execute(
            select(SegmentModel.sequence)
            .where(
                SegmentModel.stream_public_id == public_id,
                SegmentModel.segment_id == segment_id,
            )
            .order_by(SegmentModel.sequence)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_by_stream(
        self, public_id: str, after_sequence: Optional[int] = None
    ) -> list[Segment]:
        """List segments of a stream in creation order."""
        query = select(SegmentModel).where(SegmentModel.stream_public_id == public_id)
        if after_sequence is not None:
            query = query.where(SegmentModel.sequence > after_sequence)

        result = await self.session.execute(query.order_by(SegmentModel.sequence))
        return [self._to_entity(model) for model in result.scalars().all()]

    def _to_entity(self, model: SegmentModel) -> Segment:
        """Convert model to entity."""
        return Segment(
            segment_id=model.segment_id,
            stream_public_id=model.stream_public_id,
            segment_url=model.segment_url,
            created_at=model.created_at,
            sequence=model.sequence,
        )
