"""Stream repository implementation."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ....domain.models.stream import Stream
from ...database.models import StreamModel


class StreamRepository:
    """SQLAlchemy implementation of stream repository."""

    def __init__(self, session: AsyncSession):
        """Initialize with database session."""
        self.session = session

    async def add(self, entity: Stream) -> Stream:
        """Add stream to repository."""
        model = StreamModel(
            admin_id=entity.admin_id,
            public_id=entity.public_id,
            hub_id=entity.hub_id,
            created_at=entity.created_at,
        )

        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    async def get(self, admin_id: str) -> Optional[Stream]:
        """Get stream by admin ID."""
        model = await self.session.get(StreamModel, admin_id)
        return self._to_entity(model) if model else None

    async def get_by_public_id(self, public_id: str) -> Optional[Stream]:
        """Get stream by public ID."""
        result = await self.session.execute(
            select(StreamModel).where(StreamModel.public_id == public_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    def _to_entity(self, model: StreamModel) -> Stream:
        """Convert model to entity."""
        return Stream(
            admin_id=model.admin_id,
            public_id=model.public_id,
            hub_id=model.hub_id,
            created_at=model.created_at,
        )
