"""Hub registration repository implementation."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ....domain.models.stream import Hub
from ...database.models import HubModel


class HubRepository:
    """SQLAlchemy implementation of hub repository."""

    def __init__(self, session: AsyncSession):
        """Initialize with database session."""
        self.session = session

    async def add(self, entity: Hub) -> Hub:
        """Add hub registration."""
        model = HubModel(
            hub_id=entity.hub_id,
            stream_admin_id=entity.stream_admin_id,
            hub_url=entity.hub_url,
            created_at=entity.created_at,
        )

        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    async def delete(self, admin_id: str, hub_id: str) -> bool:
        """Delete hub registration by handle."""
        result = await self.session.execute(
            delete(HubModel).where(
                HubModel.stream_admin_id == admin_id,
                HubModel.hub_id == hub_id,
            )
        )
        await self.session.commit()
        return bool(result.rowcount)

    async def list_by_stream(self, admin_id: str) -> list[Hub]:
        """List hub registrations of a stream."""
        result = await self.session.execute(
            select(HubModel)
            .where(HubModel.stream_admin_id == admin_id)
            .order_by(HubModel.id)
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    def _to_entity(self, model: HubModel) -> Hub:
        """Convert model to entity."""
        return Hub(
            hub_id=model.hub_id,
            stream_admin_id=model.stream_admin_id,
            hub_url=model.hub_url,
            created_at=model.created_at,
        )
