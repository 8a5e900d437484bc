"""SQLAlchemy models for database tables."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text

from .database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StreamModel(Base):
    """Stream database model."""

    __tablename__ = "streams"

    admin_id = Column(String(255), primary_key=True)
    public_id = Column(String(255), unique=True, nullable=False, index=True)
    hub_id = Column(String(255), unique=True, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class SegmentModel(Base):
    """Segment database model.

    ``sequence`` is the insertion order of a segment and the only ordering
    the playlist relies on.
    """

    __tablename__ = "segments"

    sequence = Column(Integer, primary_key=True, autoincrement=True)
    segment_id = Column(String(255), nullable=False)
    stream_public_id = Column(
        String(255), ForeignKey("streams.public_id"), nullable=False
    )
    segment_url = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    __table_args__ = (
        Index("idx_segment_stream_sequence", "stream_public_id", "sequence"),
        Index("idx_segment_stream_segment", "stream_public_id", "segment_id"),
    )


class HubModel(Base):
    """Hub registration database model."""

    __tablename__ = "hubs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hub_id = Column(String(255), nullable=False)
    stream_admin_id = Column(
        String(255), ForeignKey("streams.admin_id"), nullable=False
    )
    hub_url = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    __table_args__ = (Index("idx_hub_stream_hub", "stream_admin_id", "hub_id"),)
