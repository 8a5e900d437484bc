"""Stream and segment response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class StreamResponse(BaseModel):
    """Stream record as returned to its admin."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    admin_id: str = Field(..., alias="admin", description="Secret admin identifier")
    public_id: str = Field(..., alias="public", description="Listener identifier")
    hub_id: str = Field(..., alias="hub", description="Identifier of this stream to hubs")


class SegmentResponse(BaseModel):
    """Playlist entry."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    segment_id: str = Field(..., alias="segmentID")
    stream_public_id: str = Field(..., alias="streamPublicID")
    segment_url: str = Field(..., alias="segmentURL")
