"""Relay routes.

Literal keyword routes (``/stream``, ``/{id}/admin``, ``/{id}/hubs``) are
registered before the identifier-only shapes they would otherwise collide
with, since Starlette matches routes in declaration order. Each route also
answers with a trailing slash; slash redirects are disabled on the app.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from fastapi.responses import PlainTextResponse

from ...application.services import (
    HubFanoutService,
    IdentifierService,
    PlaylistService,
    SegmentIngestionService,
    StreamService,
)
from ...domain.exceptions import InvalidRequest
from ..dependencies import (
    get_hub_service,
    get_identifier_service,
    get_ingestion_service,
    get_playlist_service,
    get_stream_service,
    require_admin_id,
    require_public_id,
)
from ..schemas import SegmentResponse, StreamResponse

router = APIRouter()


async def read_text_body(request: Request) -> str:
    """Read a small UTF-8 request body.

    Raises:
        InvalidRequest: If the body is empty or not valid UTF-8.
    """
    body = await request.body()
    if not body:
        raise InvalidRequest("No data")

    try:
        return body.decode("utf-8").strip()
    except UnicodeDecodeError:
        raise InvalidRequest("Request body is not valid UTF-8")


@router.post("/stream/", response_model=StreamResponse)
@router.post("/stream", response_model=StreamResponse)
async def create_stream(streams: StreamService = Depends(get_stream_service)):
    """Create a stream and return its three identifiers."""
    stream = await streams.create_stream()
    return StreamResponse.model_validate(stream)


@router.post("/{admin_id}/", response_class=PlainTextResponse)
@router.post("/{admin_id}", response_class=PlainTextResponse)
async def upload_segment(
    request: Request,
    background_tasks: BackgroundTasks,
    admin_id: str = Depends(require_admin_id),
    ingestion: SegmentIngestionService = Depends(get_ingestion_service),
):
    """Upload one audio segment as the ``audio`` part of a multipart form."""
    await ingestion.ingest(admin_id, request, background_tasks.add_task)
    return PlainTextResponse("Success\n")


@router.put("/{admin_id}/admin/")
@router.put("/{admin_id}/admin")
async def connect_hub(
    request: Request,
    background_tasks: BackgroundTasks,
    admin_id: str = Depends(require_admin_id),
    hubs: HubFanoutService = Depends(get_hub_service),
):
    """Connect a hub; the body is its callback URL."""
    hub_url = await read_text_body(request)
    await hubs.connect(admin_id, hub_url, background_tasks.add_task)
    return Response(status_code=200)


@router.delete("/{admin_id}/admin/")
@router.delete("/{admin_id}/admin")
async def disconnect_hub(
    request: Request,
    admin_id: str = Depends(require_admin_id),
    hubs: HubFanoutService = Depends(get_hub_service),
):
    """Disconnect a hub; the body is its handle."""
    hub_id = await read_text_body(request)
    await hubs.disconnect(admin_id, hub_id)
    return Response(status_code=200)


@router.get("/{admin_id}/hubs/", response_model=list[str])
@router.get("/{admin_id}/hubs", response_model=list[str])
async def list_hubs(
    admin_id: str = Depends(require_admin_id),
    hubs: HubFanoutService = Depends(get_hub_service),
):
    """List the handles of a stream's connected hubs."""
    return await hubs.list_hubs(admin_id)


@router.get("/{admin_id}/admin/", response_model=StreamResponse)
@router.get("/{admin_id}/admin", response_model=StreamResponse)
async def fetch_stream(
    admin_id: str = Depends(require_admin_id),
    streams: StreamService = Depends(get_stream_service),
):
    """Fetch the stream record behind an admin identifier."""
    stream = await streams.fetch_stream(admin_id)
    return StreamResponse.model_validate(stream)


@router.get("/{public_id}/", response_model=list[SegmentResponse])
@router.get("/{public_id}", response_model=list[SegmentResponse])
async def get_playlist(
    public_id: str = Depends(require_public_id),
    playlist: PlaylistService = Depends(get_playlist_service),
):
    """Full playlist of a stream."""
    segments = await playlist.segments(public_id)
    return [SegmentResponse.model_validate(segment) for segment in segments]


@router.get("/{public_id}/{segment_id}/", response_model=list[SegmentResponse])
@router.get("/{public_id}/{segment_id}", response_model=list[SegmentResponse])
async def get_playlist_after(
    segment_id: str,
    public_id: str = Depends(require_public_id),
    playlist: PlaylistService = Depends(get_playlist_service),
    identifiers: IdentifierService = Depends(get_identifier_service),
):
    """Playlist entries after a cursor segment.

    A cursor that is not a well-formed identifier is ignored.
    """
    cursor = segment_id if identifiers.is_valid(segment_id) else None
    segments = await playlist.segments(public_id, cursor)
    return [SegmentResponse.model_validate(segment) for segment in segments]
