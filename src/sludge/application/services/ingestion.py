"""Segment ingestion pipeline.

An upload is a ``multipart/form-data`` body with one file field named
``audio``. The payload is written to storage first and registered in the
metadata store second. If registration fails the bytes stay on disk and
the upload still counts as a success; the segment is then missing from the
playlist until someone reconciles it.
"""

import asyncio
from typing import Optional

from python_multipart.exceptions import FormParserError
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request
from structlog import get_logger

from ...domain.exceptions import InvalidRequest, UnknownStream, UpstreamWriteFailure
from ...domain.models.stream import Segment, Stream
from ...domain.protocols import AudioStorage, MetadataStore
from .hubs import Defer, HubFanoutService
from .identifiers import IdentifierService

logger = get_logger()

AUDIO_FIELD = "audio"
MULTIPART_FORM_DATA = "multipart/form-data"


class SegmentIngestionService:
    """Turns uploads into stored segments."""

    def __init__(
        self,
        store: MetadataStore,
        storage: AudioStorage,
        identifiers: IdentifierService,
        hubs: HubFanoutService,
        read_timeout_seconds: float = 30.0,
        max_files: int = 4,
    ):
        self.store = store
        self.storage = storage
        self.identifiers = identifiers
        self.hubs = hubs
        self.read_timeout_seconds = read_timeout_seconds
        self.max_files = max_files

    async def ingest(self, admin_id: str, request: Request, defer: Defer) -> Optional[Segment]:
        """Store the ``audio`` part of an upload as a new segment.

        The stream is resolved before the body is read, so uploads to an
        unknown stream are rejected without draining them.

        Args:
            admin_id: Admin identifier of the target stream.
            request: Incoming request with an unread multipart body.
            defer: Scheduler for the detached hub fan-out job.

        Returns:
            The registered segment, or None when the upload carried no usable
            audio part or its registration failed.

        Raises:
            InvalidRequest: Missing or malformed content type, unreadable or
                timed-out body.
            UnknownStream: If admin_id does not resolve to a stream.
        """
        content_type = request.headers.get("content-type")
        if not content_type:
            raise InvalidRequest("Missing content type header")
        if not is_multipart_form(content_type):
            raise InvalidRequest("Malformed content type header")

        stream = await self.store.get_stream(admin_id)
        if stream is None:
            raise UnknownStream()

        form = await self._read_form(request)
        try:
            upload = self._single_audio_part(form)
            data = await upload.read() if upload is not None else b""
        finally:
            await form.close()

        if not data:
            logger.info("Upload without audio ignored", public_id=stream.public_id)
            return None

        segment = await self._store_payload(stream, data)

        try:
            segment = await self._register(segment)
        except UpstreamWriteFailure as exc:
            # The payload is already on disk; report success anyway.
            logger.error(exc.message, **exc.details, exc_info=True)
            return None

        defer(self.hubs.broadcast_segment, admin_id, segment)

        logger.info(
            "Segment ingested",
            public_id=segment.stream_public_id,
            segment_id=segment.segment_id,
            size=len(data),
        )
        return segment

    async def _read_form(self, request: Request) -> FormData:
        try:
            return await asyncio.wait_for(
                request.form(max_files=self.max_files),
                timeout=self.read_timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise InvalidRequest("Upload timed out")
        except MultiPartException as exc:
            raise InvalidRequest(f"Malformed upload: {exc.message}")
        except FormParserError as exc:
            raise InvalidRequest(f"Malformed upload: {exc}")
        except HTTPException as exc:
            raise InvalidRequest(f"Malformed upload: {exc.detail}")

    @staticmethod
    def _single_audio_part(form: FormData) -> Optional[UploadFile]:
        parts = form.getlist(AUDIO_FIELD)
        if len(parts) != 1 or not isinstance(parts[0], UploadFile):
            return None
        return parts[0]

    async def _store_payload(self, stream: Stream, data: bytes) -> Segment:
        segment_id = self.identifiers.generate()
        key = self.storage.segment_key(stream.public_id, segment_id)

        await self.storage.write(key, data)

        return Segment(
            segment_id=segment_id,
            stream_public_id=stream.public_id,
            segment_url=self.storage.url_for(key),
        )

    async def _register(self, segment: Segment) -> Segment:
        try:
            return await self.store.add_segment(segment)
        except Exception as exc:
            raise UpstreamWriteFailure(
                segment.segment_id, segment.stream_public_id
            ) from exc


def is_multipart_form(content_type: str) -> bool:
    """Check for a ``multipart/form-data`` media type with a boundary."""
    media_type, _, params = content_type.partition(";")
    if media_type.strip().lower() != MULTIPART_FORM_DATA:
        return False

    for param in params.split(";"):
        name, _, value = param.strip().partition("=")
        if name.strip().lower() == "boundary" and value.strip().strip('"'):
            return True
    return False
