"""Tests for the segment ingestion pipeline."""

import asyncio
from typing import Optional
from unittest.mock import MagicMock, patch

import pytest
from starlette.requests import Request

from sludge.application.services import SegmentIngestionService
from sludge.application.services.ingestion import is_multipart_form
from sludge.domain.exceptions import InvalidRequest, UnknownStream
from sludge.domain.models import Stream

BOUNDARY = "relay-test-boundary"
MULTIPART = f"multipart/form-data; boundary={BOUNDARY}"


def file_part(name: str, data: bytes, filename: str = "chunk.opus") -> bytes:
    return (
        f"--{BOUNDARY}\r\n"
        f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
        "Content-Type: audio/ogg\r\n\r\n"
    ).encode() + data + b"\r\n"


def text_part(name: str, value: str) -> bytes:
    return (
        f"--{BOUNDARY}\r\n"
        f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
        f"{value}\r\n"
    ).encode()


def multipart_body(*parts: bytes) -> bytes:
    return b"".join(parts) + f"--{BOUNDARY}--\r\n".encode()


def make_request(
    body: bytes, content_type: Optional[str] = MULTIPART, receive=None
) -> Request:
    """Build a POST request whose body is delivered in one message."""
    headers = [(b"content-type", content_type.encode())] if content_type else []
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/",
        "headers": headers,
        "query_string": b"",
    }
    messages = [{"type": "http.request", "body": body, "more_body": False}]

    async def receive_once():
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    request = Request(scope, receive or receive_once)
    request.state.pending_messages = messages
    return request


@pytest.fixture
async def stream(store) -> Stream:
    return await store.create_stream(
        Stream(admin_id="adminadmin", public_id="publicpubl", hub_id="hubhubhubh")
    )


@pytest.fixture
def hubs() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(store, audio_storage, identifiers, hubs) -> SegmentIngestionService:
    return SegmentIngestionService(
        store, audio_storage, identifiers, hubs, read_timeout_seconds=1.0
    )


class TestContentType:
    """Test content type checks."""

    @pytest.mark.parametrize(
        "content_type",
        [
            MULTIPART,
            'multipart/form-data; boundary="quoted"',
            "Multipart/Form-Data;charset=utf-8; boundary=x",
        ],
    )
    def test_multipart_with_boundary(self, content_type):
        assert is_multipart_form(content_type)

    @pytest.mark.parametrize(
        "content_type",
        [
            "application/json",
            "multipart/form-data",
            "multipart/form-data; boundary=",
            "multipart/mixed; boundary=x",
        ],
    )
    def test_rejected_content_types(self, content_type):
        assert not is_multipart_form(content_type)

    async def test_missing_content_type(self, service, stream):
        with pytest.raises(InvalidRequest, match="Missing content type header"):
            await service.ingest(stream.admin_id, make_request(b"", None), MagicMock())

    async def test_non_multipart_content_type(self, service, stream):
        request = make_request(b"{}", "application/json")

        with pytest.raises(InvalidRequest):
            await service.ingest(stream.admin_id, request, MagicMock())


class TestIngest:
    """Test ingestion."""

    async def test_stores_audio_segment(self, service, stream, store, hubs, test_settings):
        defer = MagicMock()
        request = make_request(multipart_body(file_part("audio", b"opus-data")))

        segment = await service.ingest(stream.admin_id, request, defer)

        assert segment.stream_public_id == stream.public_id
        assert segment.segment_url == (
            f"http://files.test/audio/{stream.public_id}/{segment.segment_id}.opus"
        )
        path = test_settings.audio_dir / stream.public_id / f"{segment.segment_id}.opus"
        assert path.read_bytes() == b"opus-data"

        segments = await store.list_segments(stream.public_id)
        assert [s.segment_id for s in segments] == [segment.segment_id]

        defer.assert_called_once_with(hubs.broadcast_segment, stream.admin_id, segment)

    async def test_unknown_stream_is_rejected_before_reading_body(self, service):
        request = make_request(multipart_body(file_part("audio", b"opus-data")))

        with pytest.raises(UnknownStream):
            await service.ingest("nonexisting", request, MagicMock())

        assert request.state.pending_messages

    @pytest.mark.parametrize(
        "body",
        [
            multipart_body(text_part("title", "no audio here")),
            multipart_body(file_part("audio", b"one"), file_part("audio", b"two")),
            multipart_body(text_part("audio", "not a file")),
            multipart_body(file_part("audio", b"")),
        ],
        ids=["absent", "repeated", "not-a-file", "empty"],
    )
    async def test_unusable_audio_part_is_ignored(self, service, stream, store, body):
        defer = MagicMock()

        segment = await service.ingest(stream.admin_id, make_request(body), defer)

        assert segment is None
        assert await store.list_segments(stream.public_id) == []
        defer.assert_not_called()

    async def test_malformed_body(self, service, stream):
        request = make_request(b"--not-the-boundary\r\ngarbage")

        with pytest.raises(InvalidRequest):
            await service.ingest(stream.admin_id, request, MagicMock())

    async def test_too_many_files(self, store, audio_storage, identifiers, hubs, stream):
        service = SegmentIngestionService(
            store, audio_storage, identifiers, hubs, max_files=1
        )
        body = multipart_body(file_part("audio", b"one"), file_part("extra", b"two"))

        with pytest.raises(InvalidRequest):
            await service.ingest(stream.admin_id, make_request(body), MagicMock())

    async def test_read_timeout(self, store, audio_storage, identifiers, hubs, stream):
        service = SegmentIngestionService(
            store, audio_storage, identifiers, hubs, read_timeout_seconds=0.05
        )

        async def stalled_receive():
            await asyncio.sleep(10)

        request = make_request(b"", receive=stalled_receive)

        with pytest.raises(InvalidRequest, match="timed out"):
            await service.ingest(stream.admin_id, request, MagicMock())

    async def test_registration_failure_keeps_file(
        self, service, stream, store, test_settings
    ):
        defer = MagicMock()
        request = make_request(multipart_body(file_part("audio", b"orphan")))

        with patch.object(store, "add_segment", side_effect=RuntimeError("db down")):
            segment = await service.ingest(stream.admin_id, request, defer)

        assert segment is None
        defer.assert_not_called()

        files = list((test_settings.audio_dir / stream.public_id).iterdir())
        assert len(files) == 1
        assert files[0].read_bytes() == b"orphan"
