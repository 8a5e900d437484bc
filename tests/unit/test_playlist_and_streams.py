"""Tests for stream creation and playlist queries."""

import pytest

from sludge.application.services import PlaylistService, StreamService
from sludge.domain.exceptions import UnknownStream
from sludge.domain.models import Segment


class TestStreamService:
    """Test stream service."""

    async def test_create_stream_has_distinct_valid_identifiers(self, store, identifiers):
        service = StreamService(store, identifiers)

        stream = await service.create_stream()

        ids = {stream.admin_id, stream.public_id, stream.hub_id}
        assert len(ids) == 3
        assert all(identifiers.is_valid(value) for value in ids)

    async def test_fetch_stream(self, store, identifiers):
        service = StreamService(store, identifiers)
        created = await service.create_stream()

        fetched = await service.fetch_stream(created.admin_id)

        assert fetched.public_id == created.public_id
        assert fetched.hub_id == created.hub_id

    async def test_fetch_by_public_id_is_unknown(self, store, identifiers):
        service = StreamService(store, identifiers)
        created = await service.create_stream()

        with pytest.raises(UnknownStream):
            await service.fetch_stream(created.public_id)


class TestPlaylistService:
    """Test playlist service."""

    async def test_segments_and_cursor(self, store, identifiers):
        stream = await StreamService(store, identifiers).create_stream()
        for segment_id in ("first00000", "second0000", "third00000"):
            await store.add_segment(
                Segment(segment_id, stream.public_id, f"http://files.test/{segment_id}")
            )
        service = PlaylistService(store)

        full = await service.segments(stream.public_id)
        after = await service.segments(stream.public_id, "first00000")

        assert [s.segment_id for s in full] == ["first00000", "second0000", "third00000"]
        assert [s.segment_id for s in after] == ["second0000", "third00000"]

    async def test_empty_playlist(self, store, identifiers):
        stream = await StreamService(store, identifiers).create_stream()

        assert await PlaylistService(store).segments(stream.public_id) == []

    async def test_unknown_public_id(self, store):
        with pytest.raises(UnknownStream):
            await PlaylistService(store).segments("missing000")
