"""Hub fan-out manager.

Hubs are downstream relays that want to hear about a stream. Registration
and notification are push-and-forget: they run as deferred jobs after the
admin's request has been answered, and delivery problems are logged and
dropped instead of being reported to anyone.
"""

import asyncio
from typing import Any, Callable, Optional
from urllib.parse import urljoin

import httpx
from structlog import get_logger

from ...domain.exceptions import InvalidRequest, UnknownStream
from ...domain.models.stream import Hub, Segment, Stream
from ...domain.protocols import HubNotifier, MetadataStore
from .identifiers import IdentifierService

logger = get_logger()

# Schedules ``func(*args)`` to run after the current request, e.g.
# ``BackgroundTasks.add_task``.
Defer = Callable[..., Any]


class HubFanoutService:
    """Maintains hub registrations per stream and notifies them."""

    def __init__(
        self,
        store: MetadataStore,
        notifier: HubNotifier,
        identifiers: IdentifierService,
        public_url: str,
    ):
        self.store = store
        self.notifier = notifier
        self.identifiers = identifiers
        self.public_url = public_url

    async def connect(self, admin_id: str, hub_url: str, defer: Defer) -> None:
        """Schedule registration of a hub for a stream.

        Only the URL shape and the stream are checked before returning; the
        registration itself happens in a deferred job.

        Args:
            admin_id: Admin identifier of the stream.
            hub_url: Callback URL of the hub.
            defer: Scheduler for the detached registration job.

        Raises:
            InvalidRequest: If hub_url is not an absolute http(s) URL.
            UnknownStream: If admin_id does not resolve to a stream.
        """
        url = self.validate_hub_url(hub_url)
        stream = await self._require_stream(admin_id)

        defer(self.register, stream, url)
        logger.info("Hub registration scheduled", hub_url=url)

    async def register(self, stream: Stream, hub_url: str) -> Optional[Hub]:
        """Store a hub registration and announce the stream to the hub.

        Runs detached from any request, so every failure is logged here and
        never raised.
        """
        try:
            hub = await self.store.add_hub(
                Hub(
                    hub_id=self.identifiers.generate(),
                    stream_admin_id=stream.admin_id,
                    hub_url=hub_url,
                )
            )
        except Exception as exc:
            logger.error(
                "Hub registration failed",
                hub_url=hub_url,
                error=str(exc),
                exc_info=True,
            )
            return None

        try:
            await self.notifier.announce(hub_url, stream, self.playlist_url(stream))
        except Exception as exc:
            logger.warning(
                "Hub announcement failed",
                hub_id=hub.hub_id,
                hub_url=hub_url,
                error=str(exc),
            )

        return hub

    async def disconnect(self, admin_id: str, hub_id: str) -> None:
        """Remove a hub registration. Unknown handles are ignored.

        Raises:
            UnknownStream: If admin_id does not resolve to a stream.
        """
        await self._require_stream(admin_id)

        removed = await self.store.remove_hub(admin_id, hub_id)
        logger.info("Hub disconnected", hub_id=hub_id, removed=removed)

    async def list_hubs(self, admin_id: str) -> list[str]:
        """List registered hub handles in store order.

        Raises:
            UnknownStream: If admin_id does not resolve to a stream.
        """
        await self._require_stream(admin_id)

        hubs = await self.store.list_hubs(admin_id)
        return [hub.hub_id for hub in hubs]

    async def broadcast_segment(self, admin_id: str, segment: Segment) -> None:
        """Notify every hub of a stream about a new segment, concurrently."""
        try:
            stream = await self.store.get_stream(admin_id)
            hubs = await self.store.list_hubs(admin_id) if stream else []
        except Exception as exc:
            logger.error(
                "Hub lookup failed",
                segment_id=segment.segment_id,
                error=str(exc),
                exc_info=True,
            )
            return

        if not hubs:
            return

        await asyncio.gather(*(self._deliver(hub, stream, segment) for hub in hubs))

    async def _deliver(self, hub: Hub, stream: Stream, segment: Segment) -> None:
        try:
            await self.notifier.notify_segment(hub.hub_url, stream, segment)
        except Exception as exc:
            logger.warning(
                "Hub notification failed",
                hub_id=hub.hub_id,
                hub_url=hub.hub_url,
                segment_id=segment.segment_id,
                error=str(exc),
            )

    def playlist_url(self, stream: Stream) -> str:
        """Public playlist URL of a stream."""
        return urljoin(self.public_url, stream.public_id)

    @staticmethod
    def validate_hub_url(hub_url: str) -> str:
        """Normalize a hub URL, rejecting anything but absolute http(s) URLs."""
        try:
            url = httpx.URL(hub_url.strip())
        except (httpx.InvalidURL, TypeError, ValueError):
            raise InvalidRequest(f"Invalid hub URL: {hub_url}")

        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidRequest(f"Invalid hub URL: {hub_url}")

        return str(url)

    async def _require_stream(self, admin_id: str) -> Stream:
        stream = await self.store.get_stream(admin_id)
        if stream is None:
            raise UnknownStream()
        return stream
