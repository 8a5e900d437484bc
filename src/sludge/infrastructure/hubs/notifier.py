"""Hub notification delivery over HTTP."""

import json
from datetime import datetime, timezone
from typing import Dict

import httpx
from structlog import get_logger

from ...domain.models.stream import Segment, Stream

logger = get_logger()

STREAM_CONNECTED = "stream.connected"
SEGMENT_CREATED = "segment.created"


class HttpHubNotifier:
    """Posts JSON events to hub callback URLs.

    Delivery errors are raised to the caller; deciding whether they matter is
    the fan-out manager's job.
    """

    def __init__(self, timeout_seconds: float = 10.0):
        self.timeout_seconds = timeout_seconds

    async def announce(self, hub_url: str, stream: Stream, playlist_url: str) -> None:
        """Send a ``stream.connected`` event."""
        payload = {
            "event": STREAM_CONNECTED,
            "hub": stream.hub_id,
            "playlist": playlist_url,
            "timestamp": datetime.now(timezone.utc),
        }
        await self._post(hub_url, STREAM_CONNECTED, stream.hub_id, payload)

    async def notify_segment(self, hub_url: str, stream: Stream, segment: Segment) -> None:
        """Send a ``segment.created`` event."""
        payload = {
            "event": SEGMENT_CREATED,
            "hub": stream.hub_id,
            "timestamp": segment.created_at,
            "data": {
                "segmentID": segment.segment_id,
                "streamPublicID": segment.stream_public_id,
                "segmentURL": segment.segment_url,
            },
        }
        await self._post(hub_url, SEGMENT_CREATED, stream.hub_id, payload)

    async def _post(self, hub_url: str, event_type: str, hub_id: str, payload: Dict) -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                hub_url,
                content=json.dumps(payload, default=_json_serialize_datetime),
                headers={
                    "X-Event-Type": event_type,
                    "X-Hub-ID": hub_id,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout_seconds,
            )

            response.raise_for_status()

        logger.info(
            "Hub notified",
            hub_url=hub_url,
            event_type=event_type,
            status_code=response.status_code,
        )


def _json_serialize_datetime(obj) -> str:
    """JSON serializer that handles datetime objects.

    Raises:
        TypeError: If object is not JSON serializable
    """
    if isinstance(obj, datetime):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
