"""Stream domain models - a live audio channel, its segments and its hubs."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Stream:
    """A live audio channel.

    The three identifiers are capabilities: ``admin_id`` allows mutation,
    ``public_id`` allows reading the playlist and ``hub_id`` identifies the
    stream to other relays. None of them change after creation.
    """

    admin_id: str
    public_id: str
    hub_id: str
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class Segment:
    """One uploaded audio chunk of a stream."""

    segment_id: str
    stream_public_id: str
    segment_url: str
    created_at: datetime = field(default_factory=_utcnow)

    # Assigned by the store, defines playlist order
    sequence: Optional[int] = None


@dataclass
class Hub:
    """A downstream relay registered to receive notifications for a stream."""

    hub_id: str
    stream_admin_id: str
    hub_url: str
    created_at: datetime = field(default_factory=_utcnow)
