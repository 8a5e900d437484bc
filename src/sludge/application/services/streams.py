"""Stream creation and lookup."""

from structlog import get_logger

from ...domain.exceptions import UnknownStream
from ...domain.models.stream import Stream
from ...domain.protocols import MetadataStore
from .identifiers import IdentifierService

logger = get_logger()


class StreamService:
    """Creates streams and resolves admin identifiers to stream records."""

    def __init__(self, store: MetadataStore, identifiers: IdentifierService):
        self.store = store
        self.identifiers = identifiers

    async def create_stream(self) -> Stream:
        """Create a stream with three fresh identifiers."""
        stream = Stream(
            admin_id=self.identifiers.generate(),
            public_id=self.identifiers.generate(),
            hub_id=self.identifiers.generate(),
        )
        stream = await self.store.create_stream(stream)

        logger.info("Stream created", public_id=stream.public_id)
        return stream

    async def fetch_stream(self, admin_id: str) -> Stream:
        """Get the stream record behind an admin identifier.

        Raises:
            UnknownStream: If no stream has this admin identifier.
        """
        stream = await self.store.get_stream(admin_id)
        if stream is None:
            raise UnknownStream()
        return stream
