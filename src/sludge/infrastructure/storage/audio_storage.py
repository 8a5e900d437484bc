"""Local file storage for segment payloads."""

import logging
from pathlib import Path
from urllib.parse import urljoin

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)

SEGMENT_EXTENSION = ".opus"


class LocalAudioStorage:
    """Writes segment audio under a directory served at ``files_url``.

    Keys are relative POSIX paths of the form ``<public id>/<segment id>.opus``;
    the same key is used on disk and in the public URL.
    """

    def __init__(self, audio_dir: Path, files_url: str):
        self.audio_dir = Path(audio_dir)
        self.files_url = files_url

    @staticmethod
    def segment_key(public_id: str, segment_id: str) -> str:
        """Build the storage key of a segment.

        Example:
            >>> LocalAudioStorage.segment_key("pub", "seg")
            'pub/seg.opus'
        """
        return f"{public_id}/{segment_id}{SEGMENT_EXTENSION}"

    def path_for(self, key: str) -> Path:
        """Resolve a key to a path inside the audio directory.

        Raises:
            ValueError: If the key points outside the audio directory.
        """
        root = self.audio_dir.resolve()
        path = (root / key).resolve()
        if root not in path.parents:
            raise ValueError(f"Storage key escapes audio directory: {key}")
        return path

    async def write(self, key: str, data: bytes) -> None:
        """Write payload bytes, creating the stream directory if needed."""
        path = self.path_for(key)
        await aiofiles.os.makedirs(path.parent, exist_ok=True)

        async with aiofiles.open(path, "wb") as f:
            await f.write(data)

        logger.debug(f"Wrote {len(data)} bytes to {path}")

    def url_for(self, key: str) -> str:
        """Public URL of a stored key."""
        return urljoin(self.files_url, key)
