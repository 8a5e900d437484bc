"""Storage adapters: metadata store and audio payload storage."""

from .audio_storage import LocalAudioStorage
from .metadata_store import SQLMetadataStore

__all__ = ["LocalAudioStorage", "SQLMetadataStore"]
