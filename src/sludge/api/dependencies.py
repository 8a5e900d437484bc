"""FastAPI dependency injection."""

import asyncio
from typing import Optional

from fastapi import Depends

from ..application.services import (
    HubFanoutService,
    IdentifierService,
    PlaylistService,
    SegmentIngestionService,
    StreamService,
)
from ..domain.exceptions import InvalidPath
from ..domain.protocols import AudioStorage, HubNotifier, MetadataStore
from ..infrastructure.config import Settings, get_settings
from ..infrastructure.database import Database
from ..infrastructure.hubs import HttpHubNotifier
from ..infrastructure.storage import LocalAudioStorage, SQLMetadataStore


# Settings dependency
def get_settings_dep() -> Settings:
    """Get application settings."""
    return get_settings()


# Database dependencies
_db_instance: Optional[Database] = None
_db_lock = asyncio.Lock()


async def get_database() -> Database:
    """Get database instance (singleton), creating tables on first use.

    Concurrent first requests wait for a single instance to be built.
    """
    global _db_instance
    if _db_instance is None:
        async with _db_lock:
            if _db_instance is None:
                settings = get_settings()
                database = Database(
                    settings.database_url, echo=settings.database_echo
                )
                await database.create_tables()
                _db_instance = database
    return _db_instance


async def close_database() -> None:
    """Dispose of the database singleton, if one was created."""
    global _db_instance
    if _db_instance is not None:
        await _db_instance.close()
        _db_instance = None


# Infrastructure dependencies
def get_metadata_store(db: Database = Depends(get_database)) -> MetadataStore:
    """Get metadata store."""
    return SQLMetadataStore(db)


def get_identifier_service(
    settings: Settings = Depends(get_settings_dep),
) -> IdentifierService:
    """Get identifier service."""
    return IdentifierService(settings.id_length, settings.id_alphabet)


def get_audio_storage(settings: Settings = Depends(get_settings_dep)) -> AudioStorage:
    """Get audio storage."""
    return LocalAudioStorage(settings.audio_dir, settings.files_url)


def get_hub_notifier(settings: Settings = Depends(get_settings_dep)) -> HubNotifier:
    """Get hub notifier."""
    return HttpHubNotifier(timeout_seconds=settings.hub_timeout_seconds)


# Service dependencies
def get_stream_service(
    store: MetadataStore = Depends(get_metadata_store),
    identifiers: IdentifierService = Depends(get_identifier_service),
) -> StreamService:
    """Get stream service."""
    return StreamService(store, identifiers)


def get_hub_service(
    store: MetadataStore = Depends(get_metadata_store),
    notifier: HubNotifier = Depends(get_hub_notifier),
    identifiers: IdentifierService = Depends(get_identifier_service),
    settings: Settings = Depends(get_settings_dep),
) -> HubFanoutService:
    """Get hub fan-out service."""
    return HubFanoutService(store, notifier, identifiers, settings.public_url)


def get_ingestion_service(
    store: MetadataStore = Depends(get_metadata_store),
    storage: AudioStorage = Depends(get_audio_storage),
    identifiers: IdentifierService = Depends(get_identifier_service),
    hubs: HubFanoutService = Depends(get_hub_service),
    settings: Settings = Depends(get_settings_dep),
) -> SegmentIngestionService:
    """Get segment ingestion service."""
    return SegmentIngestionService(
        store,
        storage,
        identifiers,
        hubs,
        read_timeout_seconds=settings.upload_read_timeout_seconds,
        max_files=settings.upload_max_files,
    )


def get_playlist_service(
    store: MetadataStore = Depends(get_metadata_store),
) -> PlaylistService:
    """Get playlist service."""
    return PlaylistService(store)


# Path identifier dependencies
def require_admin_id(
    admin_id: str,
    identifiers: IdentifierService = Depends(get_identifier_service),
) -> str:
    """Validate the admin identifier path segment."""
    if not identifiers.is_valid(admin_id):
        raise InvalidPath()
    return admin_id


def require_public_id(
    public_id: str,
    identifiers: IdentifierService = Depends(get_identifier_service),
) -> str:
    """Validate the public identifier path segment."""
    if not identifiers.is_valid(public_id):
        raise InvalidPath()
    return public_id
