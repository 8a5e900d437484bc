"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from sludge.api.dependencies import get_database, get_hub_notifier, get_settings_dep
from sludge.api.main import create_app
from sludge.application.services import IdentifierService
from sludge.infrastructure.config import Settings
from sludge.infrastructure.database import Database
from sludge.infrastructure.storage import LocalAudioStorage, SQLMetadataStore

TEST_ID_LENGTH = 10


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Test settings with overrides."""
    return Settings(
        environment="test",
        data_dir=tmp_path,
        files_url="http://files.test/audio",
        public_url="http://relay.test",
        id_length=TEST_ID_LENGTH,
        database_url="sqlite+aiosqlite:///:memory:",
        upload_read_timeout_seconds=5,
        log_level="DEBUG",
        log_format="console",
    )


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """In-memory SQLite database with tables."""
    db = Database(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_tables()

    yield db

    await db.drop_tables()
    await db.close()


@pytest.fixture
def store(database: Database) -> SQLMetadataStore:
    """Metadata store on the test database."""
    return SQLMetadataStore(database)


@pytest.fixture
def identifiers(test_settings: Settings) -> IdentifierService:
    """Identifier service with the test length and alphabet."""
    return IdentifierService(test_settings.id_length, test_settings.id_alphabet)


@pytest.fixture
def audio_storage(test_settings: Settings) -> LocalAudioStorage:
    """Audio storage under the per-test data directory."""
    return LocalAudioStorage(test_settings.audio_dir, test_settings.files_url)


@pytest.fixture
def hub_notifier() -> AsyncMock:
    """Hub notifier that records calls instead of sending them."""
    notifier = AsyncMock()
    notifier.announce = AsyncMock(return_value=None)
    notifier.notify_segment = AsyncMock(return_value=None)
    return notifier


@pytest_asyncio.fixture
async def client(
    database: Database, test_settings: Settings, hub_notifier: AsyncMock
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database, settings and notifier overrides."""
    app = create_app(test_settings)

    async def override_get_database():
        return database

    app.dependency_overrides[get_database] = override_get_database
    app.dependency_overrides[get_settings_dep] = lambda: test_settings
    app.dependency_overrides[get_hub_notifier] = lambda: hub_notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
