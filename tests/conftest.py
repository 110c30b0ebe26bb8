from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from song_library.config import Settings
from song_library.main import create_app
from song_library.stores import SongStore

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def settings() -> Settings:
    return Settings(DATABASE_URL=MEMORY_URL, ALLOW_ORIGINS=["*"])


@pytest.fixture
def client(settings: Settings) -> TestClient:
    """HTTP client over an app backed by a fresh in-memory database."""
    app = create_app(settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
async def store() -> SongStore:
    store = SongStore.from_url(MEMORY_URL)
    await store.create_schema()
    yield store
    await store.dispose()
