"""Shared fixtures: isolated in-memory database and an authenticated HTTP client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from translationflow.config import Settings
from translationflow.database import Database
from translationflow.main import create_app

from tests.helpers import JWT_SECRET, auth_headers


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite://",
        debug=False,
        auth_jwt_secret=JWT_SECRET,
    )


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings)
    await db.init_db()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def app(settings):
    app = create_app(settings)
    # ASGITransport does not run the lifespan, so create tables here
    await app.state.db.init_db()
    yield app
    await app.state.db.close()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=auth_headers("user-1"),
    ) as client:
        yield client


@pytest.fixture
def project_payload() -> dict:
    return {
        "name": "Documentary S01",
        "description": "Season one subtitles and dubbing",
        "source_language": "en",
        "target_languages": ["es", "fr"],
    }


@pytest.fixture
def video_payload() -> dict:
    return {
        "title": "Episode 1",
        "source_file_name": "ep01.en.srt",
        "source_language": "en",
        "target_language": "es",
        "source_file_content": "1\n00:00:01,000 --> 00:00:02,000\nHello\n",
    }
