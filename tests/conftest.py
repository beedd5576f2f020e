"""Shared fixtures: in-memory database, app clients and sample bookmarks."""
import os

# Settings are read at import time by db.session and api.main
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("API_TOKEN", "test-api-token")
os.environ.setdefault("ENVIRONMENT", "test")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from api.main import app  # noqa: E402
from core.config import get_settings  # noqa: E402
from db.session import get_async_session  # noqa: E402
from models.base import Base  # noqa: E402
from models.bookmark import Bookmark  # noqa: E402

API_TOKEN = get_settings().api_token


def make_bookmarks_array() -> list[dict]:
    """Sample rows inserted directly into the table."""
    return [
        {
            "id": 1,
            "title": "Thinkful",
            "url": "https://www.thinkful.com",
            "description": "Think outside the classroom",
            "rating": 5,
        },
        {
            "id": 2,
            "title": "Google",
            "url": "https://www.google.com",
            "description": "Where we find everything else",
            "rating": 4,
        },
        {
            "id": 3,
            "title": "MDN",
            "url": "https://developer.mozilla.org",
            "description": "The only place to find web documentation",
            "rating": 5,
        },
    ]


def make_malicious_bookmark() -> dict:
    """A row whose text fields carry script and event-handler markup."""
    return {
        "id": 911,
        "title": 'Malice malice malice <script>alert("xss");</script>',
        "url": "https://www.hackers.com",
        "description": (
            'Bad image <img src="https://url.to.file.which/does-not.exist" '
            'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
        ),
        "rating": 1,
    }


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database shared by every connection of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


async def fetch_bookmark(
    session_factory: async_sessionmaker[AsyncSession], bookmark_id: int,
) -> Bookmark | None:
    """Read a row with a fresh session so no identity map can serve stale data."""
    async with session_factory() as session:
        return await session.get(Bookmark, bookmark_id)


async def count_bookmarks(session_factory: async_sessionmaker[AsyncSession]) -> int:
    """Number of rows currently in the bookmarks table."""
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(Bookmark))
        return result.scalar_one()


@pytest.fixture
async def app_with_db(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[FastAPI]:
    """The application with its session dependency pointed at the test database."""

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_session] = override_get_async_session
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app_with_db: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Client that sends the configured bearer token."""
    async with AsyncClient(
        transport=ASGITransport(app=app_with_db),
        base_url="http://test",
        headers={"Authorization": f"Bearer {API_TOKEN}"},
    ) as ac:
        yield ac


@pytest.fixture
async def anon_client(app_with_db: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Client without any Authorization header."""
    async with AsyncClient(
        transport=ASGITransport(app=app_with_db),
        base_url="http://test",
    ) as ac:
        yield ac


async def _insert_rows(
    session_factory: async_sessionmaker[AsyncSession], rows: list[dict],
) -> None:
    async with session_factory() as session:
        session.add_all([Bookmark(**row) for row in rows])
        await session.commit()


@pytest.fixture
async def bookmarks_in_db(session_factory: async_sessionmaker[AsyncSession]) -> list[dict]:
    """Insert the sample bookmarks and return them as plain dicts."""
    rows = make_bookmarks_array()
    await _insert_rows(session_factory, rows)
    return rows


@pytest.fixture
async def malicious_bookmark_in_db(
    session_factory: async_sessionmaker[AsyncSession],
) -> dict:
    """Insert the markup-laden bookmark and return it."""
    row = make_malicious_bookmark()
    await _insert_rows(session_factory, [row])
    return row
