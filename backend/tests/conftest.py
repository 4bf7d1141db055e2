"""
Notekeeper Backend: Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── db_engine: In-memory SQLite engine (aiosqlite) with the schema created
    ├── session_factory / db_session: Sessions bound to that engine
    ├── note_store: NoteStore over db_session
    ├── mock_store: AsyncMock standing in for NoteStore in service unit tests
    └── test_client: HTTPX AsyncClient wired to the app with db_engine behind it
"""

import os

# Override settings for testing BEFORE any notekeeper imports
# Why: Prevents tests from touching a real database
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["TAKE_DEFAULT_N"] = "5"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ["DB_AUTO_CREATE"] = "false"

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from notekeeper.database import Base, enable_case_sensitive_like, get_db_session  # noqa: E402
from notekeeper.models.note import Note  # noqa: E402
from notekeeper.store.note_store import NoteStore  # noqa: E402


@pytest_asyncio.fixture
async def db_engine():
    """
    Provides a fresh in-memory database with the notes table.

    StaticPool keeps one connection, so every session in the test sees the
    same memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_case_sensitive_like(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def note_store(db_session):
    return NoteStore(db_session)


@pytest.fixture
def mock_store():
    """
    Provides a mock NoteStore for service unit tests.

    Usage:
        async def test_get_note(mock_store):
            mock_store.find_by_id.return_value = make_note(1, None, "Hello world")
            result = await service.get_note(mock_store, 1)
    """
    store = AsyncMock(spec=NoteStore)
    store.find_by_id.return_value = None
    store.update.return_value = None
    store.delete.return_value = None
    store.list_all.return_value = []
    store.search.return_value = []
    return store


@pytest.fixture
def make_note():
    """Builds detached Note instances, as the store would return them."""
    def _make(note_id, title, content):
        return Note(id=note_id, title=title, content=content)
    return _make


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    get_db_session is overridden to hand out sessions from the test engine,
    rolling back on error like the real dependency. The store commits.
    """
    from notekeeper.main import app

    async def _test_db_session():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _test_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
