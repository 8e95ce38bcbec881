"""
Test infrastructure for the Forum API.

Strategy
--------
- SQLite in-memory via aiosqlite replaces Postgres; StaticPool keeps every
  session on the one connection that owns the in-memory database.
- ``get_db`` is overridden so requests use the test session factory.
- Tables are created before and dropped after each test.
- Redis is disabled by setting ``cache._redis = None``; the CacheManager
  treats that as a permanent miss.
- Argon2 costs are lowered through the environment before ``forum`` is
  imported, since Settings is read once at import time.
"""
import os

os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("ARGON2_PARALLELISM", "1")

import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from forum.cache import cache  # noqa: E402
from forum.database import Base, commit, get_db, rollback  # noqa: E402
from forum.main import app  # noqa: E402
from forum.middleware import install_query_counter  # noqa: E402
from tests.fakes import InMemoryCommentStore, InMemoryUserStore  # noqa: E402

# ---------------------------------------------------------------------------
# Test database engine — SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await commit(session)
        except Exception:
            await rollback(session)
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    cache._redis = None
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live session for tests that drive the repositories directly."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest_asyncio.fixture
async def comment_store() -> InMemoryCommentStore:
    return InMemoryCommentStore()
