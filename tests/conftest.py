"""
Shared fixtures for the News API suite.

Every test runs against a freshly created and seeded in-memory SQLite
database (aiosqlite, one StaticPool connection so all sessions see the same
data).  The test engine carries the same foreign-key pragma and query
counter as the production engine, so constraint violations reach the error
classifier and ``X-Query-Count`` behaves as it does in production.

Requests go through the real ``get_db`` dependency: only the session
factory it opens is rebound to the test engine, which keeps the
commit/rollback and post-commit cache invalidation path under test.

Redis is off unless a test asks for ``fake_cache``, which plugs an
in-process fakeredis server into the shared ``CacheManager``.
"""
import fakeredis
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from news_api import database
from news_api.cache import cache
from news_api.database import Base, install_sqlite_pragmas
from news_api.main import app
from news_api.middleware import install_query_counter

from tests.seed_data import seed

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_sqlite_pragmas(engine_test)
install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)

# get_db looks the factory up at call time.
database.async_session = async_session_test


@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Seed a fresh schema for each test; caching disabled by default."""
    cache._redis = None
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with async_session_test() as session:
        await seed(session)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def fake_cache():
    """Enable the article cache on an empty fakeredis store; yields the client."""
    client = fakeredis.FakeAsyncRedis(decode_responses=True)
    await client.flushall()
    cache._redis = client
    cache._hits = cache._misses = 0
    yield client
    cache._redis = None
    await client.aclose()


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A plain session for calling service functions directly."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
