"""Pytest configuration and fixtures for meetme-search.

Uses app.main:app for HTTP tests and app.infrastructure.persistence.database
for DB-dependent fixtures. All imports use app.*.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.limiter import limiter
from app.domain.exceptions import SqlNotConfiguredException
from app.infrastructure.persistence import database
from app.main import app


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI). Rate limits are off unless a test enables them."""
    limiter.reset()
    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture
async def session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to one connection whose transaction is rolled back after the test.

    Sessions from the factory commit to savepoints, so repositories that open
    their own sessions see each other's writes within the test. Skips
    (pytest.skip) when Postgres is not configured. Use
    @pytest.mark.requires_db on tests that need it; run without DB via:
    pytest -m 'not requires_db'.
    """
    try:
        database.get_session_factory()
    except SqlNotConfiguredException:
        pytest.skip("Postgres not configured: set DATABASE_URL (postgresql+asyncpg://...)")
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.create_all)
    async with database.engine.connect() as conn:
        outer = await conn.begin()
        yield async_sessionmaker(
            bind=conn,
            class_=AsyncSession,
            expire_on_commit=False,
            join_transaction_mode="create_savepoint",
        )
        await outer.rollback()
    await database.dispose_engine()


@pytest.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncSession:
    """Single session from session_factory for seeding rows. Rolled back with the outer transaction."""
    async with session_factory() as session:
        yield session
