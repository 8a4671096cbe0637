"""Service test fixtures — async DB, stores, seeded identities, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness check sees the test engine
    - bcrypt runs at its minimum cost (4 rounds) to keep tests fast
    - SQLite enforces foreign keys (PRAGMA foreign_keys=ON), as Postgres does

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store and route tests
    - Seed data goes through IdentityStore so passwords are real bcrypt hashes
"""

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from httpx import ASGITransport, AsyncClient

import devconnect.infrastructure.database as db_module
from devconnect.api.dependencies import get_password_hasher, get_token_service
from devconnect.db.base import Base
from devconnect.infrastructure.database import DatabaseSessionManager, get_db
from devconnect.infrastructure.passwords import PasswordHasher
from devconnect.main import app
from devconnect.services.content_store import ContentStore
from devconnect.services.identity_store import IdentityStore
from devconnect.services.profile_store import ProfileStore


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return get_token_service()


@pytest.fixture
def identities(test_db, hasher):
    return IdentityStore(test_db, hasher)


@pytest.fixture
def content(test_db, identities):
    return ContentStore(test_db, identities)


@pytest.fixture
def profiles(test_db, identities, content):
    return ProfileStore(test_db, identities, content)


@pytest.fixture
async def alice(identities):
    return await identities.create("Alice", "Smith", "alice@example.com", "secret1")


@pytest.fixture
async def bob(identities):
    return await identities.create("Bob", "Jones", "bob@example.com", "secret2")


@pytest.fixture
async def carol(identities):
    return await identities.create("Carol", "White", "carol@example.com", "secret3")


@pytest.fixture
def auth_headers(tokens):
    """Build the x-auth-token header for an identity."""
    def _headers(identity) -> dict:
        return {"x-auth-token": tokens.issue(identity.id)}
    return _headers


@pytest.fixture
async def client(test_engine, test_session_factory, hasher):
    """FastAPI test client with DB and hasher dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_password_hasher] = lambda: hasher

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
