"""Shared pytest fixtures configured to use SQLite in-memory databases."""

import logging
import os
import time
from typing import Dict, Optional
from uuid import uuid4

# must be set before the app (and its settings) are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ["TENANTNOTES_SKIP_LIFESPAN_DB"] = "1"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tenantnotes.core.models import BaseModel  # noqa: E402
from tenantnotes.core.redis_client import get_redis_client  # noqa: E402
from tenantnotes.core.schemas.auth import TokenClaims  # noqa: E402
from tenantnotes.core.subscription import SubscriptionTier  # noqa: E402
from tenantnotes.core.models.user import UserRole  # noqa: E402
from tenantnotes.database import get_db_session  # noqa: E402
from tenantnotes.main import app  # noqa: E402

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


class FakeRedis:
    """In-memory stand-in for redis.asyncio.Redis (only the commands we use)."""

    def __init__(self):
        self.storage: Dict[str, str] = {}
        self.expiry: Dict[str, float] = {}

    def _alive(self, key: str) -> bool:
        deadline = self.expiry.get(key)
        if deadline is not None and deadline <= time.monotonic():
            self.storage.pop(key, None)
            self.expiry.pop(key, None)
        return key in self.storage

    async def ping(self):
        return True

    async def set(self, key, value):
        self.storage[key] = str(value)
        return True

    async def setex(self, key, seconds, value):
        self.storage[key] = str(value)
        self.expiry[key] = time.monotonic() + seconds
        return True

    async def exists(self, key):
        return 1 if self._alive(key) else 0

    async def incr(self, key):
        current = int(self.storage[key]) if self._alive(key) else 0
        self.storage[key] = str(current + 1)
        return current + 1

    async def expire(self, key, seconds):
        self.expiry[key] = time.monotonic() + seconds
        return True

    async def aclose(self):
        pass


@pytest.fixture(autouse=True)
def fake_redis():
    """Every test talks to a fresh in-memory Redis."""
    client = get_redis_client()
    fake = FakeRedis()
    client.redis = fake
    client._retry_after = 0.0
    yield fake
    client.redis = None


@pytest.fixture
async def test_engine():
    """A private SQLite in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    # SQLite only enforces foreign keys (and CASCADE) when asked to
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory):
    """Session for tests that work below the HTTP layer."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def test_app(session_factory):
    """App whose requests each get a fresh session on the test database."""

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """Create async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_tenant(async_client):
    """Register a tenant through the API; returns (auth headers, response body)."""

    async def _register(email: Optional[str] = None, tenant_name: str = "Acme"):
        payload = {
            "email": email or f"admin_{uuid4().hex[:8]}@example.com",
            "password": "Password123!",
            "tenantName": tenant_name,
        }
        resp = await async_client.post("/api/auth/register", json=payload)
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return bearer(body["token"]), body

    return _register


@pytest.fixture
def make_claims():
    """Build a claim set without touching the database."""

    def _make(
        role: UserRole = UserRole.ADMIN,
        subscription: SubscriptionTier = SubscriptionTier.FREE,
        **overrides,
    ) -> TokenClaims:
        data = {
            "user_id": uuid4(),
            "email": f"user_{uuid4().hex[:8]}@example.com",
            "role": role,
            "tenant_id": uuid4(),
            "subscription": subscription,
        }
        data.update(overrides)
        return TokenClaims(**data)

    return _make
