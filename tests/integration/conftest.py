"""Shared fixtures: in-memory database, two signed-in users, an ASGI client."""

from __future__ import annotations

from datetime import datetime, timezone, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from civichub.db.engine import get_db
from civichub.main import app
from civichub.models import Base, User, UserSession
from civichub.services.auth import hash_password, _hash_token
from tests.integration.helpers import problem_payload

ALICE_ID = "01ALICE0000000000000000000"
BOB_ID = "01BOB000000000000000000000"
_ALICE_TOKEN = "alice-session-token-abc123"
_BOB_TOKEN = "bob-session-token-def456"


@pytest_asyncio.fixture
async def session_factory():
    test_engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    expires = datetime.now(timezone.utc) + timedelta(hours=24)
    async with factory() as db:
        db.add_all([
            User(id=ALICE_ID, name="Alice", email="alice@test.com", password_hash=hash_password("alicepass")),
            User(id=BOB_ID, name="Bob", email="bob@test.com", password_hash=hash_password("bobpass1")),
        ])
        await db.flush()
        db.add_all([
            UserSession(user_id=ALICE_ID, token_hash=_hash_token(_ALICE_TOKEN), expires_at=expires),
            UserSession(user_id=BOB_ID, token_hash=_hash_token(_BOB_TOKEN), expires_at=expires),
        ])
        await db.commit()

    yield factory
    await test_engine.dispose()


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def alice():
    return {"Authorization": f"Bearer {_ALICE_TOKEN}"}


@pytest.fixture
def bob():
    return {"Authorization": f"Bearer {_BOB_TOKEN}"}


@pytest_asyncio.fixture
async def problem_id(client, alice):
    r = await client.post("/api/problems", json=problem_payload(), headers=alice)
    assert r.status_code == 201
    return r.json()["id"]
