"""Shared test fixtures: async SQLite in-memory DB + test client."""

import uuid
from collections.abc import AsyncGenerator
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

# Import all models so metadata is populated
import tenantnotes.models  # noqa: F401
from tenantnotes.core.database import get_session
from tenantnotes.core.plans import SubscriptionPlan
from tenantnotes.core.security import hash_password
from tenantnotes.main import app
from tenantnotes.models.note import Note
from tenantnotes.models.tenant import Tenant
from tenantnotes.models.user import User, UserRole

PASSWORD = "testpass123"
# Hashing is slow; every fixture user shares one hash
_PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite://", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def test_session_factory(engine):
    """Session factory bound to the test SQLite engine."""
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with test_session_factory() as sess:
        yield sess
        await sess.rollback()


@pytest.fixture
async def client(session) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX async test client with DB session override."""

    async def _override_session():
        yield session

    app.dependency_overrides[get_session] = _override_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ── Data factories ───────────────────────────────────────────
# Factories return plain values (ids, slugs, emails) rather than ORM objects:
# a handler rollback expires every instance in the shared session.

@pytest.fixture
def make_tenant(session):
    async def _make(slug: str, plan: SubscriptionPlan = SubscriptionPlan.FREE) -> dict:
        tenant = Tenant(name=f"{slug.title()} Inc", slug=slug, subscription_plan=plan)
        session.add(tenant)
        await session.commit()
        return {"id": tenant.id, "slug": tenant.slug}

    return _make


@pytest.fixture
def make_user(session):
    async def _make(email: str, tenant: dict, role: UserRole = UserRole.MEMBER) -> dict:
        user = User(
            email=email,
            password_hash=_PASSWORD_HASH,
            role=role,
            tenant_id=tenant["id"],
        )
        session.add(user)
        await session.commit()
        return {"id": user.id, "email": email, "role": role, "tenant": tenant}

    return _make


@pytest.fixture
def make_note(session):
    async def _make(
        owner: dict,
        title: str = "note",
        content: str = "",
        created_at: datetime | None = None,
    ) -> uuid.UUID:
        note = Note(
            title=title,
            content=content,
            user_id=owner["id"],
            tenant_id=owner["tenant"]["id"],
        )
        if created_at is not None:
            note.created_at = created_at
        session.add(note)
        await session.commit()
        return note.id

    return _make


@pytest.fixture
def login(client):
    """Log in through the API and return Authorization headers."""

    async def _login(email: str, password: str = PASSWORD) -> dict[str, str]:
        resp = await client.post("/api/auth", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['data']['token']}"}

    return _login


@pytest.fixture
async def acme(make_tenant, make_user) -> dict:
    """Free tenant "acme" with an admin and two members."""
    tenant = await make_tenant("acme")
    return {
        "tenant": tenant,
        "admin": await make_user("admin@acme.test", tenant, UserRole.ADMIN),
        "alice": await make_user("alice@acme.test", tenant),
        "bob": await make_user("bob@acme.test", tenant),
    }


@pytest.fixture
async def globex(make_tenant, make_user) -> dict:
    """Second free tenant used for cross-tenant checks."""
    tenant = await make_tenant("globex")
    return {
        "tenant": tenant,
        "admin": await make_user("admin@globex.test", tenant, UserRole.ADMIN),
        "member": await make_user("user@globex.test", tenant),
    }
