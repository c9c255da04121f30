"""Bearer-token dependency and the admin-only variant."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from tenantnotes.core.security import issue_token


@pytest.mark.asyncio
async def test_missing_auth_rejected(client: AsyncClient):
    resp = await client.get("/api/notes")
    assert resp.status_code == 401
    assert resp.json() == {
        "success": False,
        "error": "Authorization token required",
        "code": "MISSING_CREDENTIAL",
    }


@pytest.mark.asyncio
async def test_non_bearer_scheme_rejected(client: AsyncClient):
    resp = await client.get("/api/notes", headers={"Authorization": "Basic abc123"})
    assert resp.status_code == 401
    assert resp.json()["code"] == "MISSING_CREDENTIAL"


@pytest.mark.asyncio
async def test_invalid_token_rejected(client: AsyncClient):
    resp = await client.get("/api/notes", headers={"Authorization": "Bearer totally-fake-token"})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid or expired token"
    assert resp.json()["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_expired_token_rejected(client: AsyncClient, acme):
    admin = acme["admin"]
    token = issue_token(
        user_id=admin["id"],
        email=admin["email"],
        role="admin",
        tenant_id=acme["tenant"]["id"],
        tenant_slug="acme",
        now=datetime.now(timezone.utc) - timedelta(hours=25),
    )
    resp = await client.get("/api/notes", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_member_blocked_from_admin_routes(client: AsyncClient, acme, login):
    headers = await login("alice@acme.test")

    resp = await client.get("/api/users", headers=headers)
    assert resp.status_code == 403
    assert resp.json()["error"] == "Admin access required"

    resp = await client.post("/api/tenants/acme/upgrade", headers=headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_admin_route_checks_token_before_role(client: AsyncClient):
    """No token on an admin route is still a 401, not a 403."""
    resp = await client.get("/api/users")
    assert resp.status_code == 401
