"""Health endpoint, CORS preflight and the error envelope."""

import importlib
import logging

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

import tenantnotes.main
from tenantnotes.api import routes
from tenantnotes.core.config import Settings
from tenantnotes.core.database import get_session
from tenantnotes.core.security import issue_token
from tenantnotes.main import app


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/auth", "/api/notes", "/api/notes/abc", "/api/tenants/acme/upgrade"])
async def test_options_answers_with_cors_headers(client: AsyncClient, path):
    resp = await client.options(path)
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "DELETE" in resp.headers["access-control-allow-methods"]
    assert "Authorization" in resp.headers["access-control-allow-headers"]


@pytest.mark.asyncio
async def test_browser_preflight(client: AsyncClient):
    resp = await client.options("/api/notes", headers={
        "Origin": "http://dashboard.test",
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": "Authorization, Content-Type",
    })
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_allowed_origin_picks_one_entry_from_a_list(monkeypatch):
    monkeypatch.setattr(routes, "settings", Settings(allowed_origins="http://a.test, http://b.test"))

    assert routes.allowed_origin("http://b.test") == "http://b.test"
    assert routes.allowed_origin("http://evil.test") is None
    assert routes.allowed_origin(None) is None


def test_allowed_origin_wildcard():
    assert Settings(allowed_origins="*").origin_list == ["*"]
    assert routes.allowed_origin("http://anything.test") == "*"


@pytest.mark.asyncio
async def test_options_never_echoes_a_raw_origin_list(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(routes, "settings", Settings(allowed_origins="http://a.test,http://b.test"))

    resp = await client.options("/api/notes")
    assert resp.status_code == 200
    assert "access-control-allow-origin" not in resp.headers


def test_importing_app_keeps_existing_log_handlers():
    root = logging.getLogger()
    marker = logging.NullHandler()
    root.addHandler(marker)
    try:
        importlib.reload(tenantnotes.main)
        assert marker in root.handlers
    finally:
        root.removeHandler(marker)


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(client: AsyncClient):
    resp = await client.get("/nope")
    assert resp.status_code == 404
    assert resp.json()["success"] is False


class _BrokenSession:
    """Stands in for an AsyncSession whose database is unreachable."""

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.mark.asyncio
async def test_store_failure_is_a_generic_500():
    """Database errors surface as a bare 500 with no internal detail."""

    async def _broken():
        yield _BrokenSession()

    app.dependency_overrides[get_session] = _broken
    token = issue_token(
        user_id="00000000-0000-0000-0000-000000000001",
        email="a@b.test",
        role="member",
        tenant_id="00000000-0000-0000-0000-000000000002",
        tenant_slug="acme",
    )
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            resp = await ac.get("/api/notes", headers={"Authorization": f"Bearer {token}"})
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    body = resp.json()
    assert body == {"success": False, "error": "Internal server error", "code": "INTERNAL"}
    assert "connection refused" not in resp.text
