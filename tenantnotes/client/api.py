"""Async HTTP client for the notes API."""

import uuid
from typing import Any

import httpx

from tenantnotes.client.session import AuthSession
from tenantnotes.models.note import NoteRead
from tenantnotes.models.tenant import TenantRead
from tenantnotes.models.user import UserListItem, UserRead

DEFAULT_BASE_URL = "http://localhost:8000/api"


class ApiError(Exception):
    """Non-success envelope returned by the API."""

    def __init__(self, status_code: int, error: str, code: str | None = None) -> None:
        self.status_code = status_code
        self.error = error
        self.code = code
        super().__init__(f"HTTP {status_code}: {error}")


class SubscriptionLimitError(ApiError):
    """The tenant's plan does not allow another note; an upgrade is required."""


class NotesClient:
    """Thin wrapper that attaches the session token and unwraps envelopes.

    Use as an async context manager, or call ``aclose()`` when done.
    """

    def __init__(
        self,
        session: AuthSession,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.session = session
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "NotesClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ── Plumbing ─────────────────────────────────────────────

    async def _request(self, method: str, path: str, json: dict | None = None) -> dict[str, Any]:
        resp = await self._http.request(method, path, json=json, headers=self.session.auth_headers())
        try:
            body = resp.json()
        except ValueError:
            body = {}

        if resp.is_success and body.get("success", True):
            return body

        error = body.get("error") or f"HTTP {resp.status_code}"
        code = body.get("code")
        if code == "SUBSCRIPTION_LIMIT":
            raise SubscriptionLimitError(resp.status_code, error, code)
        raise ApiError(resp.status_code, error, code)

    # ── Endpoints ────────────────────────────────────────────

    async def health(self) -> dict:
        return await self._request("GET", "/health")

    async def login(self, email: str, password: str) -> UserRead:
        """Authenticate and start the session."""
        data = (await self._request("POST", "/auth", {"email": email, "password": password}))["data"]
        user = UserRead.model_validate(data["user"])
        tenant = TenantRead.model_validate(data["tenant"])
        self.session.begin(data["token"], user, tenant)
        return user

    def logout(self) -> None:
        self.session.end()

    async def list_notes(self) -> list[NoteRead]:
        body = await self._request("GET", "/notes")
        return [NoteRead.model_validate(n) for n in body["data"]]

    async def get_note(self, note_id: uuid.UUID | str) -> NoteRead:
        body = await self._request("GET", f"/notes/{note_id}")
        return NoteRead.model_validate(body["data"])

    async def create_note(self, title: str, content: str = "") -> NoteRead:
        body = await self._request("POST", "/notes", {"title": title, "content": content})
        return NoteRead.model_validate(body["data"])

    async def update_note(
        self,
        note_id: uuid.UUID | str,
        title: str | None = None,
        content: str | None = None,
    ) -> NoteRead:
        payload = {k: v for k, v in (("title", title), ("content", content)) if v is not None}
        body = await self._request("PUT", f"/notes/{note_id}", payload)
        return NoteRead.model_validate(body["data"])

    async def delete_note(self, note_id: uuid.UUID | str) -> str:
        body = await self._request("DELETE", f"/notes/{note_id}")
        return body.get("message", "")

    async def upgrade_tenant(self, slug: str | None = None) -> TenantRead:
        """Upgrade the tenant (defaults to the session's) and refresh the cached snapshot."""
        if slug is None:
            if self.session.tenant is None:
                raise RuntimeError("No active session")
            slug = self.session.tenant.slug
        body = await self._request("POST", f"/tenants/{slug}/upgrade")
        tenant = TenantRead.model_validate(body["data"])
        if self.session.tenant is not None and self.session.tenant.slug == tenant.slug:
            self.session.update_tenant(tenant)
        return tenant

    async def list_users(self) -> list[UserListItem]:
        body = await self._request("GET", "/users")
        return [UserListItem.model_validate(u) for u in body["data"]]

    async def seed(self) -> dict:
        body = await self._request("POST", "/seed")
        return body.get("data") or {}
