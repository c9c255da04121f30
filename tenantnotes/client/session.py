"""Client-side session: the issued token plus cached user and tenant.

``AuthSession`` is an explicit object with a defined lifecycle:
``hydrate()`` restores a persisted session, ``begin()`` starts one after
login, ``end()`` tears it down. Persistence is delegated to ``SessionStore``.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError

from tenantnotes.models.tenant import TenantRead
from tenantnotes.models.user import UserRead

logger = logging.getLogger(__name__)

DEFAULT_SESSION_PATH = Path.home() / ".tenantnotes" / "session.json"


class SessionData(BaseModel):
    token: str
    user: UserRead
    tenant: TenantRead


class SessionStore:
    """JSON file holding the last session."""

    def __init__(self, path: Path | str = DEFAULT_SESSION_PATH) -> None:
        self.path = Path(path)

    def load(self) -> SessionData | None:
        if not self.path.exists():
            return None
        try:
            return SessionData.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (ValidationError, ValueError, OSError):
            logger.warning("Discarding unreadable session file %s", self.path)
            self.clear()
            return None

    def save(self, data: SessionData) -> None:
        """Write the session readable by the owner only; it holds a bearer token."""
        self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(data.model_dump_json())
        # O_CREAT leaves the mode of an existing file alone
        os.chmod(self.path, 0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class AuthSession:
    def __init__(self, store: SessionStore | None = None) -> None:
        self.store = store or SessionStore()
        self._data: SessionData | None = None

    # ── Lifecycle ────────────────────────────────────────────

    def hydrate(self) -> bool:
        """Restore the persisted session. Returns True if one was found."""
        self._data = self.store.load()
        return self._data is not None

    def begin(self, token: str, user: UserRead, tenant: TenantRead) -> None:
        self._data = SessionData(token=token, user=user, tenant=tenant)
        self.store.save(self._data)

    def end(self) -> None:
        self._data = None
        self.store.clear()

    # ── State ────────────────────────────────────────────────

    def update_tenant(self, tenant: TenantRead) -> None:
        """Replace the cached tenant snapshot, e.g. after an upgrade."""
        if self._data is None:
            raise RuntimeError("No active session")
        self._data = self._data.model_copy(update={"tenant": tenant})
        self.store.save(self._data)

    @property
    def is_authenticated(self) -> bool:
        return self._data is not None

    @property
    def token(self) -> str | None:
        return self._data.token if self._data else None

    @property
    def user(self) -> UserRead | None:
        return self._data.user if self._data else None

    @property
    def tenant(self) -> TenantRead | None:
        return self._data.tenant if self._data else None

    def auth_headers(self) -> dict[str, str]:
        if self._data is None:
            return {}
        return {"Authorization": f"Bearer {self._data.token}"}

    def __repr__(self) -> str:
        who = self._data.user.email if self._data else None
        return f"AuthSession(user={who!r})"
