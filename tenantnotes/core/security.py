"""Security utilities: password hashing and identity tokens."""

import logging
import uuid
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError

from tenantnotes.core.config import get_settings
from tenantnotes.models.user import UserRole

logger = logging.getLogger(__name__)

settings = get_settings()

# ── Password hashing (Argon2) ────────────────────────────────

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # Unrecognised or corrupt hash in the users table
        logger.warning("Stored password hash could not be parsed")
        return False


# ── JWT ───────────────────────────────────────────────────────

class TokenClaims(BaseModel):
    """Verified identity assertion carried by a bearer token.

    Field names match the wire claims exactly.
    """

    userId: uuid.UUID
    email: str
    role: UserRole
    tenantId: uuid.UUID
    tenantSlug: str
    iat: int
    exp: int


def issue_token(
    user_id: uuid.UUID | str,
    email: str,
    role: UserRole | str,
    tenant_id: uuid.UUID | str,
    tenant_slug: str,
    now: datetime | None = None,
) -> str:
    """Sign an identity assertion valid for ``jwt_expire_minutes``."""
    issued = now or datetime.now(timezone.utc)
    expires = issued + timedelta(minutes=settings.jwt_expire_minutes)
    payload = {
        "userId": str(user_id),
        "email": email,
        "role": str(role),
        "tenantId": str(tenant_id),
        "tenantSlug": tenant_slug,
        "iat": int(issued.timestamp()),
        "exp": int(expires.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def validate_token(token: str) -> TokenClaims | None:
    """Verify signature, expiry and shape. Returns None on any failure."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require_exp": True, "require_iat": True},
        )
    except JWTError as exc:
        logger.debug("Token rejected: %s", exc)
        return None

    try:
        return TokenClaims.model_validate(payload)
    except ValidationError:
        logger.debug("Token rejected: malformed payload")
        return None
