"""Authentication endpoint: email + password in, signed token out."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel
from sqlmodel import select

from tenantnotes.api.deps import Session
from tenantnotes.api.envelope import Envelope, ok
from tenantnotes.core.exceptions import BadRequest, InvalidCredentials
from tenantnotes.core.security import issue_token, verify_password
from tenantnotes.models.tenant import Tenant, TenantRead
from tenantnotes.models.user import User, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


# ── Schemas ──────────────────────────────────────────────────

class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    token: str
    user: UserRead
    tenant: TenantRead


# ── Routes ───────────────────────────────────────────────────

@router.post("", response_model=Envelope[LoginResponse], response_model_exclude_none=True)
async def login(body: LoginRequest, session: Session) -> Envelope[LoginResponse]:
    """Authenticate with email + password, receive a token valid for 24h."""
    if not body.email or not body.password:
        raise BadRequest("Email and password are required")

    stmt = (
        select(User, Tenant)
        .join(Tenant, Tenant.id == User.tenant_id)  # type: ignore[arg-type]
        .where(User.email == body.email)
    )
    row = (await session.execute(stmt)).one_or_none()

    # Same error for unknown email and wrong password
    if row is None or not verify_password(body.password, row[0].password_hash):
        logger.warning("Failed login attempt for %s", body.email)
        raise InvalidCredentials()

    user, tenant = row
    token = issue_token(
        user_id=user.id,
        email=user.email,
        role=user.role,
        tenant_id=user.tenant_id,
        tenant_slug=tenant.slug,
    )
    logger.info("User %s logged in to tenant %s", user.id, tenant.slug)

    return ok(LoginResponse(
        token=token,
        user=UserRead.model_validate(user),
        tenant=TenantRead.model_validate(tenant),
    ))
