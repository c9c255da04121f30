"""FastAPI dependencies for authentication and role checks."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from tenantnotes.core.database import get_session
from tenantnotes.core.exceptions import Forbidden, InvalidToken, MissingCredential
from tenantnotes.core.identity import AdminIdentity, Identity, identity_from_claims
from tenantnotes.core.security import validate_token

# auto_error=False so a missing header produces our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


async def get_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Identity:
    """Resolve ``Authorization: Bearer <token>`` to a verified identity."""
    if credentials is None or not credentials.credentials:
        raise MissingCredential()

    claims = validate_token(credentials.credentials)
    if claims is None:
        raise InvalidToken()
    return identity_from_claims(claims)


async def require_admin(
    identity: Annotated[Identity, Depends(get_identity)],
) -> AdminIdentity:
    if not isinstance(identity, AdminIdentity):
        raise Forbidden("Admin access required")
    return identity


# Typed shorthand for use in route signatures
Auth = Annotated[Identity, Depends(get_identity)]
AdminAuth = Annotated[AdminIdentity, Depends(require_admin)]
Session = Annotated[AsyncSession, Depends(get_session)]
