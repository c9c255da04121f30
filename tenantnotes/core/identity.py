"""Caller identity resolved from a verified token.

Admins and members are distinct types so scoping decisions dispatch on the
type rather than on a role string.
"""

import uuid
from dataclasses import dataclass

from tenantnotes.core.security import TokenClaims
from tenantnotes.models.user import UserRole


@dataclass(frozen=True, slots=True)
class AdminIdentity:
    user_id: uuid.UUID
    email: str
    tenant_id: uuid.UUID
    tenant_slug: str

    role = UserRole.ADMIN


@dataclass(frozen=True, slots=True)
class MemberIdentity:
    user_id: uuid.UUID
    email: str
    tenant_id: uuid.UUID
    tenant_slug: str

    role = UserRole.MEMBER


Identity = AdminIdentity | MemberIdentity


def identity_from_claims(claims: TokenClaims) -> Identity:
    cls = AdminIdentity if claims.role == UserRole.ADMIN else MemberIdentity
    return cls(
        user_id=claims.userId,
        email=claims.email,
        tenant_id=claims.tenantId,
        tenant_slug=claims.tenantSlug,
    )
