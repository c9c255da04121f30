"""Tenant subscription management."""

import logging

from fastapi import APIRouter
from sqlmodel import select

from tenantnotes.api.deps import AdminAuth, Session
from tenantnotes.api.envelope import Envelope, ok
from tenantnotes.core.exceptions import AlreadyOnPlan, Forbidden, NotFound
from tenantnotes.core.plans import SubscriptionPlan, can_upgrade
from tenantnotes.models.tenant import Tenant, TenantRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.post(
    "/{slug}/upgrade",
    response_model=Envelope[TenantRead],
    response_model_exclude_none=True,
    summary="Upgrade the caller's tenant to the Pro plan",
)
async def upgrade_tenant(slug: str, auth: AdminAuth, session: Session) -> Envelope[TenantRead]:
    """Move a tenant from free to pro.

    Only an admin of the tenant named in the path may do this; the slug
    check runs before any lookup so other tenants' slugs are never revealed.
    """
    if auth.tenant_slug != slug:
        raise Forbidden("Access denied: You can only upgrade your own tenant")

    result = await session.execute(select(Tenant).where(Tenant.slug == slug))
    tenant = result.scalar_one_or_none()
    if tenant is None:
        raise NotFound("Tenant not found")

    if not can_upgrade(tenant.subscription_plan, SubscriptionPlan.PRO):
        raise AlreadyOnPlan()

    tenant.subscription_plan = SubscriptionPlan.PRO
    tenant.touch()
    session.add(tenant)
    await session.commit()
    await session.refresh(tenant)
    logger.info("Tenant %s upgraded to pro by %s", slug, auth.user_id)

    return ok(TenantRead.model_validate(tenant), message="Subscription upgraded to Pro successfully")
