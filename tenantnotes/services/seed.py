"""Demo data: two tenants with one admin and one member each.

Idempotent: existing tenants and users are left untouched, so it can be run
against a database that was already seeded.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tenantnotes.core.plans import SubscriptionPlan
from tenantnotes.core.security import hash_password
from tenantnotes.models.tenant import Tenant
from tenantnotes.models.user import User, UserRole

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"

DEMO_TENANTS: list[tuple[str, str]] = [
    ("acme", "Acme Corporation"),
    ("globex", "Globex Corporation"),
]

# (email, role, tenant slug)
DEMO_USERS: list[tuple[str, UserRole, str]] = [
    ("admin@acme.test", UserRole.ADMIN, "acme"),
    ("user@acme.test", UserRole.MEMBER, "acme"),
    ("admin@globex.test", UserRole.ADMIN, "globex"),
    ("user@globex.test", UserRole.MEMBER, "globex"),
]


@dataclass
class SeedResult:
    tenants: list[Tenant]
    new_users_created: int
    existing_users: int


async def seed_demo_data(session: AsyncSession) -> SeedResult:
    slugs = [slug for slug, _ in DEMO_TENANTS]
    result = await session.execute(select(Tenant).where(Tenant.slug.in_(slugs)))  # type: ignore[attr-defined]
    tenants = {t.slug: t for t in result.scalars().all()}

    for slug, name in DEMO_TENANTS:
        if slug not in tenants:
            tenant = Tenant(name=name, slug=slug, subscription_plan=SubscriptionPlan.FREE)
            session.add(tenant)
            tenants[slug] = tenant
    await session.flush()  # populate tenant ids

    emails = [email for email, _, _ in DEMO_USERS]
    result = await session.execute(select(User.email).where(User.email.in_(emails)))  # type: ignore[attr-defined]
    existing = set(result.scalars().all())

    password_hash = hash_password(DEMO_PASSWORD)
    created = 0
    for email, role, slug in DEMO_USERS:
        if email in existing:
            continue
        session.add(User(
            email=email,
            password_hash=password_hash,
            role=role,
            tenant_id=tenants[slug].id,
        ))
        created += 1

    await session.commit()
    logger.info("Seeded demo data: %d new users, %d already present", created, len(existing))

    return SeedResult(
        tenants=[tenants[slug] for slug in slugs],
        new_users_created=created,
        existing_users=len(existing),
    )
