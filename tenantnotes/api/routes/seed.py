"""Development seeding endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel

from tenantnotes.api.deps import Session
from tenantnotes.api.envelope import Envelope, ok
from tenantnotes.core.config import get_settings
from tenantnotes.core.exceptions import Forbidden
from tenantnotes.models.tenant import TenantRead
from tenantnotes.services.seed import seed_demo_data

router = APIRouter(prefix="/seed", tags=["seed"])


class SeedSummary(BaseModel):
    tenants: list[TenantRead]
    new_users_created: int
    existing_users: int


@router.post("", response_model=Envelope[SeedSummary], response_model_exclude_none=True)
async def seed(session: Session) -> Envelope[SeedSummary]:
    """Create the demo tenants and users. Disabled in production unless ALLOW_SEEDING is set."""
    settings = get_settings()
    if settings.is_production and not settings.allow_seeding:
        raise Forbidden("Seeding not allowed in production")

    result = await seed_demo_data(session)
    summary = SeedSummary(
        tenants=[TenantRead.model_validate(t) for t in result.tenants],
        new_users_created=result.new_users_created,
        existing_users=result.existing_users,
    )
    return ok(
        summary,
        message=f"Database seeded successfully. Created {result.new_users_created} new users.",
    )
