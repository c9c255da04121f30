"""User listing: tenant-scoped, admin only."""

from fastapi import APIRouter
from sqlmodel import select

from tenantnotes.api.deps import AdminAuth, Session
from tenantnotes.api.envelope import Envelope, ok
from tenantnotes.models.user import User, UserListItem

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=Envelope[list[UserListItem]], response_model_exclude_none=True)
async def list_users(auth: AdminAuth, session: Session) -> Envelope[list[UserListItem]]:
    stmt = (
        select(User)
        .where(User.tenant_id == auth.tenant_id)
        .order_by(User.created_at.asc())  # type: ignore[attr-defined]
    )
    result = await session.execute(stmt)
    return ok(
        [UserListItem.model_validate(u) for u in result.scalars().all()],
        message="Users retrieved successfully",
    )
