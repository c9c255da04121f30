"""User model: belongs to exactly one tenant."""

import uuid
from datetime import datetime
from enum import StrEnum

from sqlmodel import Field, SQLModel

from tenantnotes.models.base import TimestampMixin, enum_column, new_uuid


class UserRole(StrEnum):
    ADMIN = "admin"
    MEMBER = "member"


class User(TimestampMixin, SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    email: str = Field(max_length=320, unique=True, nullable=False, index=True)
    password_hash: str = Field(nullable=False)
    role: UserRole = Field(default=UserRole.MEMBER, sa_column=enum_column(UserRole, "user_role"))


# ── Pydantic schemas ─────────────────────────────────────────

class UserRead(SQLModel):
    """Public user fields returned at login."""
    id: uuid.UUID
    email: str
    role: UserRole
    tenant_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class UserListItem(SQLModel):
    id: uuid.UUID
    email: str
    role: UserRole
    created_at: datetime
