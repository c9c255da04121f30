"""Note model: owned by a user, pinned to the owner's tenant."""

import uuid
from datetime import datetime

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel

from tenantnotes.models.base import TimestampMixin, new_uuid


class Note(TimestampMixin, SQLModel, table=True):
    __tablename__ = "notes"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", nullable=False, index=True)

    title: str = Field(max_length=255, nullable=False)
    content: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))


# ── Pydantic schemas ─────────────────────────────────────────
# Write schemas carry no ownership fields; tenant_id and user_id come from
# the caller's identity.

class NoteCreate(SQLModel):
    title: str | None = Field(default=None, max_length=255)
    content: str | None = None


class NoteUpdate(SQLModel):
    title: str | None = Field(default=None, max_length=255)
    content: str | None = None


class NoteRead(SQLModel):
    id: uuid.UUID
    title: str
    content: str
    user_id: uuid.UUID
    tenant_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
