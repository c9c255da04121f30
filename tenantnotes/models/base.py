"""Shared base fields for all tables."""

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, DateTime
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


class TimestampMixin(SQLModel):
    """created_at / updated_at columns carried by every table, stored as aware UTC."""

    created_at: datetime = Field(
        default_factory=utcnow, nullable=False, sa_type=DateTime(timezone=True)
    )
    updated_at: datetime = Field(
        default_factory=utcnow, nullable=False, sa_type=DateTime(timezone=True)
    )

    def touch(self) -> None:
        """Mark the row as modified now."""
        self.updated_at = utcnow()


def enum_column(enum_cls: type[Enum], name: str) -> Column:
    """Enum column persisted by member value ("free") rather than name ("FREE")."""
    return Column(
        SAEnum(enum_cls, name=name, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
