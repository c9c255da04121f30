"""Tenant model: top-level isolation boundary."""

import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel

from tenantnotes.core.plans import SubscriptionPlan
from tenantnotes.models.base import TimestampMixin, enum_column, new_uuid


class Tenant(TimestampMixin, SQLModel, table=True):
    __tablename__ = "tenants"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    name: str = Field(max_length=255, nullable=False)
    slug: str = Field(max_length=100, unique=True, nullable=False, index=True)
    subscription_plan: SubscriptionPlan = Field(
        default=SubscriptionPlan.FREE,
        sa_column=enum_column(SubscriptionPlan, "subscription_plan"),
    )


# ── Pydantic schemas ─────────────────────────────────────────

class TenantRead(SQLModel):
    id: uuid.UUID
    name: str
    slug: str
    subscription_plan: SubscriptionPlan
    created_at: datetime
    updated_at: datetime
