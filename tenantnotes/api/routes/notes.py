"""Notes CRUD: tenant-scoped, with per-role ownership rules."""

import logging
import uuid

from fastapi import APIRouter, status
from sqlalchemy import and_, func, insert, literal, or_
from sqlmodel import select

from tenantnotes.api.deps import Auth, Session
from tenantnotes.api.envelope import Envelope, ok
from tenantnotes.core.exceptions import BadRequest, NotFound, SubscriptionLimitExceeded
from tenantnotes.core.permissions import (
    note_delete_miss_message,
    note_delete_scope,
    note_read_scope,
    note_update_scope,
)
from tenantnotes.core.plans import SubscriptionPlan, note_limit
from tenantnotes.models.base import new_uuid, utcnow
from tenantnotes.models.note import Note, NoteCreate, NoteRead, NoteUpdate
from tenantnotes.models.tenant import Tenant

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=Envelope[list[NoteRead]], response_model_exclude_none=True)
async def list_notes(auth: Auth, session: Session) -> Envelope[list[NoteRead]]:
    stmt = (
        select(Note)
        .where(*note_read_scope(auth))
        .order_by(Note.created_at.desc())  # type: ignore[attr-defined]
    )
    result = await session.execute(stmt)
    return ok([NoteRead.model_validate(n) for n in result.scalars().all()])


@router.post(
    "",
    response_model=Envelope[NoteRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_note(body: NoteCreate, auth: Auth, session: Session) -> Envelope[NoteRead]:
    if not body.title or not body.title.strip():
        raise BadRequest("Title is required")

    # Row lock on the tenant serializes creates per tenant on PostgreSQL.
    tenant = (
        await session.execute(
            select(Tenant).where(Tenant.id == auth.tenant_id).with_for_update()
        )
    ).scalar_one_or_none()
    if tenant is None:
        raise NotFound("Tenant not found")

    now = utcnow()
    values = {
        "id": new_uuid(),
        "tenant_id": auth.tenant_id,
        "user_id": auth.user_id,
        "title": body.title,
        "content": body.content or "",
        "created_at": now,
        "updated_at": now,
    }
    # The cap is checked inside the INSERT itself, so on SQLite the count
    # runs under the writer lock.
    result = await session.execute(_insert_within_plan_limit(values))
    if result.rowcount == 0:
        logger.info("Tenant %s hit the %s plan note limit", tenant.slug, tenant.subscription_plan)
        await session.rollback()
        raise SubscriptionLimitExceeded()

    await session.commit()
    note = await session.get(Note, values["id"])
    return ok(NoteRead.model_validate(note))


@router.get("/{note_id}", response_model=Envelope[NoteRead], response_model_exclude_none=True)
async def get_note(note_id: uuid.UUID, auth: Auth, session: Session) -> Envelope[NoteRead]:
    note = await _find(note_id, note_read_scope(auth), session)
    if note is None:
        raise NotFound("Note not found")
    return ok(NoteRead.model_validate(note))


@router.put("/{note_id}", response_model=Envelope[NoteRead], response_model_exclude_none=True)
async def update_note(
    note_id: uuid.UUID,
    body: NoteUpdate,
    auth: Auth,
    session: Session,
) -> Envelope[NoteRead]:
    update_data = body.model_dump(exclude_none=True)
    if not update_data:
        raise BadRequest("At least title or content must be provided")
    if "title" in update_data and not update_data["title"].strip():
        raise BadRequest("Title cannot be empty")

    note = await _find(note_id, note_update_scope(auth), session)
    if note is None:
        raise NotFound("Note not found or access denied")

    for field, value in update_data.items():
        setattr(note, field, value)

    note.touch()
    session.add(note)
    await session.commit()
    await session.refresh(note)
    return ok(NoteRead.model_validate(note))


@router.delete("/{note_id}", response_model=Envelope[None], response_model_exclude_none=True)
async def delete_note(note_id: uuid.UUID, auth: Auth, session: Session) -> Envelope[None]:
    note = await _find(note_id, note_delete_scope(auth), session)
    if note is None:
        raise NotFound(note_delete_miss_message(auth))

    await session.delete(note)
    await session.commit()
    logger.info("Note %s deleted by %s user %s", note_id, auth.role, auth.user_id)
    return ok(message="Note deleted successfully")


# ── Internal helper ───────────────────────────────────────────

async def _find(note_id: uuid.UUID, scope: list, session) -> Note | None:
    stmt = select(Note).where(Note.id == note_id, *scope)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


def _insert_within_plan_limit(values: dict):
    """INSERT … SELECT that writes the note only while the tenant's plan has room."""
    table = Note.__table__
    tenant_notes = (
        select(func.count())
        .select_from(Note)
        .where(Note.tenant_id == values["tenant_id"])
        .correlate(None)
        .scalar_subquery()
    )
    plan_allows = []
    for plan in SubscriptionPlan:
        limit = note_limit(plan)
        if limit is None:
            plan_allows.append(Tenant.subscription_plan == plan)
        else:
            plan_allows.append(and_(Tenant.subscription_plan == plan, tenant_notes < limit))

    source = (
        select(*[literal(value, table.c[name].type) for name, value in values.items()])
        .select_from(Tenant)
        .where(Tenant.id == values["tenant_id"], or_(*plan_allows))
    )
    return insert(table).from_select(list(values), source)
