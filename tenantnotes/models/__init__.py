"""Import all models so SQLModel.metadata picks them up."""

from tenantnotes.models.note import Note, NoteCreate, NoteRead, NoteUpdate
from tenantnotes.models.tenant import Tenant, TenantRead
from tenantnotes.models.user import User, UserListItem, UserRead, UserRole

__all__ = [
    "Note",
    "NoteCreate",
    "NoteRead",
    "NoteUpdate",
    "Tenant",
    "TenantRead",
    "User",
    "UserListItem",
    "UserRead",
    "UserRole",
]
