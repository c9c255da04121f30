"""Row scoping for notes.

Each note operation has one function that returns the SQL predicates a row
must satisfy for the given identity. Handlers combine these with the row id;
an empty result means "not found" regardless of whether the row exists.

Rules:
- Reads are tenant-wide for every role.
- Updates require ownership for every role (admins get no override).
- Deletes are tenant-wide for admins, ownership-only for members.
"""

from sqlalchemy.sql.elements import ColumnElement

from tenantnotes.core.identity import AdminIdentity, Identity
from tenantnotes.models.note import Note


def _tenant(identity: Identity) -> list[ColumnElement[bool]]:
    return [Note.tenant_id == identity.tenant_id]


def _owner(identity: Identity) -> list[ColumnElement[bool]]:
    return [Note.tenant_id == identity.tenant_id, Note.user_id == identity.user_id]


def note_read_scope(identity: Identity) -> list[ColumnElement[bool]]:
    return _tenant(identity)


def note_update_scope(identity: Identity) -> list[ColumnElement[bool]]:
    return _owner(identity)


def note_delete_scope(identity: Identity) -> list[ColumnElement[bool]]:
    if isinstance(identity, AdminIdentity):
        return _tenant(identity)
    return _owner(identity)


def note_delete_miss_message(identity: Identity) -> str:
    if isinstance(identity, AdminIdentity):
        return "Note not found in your organization"
    return "Note not found or access denied"
