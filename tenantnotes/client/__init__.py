"""Python client for the notes API, with a persisted login session."""

from tenantnotes.client.api import ApiError, NotesClient, SubscriptionLimitError
from tenantnotes.client.session import AuthSession, SessionData, SessionStore

__all__ = [
    "ApiError",
    "AuthSession",
    "NotesClient",
    "SessionData",
    "SessionStore",
    "SubscriptionLimitError",
]
