"""
State Management
Session lifecycle, route guarding and local persistence.
"""

from .session import (
    SessionStatus,
    SessionStore,
    SessionManager,
)
from .guard import RouteDecision, RouteGuard
from .persistence import (
    KeyValueStore,
    MemoryStore,
    JSONFileStore,
    ClientStorage,
    StoredSession,
    CredentialPersistence,
    PreferenceStore,
)

__all__ = [
    "SessionStatus",
    "SessionStore",
    "SessionManager",
    "RouteDecision",
    "RouteGuard",
    "KeyValueStore",
    "MemoryStore",
    "JSONFileStore",
    "ClientStorage",
    "StoredSession",
    "CredentialPersistence",
    "PreferenceStore",
]
