"""
Route Guard
Decides what the UI may show from the current session state.
"""

from enum import Enum

from core.errors import SessionInvalidError

from .session import SessionStatus, SessionStore


class RouteDecision(Enum):
    LOADING = "loading"              # session not resolved yet, decide nothing
    ALLOW = "allow"
    REDIRECT_TO_AUTH = "redirect_to_auth"


class RouteGuard:
    def __init__(self, store: SessionStore):
        self._store = store

    def decide(self) -> RouteDecision:
        status = self._store.status
        if status == SessionStatus.UNRESOLVED:
            return RouteDecision.LOADING
        if status == SessionStatus.AUTHENTICATED:
            return RouteDecision.ALLOW
        return RouteDecision.REDIRECT_TO_AUTH

    def require_authenticated(self) -> None:
        """Raise SessionInvalidError unless a protected call may proceed"""
        if not self._store.is_authenticated:
            raise SessionInvalidError()
