"""
Session State Management
Authentication lifecycle as an explicit state machine.

States:
    UNRESOLVED     startup; persisted credentials not looked at yet
    AUTHENTICATED  credentials held, user known
    ANONYMOUS      no credentials, or credentials discarded

Transitions:
    resume()    UNRESOLVED -> AUTHENTICATED | ANONYMOUS
    login()     *          -> AUTHENTICATED           (failure: unchanged)
    register()  *          -> AUTHENTICATED via login (failure: unchanged)
    logout()    *          -> ANONYMOUS               (idempotent)

The SessionStore is the only mutable state shared between components. The
SessionManager is its only writer; the orchestrator, the API client and
the route guard read it.
"""

import logging
from enum import Enum
from typing import Optional

from core.errors import APIError, AuthenticationError
from core.ports import AuthGateway, TokenVerifier
from models import Credentials, User
from utils.config import settings

from .persistence import CredentialPersistence, StoredSession

logger = logging.getLogger(__name__)


# =============================================================================
# Session Store
# =============================================================================

class SessionStatus(Enum):
    UNRESOLVED = "unresolved"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class SessionStore:
    """Current authentication state, credentials and user"""

    def __init__(self):
        self.status: SessionStatus = SessionStatus.UNRESOLVED
        self.credentials: Optional[Credentials] = None
        self.user: Optional[User] = None

    @property
    def access_token(self) -> Optional[str]:
        return self.credentials.access if self.credentials else None

    @property
    def is_authenticated(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATED

    def session_key(self) -> Optional[str]:
        """Identifies the active session; None when there is none"""
        if not self.is_authenticated or self.credentials is None:
            return None
        return self.credentials.access

    def set_authenticated(self, credentials: Credentials, user: User) -> None:
        self.credentials = credentials
        self.user = user
        self.status = SessionStatus.AUTHENTICATED

    def set_anonymous(self) -> None:
        self.credentials = None
        self.user = None
        self.status = SessionStatus.ANONYMOUS


# =============================================================================
# Session Manager
# =============================================================================

class SessionManager:
    """
    Drives the SessionStore through the authentication lifecycle.

    Usage:
        manager = SessionManager(SessionStore(), client, persistence, verifier=client)
        manager.resume()

        if manager.may_access_protected:
            ...

        manager.login("alice", "secret")
        manager.logout()
    """

    def __init__(
        self,
        store: SessionStore,
        auth: AuthGateway,
        persistence: CredentialPersistence,
        verifier: Optional[TokenVerifier] = None,
        verify_on_resume: Optional[bool] = None,
    ):
        self.store = store
        self._auth = auth
        self._persistence = persistence
        self._verifier = verifier
        if verify_on_resume is None:
            verify_on_resume = settings.VERIFY_ON_RESUME
        self._verify_on_resume = verify_on_resume and verifier is not None

    # =========================================================================
    # Derived State
    # =========================================================================

    @property
    def status(self) -> SessionStatus:
        return self.store.status

    @property
    def user(self) -> Optional[User]:
        return self.store.user

    @property
    def is_resolved(self) -> bool:
        return self.store.status != SessionStatus.UNRESOLVED

    @property
    def may_access_protected(self) -> bool:
        return self.store.is_authenticated

    # =========================================================================
    # Transitions
    # =========================================================================

    def resume(self) -> SessionStatus:
        """Restore a session persisted by a previous run, if any"""
        if self.is_resolved:
            return self.store.status

        stored = self._persistence.load()
        if stored is None:
            logger.info("No stored session; starting anonymous")
            self.store.set_anonymous()
            return self.store.status

        credentials = stored.credentials
        if self._verify_on_resume:
            credentials = self._verify_stored(stored)
            if credentials is None:
                self.store.set_anonymous()
                return self.store.status

        self.store.set_authenticated(credentials, User(id=0, username=stored.username))
        logger.info("Resumed session for %s", stored.username or "<unknown>")
        return self.store.status

    def login(self, username: str, password: str) -> User:
        try:
            credentials = self._auth.authenticate(username, password)
        except AuthenticationError:
            logger.warning("Login rejected for %s", username)
            raise

        self._persistence.save(credentials, username)
        user = User(id=0, username=username)
        self.store.set_authenticated(credentials, user)
        logger.info("Logged in as %s", username)
        return user

    def register(self, username: str, email: str, password: str) -> User:
        self._auth.register(username, email, password)
        logger.info("Registered account %s", username)

        user = self.login(username, password)
        user = User(id=user.id, username=user.username, email=email)
        self.store.user = user
        return user

    def logout(self) -> None:
        previous = self.store.user.username if self.store.user else None
        self._persistence.clear()
        self.store.set_anonymous()
        if previous:
            logger.info("Logged out %s", previous)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _verify_stored(self, stored: StoredSession) -> Optional[Credentials]:
        """
        Check a persisted credential with the journal service.

        Returns the credentials to use, or None when the session must not
        be resumed. Persistence is cleared only when the service rejected
        the credentials; an unreachable service leaves them for next time.
        """
        credentials = stored.credentials
        try:
            self._verifier.verify(credentials.access)
            return credentials
        except AuthenticationError:
            logger.info("Stored access token rejected; trying refresh")
        except APIError as exc:
            logger.warning("Could not verify stored session: %s", exc)
            return None

        if not credentials.refresh:
            self._persistence.clear()
            return None

        try:
            access = self._verifier.refresh(credentials.refresh)
        except AuthenticationError:
            logger.info("Stored refresh token rejected; clearing session")
            self._persistence.clear()
            return None
        except APIError as exc:
            logger.warning("Could not refresh stored session: %s", exc)
            return None

        refreshed = Credentials(access=access, refresh=credentials.refresh)
        self._persistence.save(refreshed, stored.username)
        return refreshed
