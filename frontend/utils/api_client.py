"""
Journal Service API Client
Connects the Streamlit frontend to the journal REST service.

Implements every collaborator operation the core consumes (see
core.ports). Failures are raised, never returned:

    401/403 on the token endpoints      -> AuthenticationError
    non-2xx on the register endpoint     -> RegistrationError
    any other non-2xx / connection error -> APIError
    body the models cannot parse         -> APIError
"""

import logging
from typing import Any, Callable, List, Optional, TypeVar

import requests

from core.errors import APIError, AuthenticationError, RegistrationError
from models import AnalysisResult, Credentials, JournalEntry

from .config import settings

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]
T = TypeVar("T")


class APIClient:
    """Client for journal service communication"""

    def __init__(
        self,
        base_url: str = None,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.BACKEND_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self._token_provider = token_provider

    def _headers(self, authenticated: bool) -> dict:
        headers = {"Accept": "application/json"}
        if authenticated and self._token_provider is not None:
            token = self._token_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(self, method: str, endpoint: str, data: dict = None, authenticated: bool = True):
        """Make a request and return the decoded JSON body (None when empty)"""
        url = f"{self.base_url}{endpoint}"
        try:
            resp = self.session.request(
                method,
                url,
                json=data,
                headers=self._headers(authenticated),
                timeout=self.timeout,
            )
        except requests.exceptions.ConnectionError as exc:
            logger.warning("%s %s: backend not reachable", method, endpoint)
            raise APIError("Journal service not reachable. Is the backend running?") from exc
        except requests.exceptions.RequestException as exc:
            logger.warning("%s %s failed: %s", method, endpoint, exc)
            raise APIError(str(exc)) from exc

        if not resp.ok:
            detail = self._error_detail(resp)
            logger.warning("%s %s -> %s: %s", method, endpoint, resp.status_code, detail)
            raise APIError(detail, status_code=resp.status_code)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise APIError(f"Invalid JSON from {endpoint}", status_code=resp.status_code) from exc

    @staticmethod
    def _error_detail(resp: requests.Response) -> str:
        """Best human-readable message from an error response"""
        try:
            body = resp.json()
        except ValueError:
            return f"HTTP {resp.status_code}"

        if isinstance(body, dict):
            if "detail" in body:
                return str(body["detail"])
            # Field errors: {"username": ["already exists"], ...}
            parts = []
            for field_name, messages in body.items():
                if isinstance(messages, list):
                    messages = " ".join(str(m) for m in messages)
                parts.append(f"{field_name}: {messages}")
            if parts:
                return "; ".join(parts)
        return f"HTTP {resp.status_code}"

    @staticmethod
    def _parse(endpoint: str, parse: Callable[[Any], T], data: Any) -> T:
        """Build model objects from a decoded body; malformed bodies become APIError"""
        try:
            return parse(data)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Unexpected response from %s: %s", endpoint, exc)
            raise APIError(f"Unexpected response from {endpoint}") from exc

    @staticmethod
    def _is_auth_failure(exc: APIError) -> bool:
        return exc.status_code in (400, 401, 403)

    # =========================================================================
    # Authentication
    # =========================================================================

    def authenticate(self, username: str, password: str) -> Credentials:
        """Exchange username/password for an access/refresh token pair"""
        try:
            data = self._request(
                "POST", "/api/token/",
                {"username": username, "password": password},
                authenticated=False,
            )
        except APIError as exc:
            if self._is_auth_failure(exc):
                raise AuthenticationError(str(exc)) from exc
            raise
        return self._parse("/api/token/", Credentials.from_api_response, data)

    def register(self, username: str, email: str, password: str) -> None:
        """Create an account. Does not log in."""
        try:
            self._request(
                "POST", "/api/register/",
                {"username": username, "email": email, "password": password},
                authenticated=False,
            )
        except APIError as exc:
            if exc.is_connection_error:
                raise
            raise RegistrationError(str(exc)) from exc

    def verify(self, access_token: str) -> None:
        """Raise AuthenticationError unless the access token is still valid"""
        try:
            self._request("POST", "/api/token/verify/", {"token": access_token}, authenticated=False)
        except APIError as exc:
            if self._is_auth_failure(exc):
                raise AuthenticationError("Session expired") from exc
            raise

    def refresh(self, refresh_token: str) -> str:
        """Exchange a refresh token for a new access token"""
        try:
            data = self._request("POST", "/api/token/refresh/", {"refresh": refresh_token}, authenticated=False)
        except APIError as exc:
            if self._is_auth_failure(exc):
                raise AuthenticationError("Session expired") from exc
            raise
        return self._parse("/api/token/refresh/", lambda body: body["access"], data)

    # =========================================================================
    # Journal
    # =========================================================================

    def fetch_entries(self) -> List[JournalEntry]:
        """All entries of the current user, newest first"""
        data = self._request("GET", "/api/journal/") or []
        # Paginated responses wrap the list
        if isinstance(data, dict):
            data = data.get("results", [])
        return self._parse(
            "/api/journal/", lambda items: [JournalEntry.from_api_response(item) for item in items], data
        )

    def create_entry(self, content: str) -> JournalEntry:
        data = self._request("POST", "/api/journal/", {"content": content})
        return self._parse("/api/journal/", JournalEntry.from_api_response, data)

    def analyze(self, entry_id: int) -> AnalysisResult:
        endpoint = f"/api/journal/{entry_id}/analyze/"
        data = self._request("POST", endpoint)
        return self._parse(endpoint, AnalysisResult.from_api_response, data)

    # =========================================================================
    # Health
    # =========================================================================

    def is_connected(self) -> bool:
        """Check if the journal service is reachable"""
        try:
            resp = self.session.get(f"{self.base_url}/api/", timeout=5)
        except requests.exceptions.RequestException:
            return False
        return resp.status_code < 500
