"""
Collaborator Ports
The operations the core consumes from the journal service.

``utils.api_client.APIClient`` implements all of them over HTTP; tests
substitute in-memory fakes.
"""

from typing import List, Protocol

from models import AnalysisResult, Credentials, JournalEntry


class AuthGateway(Protocol):
    def authenticate(self, username: str, password: str) -> Credentials:
        """Raises AuthenticationError on bad credentials"""
        ...

    def register(self, username: str, email: str, password: str) -> None:
        """Raises RegistrationError when the account cannot be created"""
        ...


class TokenVerifier(Protocol):
    def verify(self, access_token: str) -> None:
        """Raises AuthenticationError if the token is no longer valid"""
        ...

    def refresh(self, refresh_token: str) -> str:
        """Exchange a refresh token for a new access token"""
        ...


class EntryGateway(Protocol):
    def fetch_entries(self) -> List[JournalEntry]:
        """All entries of the current user, newest first"""
        ...

    def create_entry(self, content: str) -> JournalEntry:
        ...

    def analyze(self, entry_id: int) -> AnalysisResult:
        ...
