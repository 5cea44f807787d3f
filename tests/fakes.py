"""In-memory stand-in for the journal service."""

from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from core.errors import APIError, AuthenticationError, RegistrationError
from models import AnalysisResult, Credentials, JournalEntry, Sentiment

DEFAULT_ANALYSIS = AnalysisResult(
    sentiment=Sentiment.POSITIVE,
    emotions=["joy", "gratitude"],
    feedback="It sounds like a day full of connection.",
    affirmation="I make room for the moments that matter.",
)


class FakeJournalService:
    def __init__(self):
        self.users: Dict[str, dict] = {}
        self.entries: List[JournalEntry] = []  # newest first
        self.calls: List[tuple] = []
        self.analysis = DEFAULT_ANALYSIS

        self.valid_access = set()
        self.valid_refresh = set()

        self.fail_create: Optional[Exception] = None
        self.fail_analyze: Optional[Exception] = None
        self.unreachable = False
        self.on_create: Optional[Callable[[str], None]] = None

        self._next_id = 1
        self._token_seq = 0

    def add_user(self, username: str, password: str, email: str = "") -> None:
        self.users[username] = {"email": email, "password": password}

    def _check_reachable(self):
        if self.unreachable:
            raise APIError("Journal service not reachable")

    def _issue_access(self, username: str) -> str:
        self._token_seq += 1
        token = f"access-{username}-{self._token_seq}"
        self.valid_access.add(token)
        return token

    # AuthGateway

    def authenticate(self, username: str, password: str) -> Credentials:
        self.calls.append(("authenticate", username))
        self._check_reachable()
        user = self.users.get(username)
        if user is None or user["password"] != password:
            raise AuthenticationError("No active account found with the given credentials")
        refresh = f"refresh-{username}"
        self.valid_refresh.add(refresh)
        return Credentials(access=self._issue_access(username), refresh=refresh)

    def register(self, username: str, email: str, password: str) -> None:
        self.calls.append(("register", username))
        self._check_reachable()
        if username in self.users:
            raise RegistrationError("username: A user with that username already exists.")
        self.add_user(username, password, email)

    # TokenVerifier

    def verify(self, access_token: str) -> None:
        self.calls.append(("verify", access_token))
        self._check_reachable()
        if access_token not in self.valid_access:
            raise AuthenticationError("Token is invalid or expired")

    def refresh(self, refresh_token: str) -> str:
        self.calls.append(("refresh", refresh_token))
        self._check_reachable()
        if refresh_token not in self.valid_refresh:
            raise AuthenticationError("Token is invalid or expired")
        return self._issue_access(refresh_token.split("-", 1)[1])

    # EntryGateway

    def fetch_entries(self) -> List[JournalEntry]:
        self.calls.append(("fetch_entries",))
        self._check_reachable()
        return list(self.entries)

    def create_entry(self, content: str) -> JournalEntry:
        self.calls.append(("create_entry", content))
        if self.on_create is not None:
            self.on_create(content)
        if self.fail_create is not None:
            raise self.fail_create
        entry = JournalEntry(
            id=self._next_id,
            user=1,
            content=content,
            created_at=datetime(2024, 1, 1, 9, 0) + timedelta(days=self._next_id),
        )
        self._next_id += 1
        self.entries.insert(0, entry)
        return entry

    def analyze(self, entry_id: int) -> AnalysisResult:
        self.calls.append(("analyze", entry_id))
        if self.fail_analyze is not None:
            raise self.fail_analyze
        for i, entry in enumerate(self.entries):
            if entry.id == entry_id:
                self.entries[i] = entry.with_analysis(self.analysis)
                return self.analysis
        raise APIError("Not found.", status_code=404)

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]
