"""
Local Persistence
String key-value storage that survives restarts, plus the two typed views
the app needs on top of it.

Each browser gets its own file (ClientStorage), so one browser never
resumes or clears the session of another.

Keys:
    access_token, refresh_token, username   -> session lifecycle, set/cleared together
    theme                                   -> user preference, independent

NOT responsible for:
- Deciding whether a stored credential is still valid (SessionManager)
- Encrypting anything
"""

import json
import logging
import os
import re
import threading
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Protocol

from models import Credentials, Theme

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"
USERNAME_KEY = "username"
THEME_KEY = "theme"

SESSION_KEYS = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USERNAME_KEY)

CLIENT_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")

# One lock per file, shared by every JSONFileStore opened on it
_path_locks: Dict[Path, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _path_locks_guard:
        if key not in _path_locks:
            _path_locks[key] = threading.Lock()
        return _path_locks[key]


# =============================================================================
# Key-Value Stores
# =============================================================================

class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """Process-local store; forgets everything on exit"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)


class JSONFileStore:
    """
    Key-value store backed by a single JSON object on disk.

    Every write rewrites the file through a temp file + rename so a crash
    never leaves half a document behind.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._ensure_directory()
        self._lock = _lock_for(self.path)

    def _ensure_directory(self):
        """Create parent directory"""
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Ignoring corrupt storage file %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: Dict[str, str]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
        os.replace(tmp, self.path)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)


class ClientStorage:
    """
    Hands out one JSONFileStore per browser, keyed by an opaque client id.

    Usage:
        storage = ClientStorage(settings.STORAGE_DIR)
        client_id = storage.new_client_id()
        kv_store = storage.store_for(client_id)
    """

    def __init__(self, directory):
        self.directory = Path(directory)

    @staticmethod
    def new_client_id() -> str:
        return uuid.uuid4().hex

    @staticmethod
    def is_valid_id(client_id: Optional[str]) -> bool:
        return bool(client_id) and CLIENT_ID_PATTERN.match(client_id) is not None

    def path_for(self, client_id: str) -> Path:
        # The id ends up in a file name; anything but 32 hex chars is refused
        if not self.is_valid_id(client_id):
            raise ValueError(f"Invalid client id: {client_id!r}")
        return self.directory / f"{client_id}.json"

    def store_for(self, client_id: str) -> JSONFileStore:
        return JSONFileStore(self.path_for(client_id))


# =============================================================================
# Credential Persistence
# =============================================================================

@dataclass(frozen=True)
class StoredSession:
    """What a previous run left behind after a successful login"""
    credentials: Credentials
    username: str


class CredentialPersistence:
    """load/save/clear of the session keys, always as a group"""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def load(self) -> Optional[StoredSession]:
        access = self._store.get(ACCESS_TOKEN_KEY)
        if not access:
            return None
        return StoredSession(
            credentials=Credentials(
                access=access,
                refresh=self._store.get(REFRESH_TOKEN_KEY) or "",
            ),
            username=self._store.get(USERNAME_KEY) or "",
        )

    def save(self, credentials: Credentials, username: str) -> None:
        self._store.set(ACCESS_TOKEN_KEY, credentials.access)
        self._store.set(REFRESH_TOKEN_KEY, credentials.refresh)
        self._store.set(USERNAME_KEY, username)

    def clear(self) -> None:
        for key in SESSION_KEYS:
            self._store.remove(key)


# =============================================================================
# Preferences
# =============================================================================

class PreferenceStore:
    """User-togglable settings that live outside the session lifecycle"""

    def __init__(self, store: KeyValueStore, default_theme: Theme = Theme.LIGHT):
        self._store = store
        self._default_theme = default_theme

    @property
    def theme(self) -> Theme:
        raw = self._store.get(THEME_KEY)
        try:
            return Theme(raw) if raw else self._default_theme
        except ValueError:
            return self._default_theme

    @theme.setter
    def theme(self, value: Theme) -> None:
        self._store.set(THEME_KEY, value.value)

    def toggle_theme(self) -> Theme:
        new_theme = self.theme.toggled()
        self.theme = new_theme
        return new_theme
