import logging
from typing import TYPE_CHECKING, List

from models import JournalEntry

from .errors import SessionInvalidError
from .ports import EntryGateway

if TYPE_CHECKING:
    from state.session import SessionStore

logger = logging.getLogger(__name__)


class EntryLoader:
    """Session-gated access to the user's entries"""

    def __init__(self, store: "SessionStore", entries: EntryGateway):
        self._store = store
        self._entries = entries

    def fetch_entries(self) -> List[JournalEntry]:
        """All entries of the current user, newest first"""
        if not self._store.is_authenticated:
            raise SessionInvalidError()
        entries = self._entries.fetch_entries()
        logger.debug("Fetched %d entries", len(entries))
        return entries
