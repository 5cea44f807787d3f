"""
Entry Submission Orchestrator
Saves a journal entry, then asks the analysis service about it.

Two phases, strictly in order, no rollback:

    create   content  -> JournalEntry    failure: CreationError, nothing persisted
    analyze  entry.id -> AnalysisResult  failure: AnalysisError, entry stays
                                         persisted without analysis

A failed analysis is never retried automatically; ``retry_analysis`` is
there for the UI to offer it by hand.
"""

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Optional, Set

from models import AnalysisResult, JournalEntry
from utils.config import settings

from .errors import (
    AnalysisError,
    CreationError,
    SessionInvalidError,
    SubmissionInProgressError,
    ValidationError,
)
from .ports import EntryGateway

if TYPE_CHECKING:
    from state.session import SessionStore

logger = logging.getLogger(__name__)

OnSuccessCallback = Callable[[AnalysisResult], None]


class EntrySubmissionOrchestrator:
    def __init__(
        self,
        store: "SessionStore",
        entries: EntryGateway,
        min_length: Optional[int] = None,
    ):
        self._store = store
        self._entries = entries
        self._min_length = min_length if min_length is not None else settings.MIN_ENTRY_LENGTH
        self._lock = threading.Lock()
        self._in_flight: Set[str] = set()

    @property
    def min_length(self) -> int:
        return self._min_length

    def is_busy(self) -> bool:
        key = self._store.session_key()
        with self._lock:
            return key is not None and key in self._in_flight

    # =========================================================================
    # Operations
    # =========================================================================

    def submit(self, content: str, on_success: Optional[OnSuccessCallback] = None) -> AnalysisResult:
        """
        Save ``content`` as a new entry and analyze it.

        ``on_success`` runs only when both phases succeeded; the caller
        clears its input buffer there.
        """
        self.validate(content)
        key = self._require_session()

        with self._single_flight(key):
            entry = self._create(content)
            result = self._analyze(entry)

        if on_success is not None:
            on_success(result)
        return result

    def retry_analysis(self, entry: JournalEntry) -> AnalysisResult:
        """Run the analyze phase alone for an entry left unanalyzed"""
        key = self._require_session()
        with self._single_flight(key):
            return self._analyze(entry)

    def validate(self, content: str) -> None:
        if len((content or "").strip()) < self._min_length:
            raise ValidationError(
                f"Please write at least {self._min_length} characters for a meaningful analysis."
            )

    # =========================================================================
    # Phases
    # =========================================================================

    def _create(self, content: str) -> JournalEntry:
        try:
            entry = self._entries.create_entry(content)
        except Exception as exc:
            logger.warning("Entry creation failed: %s", exc)
            raise CreationError(f"Could not save your entry: {exc}") from exc
        logger.info("Created entry %s", entry.id)
        return entry

    def _analyze(self, entry: JournalEntry) -> AnalysisResult:
        try:
            result = self._entries.analyze(entry.id)
        except Exception as exc:
            logger.warning("Analysis failed for entry %s, left unanalyzed: %s", entry.id, exc)
            raise AnalysisError(
                f"Your entry was saved, but the analysis failed: {exc}",
                entry=entry,
            ) from exc
        logger.info("Analyzed entry %s: %s", entry.id, result.sentiment.value)
        return result

    # =========================================================================
    # Guards
    # =========================================================================

    def _require_session(self) -> str:
        key = self._store.session_key()
        if key is None:
            raise SessionInvalidError()
        return key

    @contextmanager
    def _single_flight(self, key: str):
        with self._lock:
            if key in self._in_flight:
                raise SubmissionInProgressError()
            self._in_flight.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._in_flight.discard(key)
