from datetime import datetime

import pytest

from core import EntryLoader, EntrySubmissionOrchestrator
from models import JournalEntry, Sentiment
from state import (
    CredentialPersistence,
    MemoryStore,
    SessionManager,
    SessionStore,
)

from fakes import FakeJournalService


@pytest.fixture
def service():
    svc = FakeJournalService()
    svc.add_user("alice", "correct-horse", email="alice@example.com")
    return svc


@pytest.fixture
def kv_store():
    return MemoryStore()


@pytest.fixture
def persistence(kv_store):
    return CredentialPersistence(kv_store)


@pytest.fixture
def session_store():
    return SessionStore()


@pytest.fixture
def manager(session_store, service, persistence):
    return SessionManager(session_store, auth=service, persistence=persistence, verifier=service)


@pytest.fixture
def logged_in(manager):
    manager.resume()
    manager.login("alice", "correct-horse")
    return manager


@pytest.fixture
def orchestrator(session_store, service):
    return EntrySubmissionOrchestrator(session_store, service, min_length=20)


@pytest.fixture
def loader(session_store, service):
    return EntryLoader(session_store, service)


def make_entry(entry_id, sentiment=None, emotions=None, created_at=None, content="entry text"):
    if sentiment is not None and emotions is None:
        emotions = []
    return JournalEntry(
        id=entry_id,
        user=1,
        content=content,
        created_at=created_at or datetime(2024, 3, entry_id % 28 + 1, 12, 0),
        sentiment=Sentiment(sentiment) if sentiment else None,
        emotions=emotions,
    )


@pytest.fixture
def entry_factory():
    return make_entry
