"""Shared test fixtures."""

import pytest

from tests.unit.fakes import FakeScheduler, FakeSurface, RecordingStore
from travel_journal.core.editor.session import PageEditorSession
from travel_journal.core.repository import DocumentRepository


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def store(scheduler: FakeScheduler) -> RecordingStore:
    return RecordingStore(clock=scheduler.clock)


@pytest.fixture
def repository(store: RecordingStore, scheduler: FakeScheduler) -> DocumentRepository:
    return DocumentRepository(store, clock=scheduler.clock)


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def session(
    repository: DocumentRepository, surface: FakeSurface, scheduler: FakeScheduler
) -> PageEditorSession:
    return PageEditorSession(repository, surface, scheduler=scheduler, delay_ms=300)
