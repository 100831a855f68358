from __future__ import annotations

import os

import pytest

os.environ.setdefault("APP_ENV", "testing")

from src.conference_system.conference_system.catalog.model import Session
from src.conference_system.conference_system.container import assemble_container
from src.conference_system.conference_system.notifications.dispatcher import NotificationDispatcher
from src.conference_system.conference_system.participants.credentials import CredentialService
from src.conference_system.conference_system.proceedings.storage import LocalProceedingsStorage

from tests.fakes import (
    InlineExecutor,
    InMemoryAdmissions,
    InMemoryParticipants,
    InMemoryProceedings,
    InMemoryRegistrations,
    InMemorySessions,
    InMemoryStore,
    InMemoryTracks,
    RecordingGateway,
)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def credentials() -> CredentialService:
    return CredentialService("test-secret")


@pytest.fixture
def container(store, gateway, credentials, tmp_path):
    return assemble_container(
        ping=lambda: 2,
        participants_repo=InMemoryParticipants(store),
        tracks_repo=InMemoryTracks(store),
        sessions_repo=InMemorySessions(store),
        admission_ledger=InMemoryAdmissions(store, pause=0.002),
        registrations_repo=InMemoryRegistrations(store),
        proceedings_repo=InMemoryProceedings(store),
        notifier=NotificationDispatcher(gateway, executor=InlineExecutor()),
        credentials=credentials,
        storage=LocalProceedingsStorage(tmp_path / "uploads"),
    )


@pytest.fixture
def make_participant(container, credentials):
    """Insert a participant directly (skips password hashing cost)."""

    def _make(name: str, email: str) -> int:
        participant_id = container.participants_repo.create_participant(
            name=name,
            email=email,
            organization=None,
            password_hash="not-a-real-hash",
            identity_token=credentials.mint_token(name, email),
        )
        assert participant_id is not None
        return participant_id

    return _make


@pytest.fixture
def make_session(container):
    track = container.catalog_service.create_track(title="Main", description="Main hall talks")

    def _make(capacity: int, title: str = "Keynote") -> Session:
        return container.catalog_service.create_session(
            track_id=track.track_id,
            title=title,
            speaker="Dr. Lee",
            time="2025-03-14 10:00",
            venue="Hall A",
            capacity=capacity,
        )

    return _make
