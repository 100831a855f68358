from __future__ import annotations

import itertools
import threading
import time as _time
from concurrent.futures import Executor, Future
from dataclasses import replace
from datetime import datetime
from typing import Optional

from src.conference_system.conference_system.admissions.model import AdmissionAttempt, AdmissionRecord
from src.conference_system.conference_system.catalog.model import ScheduleRow, Session, Track
from src.conference_system.conference_system.core.enums import AdmissionOutcome, SessionUpdateOutcome
from src.conference_system.conference_system.notifications.gateway import NotificationResult
from src.conference_system.conference_system.participants.model import Participant
from src.conference_system.conference_system.proceedings.model import ProceedingsFile

FIXED_NOW = datetime(2025, 3, 14, 9, 30, 0)


class InMemoryStore:
    """Rows shared by the fake repositories, with the same cascades as schema.sql."""

    def __init__(self):
        self.lock = threading.Lock()
        self.participants: dict[int, Participant] = {}
        self.tracks: dict[int, Track] = {}
        self.sessions: dict[int, Session] = {}
        self.admissions: dict[int, AdmissionRecord] = {}
        self.registrations: set[tuple[int, int]] = set()
        self.proceedings: dict[int, ProceedingsFile] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    def registration_pairs(self) -> frozenset[tuple[int, int]]:
        with self.lock:
            return frozenset(self.registrations)

    def drop_session(self, session_id: int) -> None:
        self.sessions.pop(session_id, None)
        for aid in [a.admission_id for a in self.admissions.values() if a.session_id == session_id]:
            del self.admissions[aid]
        self.registrations = {(p, s) for (p, s) in self.registrations if s != session_id}

    def drop_participant(self, participant_id: int) -> None:
        self.participants.pop(participant_id, None)
        for aid in [a.admission_id for a in self.admissions.values() if a.participant_id == participant_id]:
            del self.admissions[aid]
        self.registrations = {(p, s) for (p, s) in self.registrations if p != participant_id}


class InMemoryParticipants:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def _with_sessions(self, p: Participant) -> Participant:
        sessions = tuple(sorted(s for (pid, s) in self._store.registration_pairs() if pid == p.participant_id))
        return replace(p, registered_sessions=sessions)

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        p = self._store.participants.get(participant_id)
        return self._with_sessions(p) if p else None

    def get_by_email(self, email: str) -> Optional[Participant]:
        for p in self._store.participants.values():
            if p.email == email:
                return self._with_sessions(p)
        return None

    def get_by_token(self, identity_token: str) -> Optional[Participant]:
        for p in self._store.participants.values():
            if p.identity_token == identity_token:
                return self._with_sessions(p)
        return None

    def create_participant(self, *, name, email, organization, password_hash, identity_token) -> Optional[int]:
        with self._store.lock:
            taken = any(p.email == email or p.identity_token == identity_token for p in self._store.participants.values())
            if taken:
                return None
            participant_id = self._store.next_id()
            self._store.participants[participant_id] = Participant(
                participant_id=participant_id,
                name=name,
                email=email,
                organization=organization,
                password_hash=password_hash,
                identity_token=identity_token,
                created_at=FIXED_NOW,
            )
            return participant_id

    def delete_by_id(self, participant_id: int) -> bool:
        with self._store.lock:
            if participant_id not in self._store.participants:
                return False
            self._store.drop_participant(participant_id)
            return True

    def list_all(self):
        return [self._with_sessions(p) for p in self._store.participants.values()]


class InMemoryTracks:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def get_by_id(self, track_id: int) -> Optional[Track]:
        return self._store.tracks.get(track_id)

    def list_all(self):
        return sorted(self._store.tracks.values(), key=lambda t: t.title)

    def create_track(self, *, title, description) -> int:
        track_id = self._store.next_id()
        self._store.tracks[track_id] = Track(track_id=track_id, title=title, description=description)
        return track_id

    def update_track(self, *, track_id, title, description) -> bool:
        if track_id not in self._store.tracks:
            return False
        self._store.tracks[track_id] = Track(track_id=track_id, title=title, description=description)
        return True

    def delete_track(self, *, track_id) -> bool:
        with self._store.lock:
            if self._store.tracks.pop(track_id, None) is None:
                return False
            for sid in [s.session_id for s in self._store.sessions.values() if s.track_id == track_id]:
                self._store.drop_session(sid)
            return True


class InMemorySessions:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def get_by_id(self, session_id: int) -> Optional[Session]:
        return self._store.sessions.get(session_id)

    def create_session(self, *, track_id, title, speaker, time, venue, capacity) -> Optional[int]:
        if track_id not in self._store.tracks:
            return None
        session_id = self._store.next_id()
        self._store.sessions[session_id] = Session(session_id, track_id, title, speaker, time, venue, capacity)
        return session_id

    def update_session(self, *, session_id, track_id, title, speaker, time, venue, capacity) -> SessionUpdateOutcome:
        with self._store.lock:
            if session_id not in self._store.sessions:
                return SessionUpdateOutcome.MISSING
            admitted = sum(1 for a in self._store.admissions.values() if a.session_id == session_id)
            if capacity < admitted:
                return SessionUpdateOutcome.BELOW_ADMITTED
            self._store.sessions[session_id] = Session(session_id, track_id, title, speaker, time, venue, capacity)
            return SessionUpdateOutcome.UPDATED

    def delete_session(self, *, session_id) -> bool:
        with self._store.lock:
            if session_id not in self._store.sessions:
                return False
            self._store.drop_session(session_id)
            return True

    def list_schedule(self):
        rows = []
        for s in sorted(self._store.sessions.values(), key=lambda s: (s.time, s.session_id)):
            rows.append(
                ScheduleRow(
                    session_id=s.session_id,
                    track_id=s.track_id,
                    track_title=self._store.tracks[s.track_id].title,
                    title=s.title,
                    speaker=s.speaker,
                    time=s.time,
                    venue=s.venue,
                    capacity=s.capacity,
                    admitted_count=sum(1 for a in self._store.admissions.values() if a.session_id == s.session_id),
                    registered_count=sum(1 for (_, sid) in self._store.registration_pairs() if sid == s.session_id),
                )
            )
        return rows


class InMemoryAdmissions:
    """Count-then-insert with a pause in between and no locking of its own.

    Left to itself this ledger overbooks under concurrency, so any test that
    keeps the capacity bound is exercising the caller's serialisation.
    """

    def __init__(self, store: InMemoryStore, *, pause: float = 0.0):
        self._store = store
        self._pause = pause

    def try_admit(self, *, participant_id, session_id, check_in_time) -> AdmissionAttempt:
        session = self._store.sessions.get(session_id)
        if session is None:
            return AdmissionAttempt(AdmissionOutcome.SESSION_MISSING)
        if participant_id not in self._store.participants:
            return AdmissionAttempt(AdmissionOutcome.PARTICIPANT_MISSING)

        rows = [a for a in self._store.admissions.values() if a.session_id == session_id]
        admitted = len(rows)
        existing = next((a for a in rows if a.participant_id == participant_id), None)
        if existing:
            return AdmissionAttempt(AdmissionOutcome.ALREADY_ADMITTED, existing, admitted, session.capacity)
        if admitted >= session.capacity:
            return AdmissionAttempt(AdmissionOutcome.FULL, None, admitted, session.capacity)

        if self._pause:
            _time.sleep(self._pause)

        record = AdmissionRecord(self._store.next_id(), participant_id, session_id, check_in_time)
        self._store.admissions[record.admission_id] = record
        return AdmissionAttempt(AdmissionOutcome.ADMITTED, record, admitted + 1, session.capacity)

    def count_for_session(self, session_id: int) -> int:
        return len(self.list_for_session(session_id))

    def list_for_session(self, session_id: int):
        rows = [a for a in self._store.admissions.values() if a.session_id == session_id]
        return sorted(rows, key=lambda a: (a.check_in_time, a.admission_id))


class InMemoryRegistrations:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def add(self, *, participant_id, session_id) -> bool:
        with self._store.lock:
            if participant_id not in self._store.participants or session_id not in self._store.sessions:
                return False
            pair = (participant_id, session_id)
            if pair in self._store.registrations:
                return False
            self._store.registrations.add(pair)
            return True

    def sessions_for(self, participant_id: int) -> tuple[int, ...]:
        return tuple(sorted(s for (p, s) in self._store.registration_pairs() if p == participant_id))

    def count_for_session(self, session_id: int) -> int:
        return sum(1 for (_, s) in self._store.registration_pairs() if s == session_id)


class InMemoryProceedings:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def create_file(self, *, file_name, file_path) -> int:
        file_id = self._store.next_id()
        self._store.proceedings[file_id] = ProceedingsFile(file_id, file_name, file_path, FIXED_NOW)
        return file_id

    def list_all(self):
        return sorted(self._store.proceedings.values(), key=lambda f: f.file_id, reverse=True)


class RecordingGateway:
    def __init__(self, *, error: Optional[Exception] = None):
        self.sent: list[tuple[str, str, str]] = []
        self._error = error

    def send(self, to_address: str, subject: str, body: str) -> NotificationResult:
        if self._error is not None:
            raise self._error
        self.sent.append((to_address, subject, body))
        return NotificationResult(to_address, subject, success=True)


class InlineExecutor(Executor):
    """Runs submitted work immediately on the calling thread."""

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


