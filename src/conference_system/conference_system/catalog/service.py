from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import optional_text, require_capacity, require_non_empty, require_positive_id
from ..core.constants import MAX_DESCRIPTION_LENGTH
from ..core.enums import SessionUpdateOutcome
from ..core.exceptions import InvalidCapacityError, NotFoundError
from .model import ScheduleRow, Session, Track
from .repository import SessionRepository, TrackRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionDraft:
    """Validated session fields, ready to persist."""

    track_id: int
    title: str
    speaker: str
    time: datetime
    venue: str
    capacity: int


class CatalogService:
    """Use cases: manage tracks and sessions, list the schedule."""

    def __init__(self, tracks: TrackRepository, sessions: SessionRepository):
        self._tracks = tracks
        self._sessions = sessions

    # -------- Tracks --------
    def list_tracks(self) -> list[Track]:
        return list(self._tracks.list_all())

    def create_track(self, *, title: str, description: Optional[str] = None) -> Track:
        title = require_non_empty(title, "Title")
        description = optional_text(description, "Description", max_length=MAX_DESCRIPTION_LENGTH)
        track_id = self._tracks.create_track(title=title, description=description)
        logger.info("Created track %s", track_id)
        return Track(track_id=track_id, title=title, description=description)

    def update_track(self, *, track_id: Any, title: str, description: Optional[str] = None) -> Track:
        track_id = require_positive_id(track_id, "Track id")
        title = require_non_empty(title, "Title")
        description = optional_text(description, "Description", max_length=MAX_DESCRIPTION_LENGTH)
        if not self._tracks.update_track(track_id=track_id, title=title, description=description):
            raise NotFoundError("Track not found")
        return Track(track_id=track_id, title=title, description=description)

    def delete_track(self, track_id: Any) -> None:
        track_id = require_positive_id(track_id, "Track id")
        if not self._tracks.delete_track(track_id=track_id):
            raise NotFoundError("Track not found")
        logger.info("Deleted track %s with its sessions", track_id)

    # -------- Sessions --------
    def validate_session(
        self,
        *,
        track_id: Any,
        title: str,
        speaker: str,
        time: Any,
        venue: str,
        capacity: Any,
    ) -> SessionDraft:
        draft = SessionDraft(
            track_id=require_positive_id(track_id, "Track id"),
            title=require_non_empty(title, "Title"),
            speaker=require_non_empty(speaker, "Speaker"),
            time=parse_iso_datetime(time),
            venue=require_non_empty(venue, "Venue"),
            capacity=require_capacity(capacity),
        )
        if not self._tracks.get_by_id(draft.track_id):
            raise NotFoundError("Track not found")
        return draft

    def get_session(self, session_id: Any) -> Session:
        session = self._sessions.get_by_id(require_positive_id(session_id, "Session id"))
        if not session:
            raise NotFoundError("Session not found")
        return session

    def create_session(self, **fields: Any) -> Session:
        draft = self.validate_session(**fields)
        session_id = self._sessions.create_session(
            track_id=draft.track_id,
            title=draft.title,
            speaker=draft.speaker,
            time=draft.time,
            venue=draft.venue,
            capacity=draft.capacity,
        )
        if session_id is None:
            raise NotFoundError("Track not found")
        logger.info("Created session %s (capacity %s)", session_id, draft.capacity)
        return Session(session_id=session_id, **asdict(draft))

    def update_session(self, session_id: Any, **fields: Any) -> Session:
        session_id = require_positive_id(session_id, "Session id")
        draft = self.validate_session(**fields)
        outcome = self._sessions.update_session(
            session_id=session_id,
            track_id=draft.track_id,
            title=draft.title,
            speaker=draft.speaker,
            time=draft.time,
            venue=draft.venue,
            capacity=draft.capacity,
        )
        if outcome == SessionUpdateOutcome.MISSING:
            raise NotFoundError("Session not found")
        if outcome == SessionUpdateOutcome.BELOW_ADMITTED:
            raise InvalidCapacityError("Capacity cannot be lower than the number of admitted participants")
        logger.info("Updated session %s (capacity %s)", session_id, draft.capacity)
        return Session(session_id=session_id, **asdict(draft))

    def delete_session(self, session_id: Any) -> None:
        session_id = require_positive_id(session_id, "Session id")
        if not self._sessions.delete_session(session_id=session_id):
            raise NotFoundError("Session not found")
        logger.info("Deleted session %s with its admissions", session_id)

    def list_schedule(self) -> list[ScheduleRow]:
        return list(self._sessions.list_schedule())
