from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import SessionUpdateOutcome
from .model import ScheduleRow, Session, Track


class TrackRepository(Protocol):
    def get_by_id(self, track_id: int) -> Optional[Track]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Track]:
        raise NotImplementedError

    def create_track(self, *, title: str, description: Optional[str]) -> int:
        raise NotImplementedError

    def update_track(self, *, track_id: int, title: str, description: Optional[str]) -> bool:
        raise NotImplementedError

    def delete_track(self, *, track_id: int) -> bool:
        """Delete a track; its sessions and their admissions cascade."""

        raise NotImplementedError


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[Session]:
        raise NotImplementedError

    def create_session(
        self,
        *,
        track_id: int,
        title: str,
        speaker: str,
        time: datetime,
        venue: str,
        capacity: int,
    ) -> Optional[int]:
        """Returns session_id, or None if the track vanished meanwhile."""

        raise NotImplementedError

    def update_session(
        self,
        *,
        session_id: int,
        track_id: int,
        title: str,
        speaker: str,
        time: datetime,
        venue: str,
        capacity: int,
    ) -> SessionUpdateOutcome:
        """Update in place, refusing a capacity below the current admitted count.

        The capacity comparison and the write must be atomic with respect to
        concurrent admissions on the same session.
        """

        raise NotImplementedError

    def delete_session(self, *, session_id: int) -> bool:
        """Delete a session; its admissions and registrations cascade."""

        raise NotImplementedError

    def list_schedule(self) -> Sequence[ScheduleRow]:
        raise NotImplementedError
