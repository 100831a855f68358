from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.constants import MYSQL_FOREIGN_KEY_MISSING
from ..core.enums import SessionUpdateOutcome
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_integrity_error
from .model import ScheduleRow, Session
from .repository import SessionRepository

_COLUMNS = "session_id, track_id, title, speaker, time, venue, capacity"


def _to_session(r: dict) -> Session:
    return Session(
        session_id=int(r["session_id"]),
        track_id=int(r["track_id"]),
        title=r["title"],
        speaker=r["speaker"],
        time=r["time"],
        venue=r["venue"],
        capacity=int(r["capacity"]),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO sessions(track_id, title, speaker, time, venue, capacity)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (int(track_id), title, speaker, time, venue, int(capacity)),
                )
            except mysql.connector.Error as exc:
                if is_integrity_error(exc, MYSQL_FOREIGN_KEY_MISSING):
                    return None
                raise
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            # Same row lock the admission ledger takes, so a concurrent
            # check-in cannot slip in between the count and the update.
            cur.execute("SELECT session_id FROM sessions WHERE session_id=%s FOR UPDATE", (int(session_id),))
            if not fetchone(cur):
                return SessionUpdateOutcome.MISSING

            cur.execute("SELECT COUNT(*) AS admitted FROM admissions WHERE session_id=%s", (int(session_id),))
            admitted = int(fetchone(cur)["admitted"])
            if int(capacity) < admitted:
                return SessionUpdateOutcome.BELOW_ADMITTED

            try:
                cur.execute(
                    """
                    UPDATE sessions
                    SET track_id=%s, title=%s, speaker=%s, time=%s, venue=%s, capacity=%s
                    WHERE session_id=%s
                    """,
                    (int(track_id), title, speaker, time, venue, int(capacity), int(session_id)),
                )
            except mysql.connector.Error as exc:
                if is_integrity_error(exc, MYSQL_FOREIGN_KEY_MISSING):
                    return SessionUpdateOutcome.MISSING
                raise
            return SessionUpdateOutcome.UPDATED

    def delete_session(self, *, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE session_id=%s", (int(session_id),))
            return cur.rowcount > 0

    def list_schedule(self) -> Sequence[ScheduleRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    s.session_id, s.track_id, t.title AS track_title,
                    s.title, s.speaker, s.time, s.venue, s.capacity,
                    (SELECT COUNT(*) FROM admissions a WHERE a.session_id = s.session_id) AS admitted_count,
                    (SELECT COUNT(*) FROM session_registrations r WHERE r.session_id = s.session_id) AS registered_count
                FROM sessions s
                JOIN tracks t ON t.track_id = s.track_id
                ORDER BY s.time ASC, s.session_id ASC
                """
            )
            return [
                ScheduleRow(
                    session_id=int(r["session_id"]),
                    track_id=int(r["track_id"]),
                    track_title=r["track_title"],
                    title=r["title"],
                    speaker=r["speaker"],
                    time=r["time"],
                    venue=r["venue"],
                    capacity=int(r["capacity"]),
                    admitted_count=int(r["admitted_count"] or 0),
                    registered_count=int(r["registered_count"] or 0),
                )
                for r in fetchall(cur)
            ]
