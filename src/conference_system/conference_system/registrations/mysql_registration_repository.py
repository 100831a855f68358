from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .repository import RegistrationRepository


class MySQLRegistrationRepository(RegistrationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, *, participant_id: int, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # IGNORE covers both the duplicate pair and a parent deleted meanwhile;
            # the service re-reads the set to tell them apart.
            cur.execute(
                "INSERT IGNORE INTO session_registrations(participant_id, session_id) VALUES(%s,%s)",
                (int(participant_id), int(session_id)),
            )
            return cur.rowcount > 0

    def sessions_for(self, participant_id: int) -> tuple[int, ...]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT session_id FROM session_registrations
                WHERE participant_id=%s
                ORDER BY session_id
                """,
                (int(participant_id),),
            )
            return tuple(int(r["session_id"]) for r in fetchall(cur))

    def count_for_session(self, session_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS registered FROM session_registrations WHERE session_id=%s",
                (int(session_id),),
            )
            return int(fetchone(cur)["registered"])
