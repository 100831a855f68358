from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.constants import MYSQL_DUPLICATE_KEY
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_integrity_error
from .model import Participant
from .repository import ParticipantRepository

_COLUMNS = "participant_id, name, email, organization, password_hash, identity_token, created_at"


def _to_participant(row: dict, registered: Sequence[int] = ()) -> Participant:
    return Participant(
        participant_id=int(row["participant_id"]),
        name=row["name"],
        email=row["email"],
        organization=row.get("organization"),
        password_hash=row["password_hash"],
        identity_token=row["identity_token"],
        registered_sessions=tuple(sorted(int(s) for s in registered)),
        created_at=row.get("created_at"),
    )


class MySQLParticipantRepository(ParticipantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value) -> Optional[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM participants WHERE {where}=%s", (value,))
            row = fetchone(cur)
            if not row:
                return None
            cur.execute(
                "SELECT session_id FROM session_registrations WHERE participant_id=%s",
                (int(row["participant_id"]),),
            )
            sessions = [r["session_id"] for r in fetchall(cur)]
            return _to_participant(row, sessions)

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        return self._get_one("participant_id", int(participant_id))

    def get_by_email(self, email: str) -> Optional[Participant]:
        return self._get_one("email", email)

    def get_by_token(self, identity_token: str) -> Optional[Participant]:
        return self._get_one("identity_token", identity_token)

    def create_participant(
        self,
        *,
        name: str,
        email: str,
        organization: Optional[str],
        password_hash: str,
        identity_token: str,
    ) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO participants(name, email, organization, password_hash, identity_token)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (name, email, organization, password_hash, identity_token),
                )
            except mysql.connector.Error as exc:
                if is_integrity_error(exc, MYSQL_DUPLICATE_KEY):
                    return None
                raise
            return int(cur.lastrowid)

    def delete_by_id(self, participant_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM participants WHERE participant_id=%s", (int(participant_id),))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM participants ORDER BY participant_id")
            rows = fetchall(cur)
            cur.execute("SELECT participant_id, session_id FROM session_registrations")
            by_participant: dict[int, list[int]] = {}
            for r in fetchall(cur):
                by_participant.setdefault(int(r["participant_id"]), []).append(int(r["session_id"]))
            return [_to_participant(r, by_participant.get(int(r["participant_id"]), ())) for r in rows]
