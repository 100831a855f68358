from __future__ import annotations

from datetime import datetime
from typing import Sequence

import mysql.connector

from ..core.constants import MYSQL_DUPLICATE_KEY, MYSQL_FOREIGN_KEY_MISSING
from ..core.enums import AdmissionOutcome
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_integrity_error
from .model import AdmissionAttempt, AdmissionRecord
from .repository import AdmissionLedger


def _to_record(r: dict) -> AdmissionRecord:
    return AdmissionRecord(
        admission_id=int(r["admission_id"]),
        participant_id=int(r["participant_id"]),
        session_id=int(r["session_id"]),
        check_in_time=r["check_in_time"],
    )


class MySQLAdmissionLedger(AdmissionLedger):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def try_admit(self, *, participant_id: int, session_id: int, check_in_time: datetime) -> AdmissionAttempt:
        with db_cursor(self._conn_factory) as (_, cur):
            # The session row lock serialises count-and-insert per session
            # across processes; other sessions are unaffected.
            cur.execute("SELECT capacity FROM sessions WHERE session_id=%s FOR UPDATE", (int(session_id),))
            row = fetchone(cur)
            if not row:
                return AdmissionAttempt(AdmissionOutcome.SESSION_MISSING)
            capacity = int(row["capacity"])

            cur.execute(
                """
                SELECT admission_id, participant_id, session_id, check_in_time
                FROM admissions
                WHERE participant_id=%s AND session_id=%s
                """,
                (int(participant_id), int(session_id)),
            )
            existing = fetchone(cur)

            cur.execute("SELECT COUNT(*) AS admitted FROM admissions WHERE session_id=%s", (int(session_id),))
            admitted = int(fetchone(cur)["admitted"])

            if existing:
                return AdmissionAttempt(AdmissionOutcome.ALREADY_ADMITTED, _to_record(existing), admitted, capacity)
            if admitted >= capacity:
                return AdmissionAttempt(AdmissionOutcome.FULL, None, admitted, capacity)

            try:
                cur.execute(
                    "INSERT INTO admissions(participant_id, session_id, check_in_time) VALUES(%s,%s,%s)",
                    (int(participant_id), int(session_id), check_in_time),
                )
            except mysql.connector.Error as exc:
                if is_integrity_error(exc, MYSQL_DUPLICATE_KEY):
                    return AdmissionAttempt(AdmissionOutcome.ALREADY_ADMITTED, None, admitted, capacity)
                if is_integrity_error(exc, MYSQL_FOREIGN_KEY_MISSING):
                    return AdmissionAttempt(AdmissionOutcome.PARTICIPANT_MISSING, None, admitted, capacity)
                raise

            record = AdmissionRecord(
                admission_id=int(cur.lastrowid),
                participant_id=int(participant_id),
                session_id=int(session_id),
                check_in_time=check_in_time,
            )
            return AdmissionAttempt(AdmissionOutcome.ADMITTED, record, admitted + 1, capacity)

    def count_for_session(self, session_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS admitted FROM admissions WHERE session_id=%s", (int(session_id),))
            return int(fetchone(cur)["admitted"])

    def list_for_session(self, session_id: int) -> Sequence[AdmissionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT admission_id, participant_id, session_id, check_in_time
                FROM admissions
                WHERE session_id=%s
                ORDER BY check_in_time ASC, admission_id ASC
                """,
                (int(session_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]
