from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ProceedingsFile
from .repository import ProceedingsRepository


class MySQLProceedingsRepository(ProceedingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_file(self, *, file_name: str, file_path: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO proceedings(file_name, file_path) VALUES(%s,%s)",
                (file_name, file_path),
            )
            return int(cur.lastrowid)

    def list_all(self) -> Sequence[ProceedingsFile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT file_id, file_name, file_path, uploaded_at FROM proceedings ORDER BY uploaded_at DESC, file_id DESC"
            )
            return [
                ProceedingsFile(
                    file_id=int(r["file_id"]),
                    file_name=r["file_name"],
                    file_path=r["file_path"],
                    uploaded_at=r.get("uploaded_at"),
                )
                for r in fetchall(cur)
            ]
