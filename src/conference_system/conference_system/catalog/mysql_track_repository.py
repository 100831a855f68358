from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Track
from .repository import TrackRepository


class MySQLTrackRepository(TrackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, track_id: int) -> Optional[Track]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT track_id, title, description FROM tracks WHERE track_id=%s", (int(track_id),))
            r = fetchone(cur)
            if not r:
                return None
            return Track(track_id=int(r["track_id"]), title=r["title"], description=r.get("description"))

    def list_all(self) -> Sequence[Track]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT track_id, title, description FROM tracks ORDER BY title")
            return [
                Track(track_id=int(r["track_id"]), title=r["title"], description=r.get("description"))
                for r in fetchall(cur)
            ]

    def create_track(self, *, title: str, description: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO tracks(title, description) VALUES(%s,%s)", (title, description))
            return int(cur.lastrowid)

    def update_track(self, *, track_id: int, title: str, description: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE tracks SET title=%s, description=%s WHERE track_id=%s",
                (title, description, int(track_id)),
            )
            # rowcount is 0 for an unchanged row; confirm existence instead.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM tracks WHERE track_id=%s", (int(track_id),))
            return fetchone(cur) is not None

    def delete_track(self, *, track_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tracks WHERE track_id=%s", (int(track_id),))
            return cur.rowcount > 0
