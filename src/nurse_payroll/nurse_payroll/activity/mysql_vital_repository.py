from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_datetime
from .model import VitalRecord
from .repository import VitalRepository


class MySQLVitalRepository(VitalRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_created_by(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[VitalRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, resident_id, measured_at, created_by
                FROM vital_records
                WHERE created_by=%s AND measured_at >= %s AND measured_at < %s
                ORDER BY measured_at
                """,
                (int(user_id), start, end),
            )
            return [
                VitalRecord(
                    vital_id=int(r["id"]),
                    resident_id=r["resident_id"],
                    measured_at=normalize_mysql_datetime(r.get("measured_at")),
                    created_by=int(r["created_by"]) if r.get("created_by") is not None else None,
                )
                for r in fetchall(cur)
            ]
