from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_datetime
from .model import ShiftRecord
from .repository import ShiftRepository


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_nurse(self, *, nurse_id: str, start: datetime, end: datetime) -> Sequence[ShiftRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, nurse_id, facility_id, start_datetime, required_time
                FROM shifts
                WHERE nurse_id=%s AND start_datetime >= %s AND start_datetime < %s
                ORDER BY start_datetime
                """,
                (nurse_id, start, end),
            )
            return [
                ShiftRecord(
                    shift_id=int(r["id"]),
                    nurse_id=r.get("nurse_id"),
                    facility_id=r.get("facility_id"),
                    start_datetime=normalize_mysql_datetime(r.get("start_datetime")),
                    required_time=int(r["required_time"]) if r.get("required_time") is not None else None,
                )
                for r in fetchall(cur)
            ]
