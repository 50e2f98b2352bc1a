from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_datetime
from .model import ShiftLocationRecord
from .repository import ShiftLocationRepository


class MySQLShiftLocationRepository(ShiftLocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_nurse(self, *, nurse_id: str, start: datetime, end: datetime) -> Sequence[ShiftLocationRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_location_id, facility_id, nurse_id, date_time,
                       distance_m, duration_sec, shift_period
                FROM shift_locations
                WHERE nurse_id=%s AND date_time >= %s AND date_time < %s
                ORDER BY date_time
                """,
                (nurse_id, start, end),
            )
            return [
                ShiftLocationRecord(
                    shift_location_id=int(r["shift_location_id"]),
                    facility_id=r.get("facility_id"),
                    nurse_id=r.get("nurse_id"),
                    date_time=normalize_mysql_datetime(r.get("date_time")),
                    distance_m=int(r["distance_m"]) if r.get("distance_m") is not None else None,
                    duration_sec=int(r["duration_sec"]) if r.get("duration_sec") is not None else None,
                    shift_period=r.get("shift_period"),
                )
                for r in fetchall(cur)
            ]
