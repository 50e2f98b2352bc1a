from __future__ import annotations

import json
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    normalize_mysql_decimal,
    normalize_mysql_json,
    translate_integrity_errors,
)
from .model import CalculationDetails, SalaryFilters, SalaryRecord, SalaryRecordInput, SalaryRecordPatch
from .repository import SalaryRepository

# `year_month` is a reserved word in MySQL and must stay quoted.
_COLUMNS = """
    id, user_id, nurse_id, `year_month`, total_amount,
    distance_pay, time_pay, vital_pay,
    total_distance_km, total_minutes, total_vital_count,
    calculation_details, calculated_at, created_at, updated_at
"""


def _dump_details(details: Optional[CalculationDetails]) -> Optional[str]:
    return json.dumps(details.to_dict(), ensure_ascii=False) if details else None


def _to_record(r: dict) -> SalaryRecord:
    raw_details = normalize_mysql_json(r.get("calculation_details"))
    return SalaryRecord(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        nurse_id=r["nurse_id"],
        year_month=r["year_month"],
        total_amount=int(r["total_amount"] or 0),
        distance_pay=int(r["distance_pay"] or 0),
        time_pay=int(r["time_pay"] or 0),
        vital_pay=int(r["vital_pay"] or 0),
        total_distance_km=normalize_mysql_decimal(r.get("total_distance_km")),
        total_minutes=int(r["total_minutes"] or 0),
        total_vital_count=int(r["total_vital_count"] or 0),
        calculation_details=CalculationDetails.from_dict(raw_details) if raw_details else None,
        calculated_at=r.get("calculated_at"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _params(data: SalaryRecordInput) -> tuple:
    return (
        int(data.user_id),
        data.nurse_id,
        data.year_month,
        int(data.total_amount),
        int(data.distance_pay),
        int(data.time_pay),
        int(data.vital_pay),
        data.total_distance_km,
        int(data.total_minutes),
        int(data.total_vital_count),
        _dump_details(data.calculation_details),
        data.calculated_at,
    )


_INSERT = """
    INSERT INTO nurse_salaries(
        user_id, nurse_id, `year_month`, total_amount,
        distance_pay, time_pay, vital_pay,
        total_distance_km, total_minutes, total_vital_count,
        calculation_details, calculated_at
    )
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
"""


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM nurse_salaries WHERE id=%s", (int(salary_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_by_nurse_and_month(self, nurse_id: str, year_month: str) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM nurse_salaries WHERE nurse_id=%s AND `year_month`=%s",
                (nurse_id, year_month),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list(self, filters: SalaryFilters) -> Sequence[SalaryRecord]:
        clauses = ["1=1"]
        params: list[object] = []
        if filters.user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(filters.user_id))
        if filters.nurse_id:
            clauses.append("nurse_id=%s")
            params.append(filters.nurse_id)
        if filters.year_month:
            clauses.append("`year_month`=%s")
            params.append(filters.year_month)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM nurse_salaries
                WHERE {where}
                ORDER BY `year_month` DESC, created_at DESC, id DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def insert(self, data: SalaryRecordInput) -> int:
        message = f"Salary for {data.nurse_id} {data.year_month} already exists"
        with translate_integrity_errors(message):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(_INSERT, _params(data))
                return int(cur.lastrowid)

    def upsert(self, data: SalaryRecordInput) -> int:
        message = f"Salary for {data.nurse_id} {data.year_month} could not be written"
        with translate_integrity_errors(message):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    _INSERT
                    + """
                    ON DUPLICATE KEY UPDATE
                        id=LAST_INSERT_ID(id),
                        user_id=VALUES(user_id),
                        total_amount=VALUES(total_amount),
                        distance_pay=VALUES(distance_pay),
                        time_pay=VALUES(time_pay),
                        vital_pay=VALUES(vital_pay),
                        total_distance_km=VALUES(total_distance_km),
                        total_minutes=VALUES(total_minutes),
                        total_vital_count=VALUES(total_vital_count),
                        calculation_details=VALUES(calculation_details),
                        calculated_at=VALUES(calculated_at)
                    """,
                    _params(data),
                )

                # LAST_INSERT_ID(id) reports the updated row; fall back to the natural key.
                if cur.lastrowid:
                    return int(cur.lastrowid)

                cur.execute(
                    "SELECT id FROM nurse_salaries WHERE nurse_id=%s AND `year_month`=%s",
                    (data.nurse_id, data.year_month),
                )
                r = fetchone(cur)
                return int(r["id"]) if r else 0

    def update(self, salary_id: int, patch: SalaryRecordPatch) -> bool:
        assignments = patch.assignments()
        if not assignments:
            return self.get_by_id(salary_id) is not None

        set_clause = ", ".join(f"{column}=%s" for column, _ in assignments)
        params = [
            _dump_details(value) if column == "calculation_details" else value
            for column, value in assignments
        ]
        params.append(int(salary_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE nurse_salaries SET {set_clause} WHERE id=%s", tuple(params))
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM nurse_salaries WHERE id=%s", (int(salary_id),))
            return fetchone(cur) is not None

    def delete(self, salary_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM nurse_salaries WHERE id=%s", (int(salary_id),))
            return cur.rowcount > 0
