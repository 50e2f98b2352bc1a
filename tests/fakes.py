"""In-memory repositories standing in for the MySQL ones in tests."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Optional

from src.nurse_payroll.nurse_payroll.activity.model import ShiftLocationRecord, ShiftRecord, VitalRecord
from src.nurse_payroll.nurse_payroll.core.enums import RateKey, Role
from src.nurse_payroll.nurse_payroll.core.exceptions import ConflictError
from src.nurse_payroll.nurse_payroll.payroll.model import (
    SalaryFilters,
    SalaryRecord,
    SalaryRecordInput,
    SalaryRecordPatch,
)
from src.nurse_payroll.nurse_payroll.settings.model import RateSetting, RateSettingPatch
from src.nurse_payroll.nurse_payroll.users.model import User

CREATED_AT = datetime(2025, 6, 1, 9, 0)


class InMemoryUsers:
    def __init__(self, users=()):
        self._users = list(users)

    def find_by_nurse_id(self, nurse_id: str) -> Optional[User]:
        return next((u for u in self._users if u.nurse_id == nurse_id), None)

    def list_active_nurses(self):
        return [u for u in self._users if u.role == Role.NURSE and u.is_active and u.nurse_id]


class InMemorySettings:
    def __init__(self, values: Optional[dict] = None):
        self._rows: dict[str, RateSetting] = {}
        for key, value in (values or {}).items():
            self._rows[key] = RateSetting(key=key, value=Decimal(str(value)))

    def list_all(self):
        return [self._rows[k] for k in sorted(self._rows)]

    def get_by_key(self, key):
        return self._rows.get(key)

    def insert(self, *, key, value, description, updated_by):
        if key in self._rows:
            raise ConflictError(f"Setting {key!r} already exists")
        self._rows[key] = RateSetting(key=key, value=value, description=description, updated_by=updated_by)

    def upsert(self, *, key, value, description, updated_by):
        old = self._rows.get(key)
        if description is None and old is not None:
            description = old.description
        self._rows[key] = RateSetting(key=key, value=value, description=description, updated_by=updated_by)

    def update(self, key, patch: RateSettingPatch) -> bool:
        old = self._rows.get(key)
        if not old:
            return False
        self._rows[key] = replace(
            old,
            value=patch.value if patch.value is not None else old.value,
            description=patch.description if patch.description is not None else old.description,
            updated_by=patch.updated_by if patch.updated_by is not None else old.updated_by,
        )
        return True

    def delete(self, key) -> bool:
        return self._rows.pop(key, None) is not None


class InMemoryLocations:
    # Filters by nurse only; month filtering is left to the aggregator.
    def __init__(self, rows=()):
        self.rows = list(rows)
        self.last_args = None

    def list_for_nurse(self, *, nurse_id, start, end):
        self.last_args = {"nurse_id": nurse_id, "start": start, "end": end}
        return [r for r in self.rows if r.nurse_id == nurse_id]


class InMemoryShifts:
    def __init__(self, rows=()):
        self.rows = list(rows)
        self.last_args = None

    def list_for_nurse(self, *, nurse_id, start, end):
        self.last_args = {"nurse_id": nurse_id, "start": start, "end": end}
        return [r for r in self.rows if r.nurse_id == nurse_id]


class InMemoryVitals:
    def __init__(self, rows=()):
        self.rows = list(rows)
        self.calls = 0

    def list_created_by(self, *, user_id, start, end):
        self.calls += 1
        return [r for r in self.rows if r.created_by == user_id]


class InMemorySalaries:
    """Keeps (nurse_id, year_month) unique like the nurse_salaries table."""

    def __init__(self):
        self._rows: dict[int, SalaryRecord] = {}
        self._by_key: dict[tuple[str, str], int] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    @staticmethod
    def _record(salary_id: int, data: SalaryRecordInput, created_at: datetime) -> SalaryRecord:
        return SalaryRecord(
            id=salary_id,
            user_id=data.user_id,
            nurse_id=data.nurse_id,
            year_month=data.year_month,
            total_amount=data.total_amount,
            distance_pay=data.distance_pay,
            time_pay=data.time_pay,
            vital_pay=data.vital_pay,
            total_distance_km=data.total_distance_km,
            total_minutes=data.total_minutes,
            total_vital_count=data.total_vital_count,
            calculation_details=data.calculation_details,
            calculated_at=data.calculated_at,
            created_at=created_at,
            updated_at=created_at,
        )

    def get_by_id(self, salary_id):
        return self._rows.get(int(salary_id))

    def get_by_nurse_and_month(self, nurse_id, year_month):
        salary_id = self._by_key.get((nurse_id, year_month))
        return self._rows.get(salary_id) if salary_id else None

    def list(self, filters: SalaryFilters):
        out = [
            r
            for r in self._rows.values()
            if (filters.user_id is None or r.user_id == filters.user_id)
            and (not filters.nurse_id or r.nurse_id == filters.nurse_id)
            and (not filters.year_month or r.year_month == filters.year_month)
        ]
        return sorted(out, key=lambda r: (r.year_month, r.id), reverse=True)

    def insert(self, data: SalaryRecordInput) -> int:
        with self._lock:
            key = (data.nurse_id, data.year_month)
            if key in self._by_key:
                raise ConflictError(f"Salary for {data.nurse_id} {data.year_month} already exists")
            salary_id = self._next_id
            self._next_id += 1
            self._rows[salary_id] = self._record(salary_id, data, CREATED_AT)
            self._by_key[key] = salary_id
            return salary_id

    def upsert(self, data: SalaryRecordInput) -> int:
        with self._lock:
            key = (data.nurse_id, data.year_month)
            salary_id = self._by_key.get(key)
            if salary_id is None:
                salary_id = self._next_id
                self._next_id += 1
                self._by_key[key] = salary_id
                created_at = CREATED_AT
            else:
                created_at = self._rows[salary_id].created_at
            self._rows[salary_id] = self._record(salary_id, data, created_at)
            return salary_id

    def update(self, salary_id, patch: SalaryRecordPatch) -> bool:
        old = self._rows.get(int(salary_id))
        if not old:
            return False
        self._rows[old.id] = replace(old, **dict(patch.assignments()))
        return True

    def delete(self, salary_id) -> bool:
        old = self._rows.pop(int(salary_id), None)
        if not old:
            return False
        del self._by_key[(old.nurse_id, old.year_month)]
        return True

    def count(self) -> int:
        return len(self._rows)


DEFAULT_RATES = {
    RateKey.DISTANCE_RATE.value: 150,
    RateKey.TIME_RATE.value: 1200,
    RateKey.VITAL_RATE.value: 50,
}

NURSE = User(user_id=7, nurse_id="N001", full_name="Sato Hanako", role=Role.NURSE)


def may_2025_activity():
    """21.0 km over two legs, one 8h shift and three vitals in 2025-05 for N001."""
    locations = [
        ShiftLocationRecord(1, "F01", "N001", datetime(2025, 5, 2, 9, 0), 12_400, 1500),
        ShiftLocationRecord(2, "F02", "N001", datetime(2025, 5, 20, 13, 30), 8_600, 1100),
    ]
    shifts = [ShiftRecord(10, "N001", "F01", datetime(2025, 5, 2, 9, 0), 480)]
    vitals = [
        VitalRecord(100, "R01", datetime(2025, 5, 2, 10, 0), 7),
        VitalRecord(101, "R02", datetime(2025, 5, 2, 11, 0), 7),
        VitalRecord(102, "R01", datetime(2025, 5, 20, 14, 0), 7),
    ]
    return locations, shifts, vitals


