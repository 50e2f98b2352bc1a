from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SalaryFilters, SalaryRecord, SalaryRecordInput, SalaryRecordPatch


class SalaryRepository(Protocol):
    """Storage for nurse_salaries; (nurse_id, year_month) is unique at the storage layer."""

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def get_by_nurse_and_month(self, nurse_id: str, year_month: str) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def list(self, filters: SalaryFilters) -> Sequence[SalaryRecord]:
        """Newest month first."""

        raise NotImplementedError

    def insert(self, data: SalaryRecordInput) -> int:
        """Plain insert. Raises ConflictError when (nurse_id, year_month) already exists.

        Returns the new id.
        """

        raise NotImplementedError

    def upsert(self, data: SalaryRecordInput) -> int:
        """Atomically insert, or overwrite the existing row for (nurse_id, year_month).

        Returns the row id.
        """

        raise NotImplementedError

    def update(self, salary_id: int, patch: SalaryRecordPatch) -> bool:
        raise NotImplementedError

    def delete(self, salary_id: int) -> bool:
        raise NotImplementedError
