from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import ShiftLocationRecord, ShiftRecord, VitalRecord


class ShiftLocationRepository(Protocol):
    def list_for_nurse(self, *, nurse_id: str, start: datetime, end: datetime) -> Sequence[ShiftLocationRecord]:
        """Rows for the nurse with start <= date_time < end (naive reference-local bounds)."""

        raise NotImplementedError


class ShiftRepository(Protocol):
    def list_for_nurse(self, *, nurse_id: str, start: datetime, end: datetime) -> Sequence[ShiftRecord]:
        """Rows for the nurse with start <= start_datetime < end."""

        raise NotImplementedError


class VitalRepository(Protocol):
    def list_created_by(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[VitalRecord]:
        """Rows recorded by the user with start <= measured_at < end."""

        raise NotImplementedError
