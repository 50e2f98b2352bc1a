from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Mapping, Optional

from ..core.constants import METERS_PER_KM


@dataclass(frozen=True)
class ShiftLocationRecord:
    """One recorded movement leg (e.g. facility-to-facility travel)."""

    shift_location_id: int
    facility_id: Optional[str]
    nurse_id: Optional[str]
    date_time: Optional[datetime]
    distance_m: Optional[int]
    duration_sec: Optional[int]
    shift_period: Optional[str] = None


@dataclass(frozen=True)
class ShiftRecord:
    """One scheduled/worked shift; `required_time` is the worked duration in minutes."""

    shift_id: int
    nurse_id: Optional[str]
    facility_id: Optional[str]
    start_datetime: Optional[datetime]
    required_time: Optional[int]


@dataclass(frozen=True)
class VitalRecord:
    """One vital-sign measurement event."""

    vital_id: int
    resident_id: str
    measured_at: Optional[datetime]
    created_by: Optional[int]


@dataclass(frozen=True)
class DailyTotals:
    """Result of one aggregator: the month total plus the same figure per local day."""

    total: int = 0
    by_day: Mapping[date, int] = field(default_factory=dict)


@dataclass(frozen=True)
class DailyActivity:
    day: date
    distance_m: int = 0
    minutes: int = 0
    vital_count: int = 0

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "distance_m": self.distance_m,
            "minutes": self.minutes,
            "vital_count": self.vital_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyActivity":
        return cls(
            day=date.fromisoformat(data["date"]),
            distance_m=int(data.get("distance_m", 0)),
            minutes=int(data.get("minutes", 0)),
            vital_count=int(data.get("vital_count", 0)),
        )


@dataclass(frozen=True)
class ActivityTotals:
    """The three monthly aggregates for one nurse."""

    total_distance_m: int
    total_minutes: int
    total_vital_count: int
    daily: tuple[DailyActivity, ...] = ()

    @property
    def total_distance_km(self) -> Decimal:
        return Decimal(self.total_distance_m) / METERS_PER_KM

    @classmethod
    def zero(cls) -> "ActivityTotals":
        return cls(total_distance_m=0, total_minutes=0, total_vital_count=0)
