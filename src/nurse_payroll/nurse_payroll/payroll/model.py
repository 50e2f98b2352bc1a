from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..activity.model import ActivityTotals, DailyActivity
from ..core.constants import METERS_PER_KM
from ..core.exceptions import ValidationError
from ..settings.model import PayRates

DETAILS_KIND = "nurse_salary_breakdown"
DETAILS_VERSION = 1


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(sep=" ") if value else None


@dataclass(frozen=True)
class SalaryBreakdown:
    """Calculator output: each component already rounded to whole yen."""

    distance_pay: int
    time_pay: int
    vital_pay: int

    @property
    def total_amount(self) -> int:
        return self.distance_pay + self.time_pay + self.vital_pay


@dataclass(frozen=True)
class CalculationDetails:
    """Audit record of one calculation, stored verbatim with the salary record.

    Carries the rates that were used so a later rate change does not alter
    what a saved record shows.
    """

    nurse_id: str
    year_month: str
    reference_timezone: str
    total_distance_m: int
    total_minutes: int
    total_vital_count: int
    rates: PayRates
    distance_pay: int
    time_pay: int
    vital_pay: int
    total_amount: int
    daily: tuple[DailyActivity, ...] = ()
    kind: str = DETAILS_KIND
    version: int = DETAILS_VERSION

    @property
    def total_distance_km(self) -> Decimal:
        return Decimal(self.total_distance_m) / METERS_PER_KM

    @classmethod
    def build(
        cls,
        *,
        nurse_id: str,
        year_month: str,
        reference_timezone: str,
        totals: ActivityTotals,
        rates: PayRates,
        breakdown: SalaryBreakdown,
    ) -> "CalculationDetails":
        return cls(
            nurse_id=nurse_id,
            year_month=year_month,
            reference_timezone=reference_timezone,
            total_distance_m=totals.total_distance_m,
            total_minutes=totals.total_minutes,
            total_vital_count=totals.total_vital_count,
            rates=rates,
            distance_pay=breakdown.distance_pay,
            time_pay=breakdown.time_pay,
            vital_pay=breakdown.vital_pay,
            total_amount=breakdown.total_amount,
            daily=tuple(totals.daily),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "version": self.version,
            "nurse_id": self.nurse_id,
            "year_month": self.year_month,
            "reference_timezone": self.reference_timezone,
            "inputs": {
                "total_distance_m": self.total_distance_m,
                "total_distance_km": str(self.total_distance_km),
                "total_minutes": self.total_minutes,
                "total_vital_count": self.total_vital_count,
            },
            "rates": self.rates.to_dict(),
            "pay": {
                "distance_pay": self.distance_pay,
                "time_pay": self.time_pay,
                "vital_pay": self.vital_pay,
                "total_amount": self.total_amount,
            },
            "daily": [d.to_dict() for d in self.daily],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CalculationDetails":
        if data.get("kind") != DETAILS_KIND:
            raise ValidationError(f"Unsupported calculation_details kind: {data.get('kind')!r}")
        if data.get("version") != DETAILS_VERSION:
            raise ValidationError(f"Unsupported calculation_details version: {data.get('version')!r}")
        try:
            inputs = data["inputs"]
            pay = data["pay"]
            return cls(
                nurse_id=str(data["nurse_id"]),
                year_month=str(data["year_month"]),
                reference_timezone=str(data["reference_timezone"]),
                total_distance_m=int(inputs["total_distance_m"]),
                total_minutes=int(inputs["total_minutes"]),
                total_vital_count=int(inputs["total_vital_count"]),
                rates=PayRates.from_dict(data["rates"]),
                distance_pay=int(pay["distance_pay"]),
                time_pay=int(pay["time_pay"]),
                vital_pay=int(pay["vital_pay"]),
                total_amount=int(pay["total_amount"]),
                daily=tuple(DailyActivity.from_dict(d) for d in data.get("daily", [])),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Malformed calculation_details: {e}") from e


@dataclass(frozen=True)
class SalaryCalculation:
    """Transient (preview) result of calculating one nurse-month."""

    nurse_id: str
    year_month: str
    totals: ActivityTotals
    breakdown: SalaryBreakdown
    details: CalculationDetails

    def to_dict(self) -> dict[str, Any]:
        return {
            "nurse_id": self.nurse_id,
            "year_month": self.year_month,
            "total_amount": self.breakdown.total_amount,
            "distance_pay": self.breakdown.distance_pay,
            "time_pay": self.breakdown.time_pay,
            "vital_pay": self.breakdown.vital_pay,
            "total_distance_km": float(self.totals.total_distance_km),
            "total_minutes": self.totals.total_minutes,
            "total_vital_count": self.totals.total_vital_count,
            "calculation_details": self.details.to_dict(),
        }


@dataclass(frozen=True)
class SalaryRecordInput:
    """Field values written by insert/upsert; the (nurse_id, year_month) pair is the natural key."""

    user_id: int
    nurse_id: str
    year_month: str
    total_amount: int
    distance_pay: int
    time_pay: int
    vital_pay: int
    total_distance_km: Decimal
    total_minutes: int
    total_vital_count: int
    calculation_details: Optional[CalculationDetails] = None
    calculated_at: Optional[datetime] = None

    @classmethod
    def from_calculation(cls, calc: SalaryCalculation, *, user_id: int, calculated_at: datetime) -> "SalaryRecordInput":
        return cls(
            user_id=int(user_id),
            nurse_id=calc.nurse_id,
            year_month=calc.year_month,
            total_amount=calc.breakdown.total_amount,
            distance_pay=calc.breakdown.distance_pay,
            time_pay=calc.breakdown.time_pay,
            vital_pay=calc.breakdown.vital_pay,
            total_distance_km=calc.totals.total_distance_km,
            total_minutes=calc.totals.total_minutes,
            total_vital_count=calc.totals.total_vital_count,
            calculation_details=calc.details,
            calculated_at=calculated_at,
        )


@dataclass(frozen=True)
class SalaryRecordPatch:
    """Fields an administrator may correct on a saved record; None means unchanged."""

    total_amount: Optional[int] = None
    distance_pay: Optional[int] = None
    time_pay: Optional[int] = None
    vital_pay: Optional[int] = None
    total_distance_km: Optional[Decimal] = None
    total_minutes: Optional[int] = None
    total_vital_count: Optional[int] = None
    calculation_details: Optional[CalculationDetails] = None
    clear_details: bool = False

    def assignments(self) -> list[tuple[str, object]]:
        out: list[tuple[str, object]] = []
        if self.total_amount is not None:
            out.append(("total_amount", self.total_amount))
        if self.distance_pay is not None:
            out.append(("distance_pay", self.distance_pay))
        if self.time_pay is not None:
            out.append(("time_pay", self.time_pay))
        if self.vital_pay is not None:
            out.append(("vital_pay", self.vital_pay))
        if self.total_distance_km is not None:
            out.append(("total_distance_km", self.total_distance_km))
        if self.total_minutes is not None:
            out.append(("total_minutes", self.total_minutes))
        if self.total_vital_count is not None:
            out.append(("total_vital_count", self.total_vital_count))
        if self.calculation_details is not None:
            out.append(("calculation_details", self.calculation_details))
        elif self.clear_details:
            out.append(("calculation_details", None))
        return out

    def is_empty(self) -> bool:
        return not self.assignments()


@dataclass(frozen=True)
class SalaryFilters:
    user_id: Optional[int] = None
    nurse_id: Optional[str] = None
    year_month: Optional[str] = None


@dataclass(frozen=True)
class SalaryRecord:
    """Domain entity: the persisted salary of one nurse for one month."""

    id: int
    user_id: int
    nurse_id: str
    year_month: str
    total_amount: int
    distance_pay: int
    time_pay: int
    vital_pay: int
    total_distance_km: Decimal
    total_minutes: int
    total_vital_count: int
    calculation_details: Optional[CalculationDetails] = None
    calculated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "nurse_id": self.nurse_id,
            "year_month": self.year_month,
            "total_amount": self.total_amount,
            "distance_pay": self.distance_pay,
            "time_pay": self.time_pay,
            "vital_pay": self.vital_pay,
            "total_distance_km": float(self.total_distance_km),
            "total_minutes": self.total_minutes,
            "total_vital_count": self.total_vital_count,
            "calculation_details": self.calculation_details.to_dict() if self.calculation_details else None,
            "calculated_at": _iso(self.calculated_at),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass(frozen=True)
class MonthRecalculation:
    """Outcome of recalculating every active nurse for one month.

    Nurses are saved one by one; `failed` maps each nurse_id that could not be
    saved to the error message, the others stay saved.
    """

    year_month: str
    saved: tuple[SalaryRecord, ...] = ()
    failed: Mapping[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "year_month": self.year_month,
            "data": [r.to_dict() for r in self.saved],
            "failed": [{"nurse_id": k, "message": v} for k, v in self.failed.items()],
        }
