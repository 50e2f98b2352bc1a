from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(sep=" ") if value else None


@dataclass(frozen=True)
class RateSetting:
    """One named pay-rate parameter (e.g. yen per km)."""

    key: str
    value: Decimal
    description: Optional[str] = None
    updated_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "setting_key": self.key,
            "setting_value": float(self.value),
            "description": self.description,
            "updated_by": self.updated_by,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass(frozen=True)
class RateSettingPatch:
    """Updatable fields of a RateSetting; None means "leave unchanged"."""

    value: Optional[Decimal] = None
    description: Optional[str] = None
    updated_by: Optional[int] = None

    def assignments(self) -> list[tuple[str, object]]:
        out: list[tuple[str, object]] = []
        if self.value is not None:
            out.append(("setting_value", self.value))
        if self.description is not None:
            out.append(("description", self.description))
        if self.updated_by is not None:
            out.append(("updated_by", self.updated_by))
        return out

    def is_empty(self) -> bool:
        return not self.assignments()


@dataclass(frozen=True)
class PayRates:
    """The three multipliers a salary calculation uses, read at calculation time."""

    distance_rate: Decimal  # yen per km
    time_rate: Decimal  # yen per hour
    vital_rate: Decimal  # yen per vital recording

    def to_dict(self) -> dict:
        return {
            "distance_rate": str(self.distance_rate),
            "time_rate": str(self.time_rate),
            "vital_rate": str(self.vital_rate),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PayRates":
        return cls(
            distance_rate=Decimal(str(data["distance_rate"])),
            time_rate=Decimal(str(data["time_rate"])),
            vital_rate=Decimal(str(data["vital_rate"])),
        )
