from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DEFAULT_REFERENCE_TIMEZONE, MAX_SALARY_YEAR, YEAR_MONTH_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp ('T' or space separated, optional offset)."""
    v = value.strip().replace("Z", "+00:00")
    return datetime.fromisoformat(v)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def get_zone(name: str | None) -> ZoneInfo:
    try:
        return ZoneInfo(name or DEFAULT_REFERENCE_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {name!r}")


@dataclass(frozen=True)
class MonthPeriod:
    """One calendar month in the reference timezone.

    The period is the half-open interval [start, end): the first instant of the
    month up to, but excluding, the first instant of the following month.
    """

    year: int
    month: int
    tz: ZoneInfo

    @property
    def year_month(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def start(self) -> datetime:
        return datetime(self.year, self.month, 1, tzinfo=self.tz)

    @property
    def end(self) -> datetime:
        days = calendar.monthrange(self.year, self.month)[1]
        return datetime.combine(date(self.year, self.month, 1) + timedelta(days=days), datetime.min.time(), tzinfo=self.tz)

    def naive_bounds(self) -> tuple[datetime, datetime]:
        """Bounds as naive local datetimes, for DATETIME columns stored in reference time."""
        return self.start.replace(tzinfo=None), self.end.replace(tzinfo=None)

    def localize(self, value: datetime) -> datetime:
        """Express a timestamp in the reference timezone.

        Naive values are taken to be reference-local already.
        """
        if value.tzinfo is None:
            return value.replace(tzinfo=self.tz)
        return value.astimezone(self.tz)

    def contains(self, value: datetime | None) -> bool:
        if value is None:
            return False
        local = self.localize(value)
        return local.year == self.year and local.month == self.month

    def local_date(self, value: datetime) -> date:
        return self.localize(value).date()


def parse_year_month(value: str, *, tz_name: str | None = None) -> MonthPeriod:
    """Parse a "YYYY-MM" key into a MonthPeriod."""
    v = (value or "").strip()
    if len(v) != 7:
        raise ValidationError("year_month must be formatted as YYYY-MM")
    try:
        parsed = datetime.strptime(v, YEAR_MONTH_FORMAT)
    except ValueError:
        raise ValidationError("year_month must be formatted as YYYY-MM")
    if parsed.year > MAX_SALARY_YEAR:
        raise ValidationError(f"year_month must not be later than {MAX_SALARY_YEAR}-12")
    return MonthPeriod(year=parsed.year, month=parsed.month, tz=get_zone(tz_name))
