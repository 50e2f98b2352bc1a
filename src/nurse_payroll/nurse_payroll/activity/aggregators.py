from __future__ import annotations

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import MonthPeriod
from ..core.constants import AGGREGATION_WORKERS
from .model import ActivityTotals, DailyActivity, DailyTotals
from .repository import ShiftLocationRepository, ShiftRepository, VitalRepository

logger = logging.getLogger(__name__)


def _sum_by_day(period: MonthPeriod, items: Iterable[tuple[Optional[datetime], int]]) -> DailyTotals:
    """Sum (timestamp, amount) pairs that fall inside the period.

    Missing timestamps never fall inside a month; negative or missing amounts count as 0.
    """
    by_day: dict[date, int] = defaultdict(int)
    total = 0
    for ts, amount in items:
        if not period.contains(ts):
            continue
        amount = max(int(amount or 0), 0)
        by_day[period.local_date(ts)] += amount
        total += amount
    return DailyTotals(total=total, by_day=dict(by_day))


class DistanceAggregator:
    """Total travel distance (metres) from shift-location legs."""

    def __init__(self, locations: ShiftLocationRepository):
        self._locations = locations

    def aggregate(self, *, nurse_id: str, period: MonthPeriod) -> DailyTotals:
        start, end = period.naive_bounds()
        rows = self._locations.list_for_nurse(nurse_id=nurse_id, start=start, end=end)
        return _sum_by_day(period, ((r.date_time, r.distance_m) for r in rows))


class TimeAggregator:
    """Total worked minutes from shift durations."""

    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def aggregate(self, *, nurse_id: str, period: MonthPeriod) -> DailyTotals:
        start, end = period.naive_bounds()
        rows = self._shifts.list_for_nurse(nurse_id=nurse_id, start=start, end=end)
        return _sum_by_day(period, ((r.start_datetime, r.required_time) for r in rows))


class VitalAggregator:
    """Number of vital recordings made by the nurse (attributed via `created_by`)."""

    def __init__(self, vitals: VitalRepository):
        self._vitals = vitals

    def aggregate(self, *, user_id: Optional[int], period: MonthPeriod) -> DailyTotals:
        if user_id is None:
            return DailyTotals()
        start, end = period.naive_bounds()
        rows = self._vitals.list_created_by(user_id=int(user_id), start=start, end=end)
        return _sum_by_day(period, ((r.measured_at, 1) for r in rows if r.created_by == int(user_id)))


def merge_daily(distance: DailyTotals, minutes: DailyTotals, vitals: DailyTotals) -> tuple[DailyActivity, ...]:
    days = sorted(set(distance.by_day) | set(minutes.by_day) | set(vitals.by_day))
    return tuple(
        DailyActivity(
            day=d,
            distance_m=distance.by_day.get(d, 0),
            minutes=minutes.by_day.get(d, 0),
            vital_count=vitals.by_day.get(d, 0),
        )
        for d in days
    )


class ActivityAggregator:
    """Runs the three aggregators for one (nurse, month).

    The reads are independent, so with `parallel=True` they are issued on a
    thread pool and awaited jointly; an error in any of them propagates.
    """

    def __init__(
        self,
        distance: DistanceAggregator,
        time: TimeAggregator,
        vitals: VitalAggregator,
        *,
        parallel: bool = True,
    ):
        self._distance = distance
        self._time = time
        self._vitals = vitals
        self._parallel = bool(parallel)

    def collect(self, *, nurse_id: str, user_id: Optional[int], period: MonthPeriod) -> ActivityTotals:
        if self._parallel:
            with ThreadPoolExecutor(max_workers=AGGREGATION_WORKERS, thread_name_prefix="aggregate") as pool:
                distance_f = pool.submit(self._distance.aggregate, nurse_id=nurse_id, period=period)
                time_f = pool.submit(self._time.aggregate, nurse_id=nurse_id, period=period)
                vitals_f = pool.submit(self._vitals.aggregate, user_id=user_id, period=period)
                distance, minutes, vitals = distance_f.result(), time_f.result(), vitals_f.result()
        else:
            distance = self._distance.aggregate(nurse_id=nurse_id, period=period)
            minutes = self._time.aggregate(nurse_id=nurse_id, period=period)
            vitals = self._vitals.aggregate(user_id=user_id, period=period)

        totals = ActivityTotals(
            total_distance_m=distance.total,
            total_minutes=minutes.total,
            total_vital_count=vitals.total,
            daily=merge_daily(distance, minutes, vitals),
        )
        logger.debug(
            "Aggregates for %s %s: %d m, %d min, %d vitals",
            nurse_id,
            period.year_month,
            totals.total_distance_m,
            totals.total_minutes,
            totals.total_vital_count,
        )
        return totals
