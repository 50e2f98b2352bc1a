from datetime import date, datetime, timezone

from src.nurse_payroll.nurse_payroll.activity.aggregators import (
    ActivityAggregator,
    DistanceAggregator,
    TimeAggregator,
    VitalAggregator,
)
from src.nurse_payroll.nurse_payroll.activity.model import ShiftLocationRecord, ShiftRecord, VitalRecord
from src.nurse_payroll.nurse_payroll.common.datetime_utils import parse_year_month
from tests.fakes import InMemoryLocations, InMemoryShifts, InMemoryVitals, may_2025_activity

MAY = parse_year_month("2025-05", tz_name="Asia/Tokyo")


def _leg(leg_id, when, distance_m, nurse_id="N001"):
    return ShiftLocationRecord(leg_id, "F01", nurse_id, when, distance_m, 600)


def test_distance_sums_legs_and_treats_missing_distance_as_zero():
    repo = InMemoryLocations(
        [
            _leg(1, datetime(2025, 5, 3, 9, 0), 4_000),
            _leg(2, datetime(2025, 5, 3, 15, 0), None),
            _leg(3, datetime(2025, 5, 4, 9, 0), 1_500),
        ]
    )

    result = DistanceAggregator(repo).aggregate(nurse_id="N001", period=MAY)

    assert result.total == 5_500
    assert result.by_day == {date(2025, 5, 3): 4_000, date(2025, 5, 4): 1_500}
    assert repo.last_args == {"nurse_id": "N001", "start": datetime(2025, 5, 1), "end": datetime(2025, 6, 1)}


def test_records_of_next_month_do_not_count():
    repo = InMemoryLocations(
        [
            _leg(1, datetime(2025, 5, 31, 23, 59, 59), 1_000),
            _leg(2, datetime(2025, 6, 1, 0, 0), 9_000),
            _leg(3, None, 9_000),
        ]
    )

    assert DistanceAggregator(repo).aggregate(nurse_id="N001", period=MAY).total == 1_000


def test_other_nurses_are_ignored():
    repo = InMemoryLocations([_leg(1, datetime(2025, 5, 3), 1_000), _leg(2, datetime(2025, 5, 3), 7_000, "N002")])

    assert DistanceAggregator(repo).aggregate(nurse_id="N001", period=MAY).total == 1_000


def test_aware_timestamps_are_bucketed_in_reference_timezone():
    repo = InMemoryLocations(
        [
            # 2025-05-01 00:30 in Tokyo
            _leg(1, datetime(2025, 4, 30, 15, 30, tzinfo=timezone.utc), 2_000),
            # 2025-06-01 00:00 in Tokyo
            _leg(2, datetime(2025, 5, 31, 15, 0, tzinfo=timezone.utc), 5_000),
        ]
    )

    result = DistanceAggregator(repo).aggregate(nurse_id="N001", period=MAY)

    assert result.total == 2_000
    assert result.by_day == {date(2025, 5, 1): 2_000}


def test_time_sums_shift_minutes_in_month():
    repo = InMemoryShifts(
        [
            ShiftRecord(1, "N001", "F01", datetime(2025, 5, 2, 9, 0), 480),
            ShiftRecord(2, "N001", "F02", datetime(2025, 5, 9, 13, 0), 90),
            ShiftRecord(3, "N001", "F02", datetime(2025, 5, 10, 13, 0), None),
            ShiftRecord(4, "N001", "F01", datetime(2025, 4, 30, 23, 0), 300),
        ]
    )

    assert TimeAggregator(repo).aggregate(nurse_id="N001", period=MAY).total == 570


def test_vitals_are_attributed_to_their_creator():
    repo = InMemoryVitals(
        [
            VitalRecord(1, "R01", datetime(2025, 5, 2, 10, 0), 7),
            VitalRecord(2, "R01", datetime(2025, 5, 2, 11, 0), 8),
            VitalRecord(3, "R02", datetime(2025, 5, 3, 10, 0), 7),
            VitalRecord(4, "R02", datetime(2025, 6, 1, 10, 0), 7),
        ]
    )

    result = VitalAggregator(repo).aggregate(user_id=7, period=MAY)

    assert result.total == 2
    assert result.by_day == {date(2025, 5, 2): 1, date(2025, 5, 3): 1}


def test_vitals_for_unknown_user_are_zero_without_a_read():
    repo = InMemoryVitals([VitalRecord(1, "R01", datetime(2025, 5, 2, 10, 0), 7)])

    result = VitalAggregator(repo).aggregate(user_id=None, period=MAY)

    assert result.total == 0
    assert repo.calls == 0


def _aggregator(parallel: bool) -> ActivityAggregator:
    locations, shifts, vitals = may_2025_activity()
    return ActivityAggregator(
        DistanceAggregator(InMemoryLocations(locations)),
        TimeAggregator(InMemoryShifts(shifts)),
        VitalAggregator(InMemoryVitals(vitals)),
        parallel=parallel,
    )


def test_collect_merges_totals_and_daily_rows():
    totals = _aggregator(parallel=False).collect(nurse_id="N001", user_id=7, period=MAY)

    assert (totals.total_distance_m, totals.total_minutes, totals.total_vital_count) == (21_000, 480, 3)
    assert [d.day for d in totals.daily] == [date(2025, 5, 2), date(2025, 5, 20)]
    assert totals.daily[0].minutes == 480
    assert totals.daily[0].vital_count == 2
    assert totals.daily[1].distance_m == 8_600


def test_parallel_and_sequential_collection_agree():
    sequential = _aggregator(parallel=False).collect(nurse_id="N001", user_id=7, period=MAY)
    parallel = _aggregator(parallel=True).collect(nurse_id="N001", user_id=7, period=MAY)

    assert parallel == sequential
