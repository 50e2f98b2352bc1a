from datetime import date, datetime, timezone

import pytest

from src.nurse_payroll.nurse_payroll.common.datetime_utils import parse_iso_datetime, parse_year_month
from src.nurse_payroll.nurse_payroll.core.exceptions import ValidationError


def test_month_period_is_half_open_in_reference_zone():
    period = parse_year_month("2024-02", tz_name="Asia/Tokyo")

    assert period.year_month == "2024-02"
    assert period.naive_bounds() == (datetime(2024, 2, 1), datetime(2024, 3, 1))
    assert period.contains(datetime(2024, 2, 29, 23, 59, 59))
    assert not period.contains(datetime(2024, 3, 1))
    assert not period.contains(None)


def test_december_ends_at_new_year():
    period = parse_year_month("2024-12")

    assert period.end.replace(tzinfo=None) == datetime(2025, 1, 1)


def test_aware_values_are_converted_before_comparison():
    period = parse_year_month("2025-05", tz_name="Asia/Tokyo")
    value = datetime(2025, 4, 30, 16, 0, tzinfo=timezone.utc)

    assert period.contains(value)
    assert period.local_date(value) == date(2025, 5, 1)


@pytest.mark.parametrize("value", ["", "2025-5", "2025/05", "2025-13", "202505", "2025-05-01"])
def test_bad_year_month_is_rejected(value):
    with pytest.raises(ValidationError):
        parse_year_month(value)


def test_unknown_timezone_is_rejected():
    with pytest.raises(ValidationError):
        parse_year_month("2025-05", tz_name="Mars/Olympus")


def test_parse_iso_datetime_accepts_zulu_suffix():
    assert parse_iso_datetime("2025-05-02T09:00:00Z") == datetime(2025, 5, 2, 9, 0, tzinfo=timezone.utc)


def test_latest_supported_month_ends_inside_date_range():
    period = parse_year_month("9998-12")

    assert period.naive_bounds() == (datetime(9998, 12, 1), datetime(9999, 1, 1))


def test_year_9999_is_rejected_as_validation_error():
    with pytest.raises(ValidationError, match="9998-12"):
        parse_year_month("9999-12")
