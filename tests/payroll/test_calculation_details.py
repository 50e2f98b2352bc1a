from datetime import date
from decimal import Decimal

import pytest

from src.nurse_payroll.nurse_payroll.activity.model import ActivityTotals, DailyActivity
from src.nurse_payroll.nurse_payroll.core.exceptions import ValidationError
from src.nurse_payroll.nurse_payroll.payroll.model import CalculationDetails, SalaryBreakdown
from src.nurse_payroll.nurse_payroll.settings.model import PayRates


def _details() -> CalculationDetails:
    totals = ActivityTotals(
        total_distance_m=21_000,
        total_minutes=480,
        total_vital_count=3,
        daily=(DailyActivity(day=date(2025, 5, 2), distance_m=12_400, minutes=480, vital_count=2),),
    )
    return CalculationDetails.build(
        nurse_id="N001",
        year_month="2025-05",
        reference_timezone="Asia/Tokyo",
        totals=totals,
        rates=PayRates(distance_rate=Decimal("150"), time_rate=Decimal("1200"), vital_rate=Decimal("50")),
        breakdown=SalaryBreakdown(distance_pay=3150, time_pay=9600, vital_pay=150),
    )


def test_details_document_layout():
    doc = _details().to_dict()

    assert doc["kind"] == "nurse_salary_breakdown"
    assert doc["version"] == 1
    assert doc["inputs"] == {
        "total_distance_m": 21_000,
        "total_distance_km": "21",
        "total_minutes": 480,
        "total_vital_count": 3,
    }
    assert doc["rates"] == {"distance_rate": "150", "time_rate": "1200", "vital_rate": "50"}
    assert doc["pay"]["total_amount"] == 12900
    assert doc["daily"] == [{"date": "2025-05-02", "distance_m": 12_400, "minutes": 480, "vital_count": 2}]


def test_details_read_back_from_stored_document():
    details = _details()

    assert CalculationDetails.from_dict(details.to_dict()) == details


def test_details_with_unknown_kind_are_rejected():
    doc = _details().to_dict()
    doc["kind"] = "something_else"

    with pytest.raises(ValidationError):
        CalculationDetails.from_dict(doc)


def test_details_missing_pay_block_are_rejected():
    doc = _details().to_dict()
    del doc["pay"]

    with pytest.raises(ValidationError):
        CalculationDetails.from_dict(doc)
