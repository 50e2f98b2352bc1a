from decimal import Decimal

from src.nurse_payroll.nurse_payroll.activity.model import ActivityTotals
from src.nurse_payroll.nurse_payroll.payroll.calculator.standard_calculator import StandardSalaryCalculator, round_yen
from src.nurse_payroll.nurse_payroll.settings.model import PayRates

RATES = PayRates(distance_rate=Decimal("150"), time_rate=Decimal("1200"), vital_rate=Decimal("50"))


def test_standard_calculator_example_month():
    totals = ActivityTotals(total_distance_m=21_000, total_minutes=480, total_vital_count=3)

    result = StandardSalaryCalculator().calculate(totals, RATES)

    assert result.distance_pay == 3150
    assert result.time_pay == 9600
    assert result.vital_pay == 150
    assert result.total_amount == 12900


def test_total_is_sum_of_components():
    totals = ActivityTotals(total_distance_m=7_777, total_minutes=333, total_vital_count=11)

    result = StandardSalaryCalculator().calculate(totals, RATES)

    assert result.total_amount == result.distance_pay + result.time_pay + result.vital_pay


def test_zero_activity_gives_zero_salary():
    result = StandardSalaryCalculator().calculate(ActivityTotals.zero(), RATES)

    assert (result.distance_pay, result.time_pay, result.vital_pay, result.total_amount) == (0, 0, 0, 0)


def test_doubling_distance_rate_only_changes_distance_pay():
    totals = ActivityTotals(total_distance_m=21_000, total_minutes=480, total_vital_count=3)
    doubled = PayRates(distance_rate=Decimal("300"), time_rate=RATES.time_rate, vital_rate=RATES.vital_rate)

    base = StandardSalaryCalculator().calculate(totals, RATES)
    result = StandardSalaryCalculator().calculate(totals, doubled)

    assert result.distance_pay == 2 * base.distance_pay
    assert result.time_pay == base.time_pay
    assert result.vital_pay == base.vital_pay


def test_components_round_half_up_to_whole_yen():
    totals = ActivityTotals(total_distance_m=3_330, total_minutes=1, total_vital_count=0)
    rates = PayRates(distance_rate=Decimal("150"), time_rate=Decimal("1230"), vital_rate=Decimal("50"))

    result = StandardSalaryCalculator().calculate(totals, rates)

    # 3.33 km * 150 = 499.5 ; 1 min * 1230 / 60 = 20.5
    assert result.distance_pay == 500
    assert result.time_pay == 21


def test_round_yen_rounds_down_below_half():
    assert round_yen(Decimal("12.49")) == 12
    assert round_yen(Decimal("12.5")) == 13
    assert round_yen(Decimal("0")) == 0
