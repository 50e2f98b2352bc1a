from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...activity.model import ActivityTotals
from ...core.constants import MINUTES_PER_HOUR
from ...settings.model import PayRates
from ..model import SalaryBreakdown
from .base import SalaryCalculator


def round_yen(amount: Decimal) -> int:
    """Round to the nearest whole yen, halves away from zero."""
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: distance x rate/km + hours x rate/hour + vitals x rate/record.

    Each component is rounded on its own; the total is their exact sum.
    """

    def calculate(self, totals: ActivityTotals, rates: PayRates) -> SalaryBreakdown:
        distance_pay = round_yen(totals.total_distance_km * rates.distance_rate)
        time_pay = round_yen(Decimal(totals.total_minutes) * rates.time_rate / MINUTES_PER_HOUR)
        vital_pay = round_yen(Decimal(totals.total_vital_count) * rates.vital_rate)
        return SalaryBreakdown(distance_pay=distance_pay, time_pay=time_pay, vital_pay=vital_pay)
