from __future__ import annotations

from abc import ABC, abstractmethod

from ...activity.model import ActivityTotals
from ...settings.model import PayRates
from ..model import SalaryBreakdown


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll).

    Implementations are pure: no I/O, and total over non-negative inputs.
    """

    @abstractmethod
    def calculate(self, totals: ActivityTotals, rates: PayRates) -> SalaryBreakdown:
        raise NotImplementedError
