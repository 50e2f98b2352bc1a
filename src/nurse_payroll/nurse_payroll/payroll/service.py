from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..activity.aggregators import ActivityAggregator
from ..common.datetime_utils import now_local, parse_year_month
from ..common.validators import require_non_empty, require_non_negative_int, require_non_negative_number
from ..core.constants import DEFAULT_REFERENCE_TIMEZONE
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..settings.service import RateConfigurationService
from ..users.repository import UserRepository
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator
from .model import (
    CalculationDetails,
    MonthRecalculation,
    SalaryCalculation,
    SalaryFilters,
    SalaryRecord,
    SalaryRecordInput,
    SalaryRecordPatch,
)
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


class SalaryCalculationService:
    """Use case: turn a nurse's monthly activity into a salary, preview or persisted.

    Order per call: resolve the nurse, read the three aggregates, read the
    current rates, compute, and (for calculate_and_save) write last.
    """

    def __init__(
        self,
        aggregator: ActivityAggregator,
        rates: RateConfigurationService,
        users: UserRepository,
        salaries: SalaryRepository,
        *,
        calculator: Optional[SalaryCalculator] = None,
        reference_timezone: str = DEFAULT_REFERENCE_TIMEZONE,
    ):
        self._aggregator = aggregator
        self._rates = rates
        self._users = users
        self._salaries = salaries
        self._calculator = calculator or StandardSalaryCalculator()
        self._tz_name = reference_timezone

    def _calculate(self, nurse_id: str, year_month: str, *, user_id: Optional[int]) -> SalaryCalculation:
        period = parse_year_month(year_month, tz_name=self._tz_name)
        totals = self._aggregator.collect(nurse_id=nurse_id, user_id=user_id, period=period)
        rates = self._rates.current_rates()
        breakdown = self._calculator.calculate(totals, rates)
        details = CalculationDetails.build(
            nurse_id=nurse_id,
            year_month=period.year_month,
            reference_timezone=self._tz_name,
            totals=totals,
            rates=rates,
            breakdown=breakdown,
        )
        return SalaryCalculation(
            nurse_id=nurse_id,
            year_month=period.year_month,
            totals=totals,
            breakdown=breakdown,
            details=details,
        )

    def calculate(self, nurse_id: str, year_month: str) -> SalaryCalculation:
        """Preview without persisting. An unknown nurse yields zero activity."""
        nurse_id = require_non_empty(nurse_id, "nurse_id")
        user = self._users.find_by_nurse_id(nurse_id)
        return self._calculate(nurse_id, year_month, user_id=user.user_id if user else None)

    def calculate_and_save(self, nurse_id: str, year_month: str, *, now: Optional[datetime] = None) -> SalaryRecord:
        nurse_id = require_non_empty(nurse_id, "nurse_id")
        user = self._users.find_by_nurse_id(nurse_id)
        if not user:
            raise NotFoundError(f"Nurse {nurse_id!r} not found")

        calc = self._calculate(nurse_id, year_month, user_id=user.user_id)
        data = SalaryRecordInput.from_calculation(calc, user_id=user.user_id, calculated_at=now or now_local())
        salary_id = self._salaries.upsert(data)

        saved = self._salaries.get_by_id(salary_id) if salary_id else None
        if saved is None:
            saved = self._salaries.get_by_nurse_and_month(nurse_id, calc.year_month)
        if saved is None:
            raise NotFoundError(f"Salary for {nurse_id} {calc.year_month} was not persisted")

        logger.info("Saved salary for %s %s: total=%d", nurse_id, calc.year_month, saved.total_amount)
        return saved

    def calculate_and_save_month(self, year_month: str, *, now: Optional[datetime] = None) -> MonthRecalculation:
        """Recalculate every active nurse for one month.

        A domain error for one nurse is recorded in the result and the batch
        moves on; records saved before or after it are kept.
        """
        period = parse_year_month(year_month, tz_name=self._tz_name)
        now = now or now_local()
        saved: list[SalaryRecord] = []
        failed: dict[str, str] = {}
        for user in self._users.list_active_nurses():
            if not user.nurse_id:
                continue
            try:
                saved.append(self.calculate_and_save(user.nurse_id, period.year_month, now=now))
            except DomainError as e:
                logger.warning("Salary for %s %s not saved: %s", user.nurse_id, period.year_month, e)
                failed[user.nurse_id] = str(e)
        logger.info("Recalculated %d salaries for %s (%d failed)", len(saved), period.year_month, len(failed))
        return MonthRecalculation(year_month=period.year_month, saved=tuple(saved), failed=failed)

    def get(self, nurse_id: str, year_month: str) -> Optional[SalaryRecord]:
        period = parse_year_month(year_month, tz_name=self._tz_name)
        return self._salaries.get_by_nurse_and_month(require_non_empty(nurse_id, "nurse_id"), period.year_month)

    def list(self, filters: SalaryFilters) -> Sequence[SalaryRecord]:
        return list_salaries(self._salaries, filters, tz_name=self._tz_name)


def list_salaries(salaries: SalaryRepository, filters: SalaryFilters, *, tz_name: str) -> Sequence[SalaryRecord]:
    if filters.year_month:
        parse_year_month(filters.year_month, tz_name=tz_name)
    return salaries.list(filters)


_COMPONENT_FIELDS = ("distance_pay", "time_pay", "vital_pay")
_PAY_FIELDS = ("total_amount", *_COMPONENT_FIELDS, "total_minutes", "total_vital_count")


def _parse_details(value: Any) -> Optional[CalculationDetails]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValidationError("calculation_details must be an object")
    return CalculationDetails.from_dict(value)


def _footed_total(components: dict[str, int], supplied: Optional[int]) -> int:
    """The record total is always the sum of its three pay components."""
    total = sum(components.values())
    if supplied is not None and supplied != total:
        raise ValidationError(f"total_amount must equal distance_pay + time_pay + vital_pay ({total})")
    return total


def _check_details(details: Optional[CalculationDetails], components: dict[str, int], total: int) -> None:
    if details is None:
        return
    shown = {name: getattr(details, name) for name in _COMPONENT_FIELDS}
    if shown != components or details.total_amount != total:
        raise ValidationError("calculation_details must show the same pay figures as the record")


class SalaryRecordService:
    """Use case: administrative CRUD over saved salaries (manual corrections)."""

    def __init__(self, salaries: SalaryRepository, *, reference_timezone: str = DEFAULT_REFERENCE_TIMEZONE):
        self._salaries = salaries
        self._tz_name = reference_timezone

    def get_by_id(self, salary_id: int) -> SalaryRecord:
        record = self._salaries.get_by_id(int(salary_id))
        if not record:
            raise NotFoundError(f"Salary {salary_id} not found")
        return record

    def list(self, filters: SalaryFilters) -> Sequence[SalaryRecord]:
        return list_salaries(self._salaries, filters, tz_name=self._tz_name)

    def create(self, payload: dict) -> SalaryRecord:
        """Manual record; total_amount may be omitted and is derived from the components."""
        if payload.get("user_id") is None:
            raise ValidationError("user_id is required")
        period = parse_year_month(str(payload.get("year_month") or ""), tz_name=self._tz_name)
        values = {
            name: require_non_negative_int(payload.get(name, 0), name)
            for name in _PAY_FIELDS
            if name != "total_amount"
        }
        supplied = payload.get("total_amount")
        components = {name: values[name] for name in _COMPONENT_FIELDS}
        total = _footed_total(
            components,
            require_non_negative_int(supplied, "total_amount") if supplied is not None else None,
        )
        details = _parse_details(payload.get("calculation_details"))
        _check_details(details, components, total)

        data = SalaryRecordInput(
            user_id=require_non_negative_int(payload.get("user_id"), "user_id"),
            nurse_id=require_non_empty(payload.get("nurse_id") or "", "nurse_id"),
            year_month=period.year_month,
            total_amount=total,
            total_distance_km=require_non_negative_number(payload.get("total_distance_km", 0), "total_distance_km"),
            calculation_details=details,
            calculated_at=None,
            **values,
        )
        salary_id = self._salaries.insert(data)
        logger.info("Created salary %s for %s %s", salary_id, data.nurse_id, data.year_month)
        return self.get_by_id(salary_id)

    def update(self, salary_id: int, payload: dict) -> SalaryRecord:
        """Correct a saved record.

        Changing a pay component recomputes total_amount. A correction that
        changes any figure without supplying new calculation_details drops the
        stored details.
        """
        current = self.get_by_id(salary_id)
        values = {
            name: require_non_negative_int(payload[name], name)
            for name in _PAY_FIELDS
            if payload.get(name) is not None
        }
        km = payload.get("total_distance_km")
        km = require_non_negative_number(km, "total_distance_km") if km is not None else None

        components = {name: values.get(name, getattr(current, name)) for name in _COMPONENT_FIELDS}
        total = _footed_total(components, values.get("total_amount"))
        if any(name in values for name in _COMPONENT_FIELDS):
            values["total_amount"] = total

        details = _parse_details(payload.get("calculation_details"))
        _check_details(details, components, total)

        changed = any(values[name] != getattr(current, name) for name in values) or (
            km is not None and km != current.total_distance_km
        )
        patch = SalaryRecordPatch(
            total_distance_km=km,
            calculation_details=details,
            clear_details=changed and details is None and current.calculation_details is not None,
            **values,
        )
        if not self._salaries.update(int(salary_id), patch):
            raise NotFoundError(f"Salary {salary_id} not found")
        if not patch.is_empty():
            logger.info("Updated salary %s", salary_id)
        return self.get_by_id(salary_id)

    def delete(self, salary_id: int) -> None:
        if not self._salaries.delete(int(salary_id)):
            raise NotFoundError(f"Salary {salary_id} not found")
        logger.info("Deleted salary %s", salary_id)
