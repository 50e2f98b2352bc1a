from __future__ import annotations

from dataclasses import dataclass

from .activity.aggregators import ActivityAggregator, DistanceAggregator, TimeAggregator, VitalAggregator
from .activity.mysql_shift_location_repository import MySQLShiftLocationRepository
from .activity.mysql_shift_repository import MySQLShiftRepository
from .activity.mysql_vital_repository import MySQLVitalRepository
from .activity.repository import ShiftLocationRepository, ShiftRepository, VitalRepository
from .core.constants import DEFAULT_REFERENCE_TIMEZONE
from .database.connection import DatabaseConnection, DBConfig
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.repository import SalaryRepository
from .payroll.service import SalaryCalculationService, SalaryRecordService
from .settings.mysql_setting_repository import MySQLRateSettingRepository
from .settings.repository import RateSettingRepository
from .settings.service import RateConfigurationService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    settings_repo: RateSettingRepository
    locations_repo: ShiftLocationRepository
    shifts_repo: ShiftRepository
    vitals_repo: VitalRepository
    salaries_repo: SalaryRepository

    rate_service: RateConfigurationService
    aggregator: ActivityAggregator
    salary_calculation_service: SalaryCalculationService
    salary_record_service: SalaryRecordService


def wire(
    *,
    users_repo: UserRepository,
    settings_repo: RateSettingRepository,
    locations_repo: ShiftLocationRepository,
    shifts_repo: ShiftRepository,
    vitals_repo: VitalRepository,
    salaries_repo: SalaryRepository,
    reference_timezone: str = DEFAULT_REFERENCE_TIMEZONE,
    parallel_aggregation: bool = True,
) -> Container:
    """Build services over any set of repositories (MySQL in production, fakes in tests)."""

    rate_service = RateConfigurationService(settings_repo)
    aggregator = ActivityAggregator(
        DistanceAggregator(locations_repo),
        TimeAggregator(shifts_repo),
        VitalAggregator(vitals_repo),
        parallel=parallel_aggregation,
    )
    salary_calculation_service = SalaryCalculationService(
        aggregator,
        rate_service,
        users_repo,
        salaries_repo,
        reference_timezone=reference_timezone,
    )
    salary_record_service = SalaryRecordService(salaries_repo, reference_timezone=reference_timezone)

    return Container(
        users_repo=users_repo,
        settings_repo=settings_repo,
        locations_repo=locations_repo,
        shifts_repo=shifts_repo,
        vitals_repo=vitals_repo,
        salaries_repo=salaries_repo,
        rate_service=rate_service,
        aggregator=aggregator,
        salary_calculation_service=salary_calculation_service,
        salary_record_service=salary_record_service,
    )


def build_container(
    *,
    db_config: dict,
    reference_timezone: str = DEFAULT_REFERENCE_TIMEZONE,
    parallel_aggregation: bool = True,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        users_repo=MySQLUserRepository(conn),
        settings_repo=MySQLRateSettingRepository(conn),
        locations_repo=MySQLShiftLocationRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        vitals_repo=MySQLVitalRepository(conn),
        salaries_repo=MySQLSalaryRepository(conn),
        reference_timezone=reference_timezone,
        parallel_aggregation=parallel_aggregation,
    )
