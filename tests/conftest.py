from __future__ import annotations

from datetime import datetime

import pytest

from src.nurse_payroll.nurse_payroll.container import wire
from tests.fakes import (
    DEFAULT_RATES,
    NURSE,
    InMemoryLocations,
    InMemorySalaries,
    InMemorySettings,
    InMemoryShifts,
    InMemoryUsers,
    InMemoryVitals,
    may_2025_activity,
)


@pytest.fixture
def fixed_now():
    return datetime(2025, 6, 1, 10, 0, 0)


@pytest.fixture
def settings_repo():
    return InMemorySettings(DEFAULT_RATES)


@pytest.fixture
def salaries_repo():
    return InMemorySalaries()


@pytest.fixture
def users_repo():
    return InMemoryUsers([NURSE])


@pytest.fixture
def container(users_repo, settings_repo, salaries_repo):
    locations, shifts, vitals = may_2025_activity()
    return wire(
        users_repo=users_repo,
        settings_repo=settings_repo,
        locations_repo=InMemoryLocations(locations),
        shifts_repo=InMemoryShifts(shifts),
        vitals_repo=InMemoryVitals(vitals),
        salaries_repo=salaries_repo,
        parallel_aggregation=False,
    )
